# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""FlyCors — Cross-Origin Resource Sharing middleware.

Framework-agnostic core (policy, decision, emitter, handler) is exported
directly.  The Starlette adapter lives in :mod:`flycors.adapters.starlette`.
"""

from flycors.adapters.memory import InMemoryExchange
from flycors.decision import CorsDecision, DecisionKind, decide
from flycors.emitter import HeaderEmitter, emit
from flycors.handler import CorsHandler, load
from flycors.kernel.exceptions import (
    CorsException,
    HeadersNotAllowed,
    HeadersNotAllowedException,
    MethodNotAllowed,
    MethodNotAllowedException,
    OriginNotAllowed,
    OriginNotAllowedException,
)
from flycors.policy import DEFAULT_POLICY, CorsPolicy, EffectivePolicy, resolve_policy
from flycors.ports.exchange import Exchange

__version__ = "0.1.0"

__all__ = [
    # Policy
    "CorsPolicy",
    "DEFAULT_POLICY",
    "EffectivePolicy",
    "resolve_policy",
    # Decision / emission
    "CorsDecision",
    "DecisionKind",
    "HeaderEmitter",
    "decide",
    "emit",
    # Handler
    "CorsHandler",
    "load",
    # Exchange
    "Exchange",
    "InMemoryExchange",
    # Errors
    "CorsException",
    "HeadersNotAllowed",
    "HeadersNotAllowedException",
    "MethodNotAllowed",
    "MethodNotAllowedException",
    "OriginNotAllowed",
    "OriginNotAllowedException",
]
