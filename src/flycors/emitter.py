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
"""HeaderEmitter — writes a CorsDecision onto an Exchange."""

from __future__ import annotations

from flycors.decision import HEADER_SEPARATOR, CorsDecision, DecisionKind, HeaderValue
from flycors.ports.exchange import Exchange


def format_header_value(value: HeaderValue) -> str:
    """Join sequence values with ``", "``; strings pass through."""
    if isinstance(value, str):
        return value
    return HEADER_SEPARATOR.join(value)


class HeaderEmitter:
    """Applies a :class:`CorsDecision` to the outbound response."""

    def emit(self, decision: CorsDecision, exchange: Exchange) -> None:
        if decision.kind is DecisionKind.NOT_APPLICABLE:
            return

        for name, value in decision.headers:
            exchange.set_header(name, format_header_value(value))

        status_code = decision.status_code
        if status_code is not None:
            exchange.set_status(status_code)
        if decision.kind is DecisionKind.PREFLIGHT_ALLOWED:
            exchange.set_body("")
        if decision.terminates:
            exchange.end()


_default_emitter = HeaderEmitter()


def emit(decision: CorsDecision, exchange: Exchange) -> None:
    """Module-level shortcut for :meth:`HeaderEmitter.emit`."""
    _default_emitter.emit(decision, exchange)
