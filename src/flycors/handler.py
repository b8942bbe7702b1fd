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
"""CorsHandler — one CORS middleware installation.

Usage::

    handler = load(CorsPolicy(origins=["https://a.com"], credentials=True))

    try:
        handler.handle(exchange)
    except CorsException:
        ...  # exchange already carries status 403 and is terminated

The handler owns its :class:`~flycors.policy.EffectivePolicy`, resolved once
in :func:`load`.  It holds no other state, so one instance may serve any
number of concurrent requests.
"""

from __future__ import annotations

import structlog

from flycors.decision import (
    ACCESS_CONTROL_REQUEST_HEADERS,
    ACCESS_CONTROL_REQUEST_METHOD,
    ORIGIN,
    CorsDecision,
    DecisionKind,
    decide,
)
from flycors.emitter import HeaderEmitter
from flycors.kernel.exceptions import CorsException, OriginNotAllowedException
from flycors.policy import DEFAULT_POLICY, CorsPolicy, EffectivePolicy, resolve_policy
from flycors.ports.exchange import Exchange

logger = structlog.get_logger("flycors.handler")


class CorsHandler:
    """Runs the CORS decision for each exchange and applies it."""

    def __init__(self, policy: EffectivePolicy, emitter: HeaderEmitter | None = None) -> None:
        self._policy = policy
        self._emitter = emitter or HeaderEmitter()

    @property
    def policy(self) -> EffectivePolicy:
        return self._policy

    def handle(self, exchange: Exchange) -> CorsDecision:
        """Decide and emit for *exchange*.

        Raises:
            CorsException: the request was rejected.  Status 403 has been
                set and the exchange terminated before raising.
        """
        decision = decide(exchange, self._policy)
        self._emitter.emit(decision, exchange)

        if decision.kind is DecisionKind.REJECTED:
            assert decision.error is not None
            self._log_rejection(decision.error, exchange)
            raise decision.error

        if decision.kind is DecisionKind.PREFLIGHT_ALLOWED:
            logger.debug("cors_preflight_allowed", origin=exchange.get_header(ORIGIN))

        return decision

    def _log_rejection(self, error: CorsException, exchange: Exchange) -> None:
        if isinstance(error, OriginNotAllowedException):
            logger.warning(
                "cors_origin_rejected",
                origin=exchange.get_header(ORIGIN),
                method=exchange.method,
            )
            return
        logger.warning(
            "cors_preflight_rejected",
            reason=error.code,
            origin=exchange.get_header(ORIGIN),
            requested_method=exchange.get_header(ACCESS_CONTROL_REQUEST_METHOD) or None,
            requested_headers=exchange.get_header(ACCESS_CONTROL_REQUEST_HEADERS) or None,
        )

    __call__ = handle


def load(policy: CorsPolicy | None = None, default: EffectivePolicy = DEFAULT_POLICY) -> CorsHandler:
    """Resolve *policy* against *default* and return a handler bound to it."""
    return CorsHandler(resolve_policy(policy, default))
