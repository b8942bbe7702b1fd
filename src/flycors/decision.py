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
"""Per-request CORS decision.

References:
- https://fetch.spec.whatwg.org/#http-cors-protocol
- https://en.wikipedia.org/wiki/Cross-origin_resource_sharing

:func:`decide` reads an :class:`~flycors.ports.exchange.Exchange` without
mutating it and returns a :class:`CorsDecision` describing what to write.
Applying the decision is the job of :mod:`flycors.emitter`.

Per request::

    Start ─(no Origin)──────────────────────────────► NOT_APPLICABLE
      └─(Origin)─► origin check ─(denied)───────────► REJECTED
                        └─(ok, method != OPTIONS)───► ALLOWED
                        └─(ok, OPTIONS)─► preflight ─► REJECTED | PREFLIGHT_ALLOWED
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

from flycors.kernel.exceptions import (
    CorsException,
    HeadersNotAllowedException,
    MethodNotAllowedException,
    OriginNotAllowedException,
)
from flycors.policy import EffectivePolicy
from flycors.ports.exchange import Exchange

# Request headers
ORIGIN = "Origin"
ACCESS_CONTROL_REQUEST_METHOD = "Access-Control-Request-Method"
ACCESS_CONTROL_REQUEST_HEADERS = "Access-Control-Request-Headers"

# Response headers
ACCESS_CONTROL_ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ACCESS_CONTROL_ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
ACCESS_CONTROL_ALLOW_METHODS = "Access-Control-Allow-Methods"
ACCESS_CONTROL_ALLOW_HEADERS = "Access-Control-Allow-Headers"
ACCESS_CONTROL_MAX_AGE = "Access-Control-Max-Age"

HEADER_SEPARATOR = ", "
PREFLIGHT_METHOD = "OPTIONS"

HeaderValue = str | Sequence[str]


class DecisionKind(Enum):
    """Terminal state reached for one request."""

    NOT_APPLICABLE = "NOT_APPLICABLE"
    ALLOWED = "ALLOWED"
    PREFLIGHT_ALLOWED = "PREFLIGHT_ALLOWED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class CorsDecision:
    """Outcome of :func:`decide`.

    ``headers`` is ordered; on rejection it holds only what was emitted
    before the failing check.
    """

    kind: DecisionKind
    headers: tuple[tuple[str, HeaderValue], ...] = ()
    error: CorsException | None = None

    @property
    def terminates(self) -> bool:
        """Whether the exchange must end here (no downstream handler)."""
        return self.kind in (DecisionKind.PREFLIGHT_ALLOWED, DecisionKind.REJECTED)

    @property
    def status_code(self) -> int | None:
        if self.kind is DecisionKind.PREFLIGHT_ALLOWED:
            return 204
        if self.error is not None:
            return self.error.status_code
        return None


NOT_APPLICABLE = CorsDecision(DecisionKind.NOT_APPLICABLE)


def has_match(values: Iterable[str], value: str) -> bool:
    """Exact, case-sensitive membership."""
    return value in values


def has_include(allowed: Iterable[str], requested: Iterable[str]) -> bool:
    """Return ``True`` when every *requested* value is in *allowed*."""
    return set(requested).issubset(allowed)


def decide(exchange: Exchange, policy: EffectivePolicy) -> CorsDecision:
    """Classify *exchange* against *policy*."""
    origin = exchange.get_header(ORIGIN)
    if not origin:
        return NOT_APPLICABLE

    if not policy.allow_all_origins and not has_match(policy.origins, origin):
        return CorsDecision(
            DecisionKind.REJECTED,
            error=OriginNotAllowedException(
                f"Origin '{origin}' is not allowed",
                context={"origin": origin},
            ),
        )

    headers: list[tuple[str, HeaderValue]] = [(ACCESS_CONTROL_ALLOW_ORIGIN, origin)]

    # https://fetch.spec.whatwg.org/#cors-protocol-and-credentials
    if policy.credentials:
        headers.append((ACCESS_CONTROL_ALLOW_CREDENTIALS, "true"))

    if exchange.method != PREFLIGHT_METHOD:
        # Expose headers go out under the Allow-Headers name; existing clients rely on it.
        if policy.expose_headers:
            headers.append((ACCESS_CONTROL_ALLOW_HEADERS, policy.expose_headers))
        return CorsDecision(DecisionKind.ALLOWED, headers=tuple(headers))

    return _decide_preflight(exchange, policy, headers)


def _decide_preflight(
    exchange: Exchange,
    policy: EffectivePolicy,
    headers: list[tuple[str, HeaderValue]],
) -> CorsDecision:
    """Validate ``Access-Control-Request-Method`` and ``-Headers``.

    Both request headers are optional; an absent one is not checked.
    """
    requested_method = exchange.get_header(ACCESS_CONTROL_REQUEST_METHOD)
    requested_headers = exchange.get_header(ACCESS_CONTROL_REQUEST_HEADERS)

    if requested_method and not has_match(policy.methods, requested_method):
        return CorsDecision(
            DecisionKind.REJECTED,
            headers=tuple(headers),
            error=MethodNotAllowedException(
                f"Method '{requested_method}' is not allowed",
                context={"method": requested_method},
            ),
        )

    if requested_headers and not has_include(policy.headers, requested_headers.split(HEADER_SEPARATOR)):
        return CorsDecision(
            DecisionKind.REJECTED,
            headers=tuple(headers),
            error=HeadersNotAllowedException(
                f"Headers '{requested_headers}' are not allowed",
                context={"headers": requested_headers},
            ),
        )

    if policy.methods:
        headers.append((ACCESS_CONTROL_ALLOW_METHODS, policy.methods))
    if policy.headers:
        headers.append((ACCESS_CONTROL_ALLOW_HEADERS, policy.headers))
    if policy.max_age > timedelta(0):
        headers.append((ACCESS_CONTROL_MAX_AGE, str(policy.max_age_seconds)))

    return CorsDecision(DecisionKind.PREFLIGHT_ALLOWED, headers=tuple(headers))
