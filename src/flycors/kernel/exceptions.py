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
"""Exception hierarchy for FlyCors.

All library exceptions inherit from FlyCorsException, so hosts can catch
the base class for unified handling or a specific subclass for targeted
handling.

Categories:
- SecurityException: access control decisions
- CorsException: a cross-origin request rejected by the active policy
"""

from __future__ import annotations

# =============================================================================
# Base Exception
# =============================================================================


class FlyCorsException(Exception):
    """Base exception for all FlyCors errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "ORIGIN_NOT_ALLOWED").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Security Exceptions
# =============================================================================


class SecurityException(FlyCorsException):
    """Access control errors."""


class ForbiddenException(SecurityException):
    """The caller is not permitted to perform the request."""


# =============================================================================
# CORS Exceptions
# =============================================================================


class CorsException(ForbiddenException):
    """A cross-origin request was rejected by the CORS policy.

    Always surfaced to the client as HTTP 403.
    """

    status_code: int = 403
    default_code: str = "CORS_REJECTED"

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code=self.default_code, context=context)


class OriginNotAllowedException(CorsException):
    """The request ``Origin`` is not permitted by the policy."""

    default_code = "ORIGIN_NOT_ALLOWED"


class MethodNotAllowedException(CorsException):
    """The preflight-requested method is not permitted by the policy."""

    default_code = "METHOD_NOT_ALLOWED"


class HeadersNotAllowedException(CorsException):
    """The preflight-requested headers are not a subset of the permitted headers."""

    default_code = "HEADERS_NOT_ALLOWED"


# Short names for the three failure kinds.
OriginNotAllowed = OriginNotAllowedException
MethodNotAllowed = MethodNotAllowedException
HeadersNotAllowed = HeadersNotAllowedException
