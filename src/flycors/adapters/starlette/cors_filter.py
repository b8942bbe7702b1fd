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
"""CORS filter — runs a CorsHandler inside the WebFilter chain."""

from __future__ import annotations

from collections.abc import Sequence
from typing import cast

import structlog
from starlette.requests import Request
from starlette.responses import Response

from flycors.adapters.starlette.errors import cors_error_response
from flycors.adapters.starlette.exchange import StarletteExchange
from flycors.handler import CorsHandler, load
from flycors.kernel.exceptions import CorsException
from flycors.policy import CorsPolicy
from flycors.web.filter import CallNext, PathMatcher
from flycors.web.ordering import HIGHEST_PRECEDENCE, order


@order(HIGHEST_PRECEDENCE + 100)
class CorsFilter:
    """Applies the CORS policy to every request whose path matches.

    Preflight requests are answered here (204 or 403) and never reach the
    route handler.  Simple requests continue down the chain and get the
    ``Access-Control-*`` headers added to whatever response comes back.

    The request path is bound into structlog's context while the handler
    runs, so its rejection events carry ``path``.
    """

    def __init__(
        self,
        policy: CorsPolicy | None = None,
        handler: CorsHandler | None = None,
        url_patterns: Sequence[str] = (),
        exclude_patterns: Sequence[str] = (),
    ) -> None:
        self._handler = handler or load(policy)
        self._paths = PathMatcher.of(url_patterns, exclude_patterns)

    @property
    def handler(self) -> CorsHandler:
        return self._handler

    def should_not_filter(self, request: Request) -> bool:
        return not self._paths.matches(request.url.path)

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        exchange = StarletteExchange(request)
        try:
            with structlog.contextvars.bound_contextvars(path=request.url.path):
                self._handler.handle(exchange)
        except CorsException as exc:
            return cors_error_response(request, exc, headers=exchange.response_headers)

        if exchange.terminated:
            return exchange.to_response()

        response = cast(Response, await call_next(request))
        return exchange.apply_headers(response)
