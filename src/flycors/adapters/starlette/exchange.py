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
"""StarletteExchange — Exchange over a Starlette request."""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import Response


class StarletteExchange:
    """Adapts a Starlette :class:`Request` to the Exchange protocol.

    Writes are buffered here; the filter turns them into a response
    (terminated exchanges) or copies them onto the downstream response.
    """

    def __init__(self, request: Request) -> None:
        self._request = request
        self.response_headers: dict[str, str] = {}
        self.status_code: int | None = None
        self.body: str | None = None
        self._terminated = False

    @property
    def method(self) -> str:
        return self._request.method

    def get_header(self, name: str) -> str:
        return self._request.headers.get(name, "")

    def set_header(self, name: str, value: str) -> None:
        self.response_headers[name] = value

    def set_status(self, status_code: int) -> None:
        self.status_code = status_code

    def set_body(self, body: str) -> None:
        self.body = body

    def end(self) -> None:
        self._terminated = True

    @property
    def terminated(self) -> bool:
        return self._terminated

    def to_response(self) -> Response:
        """Build the response for a terminated exchange."""
        return Response(
            content=self.body or "",
            status_code=self.status_code or 200,
            headers=self.response_headers,
            media_type="text/plain" if self.body is not None else None,
        )

    def apply_headers(self, response: Response) -> Response:
        """Copy buffered headers onto a downstream *response*."""
        for name, value in self.response_headers.items():
            response.headers[name] = value
        return response
