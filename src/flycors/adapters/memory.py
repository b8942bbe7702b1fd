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
"""In-process Exchange implementation.

Suitable for hosts that are not built on an ASGI framework, and for tests.
"""

from __future__ import annotations

from collections.abc import Mapping


class InMemoryExchange:
    """Plain-object :class:`~flycors.ports.exchange.Exchange`.

    Request header lookup is case-insensitive, as in HTTP.  Response headers
    keep the name casing they were written with.
    """

    def __init__(self, method: str = "GET", headers: Mapping[str, str] | None = None) -> None:
        self._method = method.upper()
        self._request_headers = {k.lower(): v for k, v in (headers or {}).items()}
        self.response_headers: dict[str, str] = {}
        self.status_code: int | None = None
        self.body: str | None = None
        self._terminated = False

    @property
    def method(self) -> str:
        return self._method

    def get_header(self, name: str) -> str:
        return self._request_headers.get(name.lower(), "")

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
