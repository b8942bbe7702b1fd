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
"""Exchange protocol — framework-agnostic view of one HTTP request/response.

The CORS core only talks to this protocol, so vendor-specific types
(e.g. Starlette) stay confined to the adapter layer.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Exchange(Protocol):
    """A single inbound request paired with its mutable outbound response.

    Created by the host per request and handed to the CORS handler once.
    """

    @property
    def method(self) -> str:
        """The request method, e.g. ``"GET"``."""
        ...

    def get_header(self, name: str) -> str:
        """Return a request header value, or ``""`` when absent."""
        ...

    def set_header(self, name: str, value: str) -> None:
        """Set a response header, replacing any previous value."""
        ...

    def set_status(self, status_code: int) -> None:
        """Set the response status code."""
        ...

    def set_body(self, body: str) -> None:
        """Set the response body text."""
        ...

    def end(self) -> None:
        """Terminate the exchange so no later pipeline stage runs."""
        ...

    @property
    def terminated(self) -> bool:
        """``True`` once :meth:`end` has been called."""
        ...
