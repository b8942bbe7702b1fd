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
"""Structured JSON responses for rejected CORS requests."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse

from flycors.kernel.exceptions import CorsException


def cors_error_response(
    request: Request,
    exc: CorsException,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    """Render *exc* as a 403 JSON body, keeping any CORS headers already written."""
    status = exc.status_code
    body: dict[str, Any] = {
        "error": {
            "message": str(exc),
            "code": exc.code or type(exc).__name__,
            "timestamp": datetime.now(UTC).isoformat(),
            "status": status,
            "path": request.url.path,
        }
    }
    if exc.context:
        body["error"]["context"] = exc.context

    return JSONResponse(body, status_code=status, headers=dict(headers or {}))
