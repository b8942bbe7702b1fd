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
"""Configuration properties (flycors.cors.*, flycors.logging.*).

Example ``flycors.yaml``::

    flycors:
      cors:
        origins: [https://app.example.com]
        credentials: true
        max_age: 600
      logging:
        format: json
        cors_level: ERROR

Keys left out stay unset and take the built-in default; an explicit empty
list (``origins: []``) is kept and denies everything.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import timedelta

from flycors.config.core import Config, config_properties
from flycors.handler import CorsHandler, load
from flycors.logging.structlog_adapter import StructlogAdapter
from flycors.policy import CorsPolicy

ListValue = Sequence[str] | str | None


def _as_list(value: ListValue) -> list[str] | None:
    """Accept a list or a comma-separated string (env vars)."""
    if value is None:
        return None
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return [str(item) for item in value]


@config_properties(prefix="flycors.cors")
@dataclass
class CorsProperties:
    """Configuration for the CORS policy (flycors.cors.*)."""

    origins: ListValue = None
    methods: ListValue = None
    headers: ListValue = None
    expose_headers: ListValue = None
    credentials: bool = False
    max_age: int = 0  # seconds, 0 = default

    def to_policy(self) -> CorsPolicy:
        if self.max_age < 0:
            raise ValueError(f"flycors.cors.max_age must not be negative, got {self.max_age}")
        return CorsPolicy(
            origins=_as_list(self.origins),
            methods=_as_list(self.methods),
            headers=_as_list(self.headers),
            expose_headers=_as_list(self.expose_headers) or (),
            credentials=self.credentials,
            max_age=timedelta(seconds=self.max_age) if self.max_age else None,
        )


@config_properties(prefix="flycors.logging")
@dataclass
class LoggingProperties:
    """Configuration for log rendering and levels (flycors.logging.*)."""

    level: str = "INFO"
    format: str = "console"  # or "json"
    cors_level: str | None = None  # level for the CORS event loggers
    loggers: dict[str, str] = field(default_factory=dict)


def load_from_config(config: Config, configure_logging: bool = True) -> CorsHandler:
    """Build a :class:`CorsHandler` from the ``flycors.cors`` section.

    Unless *configure_logging* is false, structlog is set up first from
    ``flycors.logging`` so policy resolution and request events follow it.
    """
    if configure_logging:
        StructlogAdapter().configure(config.bind(LoggingProperties))
    return load(config.bind(CorsProperties).to_policy())
