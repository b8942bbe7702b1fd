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
"""StructlogAdapter — structlog setup for CORS event logging.

Rendering and levels come from :class:`~flycors.config.properties.LoggingProperties`
(``flycors.logging.*``).  ``cors_level`` tunes the two loggers that emit CORS
events (``flycors.policy`` and ``flycors.handler``) without touching the root
level, e.g. to silence rejection warnings from scanners in production.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from flycors.config.properties import LoggingProperties

CORS_LOGGERS: tuple[str, ...] = ("flycors.policy", "flycors.handler")


class StructlogAdapter:
    """Configures structlog over stdlib logging."""

    def configure(self, properties: LoggingProperties) -> None:
        processors: list[structlog.types.Processor] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
        ]
        if properties.format.lower() == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer())

        # Module-level loggers must pick up a later reconfiguration.
        structlog.configure(
            processors=processors,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=_to_level(properties.level),
            force=True,
        )

        if properties.cors_level is not None:
            for name in CORS_LOGGERS:
                self.set_level(name, properties.cors_level)
        for name, level in properties.loggers.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_to_level(level))


def _to_level(level: str) -> int:
    return getattr(logging, str(level).upper(), logging.INFO)
