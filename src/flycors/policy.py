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
"""CORS policy types and default resolution.

A :class:`CorsPolicy` is what callers write: any of ``origins``, ``methods``,
``headers`` and ``max_age`` may be left unset (``None``, or a zero duration
for ``max_age``) to take the value from :data:`DEFAULT_POLICY`.  An explicit
empty sequence is *not* unset: ``origins=[]`` denies every origin.

:func:`resolve_policy` turns a partial policy into an :class:`EffectivePolicy`,
which is frozen and safe to share across concurrent requests.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import timedelta

import structlog

logger = structlog.get_logger("flycors.policy")

WILDCARD_ORIGIN = "*"


@dataclass(frozen=True)
class CorsPolicy:
    """Caller-supplied, possibly partial, CORS policy."""

    origins: Sequence[str] | None = None
    methods: Sequence[str] | None = None
    headers: Sequence[str] | None = None
    expose_headers: Sequence[str] = field(default_factory=tuple)
    credentials: bool = False
    max_age: timedelta | None = None


@dataclass(frozen=True)
class EffectivePolicy:
    """Fully populated policy bound to one handler installation."""

    origins: frozenset[str]
    methods: tuple[str, ...]
    headers: tuple[str, ...]
    expose_headers: tuple[str, ...] = ()
    credentials: bool = False
    max_age: timedelta = timedelta(0)
    allow_all_origins: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "allow_all_origins", WILDCARD_ORIGIN in self.origins)

    @property
    def max_age_seconds(self) -> int:
        """Whole seconds of ``max_age``, truncated toward zero."""
        return int(self.max_age / timedelta(seconds=1))


DEFAULT_POLICY = EffectivePolicy(
    origins=frozenset({WILDCARD_ORIGIN}),
    methods=("GET", "POST", "PUT", "DELETE", "OPTIONS", "HEAD", "PATCH"),
    headers=("Content-Type",),
    credentials=False,
    max_age=timedelta(hours=1),
)


def resolve_policy(policy: CorsPolicy | None = None, default: EffectivePolicy = DEFAULT_POLICY) -> EffectivePolicy:
    """Merge *policy* with *default*, field by field.

    ``origins``, ``methods``, ``headers`` and ``max_age`` fall back to the
    default only when unset; lists are never merged element-wise.
    A bare ``str`` for a list field raises ``TypeError``.
    ``expose_headers`` and ``credentials`` always keep the caller's value.
    """
    policy = policy or CorsPolicy()
    for name in ("origins", "methods", "headers", "expose_headers"):
        if isinstance(getattr(policy, name), str):
            raise TypeError(f"CorsPolicy.{name} must be a sequence of strings, not a str")

    effective = EffectivePolicy(
        origins=default.origins if policy.origins is None else frozenset(policy.origins),
        methods=default.methods if policy.methods is None else tuple(policy.methods),
        headers=default.headers if policy.headers is None else tuple(policy.headers),
        expose_headers=tuple(policy.expose_headers),
        credentials=policy.credentials,
        max_age=default.max_age if not policy.max_age else policy.max_age,
    )
    logger.debug(
        "cors_policy_resolved",
        origins=sorted(effective.origins),
        methods=list(effective.methods),
        headers=list(effective.headers),
        credentials=effective.credentials,
        max_age=effective.max_age_seconds,
    )
    return effective
