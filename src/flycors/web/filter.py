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
"""Filter contracts shared by the web adapters.

``WebFilter`` is the shape ``WebFilterChainMiddleware`` drives; request and
response stay ``Any`` so Starlette types do not leak out of the adapter.
``PathMatcher`` decides which request paths a filter covers, e.g. applying
CORS to ``/api/*`` but not to ``/api/internal/*``.
"""

from __future__ import annotations

from collections.abc import Callable, Coroutine, Sequence
from dataclasses import dataclass
from fnmatch import fnmatch
from typing import Any, Protocol, runtime_checkable

# Concrete type: Callable[[Request], Coroutine[Any, Any, Response]]
CallNext = Callable[..., Coroutine[Any, Any, Any]]


@runtime_checkable
class WebFilter(Protocol):
    """A link in the filter chain.

    ``do_filter`` either answers the request itself (as CORS does for
    preflights and rejections) or awaits ``call_next`` and may decorate the
    response it gets back.  ``should_not_filter`` lets the chain skip the
    filter for a request.
    """

    async def do_filter(self, request: Any, call_next: CallNext) -> Any: ...

    def should_not_filter(self, request: Any) -> bool: ...


@dataclass(frozen=True)
class PathMatcher:
    """Glob include/exclude rules over ``request.url.path``.

    No include patterns means every path is included.  Exclusions win.
    """

    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()

    @classmethod
    def of(cls, include: Sequence[str] = (), exclude: Sequence[str] = ()) -> PathMatcher:
        return cls(tuple(include), tuple(exclude))

    def matches(self, path: str) -> bool:
        if self.include and not any(fnmatch(path, p) for p in self.include):
            return False
        return not any(fnmatch(path, p) for p in self.exclude)
