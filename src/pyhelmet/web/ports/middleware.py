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
"""Middleware protocol: the framework-agnostic unit of a chain.

Requests are typed ``Any`` because chains never look inside them; the
Starlette bridge passes Starlette requests, tests pass plain values.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

from pyhelmet.http.message import Response

# The next callable in a chain.
# Concrete type: Callable[[Request], Coroutine[Any, Any, Response]]
CallNext = Callable[[Any], Awaitable[Response]]

# The innermost handler. May return a Response directly or an awaitable.
Terminal = Callable[[Any], Any]


@runtime_checkable
class Middleware(Protocol):
    """Protocol for a unit layered around a handler.

    A unit receives the request and ``call_next``. It may act before
    delegating, decide not to delegate at all, and transform the response
    that ``call_next`` produces. Plain functions returning a bare
    :class:`Response` also satisfy the chain's contract.
    """

    def __call__(self, request: Any, call_next: CallNext) -> Awaitable[Response] | Response:
        """Handle *request*, delegating downstream through *call_next*."""
        ...
