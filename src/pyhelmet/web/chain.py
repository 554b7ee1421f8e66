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
"""MiddlewareChain: folds middleware units around a terminal handler.

Given units ``[A, B, C]`` and a terminal ``T`` the composed callable runs::

    A-enter, B-enter, C-enter, T, C-exit, B-exit, A-exit

so the *first* unit sees the response last and wins any header collision.

Every composed callable is a coroutine function. Calling one never raises;
whatever a unit or the terminal raises is delivered when the result is
awaited. That keeps a composed chain interchangeable with any other
``(request) -> Awaitable[Response]`` and lets chains nest.
"""

from __future__ import annotations

import inspect
from collections.abc import Iterable
from typing import Any

from pyhelmet.http.message import Response
from pyhelmet.kernel.exceptions import TypeMismatchError
from pyhelmet.web.ports.middleware import CallNext, Middleware, Terminal


async def settle(result: Any, source: str) -> Response:
    """Normalise a handler result into a :class:`Response`.

    Awaitables are awaited; a bare response passes through. Anything else,
    including an awaitable resolving to a non-response, raises
    :class:`TypeMismatchError` naming *source*.
    """
    if inspect.isawaitable(result):
        result = await result
    if not isinstance(result, Response):
        raise TypeMismatchError(source, result)
    return result


class MiddlewareChain:
    """An ordered, immutable sequence of middleware units.

    Insertion order is preserved as given: no sorting, no deduplication.
    A chain is itself a middleware unit; used inside another chain it runs
    its own units around the outer chain's ``call_next``.
    """

    def __init__(self, units: Iterable[Middleware] = ()) -> None:
        self._units: tuple[Middleware, ...] = tuple(units)

    @property
    def units(self) -> tuple[Middleware, ...]:
        return self._units

    def __len__(self) -> int:
        return len(self._units)

    def build(self, terminal: Terminal) -> CallNext:
        """Compose the units around *terminal* into one callable.

        The terminal's return type is only checked when the pipeline runs.
        """
        chain: CallNext = _wrap_terminal(terminal)
        for unit in reversed(self._units):
            chain = _wrap(unit, chain)
        return chain

    async def __call__(self, request: Any, call_next: CallNext) -> Response:
        return await self.build(call_next)(request)


def build_chain(units: Iterable[Middleware], terminal: Terminal) -> CallNext:
    """Shorthand for ``MiddlewareChain(units).build(terminal)``."""
    return MiddlewareChain(units).build(terminal)


def _describe(obj: Any) -> str:
    name = getattr(obj, "__qualname__", None) or type(obj).__qualname__
    return f"Middleware {name!r}"


def _wrap_terminal(handler: Terminal) -> CallNext:
    async def _call_terminal(request: Any) -> Response:
        return await settle(handler(request), "Terminal handler")

    return _call_terminal


def _wrap(unit: Middleware, next_call: CallNext) -> CallNext:
    """Create a closure that hands *next_call* to *unit*."""
    source = _describe(unit)

    async def _inner(request: Any) -> Response:
        return await settle(unit(request, next_call), source)

    return _inner
