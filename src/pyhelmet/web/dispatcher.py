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
"""MiddlewareDispatcher: top-level chain plus the handler producing the base response."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog

from pyhelmet.http.message import Response
from pyhelmet.web.chain import MiddlewareChain
from pyhelmet.web.ports.middleware import CallNext, Middleware, Terminal

logger = structlog.get_logger("pyhelmet.web")


class MiddlewareDispatcher:
    """Runs a request through *middlewares* and then *final_handler*.

    The pipeline is composed once at construction. Dispatchers are stateless
    per request, so one instance can serve concurrent requests, and since a
    dispatcher is itself ``(request) -> Awaitable[Response]`` it can be the
    terminal of another dispatcher.

    Usage:
        dispatcher = MiddlewareDispatcher([HelmetMiddleware()], handler)
        response = await dispatcher(Request("GET", "/"))
    """

    def __init__(self, middlewares: Sequence[Middleware], final_handler: Terminal) -> None:
        self._chain = MiddlewareChain(middlewares)
        self._final_handler = final_handler
        self._pipeline: CallNext = self._chain.build(final_handler)
        logger.debug("middleware_chain_built", units=len(self._chain))

    @property
    def chain(self) -> MiddlewareChain:
        return self._chain

    async def __call__(self, request: Any) -> Response:
        return await self._pipeline(request)
