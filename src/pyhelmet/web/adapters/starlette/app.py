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
"""Demo Starlette application served behind a helmet-equipped dispatcher."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from starlette.applications import Starlette
from starlette.middleware import Middleware as StarletteMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route

from pyhelmet.helmet.middleware import HelmetMiddleware
from pyhelmet.web.adapters.starlette.dispatcher_middleware import DispatcherMiddleware
from pyhelmet.web.ports.middleware import Middleware
from pyhelmet.web.request_logging import RequestLoggingMiddleware


async def _hello(request: Request) -> PlainTextResponse:
    return PlainTextResponse("Hello from pyhelmet\n")


def create_app(
    options: Mapping[str, Any] | None = None,
    *,
    extra_middlewares: Sequence[Middleware] = (),
    log_requests: bool = True,
) -> Starlette:
    """Build a one-route app whose responses pass through helmet.

    The unit order is request logging (outermost, so it sees the final
    response), then helmet, then *extra_middlewares*.
    """
    units: list[Middleware] = []
    if log_requests:
        units.append(RequestLoggingMiddleware())
    units.append(HelmetMiddleware(options))
    units.extend(extra_middlewares)

    return Starlette(
        routes=[Route("/", _hello)],
        middleware=[StarletteMiddleware(DispatcherMiddleware, middlewares=units)],
    )
