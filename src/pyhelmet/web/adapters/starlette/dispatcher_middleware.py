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
"""DispatcherMiddleware: pure ASGI middleware running a middleware chain."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from starlette.requests import Request
from starlette.responses import Response as StarletteResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from pyhelmet.http.message import Response
from pyhelmet.web.chain import MiddlewareChain
from pyhelmet.web.ports.middleware import Middleware


class DispatcherMiddleware:
    """Runs HTTP traffic through a :class:`MiddlewareChain`.

    The downstream ASGI app becomes the chain's terminal: its response
    messages are captured into a :class:`pyhelmet.http.Response`, the units
    transform it, and the result is sent to the client. The Starlette
    request is handed to the units untouched.

    Uses raw ASGI instead of ``BaseHTTPMiddleware`` so the whole body is
    buffered exactly once and nothing is sent before every unit has run.
    """

    def __init__(self, app: ASGIApp, middlewares: Sequence[Middleware] = ()) -> None:
        self.app = app
        self._chain = MiddlewareChain(middlewares)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive, send)

        async def _call_app(req: Any) -> Response:
            """Terminal: run the downstream ASGI app and capture its response."""
            status_code = 200
            raw_headers: list[tuple[bytes, bytes]] = []
            body_parts: list[bytes] = []

            async def _intercept(message: Message) -> None:
                nonlocal status_code, raw_headers
                if message["type"] == "http.response.start":
                    status_code = message["status"]
                    raw_headers = [(k.lower(), v) for k, v in message.get("headers", [])]
                elif message["type"] == "http.response.body":
                    body = message.get("body", b"")
                    if body:
                        body_parts.append(body)

            await self.app(scope, receive, _intercept)
            return Response.from_raw(status_code, raw_headers, b"".join(body_parts))

        response = await self._chain.build(_call_app)(request)
        await _to_starlette(response)(scope, receive, send)


def _to_starlette(response: Response) -> StarletteResponse:
    outgoing = StarletteResponse(content=response.body, status_code=response.status_code)
    raw = list(response.headers.raw)
    if not response.has_header("content-length"):
        raw.append((b"content-length", str(len(response.body)).encode("latin-1")))
    outgoing.raw_headers[:] = raw
    return outgoing
