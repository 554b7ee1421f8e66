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
"""Request logging middleware: logs method, path, status and duration."""

from __future__ import annotations

import time
from typing import Any

import structlog

from pyhelmet.http.message import Response
from pyhelmet.web.chain import settle
from pyhelmet.web.ports.middleware import CallNext

logger = structlog.get_logger("pyhelmet.web")


def _describe_request(request: Any) -> dict[str, Any]:
    url = getattr(request, "url", None)
    path = getattr(url, "path", None) or getattr(request, "path", None)
    return {"method": getattr(request, "method", None), "path": path}


class RequestLoggingMiddleware:
    """Emits one ``http_request`` event per request.

    Failures are logged as ``http_request_failed`` and re-raised unchanged.
    """

    async def __call__(self, request: Any, call_next: CallNext) -> Response:
        start = time.perf_counter()
        fields = _describe_request(request)

        try:
            response = await settle(call_next(request), "Downstream handler")
        except Exception as exc:
            logger.error(
                "http_request_failed",
                **fields,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise

        logger.info(
            "http_request",
            **fields,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return response
