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
"""Tests for HelmetMiddleware as a unit inside middleware chains."""

from __future__ import annotations

import asyncio

import pytest
from structlog.testing import capture_logs

from pyhelmet.core.config import Config
from pyhelmet.helmet.middleware import HelmetMiddleware
from pyhelmet.helmet.resolver import ConfigResolver, RuleFamily
from pyhelmet.helmet.rules import XFrameOptionsRule
from pyhelmet.http.message import Request, Response
from pyhelmet.kernel.exceptions import ConflictingOptionError, TypeMismatchError
from pyhelmet.web.chain import build_chain
from pyhelmet.web.dispatcher import MiddlewareDispatcher


def _ok(request) -> Response:
    return Response(status_code=200)


async def _run(helmet: HelmetMiddleware, terminal=_ok) -> Response:
    return await MiddlewareDispatcher([helmet], terminal)(Request())


class TestDefaults:
    @pytest.mark.asyncio
    async def test_default_headers(self):
        response = await _run(HelmetMiddleware())

        assert "default-src 'self'" in response.get_header("Content-Security-Policy")
        assert response.get_header("X-Content-Type-Options") == "nosniff"
        assert response.get_header("Cross-Origin-Opener-Policy") == "same-origin"
        assert response.get_header("X-Frame-Options") == "SAMEORIGIN"
        assert response.get_header("X-XSS-Protection") == "0"
        assert response.get_header("Server") == "secure"
        assert not response.has_header("X-Powered-By")

    @pytest.mark.asyncio
    async def test_full_default_header_set(self):
        response = await _run(HelmetMiddleware())
        assert response.get_header("Cross-Origin-Resource-Policy") == "same-origin"
        assert response.get_header("Origin-Agent-Cluster") == "?1"
        assert response.get_header("Referrer-Policy") == "no-referrer"
        assert response.get_header("Strict-Transport-Security") == "max-age=15552000; includeSubDomains"
        assert response.get_header("X-DNS-Prefetch-Control") == "off"
        assert response.get_header("X-Download-Options") == "noopen"
        assert response.get_header("X-Permitted-Cross-Domain-Policies") == "none"
        assert not response.has_header("Cross-Origin-Embedder-Policy")

    @pytest.mark.asyncio
    async def test_status_and_body_untouched(self):
        response = await _run(HelmetMiddleware(), lambda r: Response(status_code=404, body=b"missing"))
        assert response.status_code == 404
        assert response.body == b"missing"


class TestScenarios:
    @pytest.mark.asyncio
    async def test_null_server_value_strips_server_and_powered_by(self):
        def terminal(request):
            return Response(headers={"Server": "uvicorn", "X-Powered-By": "Starlette"})

        response = await _run(HelmetMiddleware({"xPoweredBy": {"serverValue": None}}), terminal)

        assert not response.has_header("Server")
        assert not response.has_header("X-Powered-By")

    @pytest.mark.asyncio
    async def test_bare_directive_policy(self):
        helmet = HelmetMiddleware({"contentSecurityPolicy": {"directives": {"upgrade-insecure-requests": []}}})
        response = await _run(helmet)
        assert response.get_header("Content-Security-Policy") == "upgrade-insecure-requests"

    def test_conflict_raises_before_middleware_exists(self):
        with pytest.raises(ConflictingOptionError):
            HelmetMiddleware({"hsts": {"maxAge": 1}, "strictTransportSecurity": {"maxAge": 2}})

    @pytest.mark.asyncio
    async def test_disabled_family_leaves_downstream_header(self):
        def terminal(request):
            return Response(headers={"X-Frame-Options": "ALLOW-FROM https://example.com"})

        response = await _run(HelmetMiddleware({"frameguard": False}), terminal)
        assert response.get_header("X-Frame-Options") == "ALLOW-FROM https://example.com"

    @pytest.mark.asyncio
    async def test_overrides_downstream_header(self):
        def terminal(request):
            return Response(headers={"x-frame-options": "SAMEORIGIN"})

        response = await _run(HelmetMiddleware({"xFrameOptions": {"action": "deny"}}), terminal)
        assert response.headers.getlist("X-Frame-Options") == ["DENY"]


class TestBehaviour:
    @pytest.mark.asyncio
    async def test_idempotent(self):
        helmet = HelmetMiddleware()
        once = helmet.apply(Response())
        twice = helmet.apply(once)
        assert once.headers.raw == twice.headers.raw

    @pytest.mark.asyncio
    async def test_outer_unit_overrides_helmet(self):
        async def frame_all(request, call_next):
            response = await call_next(request)
            return response.with_header("X-Frame-Options", "DENY")

        pipeline = build_chain([frame_all, HelmetMiddleware()], _ok)
        response = await pipeline(Request())
        assert response.get_header("X-Frame-Options") == "DENY"

    @pytest.mark.asyncio
    async def test_inner_unit_is_overridden_by_helmet(self):
        async def powered_by(request, call_next):
            response = await call_next(request)
            return response.with_header("X-Powered-By", "pyhelmet")

        pipeline = build_chain([HelmetMiddleware(), powered_by], _ok)
        response = await pipeline(Request())
        assert not response.has_header("X-Powered-By")

    @pytest.mark.asyncio
    async def test_concurrent_requests(self):
        helmet = HelmetMiddleware()

        async def handler(request):
            await asyncio.sleep(0)
            return Response(body=request.path.encode())

        dispatcher = MiddlewareDispatcher([helmet], handler)
        responses = await asyncio.gather(*(dispatcher(Request(path=f"/{i}")) for i in range(25)))

        assert [r.body for r in responses] == [f"/{i}".encode() for i in range(25)]
        assert all(r.get_header("X-Content-Type-Options") == "nosniff" for r in responses)

    @pytest.mark.asyncio
    async def test_downstream_type_mismatch(self):
        with pytest.raises(TypeMismatchError):
            await HelmetMiddleware()(Request(), lambda r: "oops")

    @pytest.mark.asyncio
    async def test_downstream_error_propagates(self):
        async def failing(request):
            raise LookupError("no route")

        with pytest.raises(LookupError):
            await _run(HelmetMiddleware(), failing)

    def test_custom_resolver(self):
        helmet = HelmetMiddleware(resolver=ConfigResolver([RuleFamily(XFrameOptionsRule)]))
        assert helmet.rules.keys == ["xFrameOptions"]

    def test_logs_configured_rules(self):
        with capture_logs() as logs:
            HelmetMiddleware({"hsts": False})
        assert logs[0]["event"] == "helmet_configured"
        assert "strictTransportSecurity" not in logs[0]["rules"]


class TestFromConfig:
    def test_reads_helmet_section(self):
        config = Config({"pyhelmet": {"helmet": {"xssFilter": False, "referrerPolicy": {"policy": "same-origin"}}}})
        helmet = HelmetMiddleware.from_config(config)
        response = helmet.apply(Response())
        assert not response.has_header("X-XSS-Protection")
        assert response.get_header("Referrer-Policy") == "same-origin"

    def test_missing_section_uses_defaults(self):
        assert len(HelmetMiddleware.from_config(Config({})).rules) == 13

    def test_custom_prefix(self):
        config = Config({"app": {"security": {"hidePoweredBy": False}}})
        helmet = HelmetMiddleware.from_config(config, prefix="app.security")
        assert "xPoweredBy" not in helmet.rules.keys
