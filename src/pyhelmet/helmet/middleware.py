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
"""HelmetMiddleware: the resolved rule set as a single middleware unit."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from pyhelmet.core.config import Config
from pyhelmet.helmet.resolver import ConfigResolver, ResolvedRuleSet
from pyhelmet.http.message import Response
from pyhelmet.web.chain import settle
from pyhelmet.web.ports.middleware import CallNext

logger = structlog.get_logger("pyhelmet.helmet")

HELMET_CONFIG_PREFIX = "pyhelmet.helmet"


class HelmetMiddleware:
    """Applies security headers to every response passing through it.

    Options are resolved once, here; conflicting or invalid options raise
    before the middleware exists. On each request the downstream response is
    awaited and then every rule is applied in canonical order, each rule
    receiving the previous rule's output.

    Usage:
        helmet = HelmetMiddleware({"xFrameOptions": {"action": "DENY"}, "hsts": False})
        dispatcher = MiddlewareDispatcher([helmet], handler)
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        resolver: ConfigResolver | None = None,
    ) -> None:
        self._rules: ResolvedRuleSet = (resolver or ConfigResolver()).resolve(options)
        logger.debug("helmet_configured", rules=self._rules.keys)

    @classmethod
    def from_config(cls, config: Config, prefix: str = HELMET_CONFIG_PREFIX) -> HelmetMiddleware:
        """Build from the options bag stored under *prefix* in *config*."""
        return cls(config.get_section(prefix))

    @property
    def rules(self) -> ResolvedRuleSet:
        return self._rules

    def apply(self, response: Response) -> Response:
        return self._rules.apply(response)

    async def __call__(self, request: Any, call_next: CallNext) -> Response:
        response = await settle(call_next(request), "Downstream of HelmetMiddleware")
        return self._rules.apply(response)
