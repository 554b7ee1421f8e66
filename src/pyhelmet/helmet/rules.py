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
"""Header rules: one object per security header.

A rule validates its options once, renders its header value once, and then
only copies responses. Rules hold no per-request state, so one instance is
safe to share between concurrent requests.

Each rule is also a middleware unit on its own::

    dispatcher = MiddlewareDispatcher([XFrameOptionsRule({"action": "DENY"})], handler)
"""

from __future__ import annotations

import abc
from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import ValidationError

from pyhelmet.helmet.csp import DEFAULT_DIRECTIVES, format_directives
from pyhelmet.helmet.options import (
    ContentSecurityPolicyOptions,
    CrossOriginEmbedderPolicyOptions,
    CrossOriginOpenerPolicyOptions,
    CrossOriginResourcePolicyOptions,
    ReferrerPolicyOptions,
    RuleOptions,
    StrictTransportSecurityOptions,
    XDnsPrefetchControlOptions,
    XFrameOptionsOptions,
    XPermittedCrossDomainPoliciesOptions,
    XPoweredByOptions,
)
from pyhelmet.http.message import Response
from pyhelmet.kernel.exceptions import InvalidOptionError
from pyhelmet.web.chain import settle
from pyhelmet.web.ports.middleware import CallNext


def _describe_errors(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'value'}: {err['msg']}" for err in exc.errors()
    )


class HeaderRule(abc.ABC):
    """Base class for a rule writing (or removing) one response header.

    Attributes:
        key: Option key of the rule family in a helmet options bag.
        header: Name of the header this rule writes.
        options_type: Pydantic model validating the rule's overrides, or
            ``None`` for rules without options (given mappings are ignored).
    """

    key: ClassVar[str]
    header: ClassVar[str]
    options_type: ClassVar[type[RuleOptions] | None] = None

    def __init__(self, options: RuleOptions | Mapping[str, Any] | None = None) -> None:
        self.options = self._coerce(options)
        self.value = self.render()

    def _coerce(self, options: RuleOptions | Mapping[str, Any] | None) -> Any:
        if self.options_type is None:
            return None
        if isinstance(options, self.options_type):
            return options
        try:
            return self.options_type.model_validate(dict(options or {}))
        except ValidationError as exc:
            raise InvalidOptionError(self.key, _describe_errors(exc), dict(options or {})) from exc

    @property
    def header_name(self) -> str:
        return self.header

    @abc.abstractmethod
    def render(self) -> str | None:
        """Compute the header value; ``None`` or ``""`` means "leave untouched"."""

    def apply(self, response: Response) -> Response:
        if not self.value:
            return response
        return response.with_header(self.header_name, self.value)

    async def __call__(self, request: Any, call_next: CallNext) -> Response:
        response = await settle(call_next(request), f"Downstream of {type(self).__name__}")
        return self.apply(response)

    def __repr__(self) -> str:
        try:
            name = self.header_name
        except AttributeError:
            name = self.header
        return f"{type(self).__name__}({name}: {getattr(self, 'value', None)!r})"


class _PolicyRule(HeaderRule):
    """Writes ``options.policy`` verbatim; a ``None`` policy writes nothing."""

    def render(self) -> str | None:
        return self.options.policy


class ContentSecurityPolicyRule(HeaderRule):
    key = "contentSecurityPolicy"
    header = "Content-Security-Policy"
    options_type = ContentSecurityPolicyOptions

    @property
    def header_name(self) -> str:
        if self.options.report_only:
            return "Content-Security-Policy-Report-Only"
        return self.header

    def render(self) -> str | None:
        directives = self.options.directives
        if directives is None:
            directives = DEFAULT_DIRECTIVES
        return format_directives(directives)


class CrossOriginEmbedderPolicyRule(_PolicyRule):
    key = "crossOriginEmbedderPolicy"
    header = "Cross-Origin-Embedder-Policy"
    options_type = CrossOriginEmbedderPolicyOptions


class CrossOriginOpenerPolicyRule(_PolicyRule):
    key = "crossOriginOpenerPolicy"
    header = "Cross-Origin-Opener-Policy"
    options_type = CrossOriginOpenerPolicyOptions


class CrossOriginResourcePolicyRule(_PolicyRule):
    key = "crossOriginResourcePolicy"
    header = "Cross-Origin-Resource-Policy"
    options_type = CrossOriginResourcePolicyOptions


class OriginAgentClusterRule(HeaderRule):
    key = "originAgentCluster"
    header = "Origin-Agent-Cluster"

    def render(self) -> str | None:
        return "?1"


class ReferrerPolicyRule(HeaderRule):
    key = "referrerPolicy"
    header = "Referrer-Policy"
    options_type = ReferrerPolicyOptions

    def render(self) -> str | None:
        policy = self.options.policy
        return policy if isinstance(policy, str) else ",".join(policy)


class StrictTransportSecurityRule(HeaderRule):
    key = "strictTransportSecurity"
    header = "Strict-Transport-Security"
    options_type = StrictTransportSecurityOptions

    def render(self) -> str | None:
        parts = [f"max-age={self.options.max_age}"]
        if self.options.include_sub_domains:
            parts.append("includeSubDomains")
        if self.options.preload:
            parts.append("preload")
        return "; ".join(parts)


class XContentTypeOptionsRule(HeaderRule):
    key = "xContentTypeOptions"
    header = "X-Content-Type-Options"

    def render(self) -> str | None:
        return "nosniff"


class XDnsPrefetchControlRule(HeaderRule):
    key = "xDnsPrefetchControl"
    header = "X-DNS-Prefetch-Control"
    options_type = XDnsPrefetchControlOptions

    def render(self) -> str | None:
        return "on" if self.options.allow else "off"


class XDownloadOptionsRule(HeaderRule):
    key = "xDownloadOptions"
    header = "X-Download-Options"

    def render(self) -> str | None:
        return "noopen"


class XFrameOptionsRule(HeaderRule):
    key = "xFrameOptions"
    header = "X-Frame-Options"
    options_type = XFrameOptionsOptions

    def render(self) -> str | None:
        return "DENY" if self.options.action.upper() == "DENY" else "SAMEORIGIN"


class XPermittedCrossDomainPoliciesRule(_PolicyRule):
    key = "xPermittedCrossDomainPolicies"
    header = "X-Permitted-Cross-Domain-Policies"
    options_type = XPermittedCrossDomainPoliciesOptions


class XPoweredByRule(HeaderRule):
    """Always strips ``X-Powered-By``; sets or strips ``Server``."""

    key = "xPoweredBy"
    header = "Server"
    options_type = XPoweredByOptions

    def render(self) -> str | None:
        return self.options.server_value

    def apply(self, response: Response) -> Response:
        response = response.without_header("X-Powered-By")
        if self.value is None:
            return response.without_header(self.header)
        return response.with_header(self.header, self.value)


class XXssProtectionRule(HeaderRule):
    key = "xXssProtection"
    header = "X-XSS-Protection"

    def render(self) -> str | None:
        return "0"
