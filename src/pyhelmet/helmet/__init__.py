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
"""Helmet: configurable HTTP security headers."""

from pyhelmet.helmet.csp import DEFAULT_DIRECTIVES, format_directives
from pyhelmet.helmet.middleware import HelmetMiddleware
from pyhelmet.helmet.options import RuleSetting, RuleState
from pyhelmet.helmet.resolver import (
    CANONICAL_FAMILIES,
    ConfigResolver,
    ResolvedRuleSet,
    RuleFamily,
    resolve,
)
from pyhelmet.helmet.rules import (
    ContentSecurityPolicyRule,
    CrossOriginEmbedderPolicyRule,
    CrossOriginOpenerPolicyRule,
    CrossOriginResourcePolicyRule,
    HeaderRule,
    OriginAgentClusterRule,
    ReferrerPolicyRule,
    StrictTransportSecurityRule,
    XContentTypeOptionsRule,
    XDnsPrefetchControlRule,
    XDownloadOptionsRule,
    XFrameOptionsRule,
    XPermittedCrossDomainPoliciesRule,
    XPoweredByRule,
    XXssProtectionRule,
)

__all__ = [
    # Middleware
    "HelmetMiddleware",
    # Resolution
    "CANONICAL_FAMILIES",
    "ConfigResolver",
    "ResolvedRuleSet",
    "RuleFamily",
    "RuleSetting",
    "RuleState",
    "resolve",
    # CSP
    "DEFAULT_DIRECTIVES",
    "format_directives",
    # Rules
    "HeaderRule",
    "ContentSecurityPolicyRule",
    "CrossOriginEmbedderPolicyRule",
    "CrossOriginOpenerPolicyRule",
    "CrossOriginResourcePolicyRule",
    "OriginAgentClusterRule",
    "ReferrerPolicyRule",
    "StrictTransportSecurityRule",
    "XContentTypeOptionsRule",
    "XDnsPrefetchControlRule",
    "XDownloadOptionsRule",
    "XFrameOptionsRule",
    "XPermittedCrossDomainPoliciesRule",
    "XPoweredByRule",
    "XXssProtectionRule",
]
