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
"""ConfigResolver: turns a flat options bag into an ordered rule set.

Rule families are listed once, in canonical order. That order decides the
order rules are applied in and is independent of the order keys appear in
the options bag, so header precedence is reproducible.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import structlog

from pyhelmet.helmet.options import RuleSetting, parse_setting
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
from pyhelmet.http.message import Response
from pyhelmet.kernel.exceptions import ConflictingOptionError, InvalidOptionError

logger = structlog.get_logger("pyhelmet.helmet")


@dataclass(frozen=True)
class RuleFamily:
    """One configurable header family.

    Attributes:
        rule_type: Rule class built when the family is enabled.
        alias: Legacy option key accepted instead of ``rule_type.key``.
        enabled_by_default: Whether an absent key enables the rule.
    """

    rule_type: type[HeaderRule]
    alias: str | None = None
    enabled_by_default: bool = True

    @property
    def key(self) -> str:
        return self.rule_type.key

    @property
    def keys(self) -> tuple[str, ...]:
        return (self.key,) if self.alias is None else (self.key, self.alias)


CANONICAL_FAMILIES: tuple[RuleFamily, ...] = (
    RuleFamily(ContentSecurityPolicyRule),
    RuleFamily(CrossOriginEmbedderPolicyRule, enabled_by_default=False),
    RuleFamily(CrossOriginOpenerPolicyRule),
    RuleFamily(CrossOriginResourcePolicyRule),
    RuleFamily(OriginAgentClusterRule),
    RuleFamily(ReferrerPolicyRule),
    RuleFamily(StrictTransportSecurityRule, alias="hsts"),
    RuleFamily(XContentTypeOptionsRule, alias="noSniff"),
    RuleFamily(XDnsPrefetchControlRule, alias="dnsPrefetchControl"),
    RuleFamily(XDownloadOptionsRule, alias="ieNoOpen"),
    RuleFamily(XFrameOptionsRule, alias="frameguard"),
    RuleFamily(XPermittedCrossDomainPoliciesRule, alias="permittedCrossDomainPolicies"),
    RuleFamily(XPoweredByRule, alias="hidePoweredBy"),
    RuleFamily(XXssProtectionRule, alias="xssFilter"),
)


@dataclass(frozen=True)
class ResolvedRuleSet:
    """Immutable, canonically ordered sequence of active rules."""

    rules: tuple[HeaderRule, ...] = ()

    def __iter__(self) -> Iterator[HeaderRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    @property
    def keys(self) -> list[str]:
        return [rule.key for rule in self.rules]

    def apply(self, response: Response) -> Response:
        """Fold every rule over *response* in order."""
        for rule in self.rules:
            response = rule.apply(response)
        return response


class ConfigResolver:
    """Resolves options bags against a table of rule families.

    Usage:
        rules = ConfigResolver().resolve({"hsts": {"maxAge": 31536000}, "xPoweredBy": False})
    """

    def __init__(self, families: Sequence[RuleFamily] = CANONICAL_FAMILIES) -> None:
        self._families = tuple(families)
        self._known_keys = frozenset(k for family in self._families for k in family.keys)

    @property
    def families(self) -> tuple[RuleFamily, ...]:
        return self._families

    def resolve(self, options: Mapping[str, Any] | None = None) -> ResolvedRuleSet:
        """Build the rule set for *options*.

        Raises:
            ConflictingOptionError: A family's key and its legacy alias are
                both present. Checked for every family before any rule is built.
            InvalidOptionError: A value is neither bool, ``None`` nor a
                mapping, or a mapping fails validation.
        """
        if options is None:
            options = {}
        if not isinstance(options, Mapping):
            raise InvalidOptionError("options", f"expected a mapping, got {type(options).__name__}", options)

        self._check_conflicts(options)
        for key in options:
            if key not in self._known_keys:
                logger.warning("helmet_unknown_option", option=key)

        rules: list[HeaderRule] = []
        for family in self._families:
            setting = self.setting_for(family, options)
            if setting.enabled:
                rules.append(family.rule_type(setting.overrides))
        return ResolvedRuleSet(tuple(rules))

    def settings(self, options: Mapping[str, Any]) -> dict[str, RuleSetting]:
        """Per-family settings for *options*, keyed by canonical key."""
        self._check_conflicts(options)
        return {family.key: self.setting_for(family, options) for family in self._families}

    def _check_conflicts(self, options: Mapping[str, Any]) -> None:
        for family in self._families:
            if family.alias is not None and family.key in options and family.alias in options:
                raise ConflictingOptionError(family.key, family.alias)

    @staticmethod
    def setting_for(family: RuleFamily, options: Mapping[str, Any]) -> RuleSetting:
        for key in family.keys:
            if key in options:
                return parse_setting(key, options[key], family.enabled_by_default)
        return parse_setting(family.key, None, family.enabled_by_default)


def resolve(options: Mapping[str, Any] | None = None) -> ResolvedRuleSet:
    """Resolve *options* against the canonical rule families."""
    return ConfigResolver().resolve(options)
