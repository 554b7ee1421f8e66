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
"""Typed options for each helmet rule family.

An options bag maps each family key to ``False``, ``True``/``None`` or a
mapping. :func:`parse_setting` turns one raw value into a :class:`RuleSetting`;
rule option models then validate the mapping. Keys are accepted in camelCase
(``maxAge``) as well as snake_case (``max_age``). Unknown keys are ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from pyhelmet.kernel.exceptions import InvalidOptionError


class RuleState(Enum):
    """How one rule family is configured."""

    DISABLED = "DISABLED"
    DEFAULT = "DEFAULT"
    CONFIGURED = "CONFIGURED"


@dataclass(frozen=True)
class RuleSetting:
    """A rule family's state plus its raw override mapping (empty unless CONFIGURED)."""

    state: RuleState
    overrides: Mapping[str, Any] = field(default_factory=dict)

    @property
    def enabled(self) -> bool:
        return self.state is not RuleState.DISABLED


def parse_setting(key: str, value: Any, enabled_by_default: bool = True) -> RuleSetting:
    """Interpret one option value.

    ``False`` disables, ``True`` enables with defaults, a mapping enables with
    overrides. ``None`` means "not given" and yields the family's default state,
    and so does an empty mapping for an opt-in family.
    """
    if value is None:
        return RuleSetting(RuleState.DEFAULT if enabled_by_default else RuleState.DISABLED)
    if value is False:
        return RuleSetting(RuleState.DISABLED)
    if value is True:
        return RuleSetting(RuleState.DEFAULT)
    if isinstance(value, Mapping):
        if not value and not enabled_by_default:
            return RuleSetting(RuleState.DISABLED)
        return RuleSetting(RuleState.CONFIGURED, dict(value))
    raise InvalidOptionError(key, f"expected a bool or a mapping, got {type(value).__name__}", value)


class RuleOptions(BaseModel):
    """Base for per-rule option models.

    A ``None`` field value means "use the default" unless the field is listed
    in ``nullable_fields``, where ``None`` is a meaningful value.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        keep = set(cls.nullable_fields)
        keep.update(cls.model_fields[name].alias for name in cls.nullable_fields)
        return {k: v for k, v in data.items() if v is not None or k in keep}


# Directive value: None drops the directive, a scalar is a one-token list.
DirectiveToken = str | int | float
DirectiveValue = list[DirectiveToken] | DirectiveToken | None


class ContentSecurityPolicyOptions(RuleOptions):
    directives: dict[str, DirectiveValue] | None = None
    report_only: bool = False


class CrossOriginEmbedderPolicyOptions(RuleOptions):
    nullable_fields = frozenset({"policy"})
    policy: str | None = "require-corp"


class CrossOriginOpenerPolicyOptions(RuleOptions):
    nullable_fields = frozenset({"policy"})
    policy: str | None = "same-origin"


class CrossOriginResourcePolicyOptions(RuleOptions):
    nullable_fields = frozenset({"policy"})
    policy: str | None = "same-origin"


class ReferrerPolicyOptions(RuleOptions):
    """A single policy or an ordered fallback list (sent comma-separated)."""

    policy: str | list[str] = "no-referrer"

    @field_validator("policy")
    @classmethod
    def _not_empty(cls, value: str | list[str]) -> str | list[str]:
        if not value:
            raise ValueError("at least one referrer policy is required")
        return value


class StrictTransportSecurityOptions(RuleOptions):
    max_age: int = Field(default=15552000, ge=0)  # 180 days
    include_sub_domains: bool = True
    preload: bool = False


class XDnsPrefetchControlOptions(RuleOptions):
    allow: bool = False


class XFrameOptionsOptions(RuleOptions):
    action: str = "SAMEORIGIN"


class XPermittedCrossDomainPoliciesOptions(RuleOptions):
    policy: str = "none"


class XPoweredByOptions(RuleOptions):
    """``server_value`` ``None`` strips the ``Server`` header instead of setting it."""

    nullable_fields = frozenset({"server_value"})

    server_value: str | None = "secure"
