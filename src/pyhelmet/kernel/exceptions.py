"""Exception hierarchy for pyhelmet.

Every error raised by the library inherits from :class:`PyHelmetException`
and carries an optional machine-readable ``code`` plus a ``context`` dict.

Categories:
- ConfigurationException: invalid helmet options, detected at construction
- PipelineException: contract violations detected while a chain runs
"""

from __future__ import annotations

from typing import Any


class PyHelmetException(Exception):
    """Base exception for all pyhelmet errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "HELMET_OPTION_CONFLICT").
        context: Arbitrary key-value pairs describing the failure.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(PyHelmetException):
    """Options that cannot be turned into a rule set. Never recovered."""


class ConflictingOptionError(ConfigurationException):
    """Both the current and the legacy key of one rule family were supplied."""

    def __init__(self, option: str, alias: str) -> None:
        super().__init__(
            f"Option specified twice; remove either `{alias}` or `{option}`.",
            code="HELMET_OPTION_CONFLICT",
            context={"option": option, "alias": alias},
        )
        self.option = option
        self.alias = alias


class InvalidOptionError(ConfigurationException):
    """An option value has an unsupported type or fails validation."""

    def __init__(self, option: str, reason: str, value: Any = None) -> None:
        super().__init__(
            f"Invalid value for option `{option}`: {reason}",
            code="HELMET_INVALID_OPTION",
            context={"option": option, "value": value},
        )
        self.option = option


# =============================================================================
# Pipeline Exceptions
# =============================================================================


class PipelineException(PyHelmetException):
    """A middleware chain broke its contract while handling a request."""


class TypeMismatchError(PipelineException, TypeError):
    """A handler produced something other than a Response or an awaitable of one."""

    def __init__(self, source: str, value: Any) -> None:
        super().__init__(
            f"{source} must return a Response or an awaitable resolving to one, "
            f"got {type(value).__name__}",
            code="PIPELINE_TYPE_MISMATCH",
            context={"source": source, "type": type(value).__name__},
        )
