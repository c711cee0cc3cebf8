"""Validation results: ``Valid`` or ``Invalid(message)``, nothing in between."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class Valid:
    """The field passed every rule."""

    @property
    def message(self) -> str:
        return ""

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Invalid:
    """The field failed a rule. Only the first failing rule is reported."""

    message: str

    def __bool__(self) -> bool:
        return False


type ValidationResult = Valid | Invalid

VALID = Valid()


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """The outcome of validating one form snapshot.

    ``results`` holds exactly one result per validated field or group,
    in the fixed field order. The report is falsy when any field failed,
    so you can write::

        report = validate(state)
        if not report:
            focus(report.first_invalid)
    """

    results: Mapping[str, ValidationResult] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "results", MappingProxyType(dict(self.results)))

    @property
    def errors(self) -> dict[str, str]:
        """Field name -> message, for failing fields only."""
        return {
            name: result.message
            for name, result in self.results.items()
            if isinstance(result, Invalid)
        }

    @property
    def first_invalid(self) -> str | None:
        """The earliest failing field in field order, or None."""
        for name, result in self.results.items():
            if isinstance(result, Invalid):
                return name
        return None

    @property
    def is_valid(self) -> bool:
        """True if no field failed."""
        return self.first_invalid is None

    def __bool__(self) -> bool:
        return self.is_valid
