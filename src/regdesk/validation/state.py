"""Form state: the submitted values plus the results currently on display.

A ``FormState`` is a snapshot. Validation never edits the values; it
produces a new state whose ``results`` hold exactly one
``ValidationResult`` per field, every one reset to ``Valid`` before the
new report is applied.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from regdesk.http.forms import FormData
from regdesk.validation.fields import FieldSpec, FieldValue
from regdesk.validation.result import VALID, ValidationReport, ValidationResult


@dataclass(frozen=True, slots=True)
class FormState:
    """Field values keyed by name, plus displayed results keyed by name."""

    values: Mapping[str, FieldValue] = field(default_factory=dict)
    results: Mapping[str, ValidationResult] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))
        object.__setattr__(self, "results", MappingProxyType(dict(self.results)))

    @classmethod
    def from_form(cls, form: FormData, fields: Iterable[FieldSpec]) -> FormState:
        """Read every field out of a parsed form according to its kind."""
        return cls(
            values={spec.name: spec.kind.read(spec.name, form, form.files) for spec in fields}
        )

    @classmethod
    def empty(cls, fields: Iterable[FieldSpec]) -> FormState:
        """The state of a freshly loaded page."""
        return cls(values={spec.name: spec.kind.empty() for spec in fields})

    def value(self, name: str) -> FieldValue:
        return self.values.get(name)

    def result(self, name: str) -> ValidationResult:
        return self.results.get(name, VALID)

    def clear(self) -> FormState:
        """Every field back to ``Valid``; values untouched."""
        return FormState(self.values, {name: VALID for name in self.values})

    def with_report(self, report: ValidationReport) -> FormState:
        """Clear, then display *report*'s results."""
        cleared = self.clear()
        return FormState(self.values, {**cleared.results, **report.results})
