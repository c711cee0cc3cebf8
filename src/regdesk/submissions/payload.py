"""The server-side snapshot of one registration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from regdesk.validation.fields import FileDescriptor


@dataclass(frozen=True, slots=True)
class SubmissionPayload:
    """A normalized submission: timestamp, fields, optional file.

    Built once per request by ``normalize_submission``; read-only
    afterwards and dropped once logged.
    """

    submitted_at: str
    fields: Mapping[str, Any]
    file: FileDescriptor | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def as_dict(self) -> dict[str, Any]:
        """The shape written to the submission log."""
        return {
            "submittedAt": self.submitted_at,
            "fields": dict(self.fields),
            "file": self.file.as_dict() if self.file is not None else None,
        }
