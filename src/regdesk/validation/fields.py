"""Field kinds for the registration form.

Each form control is described by a ``FieldSpec`` whose ``kind`` is one
of a closed set of tagged field types. The kind decides two things:

* ``read`` - how the control's value comes out of a parsed form
  (``FormData``) into a ``FormState``. Groups and multi-selects read
  every submitted value, flags read presence, files read metadata.
* ``normalize`` - how a raw transport value is reshaped on the server.
  Browsers and body parsers disagree about multi-value fields: the same
  multi-select may arrive as ``"a"``, ``"a,b"`` or ``["a", "b"]``. Only
  ``MultiSelect`` and ``CheckboxGroup`` change anything; every other kind
  passes values through.

Attaching normalization to the tag keeps the server free of ad hoc
``isinstance`` checks on field names.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from regdesk._internal.multimap import MultiValueMapping

if TYPE_CHECKING:
    from regdesk.http.forms import UploadFile
    from regdesk.validation.rules import Rule


@dataclass(frozen=True, slots=True)
class FileDescriptor:
    """What the validator and the log see of an uploaded file. Never the bytes."""

    original_name: str
    mime_type: str
    size_bytes: int

    @classmethod
    def from_upload(cls, upload: UploadFile) -> FileDescriptor:
        return cls(
            original_name=upload.filename,
            mime_type=upload.content_type,
            size_bytes=upload.size,
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "originalName": self.original_name,
            "mimeType": self.mime_type,
            "sizeBytes": self.size_bytes,
        }


type Scalar = str | bool | FileDescriptor
type FieldValue = Scalar | list[str] | None


# ---------------------------------------------------------------------------
# Kinds
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FieldKind:
    """Base kind: a single free-text value."""

    tag: ClassVar[str] = "text"

    def read(
        self,
        name: str,
        form: MultiValueMapping,
        files: Mapping[str, UploadFile],
    ) -> FieldValue:
        return form.get(name) or ""

    def empty(self) -> FieldValue:
        return ""

    def normalize(self, raw: Any) -> Any:
        return raw


@dataclass(frozen=True, slots=True)
class Text(FieldKind):
    tag: ClassVar[str] = "text"


@dataclass(frozen=True, slots=True)
class Date(FieldKind):
    """An ``<input type="date">`` value, ``YYYY-MM-DD``."""

    tag: ClassVar[str] = "date"


@dataclass(frozen=True, slots=True)
class Numeric(FieldKind):
    """A numeric string; parsing happens in the rules."""

    tag: ClassVar[str] = "numeric"


@dataclass(frozen=True, slots=True)
class Url(FieldKind):
    tag: ClassVar[str] = "url"


@dataclass(frozen=True, slots=True)
class SingleChoice(FieldKind):
    """A select or a radio group: one value out of ``choices``."""

    tag: ClassVar[str] = "single_choice"


@dataclass(frozen=True, slots=True)
class Flag(FieldKind):
    """A lone checkbox. Checked means the name was submitted at all."""

    tag: ClassVar[str] = "flag"

    def read(
        self,
        name: str,
        form: MultiValueMapping,
        files: Mapping[str, UploadFile],
    ) -> FieldValue:
        return name in form

    def empty(self) -> FieldValue:
        return False


@dataclass(frozen=True, slots=True)
class MultiSelect(FieldKind):
    """A ``<select multiple>``.

    Some clients send a multi-select as one comma-joined string, so a
    string containing a comma is split and each part trimmed.
    """

    tag: ClassVar[str] = "multi_select"

    def read(
        self,
        name: str,
        form: MultiValueMapping,
        files: Mapping[str, UploadFile],
    ) -> FieldValue:
        return form.get_list(name)

    def empty(self) -> FieldValue:
        return []

    def normalize(self, raw: Any) -> Any:
        # Absent or empty stays as it came in, not [].
        if not raw or isinstance(raw, list):
            return raw
        if isinstance(raw, str) and "," in raw:
            return [part.strip() for part in raw.split(",")]
        return [raw]


@dataclass(frozen=True, slots=True)
class CheckboxGroup(FieldKind):
    """Same-named checkboxes. A single checked box arrives as a scalar."""

    tag: ClassVar[str] = "checkbox_group"

    def read(
        self,
        name: str,
        form: MultiValueMapping,
        files: Mapping[str, UploadFile],
    ) -> FieldValue:
        return form.get_list(name)

    def empty(self) -> FieldValue:
        return []

    def normalize(self, raw: Any) -> Any:
        if not raw or isinstance(raw, list):
            return raw
        return [raw]


@dataclass(frozen=True, slots=True)
class File(FieldKind):
    """A single ``<input type="file">``; reads as a ``FileDescriptor``."""

    tag: ClassVar[str] = "file"

    def read(
        self,
        name: str,
        form: MultiValueMapping,
        files: Mapping[str, UploadFile],
    ) -> FieldValue:
        upload = files.get(name)
        if upload is None:
            return None
        return FileDescriptor.from_upload(upload)

    def empty(self) -> FieldValue:
        return None


# ---------------------------------------------------------------------------
# Field specs
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One control on the form: its kind, its rules, how it renders.

    ``group`` marks radio and checkbox groups whose message is shown once
    for the whole group. ``honeypot`` marks the hidden bot trap, which is
    checked before anything else. ``attrs`` are native HTML constraint
    attributes derived from the same patterns the rules use.
    """

    name: str
    kind: FieldKind
    label: str = ""
    rules: tuple[Rule, ...] = ()
    choices: tuple[tuple[str, str], ...] = ()
    group: bool = False
    honeypot: bool = False
    attrs: tuple[tuple[str, str], ...] = ()

    @property
    def tag(self) -> str:
        return self.kind.tag
