"""Submission normalizer.

Reshapes whatever the form parser handed over into one canonical
``SubmissionPayload``. It performs no validation and cannot fail on the
shapes the parser produces: strings, lists of strings, an optional file.
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from regdesk.http.forms import FormData, UploadFile
from regdesk.submissions.payload import SubmissionPayload
from regdesk.validation.fields import CheckboxGroup, FieldSpec, FileDescriptor, MultiSelect
from regdesk.validation.registration import REGISTRATION_FIELDS

_MULTI_SELECT = MultiSelect()
_CHECKBOX_GROUP = CheckboxGroup()


def normalize_skills(value: Any) -> Any:
    """Canonical list form of a multi-select value.

    ``["a", "b"]`` stays as is, ``"a, b,c"`` becomes ``["a", "b", "c"]``,
    ``"a"`` becomes ``["a"]``. Absent or empty values are returned
    unchanged rather than turned into ``[]``. Idempotent.
    """
    return _MULTI_SELECT.normalize(value)


def normalize_comm(value: Any) -> Any:
    """Canonical list form of a checkbox-group value.

    A single checked box (``"email"``) becomes ``["email"]``; lists and
    absent values pass through.
    """
    return _CHECKBOX_GROUP.normalize(value)


def transport_fields(form: FormData) -> dict[str, str | list[str]]:
    """Collapse a parsed form into the parser's wire shape.

    A name submitted once maps to its string, a repeated name to the list
    of its values.
    """
    fields: dict[str, str | list[str]] = {}
    for name in form:
        values = form.get_list(name)
        fields[name] = values[0] if len(values) == 1 else values
    return fields


def submission_timestamp(now: datetime | None = None) -> str:
    """UTC ISO-8601 with milliseconds and a ``Z`` suffix."""
    moment = (now or datetime.now(UTC)).astimezone(UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_submission(
    fields: Mapping[str, Any],
    file: UploadFile | FileDescriptor | None = None,
    *,
    now: datetime | None = None,
    specs: Iterable[FieldSpec] = REGISTRATION_FIELDS,
) -> SubmissionPayload:
    """Build the canonical payload for one submission.

    Each known field is normalized by its kind; unknown fields pass
    through untouched. The upload, if any, is reduced to its metadata.

    Args:
        fields: Field name -> string or list of strings, as parsed.
        file: The uploaded photo, if one was sent.
        now: Override for the submission time (tests).
        specs: Field definitions whose kinds drive normalization.
    """
    kinds = {spec.name: spec.kind for spec in specs}
    normalized = {
        name: kinds[name].normalize(value) if name in kinds else value
        for name, value in fields.items()
    }

    if isinstance(file, UploadFile):
        file = FileDescriptor.from_upload(file)

    return SubmissionPayload(
        submitted_at=submission_timestamp(now),
        fields=normalized,
        file=file,
    )
