"""Tests for the submission normalizer and payload."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from regdesk.http.forms import FormData, UploadFile
from regdesk.submissions import (
    SubmissionPayload,
    normalize_comm,
    normalize_skills,
    normalize_submission,
    submission_timestamp,
    transport_fields,
)
from regdesk.validation import FileDescriptor

NOW = datetime(2026, 10, 19, 8, 15, 30, 123456, tzinfo=UTC)


class TestNormalizeSkills:
    def test_list_unchanged(self) -> None:
        assert normalize_skills(["ml", "web"]) == ["ml", "web"]

    def test_comma_string_split_and_trimmed(self) -> None:
        assert normalize_skills("ml, web , data") == ["ml", "web", "data"]

    def test_single_value_wrapped(self) -> None:
        assert normalize_skills("ml") == ["ml"]

    def test_absent_unchanged(self) -> None:
        assert normalize_skills(None) is None
        assert normalize_skills("") == ""

    def test_idempotent(self) -> None:
        once = normalize_skills("ml,web")
        assert normalize_skills(once) == once


class TestNormalizeComm:
    def test_scalar_wrapped(self) -> None:
        assert normalize_comm("email") == ["email"]
        assert normalize_comm("yes") == ["yes"]

    def test_list_unchanged(self) -> None:
        assert normalize_comm(["email", "sms"]) == ["email", "sms"]

    def test_absent_unchanged(self) -> None:
        assert normalize_comm(None) is None


class TestTransportFields:
    def test_single_and_repeated(self) -> None:
        form = FormData({"a": ["1"], "b": ["x", "y"], "c": [""]})
        assert transport_fields(form) == {"a": "1", "b": ["x", "y"], "c": ""}


class TestTimestamp:
    def test_utc_milliseconds_with_z(self) -> None:
        assert submission_timestamp(NOW) == "2026-10-19T08:15:30.123Z"

    def test_converts_offsets_to_utc(self) -> None:
        ist = timezone(timedelta(hours=5, minutes=30))
        moment = datetime(2026, 10, 19, 13, 45, 30, tzinfo=ist)
        assert submission_timestamp(moment) == "2026-10-19T08:15:30.000Z"

    def test_defaults_to_now(self) -> None:
        stamp = submission_timestamp()
        assert stamp.endswith("Z")
        assert len(stamp) == len("2026-10-19T08:15:30.123Z")


class TestNormalizeSubmission:
    def test_normalizes_by_kind(self) -> None:
        payload = normalize_submission(
            {"firstName": "Asha", "skills": "ml,web", "comm": "email"},
            now=NOW,
        )
        assert payload.fields == {
            "firstName": "Asha",
            "skills": ["ml", "web"],
            "comm": ["email"],
        }
        assert payload.submitted_at == "2026-10-19T08:15:30.123Z"
        assert payload.file is None

    def test_unknown_fields_pass_through(self) -> None:
        payload = normalize_submission({"extra": "a,b"}, now=NOW)
        assert payload.fields["extra"] == "a,b"

    def test_upload_reduced_to_metadata(self) -> None:
        upload = UploadFile("me.png", "image/png", 4)
        payload = normalize_submission({}, upload, now=NOW)
        assert payload.file == FileDescriptor("me.png", "image/png", 4)

    def test_descriptor_accepted(self) -> None:
        descriptor = FileDescriptor("me.png", "image/png", 4)
        assert normalize_submission({}, descriptor, now=NOW).file is descriptor

    def test_does_not_validate(self) -> None:
        payload = normalize_submission({"email": "not an email", "nickname": "bot"}, now=NOW)
        assert payload.fields["email"] == "not an email"

    def test_fields_are_read_only(self) -> None:
        payload = normalize_submission({"firstName": "Asha"}, now=NOW)
        with pytest.raises(TypeError):
            payload.fields["firstName"] = "x"  # type: ignore[index]

    def test_input_not_mutated(self) -> None:
        fields = {"skills": "ml,web"}
        normalize_submission(fields, now=NOW)
        assert fields == {"skills": "ml,web"}


class TestPayload:
    def test_as_dict_shape(self) -> None:
        payload = SubmissionPayload(
            submitted_at="2026-10-19T08:15:30.123Z",
            fields={"comm": ["email"]},
            file=FileDescriptor("me.png", "image/png", 4),
        )
        assert payload.as_dict() == {
            "submittedAt": "2026-10-19T08:15:30.123Z",
            "fields": {"comm": ["email"]},
            "file": {"originalName": "me.png", "mimeType": "image/png", "sizeBytes": 4},
        }

    def test_as_dict_without_file(self) -> None:
        payload = SubmissionPayload(submitted_at="t", fields={})
        assert payload.as_dict()["file"] is None
