"""Tests for regdesk.validation.rules: predicates and rule factories."""

from datetime import date

import pytest

from regdesk.validation.fields import FileDescriptor
from regdesk.validation.rules import (
    MAX_UPLOAD_BYTES,
    RuleContext,
    at_least_one,
    checked,
    email_format,
    is_allowed_upload,
    is_at_least,
    is_at_least_16,
    is_blank,
    is_strong_password,
    is_valid_cgpa,
    is_valid_email,
    is_valid_phone,
    is_valid_url,
    minimum_age,
    number_between,
    parse_cgpa,
    parse_date,
    password_strength,
    required,
    same_as,
    upload,
)

TODAY = date(2026, 10, 19)
CTX = RuleContext(today=TODAY)

# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


class TestIsBlank:
    @pytest.mark.parametrize("value", [None, "", "   ", [], False])
    def test_blank(self, value) -> None:
        assert is_blank(value)

    @pytest.mark.parametrize("value", ["x", ["a"], True])
    def test_not_blank(self, value) -> None:
        assert not is_blank(value)


class TestEmail:
    def test_valid(self) -> None:
        assert is_valid_email("user@example.com")

    def test_minimal(self) -> None:
        assert is_valid_email("a@b.c")

    def test_no_tld(self) -> None:
        assert not is_valid_email("user@localhost")

    def test_space_inside(self) -> None:
        assert not is_valid_email("us er@example.com")

    def test_two_ats(self) -> None:
        assert not is_valid_email("a@b@c.d")

    def test_empty_local_part(self) -> None:
        assert not is_valid_email("@example.com")

    def test_empty(self) -> None:
        assert not is_valid_email("")


class TestPassword:
    def test_strong(self) -> None:
        assert is_strong_password("abcdefg1!")

    def test_no_symbol(self) -> None:
        assert not is_strong_password("abcdefgh1")

    def test_underscore_is_not_a_symbol(self) -> None:
        assert not is_strong_password("pass_word1")

    def test_no_digit(self) -> None:
        assert not is_strong_password("abcdefgh!")

    def test_too_short(self) -> None:
        assert not is_strong_password("ab1!")

    def test_exactly_eight(self) -> None:
        assert is_strong_password("abcd123!")
        assert not is_strong_password("abcd1234")

    def test_non_ascii_digit_does_not_count(self) -> None:
        assert not is_strong_password("abcdefg١!")


class TestPhone:
    @pytest.mark.parametrize(
        "value",
        ["9876543210", "+1 9876543210", "+919876543210", "+91 9876543210", "+1-9876543210", "19876543210"],
    )
    def test_valid(self, value: str) -> None:
        assert is_valid_phone(value)

    @pytest.mark.parametrize(
        "value",
        ["98765", "987654321", "+1234 9876543210", "98765-43210", "phone", ""],
    )
    def test_invalid(self, value: str) -> None:
        assert not is_valid_phone(value)


class TestAge:
    def test_exactly_sixteen_today(self) -> None:
        assert is_at_least("2010-10-19", 16, TODAY)

    def test_one_day_short(self) -> None:
        assert not is_at_least("2010-10-20", 16, TODAY)

    def test_older(self) -> None:
        assert is_at_least("1990-01-01", 16, TODAY)

    def test_empty_is_never_old_enough(self) -> None:
        assert not is_at_least("", 16, TODAY)

    def test_garbage_is_never_old_enough(self) -> None:
        assert not is_at_least("next tuesday", 16, TODAY)

    def test_compact_date_is_never_old_enough(self) -> None:
        assert not is_at_least("19900101", 16, TODAY)

    def test_leap_day_rolls_to_march_first(self) -> None:
        leap_day = date(2024, 2, 29)
        assert is_at_least("2023-03-01", 1, leap_day)
        assert not is_at_least("2023-03-02", 1, leap_day)

    def test_is_at_least_16_defaults_today(self) -> None:
        assert is_at_least_16("1990-01-01")
        assert not is_at_least_16("2010-10-20", TODAY)

    def test_parse_date(self) -> None:
        assert parse_date("2000-05-17") == date(2000, 5, 17)
        assert parse_date("17/05/2000") is None
        assert parse_date("20100101") is None
        assert parse_date("2010-W01-1") is None
        assert parse_date(None) is None


class TestCgpa:
    def test_parse(self) -> None:
        assert parse_cgpa("8.5") == 8.5
        assert parse_cgpa(" 7 ") == 7.0
        assert parse_cgpa("1e1") == 10.0

    @pytest.mark.parametrize("value", ["abc", "0x1", "1_0", "inf", "nan", ""])
    def test_parse_rejects(self, value: str) -> None:
        assert parse_cgpa(value) is None

    def test_blank_is_valid(self) -> None:
        assert is_valid_cgpa("")
        assert is_valid_cgpa("   ")

    def test_bounds_inclusive(self) -> None:
        assert is_valid_cgpa("0")
        assert is_valid_cgpa("10")
        assert is_valid_cgpa("7.5")

    def test_out_of_range(self) -> None:
        assert not is_valid_cgpa("10.01")
        assert not is_valid_cgpa("-0.1")

    def test_not_a_number(self) -> None:
        assert not is_valid_cgpa("eight")


class TestUrl:
    def test_blank_is_valid(self) -> None:
        assert is_valid_url("")

    @pytest.mark.parametrize(
        "value",
        [
            "https://example.com",
            "http://localhost:8080/path?q=1",
            "mailto:a@b.co",
            "http:example.com",
            "https:/example.com/work",
        ],
    )
    def test_valid(self, value: str) -> None:
        assert is_valid_url(value)

    @pytest.mark.parametrize(
        "value",
        [
            "example.com",
            "http://",
            "http:",
            "https://exa mple.com",
            "http://host:99999",
            "http:host:99999",
        ],
    )
    def test_invalid(self, value: str) -> None:
        assert not is_valid_url(value)


class TestUpload:
    def test_absent_is_valid(self) -> None:
        assert is_allowed_upload(None)

    def test_png(self) -> None:
        assert is_allowed_upload(FileDescriptor("me.png", "image/png", 1000))

    def test_jpeg_at_limit(self) -> None:
        assert is_allowed_upload(FileDescriptor("me.jpg", "image/jpeg", MAX_UPLOAD_BYTES))

    def test_over_limit(self) -> None:
        assert not is_allowed_upload(
            FileDescriptor("me.jpg", "image/jpeg", MAX_UPLOAD_BYTES + 1)
        )

    def test_wrong_type(self) -> None:
        assert not is_allowed_upload(FileDescriptor("me.gif", "image/gif", 10))


# ---------------------------------------------------------------------------
# Rule factories
# ---------------------------------------------------------------------------


class TestRequired:
    def test_default_message(self) -> None:
        assert required()("", CTX) == "This field is required."

    def test_custom_message(self) -> None:
        assert required("Email is required.")("  ", CTX) == "Email is required."

    def test_present(self) -> None:
        assert required()("x", CTX) is None


class TestGroupsAndFlags:
    def test_at_least_one(self) -> None:
        rule = at_least_one("pick one")
        assert rule([], CTX) == "pick one"
        assert rule(None, CTX) == "pick one"
        assert rule(["email"], CTX) is None

    def test_checked(self) -> None:
        rule = checked("agree")
        assert rule(False, CTX) == "agree"
        assert rule(True, CTX) is None


class TestFormatRules:
    def test_email_trims(self) -> None:
        assert email_format()("  user@example.com ", CTX) is None

    def test_password_does_not_trim(self) -> None:
        rule = password_strength("weak")
        # Seven visible characters plus a space make eight
        assert rule(" abcde1!", CTX) is None
        assert rule("abcde1!", CTX) == "weak"


class TestContextRules:
    def test_same_as_matches(self) -> None:
        ctx = RuleContext(form={"password": "s3cret!pw"}, today=TODAY)
        assert same_as("password", "mismatch")("s3cret!pw", ctx) is None

    def test_same_as_is_exact(self) -> None:
        ctx = RuleContext(form={"password": "s3cret!pw"}, today=TODAY)
        assert same_as("password", "mismatch")("s3cret!pw ", ctx) == "mismatch"

    def test_minimum_age_uses_context_today(self) -> None:
        rule = minimum_age(16, "too young")
        assert rule("2010-10-19", CTX) is None
        assert rule("2010-10-20", CTX) == "too young"

    def test_number_between(self) -> None:
        rule = number_between(0, 10, "range")
        assert rule("", CTX) is None
        assert rule("11", CTX) == "range"

    def test_upload_ignores_non_files(self) -> None:
        rule = upload("bad file")
        assert rule(None, CTX) is None
        assert rule(FileDescriptor("a.gif", "image/gif", 1), CTX) == "bad file"
