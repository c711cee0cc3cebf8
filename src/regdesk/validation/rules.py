"""Validation rules for the registration form.

Each rule is a callable with the signature::

    def rule(value: FieldValue, context: RuleContext) -> str | None:
        '''Return error message, or None if valid.'''

``context`` carries the sibling field values (a password confirmation
needs the password) and the date used as "today" for the age check.
Rules are pure: no I/O, no clock reads, no mutation of their inputs.

Rules are built by factory functions so each field can carry its own
message::

    def same_as(other: str, message: str) -> Rule:
        def check(value, context):
            if value != context.value(other):
                return message
            return None
        return check

The predicates underneath (``is_valid_email``, ``is_strong_password``,
...) are exported on their own so any host can reuse the exact same
checks. The regex sources are plain strings so templates can emit them
as HTML ``pattern`` attributes.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass, field
from datetime import date, timedelta
from urllib.parse import urlsplit

from regdesk.validation.fields import FieldValue, FileDescriptor

type Rule = Callable[[FieldValue, RuleContext], str | None]


@dataclass(frozen=True, slots=True)
class RuleContext:
    """Everything a rule may look at besides its own value."""

    form: Mapping[str, FieldValue] = field(default_factory=dict)
    today: date = field(default_factory=date.today)

    def value(self, name: str) -> FieldValue:
        return self.form.get(name)


# ---------------------------------------------------------------------------
# Patterns (shared with the HTML form)
# ---------------------------------------------------------------------------

EMAIL_PATTERN = r"[^\s@]+@[^\s@]+\.[^\s@]+"

# 8+ chars, one digit, one character that is neither word nor whitespace
PASSWORD_PATTERN = r"(?=.*\d)(?=.*[^\w\s]).{8,}"

# Optional +CC (1-3 digits, optional separator), then exactly 10 digits
PHONE_PATTERN = r"(\+?\d{1,3}[\- ]?)?\d{10}"

_EMAIL_RE = re.compile(EMAIL_PATTERN)
_PASSWORD_RE = re.compile(PASSWORD_PATTERN, re.ASCII)
_PHONE_RE = re.compile(PHONE_PATTERN, re.ASCII)
_DECIMAL_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)
_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_SCHEME_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9+.\-]*")

# Schemes whose URLs are meaningless without a host
_HOST_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})

ALLOWED_IMAGE_TYPES = frozenset({"image/png", "image/jpeg"})
MAX_UPLOAD_BYTES = 2 * 1024 * 1024  # 2 MiB


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def is_blank(value: FieldValue) -> bool:
    """True for None, empty or whitespace-only strings, empty lists, False."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list):
        return not value
    return False


def is_valid_email(value: str) -> bool:
    """``local@domain.tld`` shape. Structure only, not deliverability."""
    return _EMAIL_RE.fullmatch(value or "") is not None


def is_strong_password(value: str) -> bool:
    """At least 8 characters, including a digit and a symbol."""
    return _PASSWORD_RE.fullmatch(value or "") is not None


def is_valid_phone(value: str) -> bool:
    """Ten digits with an optional ``+`` and 1-3 digit country code."""
    return _PHONE_RE.fullmatch(value or "") is not None


def _years_before(today: date, years: int) -> date:
    # Feb 29 in a non-leap target year rolls over to Mar 1
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        return today.replace(year=today.year - years, day=28) + timedelta(days=1)


def parse_date(value: FieldValue) -> date | None:
    """Parse an ISO ``YYYY-MM-DD`` string; None if absent or malformed."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    # fromisoformat also takes basic and week-date forms
    if _ISO_DATE_RE.fullmatch(text) is None:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def is_at_least(dob: FieldValue, years: int, today: date) -> bool:
    """True if someone born on *dob* has turned *years* by *today*.

    Calendar comparison on year, month and day, not elapsed time.
    Missing or unparsable dates are never old enough.
    """
    born = parse_date(dob)
    if born is None:
        return False
    return born <= _years_before(today, years)


def is_at_least_16(dob: FieldValue, today: date | None = None) -> bool:
    return is_at_least(dob, 16, today or date.today())


def parse_cgpa(value: str) -> float | None:
    """Parse a decimal literal. None if blank or not a finite number."""
    text = (value or "").strip()
    if not text or _DECIMAL_RE.fullmatch(text) is None:
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    return number


def is_valid_cgpa(value: str, low: float = 0.0, high: float = 10.0) -> bool:
    """Optional: blank passes, otherwise a number in ``[low, high]``."""
    if not (value or "").strip():
        return True
    number = parse_cgpa(value)
    return number is not None and low <= number <= high


def is_valid_url(value: str) -> bool:
    """Optional: blank passes, otherwise a well-formed absolute URL."""
    text = (value or "").strip()
    if not text:
        return True
    if any(ch.isspace() for ch in text):
        return False
    try:
        parts = urlsplit(text)
        parts.port  # noqa: B018 (raises ValueError on a malformed port)
    except ValueError:
        return False
    if not parts.scheme or _SCHEME_RE.fullmatch(parts.scheme) is None:
        return False
    if parts.scheme.lower() in _HOST_SCHEMES:
        if not parts.netloc:
            # "http:example.com" and "http:/example.com" name a host too
            rest = text[len(parts.scheme) + 1 :].lstrip("/\\")
            try:
                parts = urlsplit(f"{parts.scheme}://{rest}")
                parts.port  # noqa: B018
            except ValueError:
                return False
        return bool(parts.hostname)
    return bool(parts.netloc or parts.path or parts.query)


def is_allowed_upload(
    file: FileDescriptor | None,
    types: Collection[str] = ALLOWED_IMAGE_TYPES,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> bool:
    """Optional: no file passes, otherwise the MIME type and size must fit."""
    if file is None:
        return True
    return file.mime_type in types and file.size_bytes <= max_bytes


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(message: str = "This field is required.") -> Rule:
    """Field must be present and non-blank (lists non-empty, flags set)."""

    def check(value: FieldValue, context: RuleContext) -> str | None:
        if is_blank(value):
            return message
        return None

    return check


def at_least_one(message: str) -> Rule:
    """Checkbox group must have at least one box checked."""

    def check(value: FieldValue, context: RuleContext) -> str | None:
        if not isinstance(value, list) or not value:
            return message
        return None

    return check


def checked(message: str) -> Rule:
    """Lone checkbox must be ticked."""

    def check(value: FieldValue, context: RuleContext) -> str | None:
        if value is not True:
            return message
        return None

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------


def _text(value: FieldValue) -> str:
    return value if isinstance(value, str) else ""


def email_format(message: str = "Enter a valid email address.") -> Rule:
    def check(value: FieldValue, context: RuleContext) -> str | None:
        if not is_valid_email(_text(value).strip()):
            return message
        return None

    return check


def password_strength(message: str) -> Rule:
    """Untrimmed: leading and trailing spaces count toward the length."""

    def check(value: FieldValue, context: RuleContext) -> str | None:
        if not is_strong_password(_text(value)):
            return message
        return None

    return check


def phone_format(message: str) -> Rule:
    def check(value: FieldValue, context: RuleContext) -> str | None:
        if not is_valid_phone(_text(value).strip()):
            return message
        return None

    return check


def absolute_url(message: str) -> Rule:
    """Optional URL; blank passes."""

    def check(value: FieldValue, context: RuleContext) -> str | None:
        if not is_valid_url(_text(value)):
            return message
        return None

    return check


# ---------------------------------------------------------------------------
# Cross-field and contextual
# ---------------------------------------------------------------------------


def same_as(other: str, message: str) -> Rule:
    """Value must equal the current value of field *other*, exactly."""

    def check(value: FieldValue, context: RuleContext) -> str | None:
        if _text(value) != _text(context.value(other)):
            return message
        return None

    return check


def minimum_age(years: int, message: str) -> Rule:
    """Date of birth must be at least *years* before ``context.today``."""

    def check(value: FieldValue, context: RuleContext) -> str | None:
        if not is_at_least(value, years, context.today):
            return message
        return None

    return check


# ---------------------------------------------------------------------------
# Range and upload
# ---------------------------------------------------------------------------


def number_between(low: float, high: float, message: str) -> Rule:
    """Optional number; blank passes, anything else must parse into range."""

    def check(value: FieldValue, context: RuleContext) -> str | None:
        if not is_valid_cgpa(_text(value), low, high):
            return message
        return None

    return check


def upload(
    message: str,
    types: Collection[str] = ALLOWED_IMAGE_TYPES,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> Rule:
    """Optional file; when present its type and size must be allowed."""

    def check(value: FieldValue, context: RuleContext) -> str | None:
        file = value if isinstance(value, FileDescriptor) else None
        if not is_allowed_upload(file, types, max_bytes):
            return message
        return None

    return check
