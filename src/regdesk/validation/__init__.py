"""Registration form validation: shared rules, one report per pass.

Usage::

    from regdesk.validation import FormState, validate

    state = FormState.from_form(form, REGISTRATION_FIELDS)
    report = validate(state)
    if not report:
        # report.errors == {"email": "Enter a valid email address."}
        # report.first_invalid == "email"
        ...

The same rule functions back the browser-facing constraint attributes
and the server-side check, so both sides agree on what "valid" means.
"""

from collections.abc import Iterable
from datetime import date

from regdesk.errors import BotSubmission
from regdesk.validation.fields import FieldSpec, FieldValue, FileDescriptor
from regdesk.validation.registration import FIELDS_BY_NAME, REGISTRATION_FIELDS
from regdesk.validation.result import VALID, Invalid, Valid, ValidationReport, ValidationResult
from regdesk.validation.rules import (
    Rule,
    RuleContext,
    is_allowed_upload,
    is_at_least,
    is_at_least_16,
    is_blank,
    is_strong_password,
    is_valid_cgpa,
    is_valid_email,
    is_valid_phone,
    is_valid_url,
)
from regdesk.validation.state import FormState

__all__ = [
    "FIELDS_BY_NAME",
    "REGISTRATION_FIELDS",
    "VALID",
    "BotSubmission",
    "FieldSpec",
    "FieldValue",
    "FileDescriptor",
    "FormState",
    "Invalid",
    "Rule",
    "RuleContext",
    "Valid",
    "ValidationReport",
    "ValidationResult",
    "check_honeypot",
    "is_allowed_upload",
    "is_at_least",
    "is_at_least_16",
    "is_strong_password",
    "is_valid_cgpa",
    "is_valid_email",
    "is_valid_phone",
    "is_valid_url",
    "validate",
    "validate_field",
]


def check_honeypot(state: FormState, fields: Iterable[FieldSpec] = REGISTRATION_FIELDS) -> None:
    """Raise ``BotSubmission`` if any honeypot field holds a value."""
    for spec in fields:
        if spec.honeypot and not is_blank(state.value(spec.name)):
            raise BotSubmission(spec.name)


def validate_field(spec: FieldSpec, context: RuleContext) -> ValidationResult:
    """Run *spec*'s rules in order; the first failure wins."""
    value = context.value(spec.name)
    for rule in spec.rules:
        message = rule(value, context)
        if message is not None:
            return Invalid(message)
    return VALID


def validate(
    state: FormState,
    fields: Iterable[FieldSpec] = REGISTRATION_FIELDS,
    *,
    today: date | None = None,
) -> ValidationReport:
    """Validate a form snapshot against every field, in order.

    Args:
        state: The submitted values. Never modified.
        fields: Field definitions in display order.
        today: The date the age check measures from. Defaults to
            ``date.today()``.

    Returns:
        A ``ValidationReport`` with one result per non-honeypot field.

    Raises:
        BotSubmission: If the honeypot is filled. Checked before any
            other rule runs.
    """
    fields = tuple(fields)
    check_honeypot(state, fields)

    context = RuleContext(form=state.values, today=today or date.today())
    return ValidationReport(
        {spec.name: validate_field(spec, context) for spec in fields if not spec.honeypot}
    )
