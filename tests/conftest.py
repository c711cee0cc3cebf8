"""Shared fixtures: a submission that passes every rule."""

from datetime import date

import pytest

from regdesk.validation import REGISTRATION_FIELDS, FormState

TODAY = date(2026, 10, 19)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def valid_fields() -> dict[str, str | list[str]]:
    """Form fields as a browser would submit them for a valid registration."""
    return {
        "firstName": "Asha",
        "lastName": "Rao",
        "nickname": "",
        "email": "asha@example.com",
        "password": "s3cret!pw",
        "confirm": "s3cret!pw",
        "phone": "+91 9876543210",
        "dob": "2000-05-17",
        "gender": "female",
        "course": "BCA",
        "mode": "online",
        "cgpa": "8.4",
        "portfolio": "https://asha.dev",
        "skills": ["ml", "web"],
        "comm": ["email"],
        "terms": "on",
    }


@pytest.fixture
def valid_state(valid_fields) -> FormState:
    """The same submission, read into a FormState."""
    values = {}
    for spec in REGISTRATION_FIELDS:
        raw = valid_fields.get(spec.name)
        if spec.tag == "flag":
            values[spec.name] = raw is not None
        elif spec.tag == "file":
            values[spec.name] = None
        elif spec.tag in ("multi_select", "checkbox_group"):
            values[spec.name] = list(raw or [])
        else:
            values[spec.name] = raw or ""
    return FormState(values=values)
