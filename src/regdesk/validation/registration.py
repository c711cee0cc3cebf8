"""The registration form, field by field.

Order matters: fields are validated, and the first failure focused, in
the order they appear in ``REGISTRATION_FIELDS``. The honeypot is listed
where it sits on the page but is always checked first.
"""

from regdesk.validation.fields import (
    CheckboxGroup,
    Date,
    FieldSpec,
    File,
    Flag,
    MultiSelect,
    Numeric,
    SingleChoice,
    Text,
    Url,
)
from regdesk.validation.rules import (
    ALLOWED_IMAGE_TYPES,
    EMAIL_PATTERN,
    MAX_UPLOAD_BYTES,
    PASSWORD_PATTERN,
    PHONE_PATTERN,
    absolute_url,
    at_least_one,
    checked,
    email_format,
    minimum_age,
    number_between,
    password_strength,
    phone_format,
    required,
    same_as,
    upload,
)

MINIMUM_AGE = 16
PHOTO_MESSAGE = "Only PNG/JPG up to 2 MB."

GENDERS = (
    ("female", "Female"),
    ("male", "Male"),
    ("nonbinary", "Non-binary"),
    ("unspecified", "Prefer not to say"),
)

# Suggestions only; any course name is accepted
COURSES = (
    ("B.Tech Computer Science", "B.Tech Computer Science"),
    ("B.Tech Electronics", "B.Tech Electronics"),
    ("B.Sc Data Science", "B.Sc Data Science"),
    ("BCA", "BCA"),
    ("MCA", "MCA"),
)

STUDY_MODES = (
    ("online", "Online"),
    ("offline", "On campus"),
    ("hybrid", "Hybrid"),
)

SKILLS = (
    ("ml", "Machine learning"),
    ("web", "Web development"),
    ("data", "Data analysis"),
    ("design", "UI/UX design"),
    ("cloud", "Cloud & DevOps"),
)

CHANNELS = (
    ("email", "Email"),
    ("sms", "SMS"),
    ("whatsapp", "WhatsApp"),
    ("phone", "Phone call"),
)

REGISTRATION_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec(
        "firstName",
        Text(),
        label="First name",
        rules=(required(),),
        attrs=(("required", ""), ("autocomplete", "given-name")),
    ),
    FieldSpec(
        "lastName",
        Text(),
        label="Last name",
        rules=(required(),),
        attrs=(("required", ""), ("autocomplete", "family-name")),
    ),
    FieldSpec("nickname", Text(), label="Nickname", honeypot=True),
    FieldSpec(
        "email",
        Text(),
        label="Email",
        rules=(required("Email is required."), email_format("Enter a valid email address.")),
        attrs=(("required", ""), ("pattern", EMAIL_PATTERN), ("autocomplete", "email")),
    ),
    FieldSpec(
        "password",
        Text(),
        label="Password",
        rules=(password_strength("Min 8 chars, include a number and a symbol."),),
        attrs=(("required", ""), ("minlength", "8"), ("pattern", PASSWORD_PATTERN)),
    ),
    FieldSpec(
        "confirm",
        Text(),
        label="Confirm password",
        rules=(same_as("password", "Passwords do not match."),),
        attrs=(("required", ""),),
    ),
    FieldSpec(
        "phone",
        Text(),
        label="Phone",
        rules=(
            phone_format("Enter a valid 10-digit phone number (with optional country code)."),
        ),
        attrs=(("required", ""), ("pattern", PHONE_PATTERN), ("autocomplete", "tel")),
    ),
    FieldSpec(
        "dob",
        Date(),
        label="Date of birth",
        rules=(
            required("Date of birth is required."),
            minimum_age(MINIMUM_AGE, "You must be at least 16 years old."),
        ),
        attrs=(("required", ""),),
    ),
    FieldSpec(
        "gender",
        SingleChoice(),
        label="Gender",
        rules=(required("Please select a gender."),),
        choices=GENDERS,
        group=True,
    ),
    FieldSpec(
        "course",
        Text(),
        label="Course",
        rules=(required("Please choose a course."),),
        choices=COURSES,
        attrs=(("required", ""),),
    ),
    FieldSpec(
        "mode",
        SingleChoice(),
        label="Study mode",
        rules=(required("Please select a study mode."),),
        choices=STUDY_MODES,
        attrs=(("required", ""),),
    ),
    FieldSpec(
        "cgpa",
        Numeric(),
        label="CGPA",
        rules=(number_between(0, 10, "CGPA must be between 0 and 10."),),
        attrs=(("min", "0"), ("max", "10"), ("step", "any")),
    ),
    FieldSpec(
        "portfolio",
        Url(),
        label="Portfolio URL",
        rules=(absolute_url("Enter a valid URL (including http/https)."),),
    ),
    FieldSpec(
        "photo",
        File(),
        label="Photo",
        rules=(upload(PHOTO_MESSAGE, ALLOWED_IMAGE_TYPES, MAX_UPLOAD_BYTES),),
        attrs=(("accept", ",".join(sorted(ALLOWED_IMAGE_TYPES))),),
    ),
    FieldSpec("skills", MultiSelect(), label="Skills", choices=SKILLS),
    FieldSpec(
        "comm",
        CheckboxGroup(),
        label="Communication preferences",
        rules=(at_least_one("Select at least one communication method."),),
        choices=CHANNELS,
        group=True,
    ),
    FieldSpec(
        "terms",
        Flag(),
        label="I agree to the terms and conditions",
        rules=(checked("You must agree to the terms."),),
        attrs=(("required", ""),),
    ),
)

FIELDS_BY_NAME = {spec.name: spec for spec in REGISTRATION_FIELDS}
