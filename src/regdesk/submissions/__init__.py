"""Server-side handling of a received registration.

``normalize_submission`` reshapes parsed fields into a
``SubmissionPayload``; ``log_submission`` writes it out. Nothing is
stored.
"""

from regdesk.submissions.normalize import (
    normalize_comm,
    normalize_skills,
    normalize_submission,
    submission_timestamp,
    transport_fields,
)
from regdesk.submissions.payload import SubmissionPayload
from regdesk.submissions.report import format_submission, log_submission

__all__ = [
    "SubmissionPayload",
    "format_submission",
    "log_submission",
    "normalize_comm",
    "normalize_skills",
    "normalize_submission",
    "submission_timestamp",
    "transport_fields",
]
