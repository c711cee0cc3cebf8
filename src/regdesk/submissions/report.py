"""Submission log: a readable dump of each normalized payload."""

import logging
from pprint import pformat

from regdesk.submissions.payload import SubmissionPayload

logger = logging.getLogger("regdesk.submissions")

BANNER = "=== New Registration ==="


def format_submission(payload: SubmissionPayload) -> str:
    """Banner line followed by the pretty-printed payload."""
    return f"{BANNER}\n{pformat(payload.as_dict(), sort_dicts=False, width=88)}"


def log_submission(payload: SubmissionPayload, log: logging.Logger | None = None) -> None:
    """Write *payload* to the submission log at INFO."""
    (log or logger).info("%s", format_submission(payload))
