"""regdesk exception hierarchy.

Shared across the router, the ASGI handler, the upload parser and the
validation layer so every module raises and catches the same types.
"""

from dataclasses import dataclass


class RegdeskError(Exception):
    """Base for all regdesk-specific errors."""


class ConfigurationError(RegdeskError):
    """Raised when app configuration is invalid.

    Typically raised by ``AppConfig.from_env()`` or when the app freezes.
    """


class BotSubmission(RegdeskError):
    """The honeypot field was filled in.

    Raised by the validator before any other rule runs. Nothing about the
    submission is processed further.
    """

    def __init__(self, field: str = "nickname") -> None:
        self.field = field
        super().__init__(f"Honeypot field {field!r} was filled in")


@dataclass(frozen=True, slots=True)
class HTTPError(RegdeskError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, the form parser, or handlers. The ASGI handler
    catches these and renders the matching error page.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class BadRequest(HTTPError):  # noqa: N818 (conventional name in web frameworks)
    """400: the request body could not be parsed."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


class PayloadTooLarge(HTTPError):  # noqa: N818
    """413: an uploaded file exceeds the configured size limit."""

    def __init__(self, limit: int, detail: str = "") -> None:
        super().__init__(
            status=413,
            detail=detail or f"File too large. Maximum size is {limit} bytes.",
        )
