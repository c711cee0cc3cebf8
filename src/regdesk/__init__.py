"""regdesk: a student registration form with shared validation.

One set of field rules checks a submission in the browser (as native
constraint attributes) and again on the server before the normalized
submission is logged.

Basic usage::

    from regdesk import AppConfig, create_app

    app = create_app(AppConfig(port=3000))
    app.run()

Validation on its own::

    from regdesk.validation import FormState, validate

    report = validate(FormState(values={"email": "nope"}))
    report.errors["email"]  # "Enter a valid email address."
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "BotSubmission",
    "ConfigurationError",
    "HTTPError",
    "RegdeskError",
    "Request",
    "Response",
    "Template",
    "create_app",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import regdesk`` fast while providing a clean top-level API.
    """
    if name == "App":
        from regdesk.app import App

        return App

    if name == "AppConfig":
        from regdesk.config import AppConfig

        return AppConfig

    if name == "create_app":
        from regdesk.web import create_app

        return create_app

    if name == "Request":
        from regdesk.http.request import Request

        return Request

    if name == "Response":
        from regdesk.http.response import Response

        return Response

    if name == "Template":
        from regdesk.templating.returns import Template

        return Template

    if name in ("BotSubmission", "ConfigurationError", "HTTPError", "RegdeskError"):
        from regdesk import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
