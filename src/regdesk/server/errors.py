"""Error handling pipeline for regdesk requests.

Maps HTTPError exceptions and unexpected failures to error pages, using
registered error handlers or the bundled ``error.html`` template.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from kida import Environment

from regdesk.errors import HTTPError
from regdesk.http.request import Request
from regdesk.http.response import Response
from regdesk.server.negotiation import negotiate
from regdesk.templating.environment import render_template
from regdesk.templating.returns import Template

logger = logging.getLogger("regdesk.server")

ERROR_TEMPLATE = "error.html"

_TITLES = {
    400: "Bad request",
    403: "Forbidden",
    404: "Page not found",
    405: "Method not allowed",
    413: "Upload too large",
    500: "Something went wrong",
}


def error_page(
    status: int,
    detail: str,
    kida_env: Environment | None,
) -> Response:
    """Render the default error page, or plain text without templates."""
    title = _TITLES.get(status, f"Error {status}")
    if kida_env is None:
        return Response(body=detail or title, status=status)
    body = render_template(
        kida_env,
        Template(ERROR_TEMPLATE, status=status, title=title, detail=detail),
    )
    return Response(body=body, status=status)


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
    kida_env: Environment | None,
) -> Response:
    """Invoke a user-registered error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc) args.
    Supports both sync and async error handlers.
    """
    params = list(inspect.signature(handler).parameters.values())

    if len(params) >= 2:
        result = handler(request, exc)
    elif len(params) == 1:
        result = handler(request)
    else:
        result = handler()

    if inspect.isawaitable(result):
        result = await result

    return negotiate(result, kida_env=kida_env)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    kida_env: Environment | None,
    debug: bool,
) -> Response:
    """Map an HTTPError to a Response using registered error handlers."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        response = await call_error_handler(handler, request, exc, kida_env)
        # Keep the exception's status unless the handler chose its own
        if response.status == 200:
            response = response.with_status(exc.status)
    else:
        detail = exc.detail or f"Error {exc.status}"
        if debug and exc.detail:
            detail = f"{exc.status}: {exc.detail}"
        response = error_page(exc.status, detail, kida_env)

    for name, value in exc.headers:
        if response.header(name) is None:
            response = response.with_header(name, value)
    return response


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    kida_env: Environment | None,
    debug: bool,
) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(500) or error_handlers.get(type(exc))
    if handler is not None:
        response = await call_error_handler(handler, request, exc, kida_env)
        if response.status == 200:
            response = response.with_status(500)
        return response

    detail = f"{type(exc).__name__}: {exc}" if debug else ""
    try:
        return error_page(500, detail, kida_env)
    except Exception:
        # The error template itself failed; fall back to plain text
        logger.exception("Error page rendering failed")
        return Response(body="Internal Server Error", status=500)
