"""ASGI handler: translates ASGI scope/messages to regdesk types.

The only component that touches raw ASGI directly. Converts scope dicts
to typed Request objects, dispatches through routing, and sends the
Response back through ASGI send().
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from kida import Environment

from regdesk._internal.asgi import Receive, Scope, Send
from regdesk._internal.invoke import invoke
from regdesk.errors import HTTPError
from regdesk.http.request import Request
from regdesk.http.response import Response
from regdesk.routing.router import RouteMatch, Router
from regdesk.server.errors import handle_http_error, handle_internal_error
from regdesk.server.negotiation import negotiate
from regdesk.server.sender import send_response

logger = logging.getLogger("regdesk.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    error_handlers: dict[int | type, Callable[..., Any]],
    kida_env: Environment | None = None,
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        match = router.match(request.method, request.path)
        response = await _invoke_handler(match, request, kida_env=kida_env)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, kida_env, debug)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, kida_env, debug)

    logger.debug("%s %s -> %d", request.method, request.path, response.status)
    await send_response(response, send, head=request.method == "HEAD")


async def _invoke_handler(
    match: RouteMatch,
    request: Request,
    *,
    kida_env: Environment | None = None,
) -> Response:
    """Call the matched route handler and negotiate its return value."""
    handler = match.route.handler
    kwargs = _build_handler_kwargs(handler, request)
    result = await invoke(handler, **kwargs)
    return negotiate(result, kida_env=kida_env)


def _build_handler_kwargs(handler: Callable[..., Any], request: Request) -> dict[str, Any]:
    """Pass ``request`` to handlers that ask for it, by name or annotation."""
    sig = inspect.signature(handler, eval_str=True)
    kwargs: dict[str, Any] = {}
    for name, param in sig.parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
    return kwargs
