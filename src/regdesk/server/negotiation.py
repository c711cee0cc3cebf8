"""Content negotiation: maps handler return values to Response objects.

isinstance-based dispatch, no magic, fully predictable.
"""

from typing import Any

from kida import Environment

from regdesk.errors import ConfigurationError
from regdesk.http.response import Response
from regdesk.templating.environment import render_template
from regdesk.templating.returns import Template


def negotiate(value: Any, *, kida_env: Environment | None = None) -> Response:
    """Convert a route handler's return value to a Response.

    Dispatch order:

    1. ``Response``      -> pass through
    2. ``Template``      -> render via kida, 200 text/html
    3. ``str``           -> 200 text/html
    4. ``(value, int)``  -> negotiate value, override status
    """
    match value:
        case Response():
            return value
        case Template():
            if kida_env is None:
                msg = "Template return type requires a kida environment."
                raise ConfigurationError(msg)
            return Response(body=render_template(kida_env, value))
        case str():
            return Response(body=value)
        case (inner, int() as status):
            return negotiate(inner, kida_env=kida_env).with_status(status)
        case _:
            msg = f"Cannot convert {type(value).__name__} to a response"
            raise TypeError(msg)
