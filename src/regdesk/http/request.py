"""Immutable HTTP request.

Frozen metadata with async body access. The request is honest about
what it is: received data that doesn't change.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any

from regdesk._internal.asgi import Receive
from regdesk.http.forms import FormData, parse_form_data
from regdesk.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers) is frozen at creation. The body is
    read asynchronously via ``.body()`` or ``.form()``.
    """

    method: str
    path: str
    headers: Headers
    client: tuple[str, int] | None

    # ASGI receive callable for body streaming
    _receive: Receive

    # Body and parsed form cache (dict contents stay mutable)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    async def body(self) -> bytes:
        """Read the full request body.

        The ASGI receive is consumed once; later calls return the cached bytes.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def form(self, *, max_file_size: int | None = None) -> FormData:
        """Parse the body as form data (URL-encoded or multipart).

        Parsed once and cached.

        Raises:
            BadRequest: If the body is not a parseable form.
            PayloadTooLarge: If an uploaded file exceeds *max_file_size*.
        """
        if "_form" in self._cache:
            return self._cache["_form"]

        ct = self.content_type or "application/x-www-form-urlencoded"
        raw = await self.body()
        result = await parse_form_data(raw, ct, max_file_size=max_file_size)
        self._cache["_form"] = result
        return result

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            client=tuple(client) if client else None,
            _receive=receive,
        )
