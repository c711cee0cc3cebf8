"""Template filters registered on every regdesk kida Environment."""

import html
from collections.abc import Iterable
from typing import Any

from kida.template import Markup


def attr(value: Any, name: str) -> str | Markup:
    """Output an HTML attribute when value is truthy, else empty string.

    ``True`` renders a bare boolean attribute.

    Example:
        <input name="email"{{ field.message | attr("title") }}>
    """
    if not value:
        return ""
    if value is True:
        return Markup(f" {name}")
    return Markup(f' {name}="{html.escape(str(value))}"')


def html_attrs(pairs: Iterable[tuple[str, str]]) -> Markup:
    """Render ``(name, value)`` pairs as attributes.

    An empty value renders a boolean attribute (``required``,
    ``autofocus``); everything else is escaped and quoted.

    Example:
        <input id="email" name="email"{{ field.attrs | html_attrs }}>
    """
    parts: list[str] = []
    for name, value in pairs:
        if value == "":
            parts.append(f" {html.escape(name)}")
        else:
            parts.append(f' {html.escape(name)}="{html.escape(str(value), quote=True)}"')
    return Markup("".join(parts))


BUILTIN_FILTERS: dict[str, Any] = {
    "attr": attr,
    "html_attrs": html_attrs,
}
