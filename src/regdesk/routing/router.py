"""Compiled router with exact path matching.

Routes are registered during setup and compiled into an immutable
lookup table when the app freezes. regdesk only serves fixed paths, so
there are no path parameters: a path either matches exactly (ignoring a
trailing slash) or it doesn't.
"""

from collections.abc import Callable
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from regdesk.errors import MethodNotAllowed, NotFound


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition."""

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    method: str


def _normalize_path(path: str) -> str:
    return "/" + path.strip("/")


class Router:
    """Method-aware exact-path router.

    Usage::

        router = Router()
        router.add(Route("/register", handler, frozenset({"POST"})))
        router.compile()
        match = router.match("POST", "/register")
    """

    __slots__ = ("_compiled", "_table")

    def __init__(self) -> None:
        self._table: dict[str, dict[str, Route]] = {}
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        by_method = self._table.setdefault(_normalize_path(route.path), {})
        for method in route.methods:
            if method in by_method:
                msg = f"Duplicate route: {method} {route.path}"
                raise ValueError(msg)
            by_method[method] = route

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._table = {
            path: MappingProxyType(by_method) for path, by_method in self._table.items()
        }  # type: ignore[assignment]
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path.

        ``HEAD`` falls back to ``GET``.

        Raises:
            NotFound: If no route has this path.
            MethodNotAllowed: If the path exists but not for this method.
        """
        by_method = self._table.get(_normalize_path(path))
        if not by_method:
            raise NotFound(f"No route matches {method} {path!r}")

        route = by_method.get(method)
        if route is None and method == "HEAD":
            route = by_method.get("GET")
        if route is None:
            raise MethodNotAllowed(frozenset(by_method))
        return RouteMatch(route=route, method=method)
