"""Routing: frozen route definitions and a compiled static router."""

from regdesk.routing.router import Route, RouteMatch, Router

__all__ = ["Route", "RouteMatch", "Router"]
