"""Kida templating: the environment and the ``Template`` return type."""

from regdesk.templating.environment import create_environment, render_template
from regdesk.templating.returns import Template

__all__ = ["Template", "create_environment", "render_template"]
