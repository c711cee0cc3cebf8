"""Kida environment setup.

The environment is created once when the app freezes and passed through
the request pipeline. An optional ``AppConfig.template_dir`` is searched
before the templates bundled with regdesk, so a deployment can restyle
the form without touching the package.
"""

from kida import ChoiceLoader, Environment, FileSystemLoader, PackageLoader

from regdesk.config import AppConfig
from regdesk.templating.filters import BUILTIN_FILTERS
from regdesk.templating.returns import Template


def create_environment(config: AppConfig) -> Environment:
    """Create a kida Environment from app configuration."""
    loaders = []
    if config.template_dir is not None:
        loaders.append(FileSystemLoader(str(config.template_dir)))
    loaders.append(PackageLoader("regdesk", "templates"))

    env = Environment(
        loader=ChoiceLoader(loaders),
        autoescape=config.autoescape,
        auto_reload=config.debug,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.update_filters(BUILTIN_FILTERS)
    return env


def render_template(env: Environment, tpl: Template) -> str:
    """Render a full template to string."""
    template = env.get_template(tpl.name)
    return template.render(tpl.context)
