"""regdesk CLI: serve the registration form.

Entry point registered as ``regdesk`` in ``pyproject.toml``::

    [project.scripts]
    regdesk = "regdesk.cli:main"
"""

import argparse
import logging
import sys

from regdesk.config import AppConfig
from regdesk.errors import ConfigurationError

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="regdesk",
        description="Serve the student registration form.",
    )
    parser.add_argument("--host", default=None, help="Bind host address")
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Bind port number (default: $PORT or 3000)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Debug mode: verbose error pages, reload on change",
    )
    parser.add_argument(
        "--trust-client",
        action="store_true",
        help="Skip server-side validation and log whatever arrives",
    )
    return parser


def config_from_args(args: argparse.Namespace, environ=None) -> AppConfig:
    """Environment first, then command-line flags on top."""
    overrides: dict[str, object] = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.debug is not None:
        overrides["debug"] = args.debug
    if args.trust_client:
        overrides["validate_submissions"] = False
    return AppConfig.from_env(environ, **overrides)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``regdesk`` command."""
    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    logging.basicConfig(level=config.log_level.upper(), format=LOG_FORMAT)
    if not config.validate_submissions:
        logging.getLogger("regdesk.server").warning(
            "Server-side validation is off; submissions are logged unchecked"
        )

    from regdesk.web import create_app

    create_app(config).run()
