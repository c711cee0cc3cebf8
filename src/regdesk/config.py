"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from regdesk.errors import ConfigurationError

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})
_LOG_LEVELS = frozenset({"debug", "info", "warning", "error", "critical"})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=8080)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False

    # Templates
    template_dir: str | Path | None = None  # Checked before the bundled templates
    autoescape: bool = True

    # Uploads; larger files are rejected by the form parser
    max_upload_bytes: int = 2 * 1024 * 1024  # 2 MiB

    # Re-run the shared validator on the server before normalizing.
    # False trusts the browser and logs whatever arrives.
    validate_submissions: bool = True

    # Logging
    log_level: str = "info"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: object) -> AppConfig:
        """Build a config from environment variables.

        ``PORT`` sets the listen port. ``REGDESK_DEBUG`` and
        ``REGDESK_LOG_LEVEL`` are also honoured. Keyword *overrides*
        win over the environment.

        Raises:
            ConfigurationError: If a variable holds an unusable value.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        port = env.get("PORT")
        if port:
            try:
                values["port"] = int(port)
            except ValueError:
                msg = f"PORT must be an integer, got {port!r}"
                raise ConfigurationError(msg) from None
            if not 0 < values["port"] < 65536:  # type: ignore[operator]
                msg = f"PORT out of range: {port}"
                raise ConfigurationError(msg)

        debug = env.get("REGDESK_DEBUG")
        if debug is not None:
            flag = debug.strip().lower()
            if flag in _TRUTHY:
                values["debug"] = True
            elif flag in _FALSY:
                values["debug"] = False
            else:
                msg = f"REGDESK_DEBUG must be a boolean, got {debug!r}"
                raise ConfigurationError(msg)

        level = env.get("REGDESK_LOG_LEVEL")
        if level:
            if level.lower() not in _LOG_LEVELS:
                msg = f"Unknown log level {level!r}"
                raise ConfigurationError(msg)
            values["log_level"] = level.lower()

        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]
