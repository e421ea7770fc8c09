"""Runtime settings resolved from command-line flags and the environment.

Environment variables:
    NPMDIFF_EXIT_STAT  - exit non-zero when differences are found (1/true/yes/y)
    NPMDIFF_LOG_LEVEL  - log level name (default: WARNING)
    NPMDIFF_LOG_FORMAT - console | json (default: console)
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from collections.abc import Mapping

EXIT_STAT_ENV_VAR = "NPMDIFF_EXIT_STAT"
LOG_LEVEL_ENV_VAR = "NPMDIFF_LOG_LEVEL"
LOG_FORMAT_ENV_VAR = "NPMDIFF_LOG_FORMAT"

OUTPUT_FORMATS = ("text", "json", "markdown")
LOG_FORMATS = ("console", "json")

_TRUTHY = {"1", "true", "yes", "y"}


class ConfigurationError(RuntimeError):
    """Raised when the run cannot be configured from the given inputs."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Validated settings for a single run."""

    backend: str
    exit_stat: bool = False
    output_format: str = "text"
    log_level: str = "WARNING"
    log_format: str = "console"

    def __post_init__(self) -> None:
        if self.backend not in {"hg", "git"}:
            raise ConfigurationError(f"Unknown backend: {self.backend}")
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(f"Unknown output format: {self.output_format}")
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"Invalid {LOG_FORMAT_ENV_VAR} '{self.log_format}' "
                f"(expected one of: {', '.join(LOG_FORMATS)})"
            )
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigurationError(f"Invalid {LOG_LEVEL_ENV_VAR} '{self.log_level}'")


def load_settings(
    args: argparse.Namespace, environ: Mapping[str, str] | None = None
) -> Settings:
    """Build settings from parsed CLI arguments and environment variables.

    ``--hg`` takes precedence when both backend flags are set.

    Raises:
        ConfigurationError: If no backend flag is set or a value is invalid.
    """
    env = os.environ if environ is None else environ

    if args.hg:
        backend = "hg"
    elif args.git:
        backend = "git"
    else:
        raise ConfigurationError("hg mode or git mode must be specified")

    exit_stat = bool(args.exit_stat) or (
        env.get(EXIT_STAT_ENV_VAR, "").strip().lower() in _TRUTHY
    )

    return Settings(
        backend=backend,
        exit_stat=exit_stat,
        output_format=getattr(args, "output_format", "text") or "text",
        log_level=env.get(LOG_LEVEL_ENV_VAR, "WARNING").strip().upper() or "WARNING",
        log_format=env.get(LOG_FORMAT_ENV_VAR, "console").strip().lower() or "console",
    )
