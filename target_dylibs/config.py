"""Runtime configuration read from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from target_dylibs.exceptions import ConfigError

_ENV_CARGO = "CARGO"
_ENV_EXTRA_ARGS = ("CARGO_ARGS", "CARGO_BUILD_ARGS")
_ENV_LOG_LEVEL = "TARGET_DYLIBS_LOG_LEVEL"
_ENV_LOG_FORMAT = "TARGET_DYLIBS_LOG_FORMAT"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")
LOG_FORMATS = ("console", "json")


@dataclass(frozen=True)
class Settings:
    """Settings for one run.

    Cargo exports ``CARGO`` when it runs a subcommand, so the same cargo
    binary is used for ``pkgid`` and ``build``.
    """

    cargo: str = "cargo"
    extra_build_args: list[str] = field(default_factory=list)
    log_level: str = "WARNING"
    log_format: str = "console"  # "console" | "json"


def _split_env(key: str) -> list[str]:
    return os.environ.get(key, "").split()


def _env_choice(key: str, default: str, choices: tuple[str, ...]) -> str:
    value = os.environ.get(key) or default
    for choice in choices:
        if value.lower() == choice.lower():
            return choice
    raise ConfigError(f"{key}={value!r} is not one of {', '.join(choices)}")


def load_settings() -> Settings:
    """Build :class:`Settings` from the current environment.

    Raises:
        ConfigError: If the log level or log format is not recognised.
    """
    extra: list[str] = []
    for key in _ENV_EXTRA_ARGS:
        extra.extend(_split_env(key))
    return Settings(
        cargo=os.environ.get(_ENV_CARGO) or "cargo",
        extra_build_args=extra,
        log_level=_env_choice(_ENV_LOG_LEVEL, "WARNING", LOG_LEVELS),
        log_format=_env_choice(_ENV_LOG_FORMAT, "console", LOG_FORMATS),
    )
