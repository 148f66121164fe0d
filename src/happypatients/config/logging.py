"""Shared logging helpers for HappyPatients."""

from __future__ import annotations

import logging

from .env import optional_env_var

LOG_LEVEL_ENV_VAR = "HAPPYPATIENTS_LOG_LEVEL"


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: the level
    defaults to ``HAPPYPATIENTS_LOG_LEVEL`` (INFO when unset) and the format is terse
    enough for CLI output. Pass ``force=True`` to reconfigure during tests or
    specialised entry points.
    """

    logging.basicConfig(
        level=level if level is not None else get_log_level(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )


def get_log_level() -> int:
    name = optional_env_var(LOG_LEVEL_ENV_VAR, "INFO").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.INFO
    return level
