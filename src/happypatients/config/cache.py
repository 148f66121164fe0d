"""Patient cache backend configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal, cast

from .env import choice_env_var, optional_env_var, require_env_var
from .errors import ConfigurationError

CacheBackend = Literal["memory", "redis"]

CACHE_BACKENDS: Final[tuple[str, ...]] = ("memory", "redis")
DEFAULT_CACHE_KEY_PREFIX: Final[str] = "patient:"
DEFAULT_REDIS_TIMEOUT_SECONDS: Final[float] = 5.0


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Where cached patient aggregates live.

    Entries carry no TTL and no size bound. Whether a patient is cached is decided
    by the eligibility policy on every reconciliation.
    """

    backend: CacheBackend = "memory"
    redis_url: str | None = None
    key_prefix: str = DEFAULT_CACHE_KEY_PREFIX
    socket_timeout_seconds: float = DEFAULT_REDIS_TIMEOUT_SECONDS


def get_cache_config() -> CacheConfig:
    backend = cast(
        "CacheBackend",
        choice_env_var("HAPPYPATIENTS_CACHE_BACKEND", "memory", CACHE_BACKENDS),
    )
    key_prefix = optional_env_var("HAPPYPATIENTS_CACHE_PREFIX", DEFAULT_CACHE_KEY_PREFIX)
    raw_timeout = optional_env_var(
        "HAPPYPATIENTS_REDIS_TIMEOUT_SECONDS", str(DEFAULT_REDIS_TIMEOUT_SECONDS)
    )
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        raise ConfigurationError(
            f"HAPPYPATIENTS_REDIS_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}"
        ) from exc

    if backend == "redis":
        return CacheConfig(
            backend=backend,
            redis_url=require_env_var("REDIS_URL"),
            key_prefix=key_prefix,
            socket_timeout_seconds=timeout,
        )
    return CacheConfig(backend=backend, key_prefix=key_prefix, socket_timeout_seconds=timeout)
