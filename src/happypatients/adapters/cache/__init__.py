"""Patient cache adapters."""

from __future__ import annotations

from .memory import InMemoryPatientCache
from .redis_cache import RedisPatientCache

__all__ = ["InMemoryPatientCache", "RedisPatientCache"]
