"""Redis-backed patient cache."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError
from redis import Redis
from redis.exceptions import RedisError

from happypatients.config.cache import DEFAULT_CACHE_KEY_PREFIX, DEFAULT_REDIS_TIMEOUT_SECONDS
from happypatients.domain.ports.errors import CacheError

from .schema import CachedPatientPayload
from .translator import patient_from_payload, patient_to_payload

if TYPE_CHECKING:
    from happypatients.domain.model import Patient

log = logging.getLogger(__name__)


class RedisPatientCache:
    """Stores each patient aggregate as one JSON string under ``<prefix><patient id>``.

    Keys never expire; entries come and go only through reconciliation.
    """

    def __init__(self, client: Redis, *, key_prefix: str = DEFAULT_CACHE_KEY_PREFIX) -> None:
        self._client = client
        self._key_prefix = key_prefix

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        key_prefix: str = DEFAULT_CACHE_KEY_PREFIX,
        socket_timeout: float = DEFAULT_REDIS_TIMEOUT_SECONDS,
    ) -> RedisPatientCache:
        client = Redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=socket_timeout,
            socket_timeout=socket_timeout,
        )
        return cls(client, key_prefix=key_prefix)

    def key_for(self, patient_id: str) -> str:
        return f"{self._key_prefix}{patient_id}"

    def save_patient(self, patient_id: str, patient: Patient) -> None:
        payload = patient_to_payload(patient).model_dump_json()
        try:
            self._client.set(self.key_for(patient_id), payload)
        except RedisError as exc:
            raise CacheError(f"Could not cache patient {patient_id}: {exc}") from exc

    def remove_patient(self, patient_id: str) -> None:
        try:
            self._client.delete(self.key_for(patient_id))
        except RedisError as exc:
            raise CacheError(f"Could not evict patient {patient_id}: {exc}") from exc

    def get_patient(self, patient_id: str) -> Patient | None:
        try:
            raw = self._client.get(self.key_for(patient_id))
        except RedisError as exc:
            raise CacheError(f"Could not read patient {patient_id}: {exc}") from exc
        if raw is None:
            return None
        try:
            payload = CachedPatientPayload.model_validate_json(raw)
        except ValidationError:
            log.warning("Discarding unreadable cache entry for patient %s", patient_id)
            return None
        return patient_from_payload(payload)
