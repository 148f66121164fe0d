from __future__ import annotations

import json
from datetime import date
from unittest.mock import Mock

import fakeredis
import pytest
from redis import Redis
from redis.exceptions import ConnectionError as RedisConnectionError

from happypatients.adapters.cache import RedisPatientCache
from happypatients.domain.model import TreatmentStatus
from happypatients.domain.ports.errors import CacheError
from tests.helpers.patients import make_patient, make_treatment, new_patient_id


@pytest.fixture
def redis_client() -> fakeredis.FakeRedis:
    return fakeredis.FakeRedis(decode_responses=True)


def test_patient_is_stored_as_json_without_expiry(redis_client: fakeredis.FakeRedis) -> None:
    cache = RedisPatientCache(redis_client, key_prefix="test:patient:")
    patient_id = new_patient_id()
    patient = make_patient(
        patient_id,
        treatments=[
            make_treatment(patient_id, "Asthma", end=date(2006, 1, 1)),
            make_treatment(patient_id, "Flu", status=TreatmentStatus.COMPLETED, start=2010),
        ],
    )

    cache.save_patient(patient_id, patient)

    key = f"test:patient:{patient_id}"
    document = json.loads(redis_client.get(key))
    assert document["id"] == patient_id
    assert [item["medical_condition"] for item in document["treatments"]] == ["Asthma", "Flu"]
    assert document["treatments"][1]["status"] == "COMPLETED"
    assert redis_client.ttl(key) == -1


def test_get_patient_rebuilds_the_aggregate(redis_client: fakeredis.FakeRedis) -> None:
    cache = RedisPatientCache(redis_client)
    patient_id = new_patient_id()
    patient = make_patient(patient_id, treatments=[make_treatment(patient_id, report="ok")])
    cache.save_patient(patient_id, patient)

    loaded = cache.get_patient(patient_id)

    assert loaded == patient


def test_remove_and_missing_entries(redis_client: fakeredis.FakeRedis) -> None:
    cache = RedisPatientCache(redis_client)
    patient_id = new_patient_id()
    cache.save_patient(patient_id, make_patient(patient_id))

    cache.remove_patient(patient_id)
    cache.remove_patient(patient_id)

    assert cache.get_patient(patient_id) is None
    assert redis_client.exists(cache.key_for(patient_id)) == 0


def test_unreadable_entry_is_treated_as_a_miss(redis_client: fakeredis.FakeRedis) -> None:
    cache = RedisPatientCache(redis_client)
    patient_id = new_patient_id()
    redis_client.set(cache.key_for(patient_id), "{not json")

    assert cache.get_patient(patient_id) is None


@pytest.mark.parametrize("method", ["set", "delete", "get"])
def test_redis_errors_become_cache_errors(method: str) -> None:
    client = Mock(spec=Redis)
    getattr(client, method).side_effect = RedisConnectionError("down")
    cache = RedisPatientCache(client)
    patient_id = new_patient_id()

    with pytest.raises(CacheError):
        if method == "set":
            cache.save_patient(patient_id, make_patient(patient_id))
        elif method == "delete":
            cache.remove_patient(patient_id)
        else:
            cache.get_patient(patient_id)
