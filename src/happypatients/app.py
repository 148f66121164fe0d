"""Application orchestration entry points."""

from __future__ import annotations

import uuid
from logging import getLogger
from typing import TYPE_CHECKING

from happypatients.adapters.cache import InMemoryPatientCache, RedisPatientCache
from happypatients.adapters.policy import EnvironmentPolicySource, StorePolicySource
from happypatients.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    is_started,
    startup,
)
from happypatients.config import get_cache_config, get_policy_config
from happypatients.domain.model import Patient, TreatmentStatus, parse_patient_id
from happypatients.domain.ports.errors import CacheError
from happypatients.domain.reconciliation import rebuild_patient
from happypatients.domain.treatments import TreatmentInformationService

if TYPE_CHECKING:
    from datetime import date

    from happypatients.config import CacheConfig, PolicyConfig
    from happypatients.domain.ports import PatientCache, PolicySource, UnitOfWorkFactory
    from happypatients.domain.treatments import OutcomeListener


log = getLogger(__name__)


def _default_unit_of_work_factory() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyUnitOfWork


def build_patient_cache(config: CacheConfig | None = None) -> PatientCache:
    """Create the cache backend selected by configuration."""

    effective = config or get_cache_config()
    if effective.backend == "redis":
        if effective.redis_url is None:
            raise ValueError("Redis cache backend requires a redis_url")
        log.info("Using Redis patient cache (prefix=%s)", effective.key_prefix)
        return RedisPatientCache.from_url(
            effective.redis_url,
            key_prefix=effective.key_prefix,
            socket_timeout=effective.socket_timeout_seconds,
        )
    log.info("Using in-memory patient cache")
    return InMemoryPatientCache()


def build_policy_source(
    config: PolicyConfig | None = None,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> PolicySource:
    """Create the eligibility policy source selected by configuration."""

    effective = config or get_policy_config()
    if effective.source == "env":
        return EnvironmentPolicySource(env_var=effective.env_var, default=effective.default_label)
    return StorePolicySource(
        unit_of_work_factory or _default_unit_of_work_factory(),
        default=effective.default_label,
    )


def build_treatment_service(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    cache: PatientCache | None = None,
    policy_source: PolicySource | None = None,
    on_reconciled: OutcomeListener | None = None,
) -> TreatmentInformationService:
    """Wire the treatment service to the configured store, cache and policy source."""

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    return TreatmentInformationService(
        unit_of_work_factory=effective_uow,
        cache=cache or build_patient_cache(),
        policy_source=policy_source or build_policy_source(unit_of_work_factory=effective_uow),
        on_reconciled=on_reconciled,
    )


def register_patient(
    *,
    name: str,
    date_of_birth: date | None = None,
    contact_number: str | None = None,
    patient_id: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Patient:
    """Create a patient base record in the store."""

    if not name.strip():
        raise ValueError("Patient name must not be blank")
    patient = Patient(
        id=parse_patient_id(patient_id) if patient_id is not None else str(uuid.uuid4()),
        name=name.strip(),
        date_of_birth=date_of_birth,
        contact_number=contact_number,
    )
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    with effective_uow() as uow:
        uow.repositories.patients.add(patient)
        uow.commit()
    log.info("Registered patient %s", patient.id)
    return patient


def find_patient(
    patient_id: str,
    *,
    cache: PatientCache,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Patient | None:
    """Return a patient aggregate, served from the cache when it holds one.

    A cache miss falls back to the store without populating the cache; only
    reconciliation writes cache entries.
    """

    canonical_id = parse_patient_id(patient_id)
    try:
        cached = cache.get_patient(canonical_id)
    except CacheError:
        log.warning("Cache read failed for patient %s; reading from store", canonical_id)
        cached = None
    if cached is not None:
        log.debug("Cache hit for patient %s", canonical_id)
        return cached

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    with effective_uow() as uow:
        return rebuild_patient(uow.repositories, canonical_id)


def set_cache_policy(
    label: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> TreatmentStatus:
    """Persist a new eligibility policy.

    Existing cache entries are not re-evaluated; the new label applies from the
    next reconciliation of each patient.
    """

    try:
        status = TreatmentStatus(label.strip())
    except ValueError as exc:
        allowed = ", ".join(TreatmentStatus)
        raise ValueError(f"Unknown policy label {label!r} (expected one of: {allowed})") from exc

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    with effective_uow() as uow:
        uow.repositories.policies.set(str(status))
        uow.commit()
    log.info("Patient cache policy set to %s", status)
    return status


def get_cache_policy(*, policy_source: PolicySource | None = None) -> str:
    """Return the policy label the next reconciliation would use."""

    return (policy_source or build_policy_source()).retrieve_policy()
