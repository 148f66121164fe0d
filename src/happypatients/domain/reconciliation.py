"""Keep the patient cache consistent with the durable store after a mutation.

Reconciliation rebuilds the patient aggregate from the store, reads the current
eligibility policy, removes any cached entry and, only when the rebuilt aggregate
is eligible, writes it back. The removal always happens before a write, so an
entry moves ``ABSENT -> PRESENT -> ABSENT -> ...`` and never from one snapshot
straight to another. Every failure path ends with the entry absent.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

from happypatients.domain.eligibility import is_patient_eligible_to_be_cached
from happypatients.domain.ports.errors import CacheError, PolicyError, StoreError

if TYPE_CHECKING:
    from happypatients.domain.model import Patient
    from happypatients.domain.ports import (
        PatientCache,
        PolicySource,
        TreatmentRepositories,
        UnitOfWorkFactory,
    )

log = logging.getLogger(__name__)


class ReconciliationOutcome(StrEnum):
    CACHED = "cached"
    EVICTED = "evicted"
    PATIENT_MISSING = "patient_missing"
    FAILED = "failed"


def rebuild_patient(repositories: TreatmentRepositories, patient_id: str) -> Patient | None:
    """Load the patient base record and attach their complete current treatment list.

    Returns ``None`` when the store has no patient under ``patient_id``. The result
    reflects the store as observed by these two reads, not a transaction shared
    with the preceding mutation.
    """

    patient = repositories.patients.get(patient_id)
    if patient is None:
        return None
    patient.replace_treatments(repositories.treatments.list_for_patient(patient_id))
    return patient


def evict_patient(
    cache: PatientCache,
    patient_id: str,
    *,
    logger: logging.Logger | None = None,
) -> bool:
    """Remove a cache entry, logging instead of raising on cache failure."""

    logger = logger or log
    try:
        cache.remove_patient(patient_id)
    except CacheError:
        logger.exception("Failed to remove patient %s from cache", patient_id)
        return False
    return True


def refresh_patient_cache(
    patient_id: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    cache: PatientCache,
    policy_source: PolicySource,
    evict_missing: bool = False,
    logger: logging.Logger | None = None,
) -> ReconciliationOutcome:
    """Run one reconciliation for ``patient_id``.

    ``evict_missing`` selects how an absent patient is handled: mutation paths that
    create or update leave the cache untouched, delete paths treat the patient as
    ineligible and make sure no entry remains.
    """

    logger = logger or log
    try:
        with unit_of_work_factory() as uow:
            patient = rebuild_patient(uow.repositories, patient_id)
        if patient is None and not evict_missing:
            logger.info("Patient %s not found; cache left untouched", patient_id)
            return ReconciliationOutcome.PATIENT_MISSING
        policy = policy_source.retrieve_policy() if patient is not None else None
    except (StoreError, PolicyError):
        logger.exception("Could not rebuild patient %s; dropping cache entry", patient_id)
        evict_patient(cache, patient_id, logger=logger)
        return ReconciliationOutcome.FAILED

    if not evict_patient(cache, patient_id, logger=logger):
        return ReconciliationOutcome.FAILED

    if patient is None or policy is None or not is_patient_eligible_to_be_cached(patient, policy):
        logger.debug("Patient %s is not eligible for caching (policy=%s)", patient_id, policy)
        return ReconciliationOutcome.EVICTED

    try:
        cache.save_patient(patient_id, patient)
    except CacheError:
        logger.exception("Failed to write patient %s to cache", patient_id)
        return ReconciliationOutcome.FAILED

    logger.debug(
        "Cached patient %s with %d treatments (policy=%s)",
        patient_id,
        len(patient.treatments),
        policy,
    )
    return ReconciliationOutcome.CACHED
