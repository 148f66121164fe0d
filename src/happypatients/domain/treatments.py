"""Application service for treatment mutations.

Every successful mutation is followed by a cache reconciliation for the affected
patient before control returns to the caller. The boolean each mutation returns
reflects the durable store only; cache effects never change it.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from happypatients.domain.eligibility import is_patient_eligible_to_be_cached
from happypatients.domain.model import parse_patient_id
from happypatients.domain.ports.errors import StoreError
from happypatients.domain.reconciliation import (
    ReconciliationOutcome,
    evict_patient,
    refresh_patient_cache,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from happypatients.domain.model import Patient, TreatmentRecord
    from happypatients.domain.ports import (
        PatientCache,
        PolicySource,
        TreatmentRepositories,
        UnitOfWorkFactory,
    )

log = logging.getLogger(__name__)

type OutcomeListener = Callable[[str, ReconciliationOutcome], None]


class TreatmentInformationService:
    """Create, update and delete treatments while keeping the patient cache in step."""

    def __init__(
        self,
        *,
        unit_of_work_factory: UnitOfWorkFactory,
        cache: PatientCache,
        policy_source: PolicySource,
        logger: logging.Logger | None = None,
        on_reconciled: OutcomeListener | None = None,
    ) -> None:
        self._unit_of_work_factory = unit_of_work_factory
        self._cache = cache
        self._policy_source = policy_source
        self._log = logger or log
        self._on_reconciled = on_reconciled

    def add_treatment_information(self, record: TreatmentRecord) -> bool:
        patient_id = parse_patient_id(record.patient_id)
        self._log.info("Adding treatment information for %s.", patient_id)
        stored = replace(record, patient_id=patient_id)
        is_success = self._write(lambda repositories: repositories.treatments.create(stored))
        if is_success:
            self._log.info("Treatment information add successful to database.")
            self._reconcile(patient_id, evict_missing=False)
        return is_success

    def get_treatment_information(self, patient_id: str) -> list[TreatmentRecord]:
        canonical_id = parse_patient_id(patient_id)
        with self._unit_of_work_factory() as uow:
            return uow.repositories.treatments.list_for_patient(canonical_id)

    def update_treatment(self, record: TreatmentRecord) -> bool:
        patient_id = parse_patient_id(record.patient_id)
        self._log.info("Updating treatment information for patient %s.", patient_id)
        stored = replace(record, patient_id=patient_id)
        is_success = self._write(lambda repositories: repositories.treatments.update(stored))
        if is_success:
            self._log.info("Treatment information update successful to database.")
            self._reconcile(patient_id, evict_missing=False)
        return is_success

    def delete_patient_treatment(
        self,
        patient_id: str,
        medical_condition: str | None = None,
    ) -> bool:
        """Delete all of a patient's treatments, or only those for ``medical_condition``.

        The cache entry is removed whatever the outcome of the delete. The rebuild
        and conditional re-cache only follow a successful delete.
        """

        canonical_id = parse_patient_id(patient_id)
        self._log.info("Deleting treatment information for patient %s.", canonical_id)
        if medical_condition is None:
            is_success = self._write(
                lambda repositories: repositories.treatments.delete_all(canonical_id)
            )
        else:
            is_success = self._write(
                lambda repositories: repositories.treatments.delete_condition(
                    canonical_id, medical_condition
                )
            )

        evict_patient(self._cache, canonical_id, logger=self._log)
        if is_success:
            self._log.info("Delete treatment information in database successful.")
            self._reconcile(canonical_id, evict_missing=True)
        return is_success

    def is_patient_eligible_to_be_cached(self, patient: Patient) -> bool:
        """Evaluate ``patient`` against the policy as it stands right now."""

        return is_patient_eligible_to_be_cached(patient, self._policy_source.retrieve_policy())

    def _write(self, operation: Callable[[TreatmentRepositories], bool]) -> bool:
        try:
            with self._unit_of_work_factory() as uow:
                applied = operation(uow.repositories)
                if applied:
                    uow.commit()
        except StoreError:
            self._log.exception("Treatment write failed")
            return False
        if not applied:
            self._log.warning("Store did not apply the treatment write")
        return applied

    def _reconcile(self, patient_id: str, *, evict_missing: bool) -> ReconciliationOutcome:
        outcome = refresh_patient_cache(
            patient_id,
            unit_of_work_factory=self._unit_of_work_factory,
            cache=self._cache,
            policy_source=self._policy_source,
            evict_missing=evict_missing,
            logger=self._log,
        )
        if outcome is ReconciliationOutcome.FAILED:
            self._log.warning("Cache reconciliation failed for patient %s", patient_id)
        if self._on_reconciled is not None:
            self._on_reconciled(patient_id, outcome)
        return outcome
