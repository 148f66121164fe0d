"""Cache eligibility rules for patient aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

    from happypatients.domain.model import Patient, TreatmentRecord

MINIMUM_ELIGIBLE_START_YEAR: Final[int] = 2000


def is_treatment_eligible(record: TreatmentRecord, policy: str) -> bool:
    """Return whether a single treatment makes its patient cacheable under ``policy``."""

    return str(record.status) == policy and record.start_date.year >= MINIMUM_ELIGIBLE_START_YEAR


def any_treatment_eligible(treatments: Iterable[TreatmentRecord], policy: str) -> bool:
    # Scans in store order and stops at the first match; an empty list never matches.
    return any(is_treatment_eligible(record, policy) for record in treatments)


def is_patient_eligible_to_be_cached(patient: Patient, policy: str) -> bool:
    """Return whether ``patient`` may be held in the cache under the given policy label.

    A patient is eligible when at least one of their treatments has the policy's
    status and started in or after ``MINIMUM_ELIGIBLE_START_YEAR``.
    """

    return any_treatment_eligible(patient.treatments, policy)
