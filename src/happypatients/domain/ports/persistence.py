"""Ports for the durable patient and treatment store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from happypatients.domain.model import Patient, TreatmentRecord


@runtime_checkable
class PatientRepository(Protocol):
    """Persistence contract for patient base records (without treatments)."""

    def add(self, patient: Patient) -> None: ...

    def get(self, patient_id: str) -> Patient | None: ...


@runtime_checkable
class TreatmentRepository(Protocol):
    """Persistence contract for treatment records.

    Writes report whether the store applied them; ``False`` means the store
    rejected the write (duplicate record, nothing matched, ...).
    """

    def create(self, record: TreatmentRecord) -> bool: ...

    def update(self, record: TreatmentRecord) -> bool: ...

    def delete_all(self, patient_id: str) -> bool: ...

    def delete_condition(self, patient_id: str, medical_condition: str) -> bool: ...

    def list_for_patient(self, patient_id: str) -> list[TreatmentRecord]: ...


@runtime_checkable
class PolicyRepository(Protocol):
    """Persistence contract for the cache eligibility policy label."""

    def get(self) -> str | None: ...

    def set(self, label: str) -> None: ...
