"""Public exports for the domain model."""

from __future__ import annotations

from .enums import TreatmentStatus
from .identifiers import InvalidPatientIdError, parse_patient_id
from .patient import Patient, TreatmentRecord

__all__ = [
    "InvalidPatientIdError",
    "Patient",
    "TreatmentRecord",
    "TreatmentStatus",
    "parse_patient_id",
]
