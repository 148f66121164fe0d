"""SQLAlchemy adapter package for HappyPatients."""

from __future__ import annotations

from .converters import patient_from_row, treatment_from_row
from .mappings import (
    cache_policy_table,
    metadata,
    patient_table,
    treatment_table,
)
from .repositories import (
    SqlAlchemyPatientRepository,
    SqlAlchemyPolicyRepository,
    SqlAlchemyTreatmentRepository,
)

__all__ = [
    "SqlAlchemyPatientRepository",
    "SqlAlchemyPolicyRepository",
    "SqlAlchemyTreatmentRepository",
    "cache_policy_table",
    "metadata",
    "patient_from_row",
    "patient_table",
    "treatment_from_row",
    "treatment_table",
]
