"""Pure mappers between store rows and domain objects."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any

from happypatients.domain.model import Patient, TreatmentRecord, TreatmentStatus

if TYPE_CHECKING:
    from sqlalchemy import Row


def patient_from_row(row: Row[Any]) -> Patient:
    """Build a patient base record; treatments are attached separately."""

    return Patient(
        id=str(row.id),
        name=row.name,
        date_of_birth=row.date_of_birth,
        contact_number=row.contact_number,
    )


def treatment_from_row(row: Row[Any]) -> TreatmentRecord:
    return TreatmentRecord(
        patient_id=str(row.patient_id),
        medical_condition=row.medical_condition,
        diagnosis=row.diagnosis,
        doctor_name=row.doctor_name,
        start_date=row.start_date,
        end_date=row.end_date,
        report=row.report or "",
        status=TreatmentStatus(row.status),
    )


def patient_values(patient: Patient) -> dict[str, object]:
    return {
        "id": uuid.UUID(patient.id),
        "name": patient.name,
        "date_of_birth": patient.date_of_birth,
        "contact_number": patient.contact_number,
    }


def treatment_values(record: TreatmentRecord) -> dict[str, object]:
    return {
        "patient_id": uuid.UUID(record.patient_id),
        "medical_condition": record.medical_condition,
        "diagnosis": record.diagnosis,
        "doctor_name": record.doctor_name,
        "start_date": record.start_date,
        "end_date": record.end_date,
        "report": record.report,
        "status": str(record.status),
    }
