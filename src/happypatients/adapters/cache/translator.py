"""Translate between patient aggregates and cached payloads."""

from __future__ import annotations

from happypatients.domain.model import Patient, TreatmentRecord

from .schema import CachedPatientPayload, CachedTreatmentPayload


def patient_to_payload(patient: Patient) -> CachedPatientPayload:
    return CachedPatientPayload(
        id=patient.id,
        name=patient.name,
        date_of_birth=patient.date_of_birth,
        contact_number=patient.contact_number,
        treatments=[treatment_to_payload(record) for record in patient.treatments],
    )


def patient_from_payload(payload: CachedPatientPayload) -> Patient:
    patient = Patient(
        id=payload.id,
        name=payload.name,
        date_of_birth=payload.date_of_birth,
        contact_number=payload.contact_number,
    )
    patient.replace_treatments(treatment_from_payload(item) for item in payload.treatments)
    return patient


def treatment_to_payload(record: TreatmentRecord) -> CachedTreatmentPayload:
    return CachedTreatmentPayload(
        patient_id=record.patient_id,
        medical_condition=record.medical_condition,
        diagnosis=record.diagnosis,
        doctor_name=record.doctor_name,
        start_date=record.start_date,
        end_date=record.end_date,
        report=record.report,
        status=record.status,
    )


def treatment_from_payload(payload: CachedTreatmentPayload) -> TreatmentRecord:
    return TreatmentRecord(
        patient_id=payload.patient_id,
        medical_condition=payload.medical_condition,
        diagnosis=payload.diagnosis,
        doctor_name=payload.doctor_name,
        start_date=payload.start_date,
        end_date=payload.end_date,
        report=payload.report,
        status=payload.status,
    )
