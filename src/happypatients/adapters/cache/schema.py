"""Pydantic models describing cached patient payloads."""

from __future__ import annotations

from datetime import date  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field

from happypatients.domain.model import TreatmentStatus  # noqa: TC001

CACHE_SCHEMA_VERSION = 1


class CachePayloadModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class CachedTreatmentPayload(CachePayloadModel):
    patient_id: str
    medical_condition: str
    diagnosis: str
    doctor_name: str
    start_date: date
    end_date: date | None = None
    report: str = ""
    status: TreatmentStatus


class CachedPatientPayload(CachePayloadModel):
    version: int = CACHE_SCHEMA_VERSION
    id: str
    name: str
    date_of_birth: date | None = None
    contact_number: str | None = None
    treatments: list[CachedTreatmentPayload] = Field(default_factory=list)
