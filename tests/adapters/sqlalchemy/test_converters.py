from __future__ import annotations

import uuid
from datetime import date
from types import SimpleNamespace
from typing import Any, cast

from happypatients.adapters.sqlalchemy.converters import (
    patient_from_row,
    treatment_from_row,
    treatment_values,
)
from happypatients.domain.model import TreatmentStatus
from tests.helpers.patients import make_treatment


def _row(**values: object) -> Any:
    return cast("Any", SimpleNamespace(**values))


def test_patient_from_row_stringifies_uuid() -> None:
    key = uuid.uuid4()

    patient = patient_from_row(
        _row(id=key, name="Jane", date_of_birth=None, contact_number=None)
    )

    assert patient.id == str(key)
    assert patient.treatments == []


def test_treatment_from_row_maps_status_and_blank_report() -> None:
    key = uuid.uuid4()

    record = treatment_from_row(
        _row(
            patient_id=key,
            medical_condition="Asthma",
            diagnosis="Mild",
            doctor_name="Dr. Example",
            start_date=date(2001, 2, 3),
            end_date=None,
            report=None,
            status="CANCELLED",
        )
    )

    assert record.patient_id == str(key)
    assert record.status is TreatmentStatus.CANCELLED
    assert record.report == ""


def test_treatment_values_use_uuid_and_plain_status() -> None:
    key = uuid.uuid4()

    values = treatment_values(make_treatment(str(key), status=TreatmentStatus.COMPLETED))

    assert values["patient_id"] == key
    assert values["status"] == "COMPLETED"
