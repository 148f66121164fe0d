"""Patient aggregate and its treatment records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import TreatmentStatus

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date


@dataclass(kw_only=True)
class TreatmentRecord:
    """One treatment of one patient.

    ``patient_id`` is the patient's external key, not a generated surrogate. A
    patient holds at most one record per ``medical_condition``.
    """

    patient_id: str
    medical_condition: str
    diagnosis: str
    doctor_name: str
    start_date: date
    end_date: date | None = None
    report: str = ""
    status: TreatmentStatus = TreatmentStatus.ONGOING

    def __post_init__(self) -> None:
        if not self.medical_condition.strip():
            raise ValueError("medical_condition must not be blank")
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not precede start_date")
        self.status = TreatmentStatus(self.status)


@dataclass(kw_only=True)
class Patient:
    """A patient plus the full current set of their treatment records."""

    id: str
    name: str
    date_of_birth: date | None = None
    contact_number: str | None = None
    treatments: list[TreatmentRecord] = field(default_factory=list)

    def replace_treatments(self, treatments: Iterable[TreatmentRecord]) -> None:
        """Swap in a complete treatment list; nothing from the previous list survives."""

        records = list(treatments)
        for record in records:
            if record.patient_id != self.id:
                raise ValueError(
                    f"treatment for patient {record.patient_id} cannot be attached to {self.id}"
                )
        self.treatments = records

    @property
    def conditions(self) -> tuple[str, ...]:
        return tuple(record.medical_condition for record in self.treatments)
