"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from happypatients.adapters.sqlalchemy.converters import (
    patient_from_row,
    patient_values,
    treatment_from_row,
    treatment_values,
)
from happypatients.adapters.sqlalchemy.mappings import (
    PATIENT_CACHE_POLICY_SCOPE,
    cache_policy_table,
    patient_table,
    treatment_table,
)
from happypatients.domain.ports.errors import StoreError

if TYPE_CHECKING:
    from sqlalchemy import CursorResult, Executable, Result
    from sqlalchemy.orm import Session

    from happypatients.domain.model import Patient, TreatmentRecord

log = logging.getLogger(__name__)


class _SessionRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def _execute(self, statement: Executable) -> Result[Any]:
        try:
            return self.session.execute(statement)
        except SQLAlchemyError as exc:
            raise StoreError(f"Store operation failed: {exc}") from exc


class SqlAlchemyPatientRepository(_SessionRepository):
    def add(self, patient: Patient) -> None:
        self._execute(insert(patient_table).values(**patient_values(patient)))

    def get(self, patient_id: str) -> Patient | None:
        stmt = select(patient_table).where(patient_table.c.id == uuid.UUID(patient_id))
        row = self._execute(stmt).one_or_none()
        if row is None:
            return None
        return patient_from_row(row)


class SqlAlchemyTreatmentRepository(_SessionRepository):
    """Treatment rows, one per (patient, medical condition)."""

    def create(self, record: TreatmentRecord) -> bool:
        try:
            self.session.execute(insert(treatment_table).values(**treatment_values(record)))
        except IntegrityError:
            log.warning(
                "Treatment for %s / %s already exists",
                record.patient_id,
                record.medical_condition,
            )
            return False
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not create treatment: {exc}") from exc
        return True

    def update(self, record: TreatmentRecord) -> bool:
        values = treatment_values(record)
        key = uuid.UUID(record.patient_id)
        del values["patient_id"], values["medical_condition"]
        stmt = (
            update(treatment_table)
            .where(treatment_table.c.patient_id == key)
            .where(treatment_table.c.medical_condition == record.medical_condition)
            .values(**values)
        )
        result = cast("CursorResult[Any]", self._execute(stmt))
        return result.rowcount > 0

    def delete_all(self, patient_id: str) -> bool:
        # Deleting rows that are already gone still satisfies the request.
        self._execute(
            delete(treatment_table).where(treatment_table.c.patient_id == uuid.UUID(patient_id))
        )
        return True

    def delete_condition(self, patient_id: str, medical_condition: str) -> bool:
        self._execute(
            delete(treatment_table)
            .where(treatment_table.c.patient_id == uuid.UUID(patient_id))
            .where(treatment_table.c.medical_condition == medical_condition)
        )
        return True

    def list_for_patient(self, patient_id: str) -> list[TreatmentRecord]:
        stmt = (
            select(treatment_table)
            .where(treatment_table.c.patient_id == uuid.UUID(patient_id))
            .order_by(treatment_table.c.medical_condition)
        )
        rows = self._execute(stmt)
        try:
            return [treatment_from_row(row) for row in rows]
        except ValueError as exc:
            raise StoreError(f"Unreadable treatment row for patient {patient_id}: {exc}") from exc


class SqlAlchemyPolicyRepository(_SessionRepository):
    """Single-row storage for the patient cache eligibility policy."""

    def __init__(self, session: Session, *, scope: str = PATIENT_CACHE_POLICY_SCOPE) -> None:
        super().__init__(session)
        self.scope = scope

    def get(self) -> str | None:
        stmt = select(cache_policy_table.c.label).where(cache_policy_table.c.scope == self.scope)
        return self._execute(stmt).scalar_one_or_none()

    def set(self, label: str) -> None:
        now = datetime.now(UTC)
        stmt = (
            update(cache_policy_table)
            .where(cache_policy_table.c.scope == self.scope)
            .values(label=label, updated_at=now)
        )
        result = cast("CursorResult[Any]", self._execute(stmt))
        if result.rowcount == 0:
            self._execute(
                insert(cache_policy_table).values(scope=self.scope, label=label, updated_at=now)
            )


if TYPE_CHECKING:
    from happypatients.domain.ports.persistence import (
        PatientRepository,
        PolicyRepository,
        TreatmentRepository,
    )

    _session_stub = cast("Session", object())
    _patient_repo: PatientRepository = SqlAlchemyPatientRepository(_session_stub)
    _treatment_repo: TreatmentRepository = SqlAlchemyTreatmentRepository(_session_stub)
    _policy_repo: PolicyRepository = SqlAlchemyPolicyRepository(_session_stub)
