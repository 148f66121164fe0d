"""SQLAlchemy table metadata for the HappyPatients store."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Final

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Dialect,
    MetaData,
    String,
    Table,
    Text,
    TypeDecorator,
    Uuid,
)

UUIDColumnType = Uuid[uuid.UUID]

PATIENT_CACHE_POLICY_SCOPE: Final[str] = "patient_cache"


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

patient_table = Table(
    "patient",
    metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column("name", String, nullable=False),
    Column("date_of_birth", Date, nullable=True),
    Column("contact_number", String(32), nullable=True),
)

# Treatments are keyed by the patient's external id rather than a foreign key:
# a treatment may be recorded before (or without) its patient base record.
treatment_table = Table(
    "treatment",
    metadata,
    Column("patient_id", UUIDColumnType, primary_key=True),
    Column("medical_condition", String, primary_key=True),
    Column("diagnosis", Text, nullable=False),
    Column("doctor_name", String, nullable=False),
    Column("start_date", Date, nullable=False),
    Column("end_date", Date, nullable=True),
    Column("report", Text, nullable=False, default=""),
    Column("status", String(16), nullable=False),
)

cache_policy_table = Table(
    "cache_policy",
    metadata,
    Column("scope", String(64), primary_key=True),
    Column("label", String(16), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
)
