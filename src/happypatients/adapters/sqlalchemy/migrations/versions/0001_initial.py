"""Create patient, treatment and cache policy tables.

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 10:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "patient",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("contact_number", sa.String(length=32), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_patient")),
    )
    op.create_table(
        "treatment",
        sa.Column("patient_id", sa.Uuid(), nullable=False),
        sa.Column("medical_condition", sa.String(), nullable=False),
        sa.Column("diagnosis", sa.Text(), nullable=False),
        sa.Column("doctor_name", sa.String(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("report", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.PrimaryKeyConstraint("patient_id", "medical_condition", name=op.f("pk_treatment")),
    )
    op.create_table(
        "cache_policy",
        sa.Column("scope", sa.String(length=64), nullable=False),
        sa.Column("label", sa.String(length=16), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("scope", name=op.f("pk_cache_policy")),
    )


def downgrade() -> None:
    op.drop_table("cache_policy")
    op.drop_table("treatment")
    op.drop_table("patient")
