"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class TreatmentStatus(StrEnum):
    """Lifecycle of a single treatment.

    Values double as eligibility policy labels, so they are kept upper-case.
    """

    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
