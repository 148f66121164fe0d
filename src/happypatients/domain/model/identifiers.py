"""Patient identifier parsing."""

from __future__ import annotations

from uuid import UUID


class InvalidPatientIdError(ValueError):
    """Raised when a patient identifier is not a valid UUID."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid patient id: {value!r}")
        self.value = value


def parse_patient_id(value: str | UUID) -> str:
    """Return the canonical (lower-case, hyphenated) form of a patient id."""

    if isinstance(value, UUID):
        return str(value)
    if not isinstance(value, str):
        raise InvalidPatientIdError(value)
    try:
        return str(UUID(value.strip()))
    except ValueError as exc:
        raise InvalidPatientIdError(value) from exc
