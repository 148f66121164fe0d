"""Port for the derived patient cache."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from happypatients.domain.model import Patient


@runtime_checkable
class PatientCache(Protocol):
    """Keyed store of patient aggregate snapshots.

    The cache is a disposable projection of the durable store. Implementations
    raise ``CacheError`` when the backend fails.
    """

    def save_patient(self, patient_id: str, patient: Patient) -> None: ...

    def remove_patient(self, patient_id: str) -> None: ...

    def get_patient(self, patient_id: str) -> Patient | None: ...
