"""Process-local patient cache."""

from __future__ import annotations

import copy
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from happypatients.domain.model import Patient


class InMemoryPatientCache:
    """Dictionary-backed cache holding private copies of patient aggregates."""

    def __init__(self) -> None:
        self._entries: dict[str, Patient] = {}
        self._lock = threading.Lock()

    def save_patient(self, patient_id: str, patient: Patient) -> None:
        snapshot = copy.deepcopy(patient)
        with self._lock:
            self._entries[patient_id] = snapshot

    def remove_patient(self, patient_id: str) -> None:
        with self._lock:
            self._entries.pop(patient_id, None)

    def get_patient(self, patient_id: str) -> Patient | None:
        with self._lock:
            cached = self._entries.get(patient_id)
        return copy.deepcopy(cached) if cached is not None else None

    def __contains__(self, patient_id: object) -> bool:
        with self._lock:
            return patient_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
