"""Domain port definitions for adapters."""

from __future__ import annotations

from .cache import PatientCache
from .errors import CacheError, PolicyError, StoreError
from .persistence import PatientRepository, PolicyRepository, TreatmentRepository
from .policy import PolicySource
from .unit_of_work import (
    RepositoryCollection,
    TreatmentRepositories,
    TreatmentUnitOfWork,
    UnitOfWork,
    UnitOfWorkFactory,
)

__all__ = [
    "CacheError",
    "PatientCache",
    "PatientRepository",
    "PolicyError",
    "PolicyRepository",
    "PolicySource",
    "RepositoryCollection",
    "StoreError",
    "TreatmentRepositories",
    "TreatmentRepository",
    "TreatmentUnitOfWork",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
