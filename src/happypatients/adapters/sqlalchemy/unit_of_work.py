"""SQLAlchemy-backed unit of work for treatment mutations and aggregate rebuilds."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from happypatients.adapters.sqlalchemy.migrations import upgrade_head
from happypatients.adapters.sqlalchemy.repositories import (
    SqlAlchemyPatientRepository,
    SqlAlchemyPolicyRepository,
    SqlAlchemyTreatmentRepository,
)
from happypatients.config import get_database_uri
from happypatients.domain.ports.errors import StoreError
from happypatients.domain.ports.unit_of_work import TreatmentRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the store adapter is used before ``startup`` or reconfigured implicitly."""


@dataclass(frozen=True, slots=True)
class _StoreBinding:
    engine: Engine
    sessions: sessionmaker[Session]


_binding: _StoreBinding | None = None


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the adapter to an engine after migrating its schema to head.

    A second call raises ``StartupError`` unless ``force`` is set.
    """

    global _binding  # noqa: PLW0603
    if _binding is not None and not force:
        raise StartupError("Treatment store already started. Pass force=True to rebind.")

    resolved_engine = engine or create_engine(database_uri or get_database_uri(), future=True)
    upgrade_head(engine=resolved_engine)
    _binding = _StoreBinding(
        engine=resolved_engine,
        sessions=sessionmaker(bind=resolved_engine, expire_on_commit=False),
    )
    log.debug("Treatment store bound to %s", resolved_engine.url)


def configured_engine() -> Engine | None:
    return _binding.engine if _binding is not None else None


def is_started() -> bool:
    return _binding is not None


def shutdown() -> None:
    """Dispose the bound engine, if any, and forget it."""

    global _binding  # noqa: PLW0603
    if _binding is not None:
        _binding.engine.dispose()
    _binding = None


def _session_factory() -> sessionmaker[Session]:
    if _binding is None:
        raise StartupError(
            "Treatment store not started. Call "
            "happypatients.adapters.sqlalchemy.unit_of_work.startup() first."
        )
    return _binding.sessions


class SqlAlchemyUnitOfWork:
    """One session, and the treatment repositories sharing it, per ``with`` block.

    Nothing is written unless ``commit`` is called; leaving the block closes the
    session and discards uncommitted work.
    """

    def __init__(self, session_factory: sessionmaker[Session] | None = None) -> None:
        self._session_factory = session_factory or _session_factory()
        self._session: Session | None = None
        self._repositories: TreatmentRepositories | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work is already open")
        session = self._session_factory()
        self._session = session
        self._repositories = TreatmentRepositories(
            patients=SqlAlchemyPatientRepository(session),
            treatments=SqlAlchemyTreatmentRepository(session),
            policies=SqlAlchemyPolicyRepository(session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            raise StoreError(f"Commit failed: {exc}") from exc

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> TreatmentRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work used outside its with block")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work used outside its with block")
        return self._session


if TYPE_CHECKING:
    from happypatients.domain.ports.unit_of_work import TreatmentUnitOfWork

    _uow_check: TreatmentUnitOfWork = SqlAlchemyUnitOfWork()
