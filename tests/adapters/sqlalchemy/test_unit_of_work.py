from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine, inspect

from happypatients.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from tests.helpers.patients import make_patient, make_treatment

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_sqlalchemy_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b
    assert is_started()


def test_startup_runs_migrations() -> None:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine, force=True)

    tables = set(inspect(engine).get_table_names())
    assert {"patient", "treatment", "cache_policy", "alembic_version"} <= tables


def test_repositories_unavailable_outside_context(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyUnitOfWork()

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_unit_of_work_commits_and_discards(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    patient = make_patient()

    with SqlAlchemyUnitOfWork() as uow:
        uow.repositories.patients.add(patient)
        uow.repositories.treatments.create(make_treatment(patient.id))
        uow.commit()

    with SqlAlchemyUnitOfWork() as uow:
        uow.repositories.treatments.create(make_treatment(patient.id, "Flu"))

    with SqlAlchemyUnitOfWork() as uow:
        assert uow.repositories.patients.get(patient.id) is not None
        records = uow.repositories.treatments.list_for_patient(patient.id)
        conditions = [record.medical_condition for record in records]

    assert conditions == ["Asthma"]


def test_unit_of_work_rolls_back_on_error(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    patient = make_patient()

    with pytest.raises(RuntimeError), SqlAlchemyUnitOfWork() as uow:
        uow.repositories.patients.add(patient)
        raise RuntimeError("boom")

    with SqlAlchemyUnitOfWork() as uow:
        assert uow.repositories.patients.get(patient.id) is None
