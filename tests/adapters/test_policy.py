from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from happypatients.adapters.policy import (
    EnvironmentPolicySource,
    StaticPolicySource,
    StorePolicySource,
)
from happypatients.domain.ports import PolicySource
from happypatients.domain.ports.errors import PolicyError, StoreError

if TYPE_CHECKING:
    from collections.abc import Callable

    from happypatients.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork
    from tests.helpers.patients import FakeStore


def test_policy_sources_satisfy_the_port(fake_store: FakeStore) -> None:
    assert isinstance(StaticPolicySource(), PolicySource)
    assert isinstance(EnvironmentPolicySource(), PolicySource)
    assert isinstance(StorePolicySource(fake_store.factory), PolicySource)


def test_static_policy_source_can_change_at_runtime() -> None:
    source = StaticPolicySource("ONGOING")

    assert source.retrieve_policy() == "ONGOING"
    source.set_policy("CANCELLED")
    assert source.retrieve_policy() == "CANCELLED"


def test_environment_policy_source_reads_on_every_call(monkeypatch: pytest.MonkeyPatch) -> None:
    source = EnvironmentPolicySource(env_var="TEST_CACHE_POLICY", default="ONGOING")
    monkeypatch.delenv("TEST_CACHE_POLICY", raising=False)

    assert source.retrieve_policy() == "ONGOING"
    monkeypatch.setenv("TEST_CACHE_POLICY", " COMPLETED ")
    assert source.retrieve_policy() == "COMPLETED"
    monkeypatch.setenv("TEST_CACHE_POLICY", "   ")
    assert source.retrieve_policy() == "ONGOING"


def test_store_policy_source_falls_back_to_default(fake_store: FakeStore) -> None:
    source = StorePolicySource(fake_store.factory, default="ONGOING")

    assert source.retrieve_policy() == "ONGOING"
    fake_store.policies.set("CANCELLED")
    assert source.retrieve_policy() == "CANCELLED"


def test_store_policy_source_reads_persisted_label(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    source = StorePolicySource(sqlite_unit_of_work, default="ONGOING")

    with sqlite_unit_of_work() as uow:
        uow.repositories.policies.set("COMPLETED")
        uow.commit()

    assert source.retrieve_policy() == "COMPLETED"


def test_store_policy_source_reports_store_failures_as_policy_errors() -> None:
    def unavailable() -> SqlAlchemyUnitOfWork:
        raise StoreError("database locked")

    source = StorePolicySource(unavailable, default="ONGOING")

    with pytest.raises(PolicyError, match="database locked"):
        source.retrieve_policy()
