"""Eligibility policy sources."""

from __future__ import annotations

import os
import threading
from typing import TYPE_CHECKING

from happypatients.config.policy import DEFAULT_POLICY_LABEL, POLICY_ENV_VAR
from happypatients.domain.ports.errors import PolicyError, StoreError

if TYPE_CHECKING:
    from happypatients.domain.ports import UnitOfWorkFactory


class StaticPolicySource:
    """Holds the policy in memory; ``set_policy`` takes effect on the next read."""

    def __init__(self, label: str = DEFAULT_POLICY_LABEL) -> None:
        self._label = label
        self._lock = threading.Lock()

    def retrieve_policy(self) -> str:
        with self._lock:
            return self._label

    def set_policy(self, label: str) -> None:
        with self._lock:
            self._label = label


class EnvironmentPolicySource:
    """Reads the policy from an environment variable on every call."""

    def __init__(
        self,
        *,
        env_var: str = POLICY_ENV_VAR,
        default: str = DEFAULT_POLICY_LABEL,
    ) -> None:
        self.env_var = env_var
        self.default = default

    def retrieve_policy(self) -> str:
        value = os.getenv(self.env_var)
        if value is None or not value.strip():
            return self.default
        return value.strip()


class StorePolicySource:
    """Reads the policy persisted in the durable store, one unit of work per call.

    Store failures surface as ``PolicyError`` to the caller.
    """

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        *,
        default: str = DEFAULT_POLICY_LABEL,
    ) -> None:
        self._unit_of_work_factory = unit_of_work_factory
        self.default = default

    def retrieve_policy(self) -> str:
        try:
            with self._unit_of_work_factory() as uow:
                label = uow.repositories.policies.get()
        except StoreError as exc:
            raise PolicyError(f"Could not read the cache policy: {exc}") from exc
        return label or self.default


if TYPE_CHECKING:
    from typing import cast

    from happypatients.domain.ports import PolicySource

    _static_check: PolicySource = StaticPolicySource()
    _env_check: PolicySource = EnvironmentPolicySource()
    _store_check: PolicySource = StorePolicySource(cast("UnitOfWorkFactory", object()))
