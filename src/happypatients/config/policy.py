"""Eligibility policy source configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal, cast

from .env import choice_env_var, optional_env_var

PolicySourceKind = Literal["store", "env"]

POLICY_SOURCES: Final[tuple[str, ...]] = ("store", "env")
POLICY_ENV_VAR: Final[str] = "HAPPYPATIENTS_CACHE_POLICY"
DEFAULT_POLICY_LABEL: Final[str] = "ONGOING"


@dataclass(frozen=True, slots=True)
class PolicyConfig:
    source: PolicySourceKind = "store"
    default_label: str = DEFAULT_POLICY_LABEL
    env_var: str = POLICY_ENV_VAR


def get_policy_config() -> PolicyConfig:
    source = cast(
        "PolicySourceKind",
        choice_env_var("HAPPYPATIENTS_POLICY_SOURCE", "store", POLICY_SOURCES),
    )
    # With the "env" source the variable is re-read on every reconciliation; here it
    # only seeds the fallback used while the store holds no policy yet.
    default_label = optional_env_var(POLICY_ENV_VAR, DEFAULT_POLICY_LABEL)
    return PolicyConfig(source=source, default_label=default_label)
