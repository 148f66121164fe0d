"""Port for the eligibility policy source."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PolicySource(Protocol):
    """Supplies the current eligibility policy (one treatment status label).

    The value may change between calls and is never cached by callers.
    Implementations raise ``PolicyError`` when the policy cannot be read.
    """

    def retrieve_policy(self) -> str: ...
