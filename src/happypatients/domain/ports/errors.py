"""Errors raised by adapters behind the domain ports."""

from __future__ import annotations


class StoreError(RuntimeError):
    """Raised when the durable store cannot complete a read or write."""


class CacheError(RuntimeError):
    """Raised when the patient cache cannot complete a read, write or removal."""


class PolicyError(RuntimeError):
    """Raised when the eligibility policy cannot be read."""
