"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration values are absent or blank."""


class UnsupportedOptionError(ConfigurationError):
    """Raised when an environment variable names an option we do not offer."""

    def __init__(self, name: str, value: str, allowed: tuple[str, ...]) -> None:
        choices = ", ".join(allowed)
        super().__init__(f"Unsupported value {value!r} for {name} (expected one of: {choices})")
        self.name = name
        self.value = value
        self.allowed = allowed
