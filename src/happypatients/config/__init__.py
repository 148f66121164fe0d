"""Application configuration helpers."""

from __future__ import annotations

from .cache import CacheBackend, CacheConfig, get_cache_config
from .env import choice_env_var, optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError, UnsupportedOptionError
from .logging import configure_logging, get_log_level
from .policy import DEFAULT_POLICY_LABEL, PolicyConfig, PolicySourceKind, get_policy_config
from .storage import DatabaseConfig, default_data_dir, get_database_config, get_database_uri

__all__ = [
    "DEFAULT_POLICY_LABEL",
    "CacheBackend",
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "PolicyConfig",
    "PolicySourceKind",
    "UnsupportedOptionError",
    "choice_env_var",
    "configure_logging",
    "default_data_dir",
    "get_cache_config",
    "get_database_config",
    "get_database_uri",
    "get_log_level",
    "get_policy_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
