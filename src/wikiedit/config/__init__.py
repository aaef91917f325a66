"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, optional_int_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import StorageConfig, get_storage_config
from .wikibase import (
    DEFAULT_WIKIBASE_API_URL,
    RecentChangesConfig,
    WikibaseConfig,
    get_recent_changes_config,
    get_wikibase_config,
)

__all__ = [
    "DEFAULT_WIKIBASE_API_URL",
    "CacheConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "RecentChangesConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "WikibaseConfig",
    "configure_logging",
    "get_recent_changes_config",
    "get_storage_config",
    "get_wikibase_config",
    "optional_env_var",
    "optional_int_env_var",
    "require_env_vars",
]
