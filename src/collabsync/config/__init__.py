"""Application configuration helpers."""

from __future__ import annotations

from .api import ApiConfig, collaboration_resilience, contacts_resilience
from .env import optional_float_env, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import StorageConfig, get_http_cache_path, get_storage_config

__all__ = [
    "ApiConfig",
    "CacheConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "collaboration_resilience",
    "configure_logging",
    "contacts_resilience",
    "get_http_cache_path",
    "get_storage_config",
    "optional_float_env",
    "require_env_vars",
]
