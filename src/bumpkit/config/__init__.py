"""Application configuration helpers."""

from __future__ import annotations

from .content import RawContentConfig, get_raw_content_config
from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import StorageConfig, get_http_cache_path, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "RawContentConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_http_cache_path",
    "get_raw_content_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_vars",
]
