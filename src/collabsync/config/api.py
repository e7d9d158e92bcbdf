"""Remote API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_float_env, require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig

DEFAULT_TIMEOUT_SECONDS = 10.0
DIRECTORY_CACHE_TTL_SECONDS = 30.0


@dataclass(frozen=True)
class ApiConfig:
    """Holds the groupware API endpoint, credentials and the acting user."""

    base_url: str
    api_token: str
    user_id: str
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_environment(cls) -> ApiConfig:
        values = require_env_vars(
            ("COLLABSYNC_BASE_URL", "COLLABSYNC_API_TOKEN", "COLLABSYNC_USER_ID")
        )
        return cls(
            base_url=values["COLLABSYNC_BASE_URL"].rstrip("/"),
            api_token=values["COLLABSYNC_API_TOKEN"],
            user_id=values["COLLABSYNC_USER_ID"],
            timeout_seconds=optional_float_env(
                "COLLABSYNC_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS
            ),
        )

    @property
    def auth_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_token}",
            "Accept": "application/json",
        }


def contacts_resilience(config: ApiConfig) -> ResilienceConfig:
    return ResilienceConfig(
        name="contacts",
        base_url=config.base_url,
        timeout_seconds=config.timeout_seconds,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers=config.auth_headers,
    )


def collaboration_resilience(config: ApiConfig) -> ResilienceConfig:
    return ResilienceConfig(
        name="collaboration",
        base_url=config.base_url,
        timeout_seconds=config.timeout_seconds,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        cache=CacheConfig(backend="sqlite", default_ttl_seconds=DIRECTORY_CACHE_TTL_SECONDS),
        default_headers=config.auth_headers,
    )
