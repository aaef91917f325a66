"""Wikibase API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, optional_int_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import (
    CACHE_BACKENDS,
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
)

DEFAULT_WIKIBASE_API_URL = "https://www.wikidata.org/w/api.php"
WIKIBASE_TIMEOUT_SECONDS = 30.0
DEFAULT_MAXLAG = 5
RECENT_CHANGES_CACHE_TTL_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class WikibaseConfig:
    """Endpoint, identity and credentials for the Wikibase action API."""

    api_url: str
    user_agent: str
    resilience: ResilienceConfig
    username: str | None = None
    password: str | None = None
    maxlag: int | None = DEFAULT_MAXLAG

    @property
    def has_credentials(self) -> bool:
        return self.username is not None and self.password is not None


@dataclass(frozen=True, slots=True)
class RecentChangesConfig:
    feed_url: str
    resilience: ResilienceConfig


def _user_agent() -> str:
    return require_env_vars(("WIKIBASE_USER_AGENT",))["WIKIBASE_USER_AGENT"]


def get_wikibase_config(*, resilience: ResilienceConfig | None = None) -> WikibaseConfig:
    user_agent = _user_agent()
    api_url = optional_env_var("WIKIBASE_API_URL") or DEFAULT_WIKIBASE_API_URL
    username = optional_env_var("WIKIBASE_USERNAME")
    password = optional_env_var("WIKIBASE_PASSWORD")
    if (username is None) != (password is None):
        raise ConfigurationError(
            "WIKIBASE_USERNAME and WIKIBASE_PASSWORD must be configured together"
        )
    maxlag = optional_int_env_var("WIKIBASE_MAXLAG")

    return WikibaseConfig(
        api_url=api_url,
        user_agent=user_agent,
        username=username,
        password=password,
        maxlag=DEFAULT_MAXLAG if maxlag is None else maxlag,
        resilience=resilience
        or ResilienceConfig(
            name="wikibase",
            base_url=api_url,
            timeout_seconds=WIKIBASE_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
            retry=RetryPolicy(total=4),
            user_agent=user_agent,
        ),
    )


def get_recent_changes_config(*, resilience: ResilienceConfig | None = None) -> RecentChangesConfig:
    user_agent = _user_agent()
    api_url = optional_env_var("WIKIBASE_API_URL") or DEFAULT_WIKIBASE_API_URL
    return RecentChangesConfig(
        feed_url=api_url,
        resilience=resilience
        or ResilienceConfig(
            name="recent-changes",
            timeout_seconds=WIKIBASE_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=1, per_seconds=1.0),
            cache=_feed_cache(),
            user_agent=user_agent,
        ),
    )


def _feed_cache() -> CacheConfig | None:
    backend = (optional_env_var("WIKIEDIT_FEED_CACHE") or "memory").lower()
    if backend == "off":
        return None
    if backend not in CACHE_BACKENDS:
        raise ConfigurationError(
            f"WIKIEDIT_FEED_CACHE must be one of memory, sqlite, off; got {backend!r}"
        )
    return CacheConfig(
        backend="sqlite" if backend == "sqlite" else "memory",
        default_ttl_seconds=RECENT_CHANGES_CACHE_TTL_SECONDS,
    )
