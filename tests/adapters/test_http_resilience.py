from __future__ import annotations

import asyncio
from pathlib import Path

import httpx
import pytest
from hishel import AsyncSqliteStorage

from wikiedit.adapters.http_resilience import (
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    ResilientClient,
    _build_cache_storage,  # type: ignore[reportPrivateUsage]
    log_response,
)


def test_client_sends_user_agent() -> None:
    client = ResilientClient(ResilienceConfig(name="test", user_agent="wikiedit-tests/0.1"))

    assert client._client.headers["User-Agent"] == "wikiedit-tests/0.1"  # noqa: SLF001
    asyncio.run(client.aclose())


def test_no_cache_without_config() -> None:
    assert _build_cache_storage(None) is None


def test_sqlite_cache_lives_in_cache_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    cache_dir = tmp_path / "cache"
    monkeypatch.setenv("WIKIEDIT_CACHE_DIR", str(cache_dir))

    storage = _build_cache_storage(CacheConfig(backend="sqlite"))

    assert isinstance(storage, AsyncSqliteStorage)
    assert cache_dir.is_dir()


def test_response_hooks_follow_logging_hook() -> None:
    async def record(_: httpx.Response) -> None:
        return None

    client = ResilientClient(ResilienceConfig(name="test", response_hooks=(record,)))

    assert client._client.event_hooks["response"] == [log_response, record]  # noqa: SLF001
    asyncio.run(client.aclose())


def test_rate_limited_client_sends_requests() -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    config = ResilienceConfig(name="test", ratelimit=RateLimit(max_calls=2, per_seconds=1.0))

    async def run() -> list[int]:
        async with ResilientClient(config) as client:
            client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))  # noqa: SLF001
            responses = [
                await client.get("https://wikibase.example.org/w/api.php") for _ in range(2)
            ]
        return [response.status_code for response in responses]

    assert asyncio.run(run()) == [204, 204]
