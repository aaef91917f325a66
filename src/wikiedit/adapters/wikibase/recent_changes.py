"""Recent-changes RSS feed of a Wikibase instance."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from logging import getLogger
from typing import TYPE_CHECKING
from xml.etree import ElementTree

from wikiedit.adapters.http_resilience import ResilientClient
from wikiedit.config.wikibase import RecentChangesConfig, get_recent_changes_config
from wikiedit.domain.model import RecentChange

if TYPE_CHECKING:
    from collections.abc import Callable

    from wikiedit.config.http_resilience import ResilienceConfig
    from wikiedit.domain.ports import RecentChangesSource

log = getLogger(__name__)

FEED_PARAMS = {"action": "feedrecentchanges", "format": "json", "feedformat": "rss"}
FROM_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
DC_CREATOR = "{http://purl.org/dc/elements/1.1/}creator"


class RecentChangesFeedError(ValueError):
    """Raised when the feed cannot be parsed into changes."""


def build_feed_params(since: datetime | None = None) -> dict[str, str]:
    params = dict(FEED_PARAMS)
    if since is not None:
        if since.tzinfo is None:
            since = since.replace(tzinfo=UTC)
        params["from"] = since.astimezone(UTC).strftime(FROM_TIMESTAMP_FORMAT)
    return params


def parse_feed(document: str | bytes) -> list[RecentChange]:
    """Parse an RSS document into unique changes ordered by title, then time."""

    try:
        root = ElementTree.fromstring(document)
    except ElementTree.ParseError as exc:
        raise RecentChangesFeedError(f"Malformed recent changes feed: {exc}") from exc

    changes = {_parse_item(item) for item in root.iter("item")}
    return sorted(changes)


def _parse_item(item: ElementTree.Element) -> RecentChange:
    title = item.findtext("title")
    published = item.findtext("pubDate")
    author = item.findtext(DC_CREATOR)
    if not title or not published or not author:
        raise RecentChangesFeedError(
            f"Feed item is incomplete: title={title!r}, pubDate={published!r}, author={author!r}"
        )
    try:
        timestamp = parsedate_to_datetime(published.strip())
    except (TypeError, ValueError) as exc:
        raise RecentChangesFeedError(f"Invalid pubDate in feed item: {published!r}") from exc
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return RecentChange(title=title.strip(), timestamp=timestamp, author=author.strip())


class RecentChangesFetcher:
    """Reads the ``feedrecentchanges`` RSS feed."""

    def __init__(
        self,
        *,
        config: RecentChangesConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config or get_recent_changes_config()
        self._client_factory = client_factory or ResilientClient

    def __call__(self, *, since: datetime | None = None) -> list[RecentChange]:
        return asyncio.run(self._fetch_async(since=since))

    async def _fetch_async(self, *, since: datetime | None) -> list[RecentChange]:
        async with self._client_factory(self._config.resilience) as client:
            response = await client.get(self._config.feed_url, params=build_feed_params(since))
            response.raise_for_status()
        changes = parse_feed(response.content)
        log.info("Fetched %s recent changes (since=%s)", len(changes), since)
        return changes


if TYPE_CHECKING:
    _source_check: RecentChangesSource = RecentChangesFetcher()
