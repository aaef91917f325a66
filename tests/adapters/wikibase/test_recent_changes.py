from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import httpx
import pytest

from wikiedit.adapters.wikibase import RecentChangesFeedError, RecentChangesFetcher, parse_feed
from wikiedit.adapters.wikibase.recent_changes import build_feed_params
from wikiedit.config import RecentChangesConfig, ResilienceConfig
from wikiedit.domain.model import RecentChange

from tests.helpers.http import make_client_factory, request_params

FEED_URL = "https://wikibase.example.org/w/api.php"


def test_feed_is_parsed_deduplicated_and_sorted(recent_changes_feed: bytes) -> None:
    changes = parse_feed(recent_changes_feed)

    assert changes == [
        RecentChange(
            title="P31",
            timestamp=datetime(2026, 10, 17, 10, 1, 40, tzinfo=UTC),
            author="Example Editor",
        ),
        RecentChange(
            title="Q146",
            timestamp=datetime(2026, 10, 17, 10, 4, 12, tzinfo=UTC),
            author="CatBot",
        ),
    ]


def test_same_title_orders_by_time() -> None:
    document = """<?xml version="1.0"?>
<rss version="2.0" xmlns:dc="http://purl.org/dc/elements/1.1/"><channel>
  <item><title>Q1</title><pubDate>Sat, 17 Oct 2026 10:00:00 GMT</pubDate>
    <dc:creator>B</dc:creator></item>
  <item><title>Q1</title><pubDate>Sat, 17 Oct 2026 09:00:00 GMT</pubDate>
    <dc:creator>A</dc:creator></item>
</channel></rss>"""

    changes = parse_feed(document)

    assert [change.author for change in changes] == ["A", "B"]


def test_empty_feed_yields_no_changes() -> None:
    assert parse_feed('<rss version="2.0"><channel></channel></rss>') == []


def test_malformed_feed_raises() -> None:
    with pytest.raises(RecentChangesFeedError):
        parse_feed("<rss><channel>")


def test_item_without_author_raises() -> None:
    document = """<rss version="2.0"><channel><item><title>Q1</title>
<pubDate>Sat, 17 Oct 2026 10:00:00 GMT</pubDate></item></channel></rss>"""

    with pytest.raises(RecentChangesFeedError, match="incomplete"):
        parse_feed(document)


def test_item_with_invalid_date_raises() -> None:
    document = """<rss version="2.0" xmlns:dc="http://purl.org/dc/elements/1.1/"><channel>
<item><title>Q1</title><pubDate>yesterday</pubDate><dc:creator>A</dc:creator></item>
</channel></rss>"""

    with pytest.raises(RecentChangesFeedError, match="pubDate"):
        parse_feed(document)


def test_feed_params_convert_since_to_utc() -> None:
    since = datetime(2026, 10, 17, 12, 30, 5, tzinfo=timezone(timedelta(hours=2)))

    params = build_feed_params(since)

    assert params["action"] == "feedrecentchanges"
    assert params["feedformat"] == "rss"
    assert params["from"] == "20261017103005"
    assert "from" not in build_feed_params()


def test_fetcher_requests_feed(recent_changes_feed: bytes) -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, content=recent_changes_feed)

    fetcher = RecentChangesFetcher(
        config=RecentChangesConfig(
            feed_url=FEED_URL,
            resilience=ResilienceConfig(name="recent-changes-test"),
        ),
        client_factory=make_client_factory(handler),
    )

    changes = fetcher(since=datetime(2026, 10, 17, 10, tzinfo=UTC))

    assert [change.title for change in changes] == ["P31", "Q146"]
    (request,) = captured
    assert request_params(request)["from"] == "20261017100000"


def test_fetcher_raises_on_http_error() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    fetcher = RecentChangesFetcher(
        config=RecentChangesConfig(
            feed_url=FEED_URL,
            resilience=ResilienceConfig(name="recent-changes-test"),
        ),
        client_factory=make_client_factory(handler),
    )

    with pytest.raises(httpx.HTTPStatusError):
        fetcher()
