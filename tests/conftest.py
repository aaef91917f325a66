from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, cast

import pytest

from wikiedit.adapters.wikibase import parse_entity_document
from wikiedit.domain.model import EntityDocument

if TYPE_CHECKING:
    from wikiedit.domain.model.statements import JsonValue

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture(autouse=True)
def _wikibase_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("WIKIBASE_USER_AGENT", "wikiedit-tests/0.1 (tests@example.org)")
    monkeypatch.setenv("WIKIEDIT_CACHE_DIR", str(tmp_path))
    for name in (
        "WIKIBASE_API_URL",
        "WIKIBASE_USERNAME",
        "WIKIBASE_PASSWORD",
        "WIKIBASE_MAXLAG",
        "WIKIEDIT_FEED_CACHE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def wbgetentities_payload() -> dict[str, JsonValue]:
    path = DATA_DIR / "wbgetentities_q146.json"
    return cast(dict[str, "JsonValue"], json.loads(path.read_text(encoding="utf-8")))


@pytest.fixture
def cat_document(wbgetentities_payload: dict[str, JsonValue]) -> EntityDocument:
    return parse_entity_document(wbgetentities_payload["entities"]["Q146"])


@pytest.fixture(scope="session")
def recent_changes_feed() -> bytes:
    return (DATA_DIR / "recent_changes.rss").read_bytes()
