from __future__ import annotations

from datetime import UTC, datetime

import pytest

from wikiedit.app import list_recent_changes, plan_entity_edit, submit_entity_edit
from wikiedit.domain.entity_updates import EditRequest, EntityUpdate
from wikiedit.domain.model import EntityDocument, EntityId, RecentChange
from wikiedit.domain.ports import EditResult

from tests.helpers.entities import make_document, term


class FakeFetcher:
    def __init__(self, document: EntityDocument) -> None:
        self.document = document
        self.requested: list[EntityId] = []

    def fetch_entity(self, entity_id: EntityId) -> EntityDocument:
        self.requested.append(entity_id)
        return self.document


class FakeSubmitter:
    def __init__(self) -> None:
        self.submitted: list[tuple[EntityUpdate, str | None, bool]] = []

    def submit_update(
        self,
        update: EntityUpdate,
        *,
        summary: str | None = None,
        bot: bool = False,
    ) -> EditResult:
        self.submitted.append((update, summary, bot))
        return EditResult(entity_id=update.entity_id or "Q999", revision_id=101)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher(make_document(entity_id="Q146", labels={"en": "Cat"}))


def test_plan_fetches_current_state(fetcher: FakeFetcher) -> None:
    request = EditRequest(add_aliases=(term("fr", "Chat"),))

    update = plan_entity_edit("Q146", request, fetcher=fetcher)

    assert fetcher.requested == ["Q146"]
    assert update.base_revision_id == 100
    assert update.as_json() == {"labels": {"fr": {"language": "fr", "value": "Chat"}}}


def test_submit_sends_non_empty_edit(fetcher: FakeFetcher) -> None:
    submitter = FakeSubmitter()
    request = EditRequest(add_labels=(term("de", "Katze"),))

    outcome = submit_entity_edit(
        "Q146",
        request,
        summary="German label",
        bot=True,
        fetcher=fetcher,
        submitter=submitter,
    )

    assert outcome.submitted
    assert outcome.result == EditResult(entity_id="Q146", revision_id=101)
    ((update, summary, bot),) = submitter.submitted
    assert update is outcome.update
    assert summary == "German label"
    assert bot


def test_submit_skips_empty_edit(fetcher: FakeFetcher) -> None:
    submitter = FakeSubmitter()
    request = EditRequest(add_labels=(term("en", "Cat"),))

    outcome = submit_entity_edit("Q146", request, fetcher=fetcher, submitter=submitter)

    assert not outcome.submitted
    assert outcome.update.is_empty_edit()
    assert submitter.submitted == []


def test_dry_run_does_not_submit(fetcher: FakeFetcher) -> None:
    submitter = FakeSubmitter()
    request = EditRequest(add_labels=(term("de", "Katze"),))

    outcome = submit_entity_edit(
        "Q146", request, dry_run=True, fetcher=fetcher, submitter=submitter
    )

    assert not outcome.submitted
    assert not outcome.update.is_empty_edit()
    assert submitter.submitted == []


def test_list_recent_changes_forwards_since() -> None:
    captured: dict[str, object] = {}
    change = RecentChange(
        title="Q146", timestamp=datetime(2026, 10, 17, 10, tzinfo=UTC), author="CatBot"
    )

    def fake_source(*, since: datetime | None = None) -> list[RecentChange]:
        captured["since"] = since
        return [change]

    since = datetime(2026, 10, 17, tzinfo=UTC)

    assert list_recent_changes(since=since, source=fake_source) == [change]
    assert captured["since"] == since
