"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from wikiedit.adapters.wikibase import RecentChangesFetcher, WikibaseClient

if TYPE_CHECKING:
    from datetime import datetime

    from wikiedit.domain.entity_updates import EditRequest, EntityUpdate
    from wikiedit.domain.model import EntityId, RecentChange
    from wikiedit.domain.ports import (
        EditResult,
        EditSubmitter,
        EntityFetcher,
        RecentChangesSource,
    )


log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SubmitResult:
    update: EntityUpdate
    result: EditResult | None = None

    @property
    def submitted(self) -> bool:
        return self.result is not None


def plan_entity_edit(
    entity_id: EntityId,
    request: EditRequest,
    *,
    fetcher: EntityFetcher | None = None,
) -> EntityUpdate:
    """Fetch the current state of ``entity_id`` and plan ``request`` against it."""

    effective_fetcher = fetcher or WikibaseClient()
    document = effective_fetcher.fetch_entity(entity_id)
    update = request.plan(document)
    log.info(
        "Planned edit of %s at revision %s: empty=%s",
        entity_id,
        update.base_revision_id,
        update.is_empty_edit(),
    )
    return update


def submit_entity_edit(
    entity_id: EntityId,
    request: EditRequest,
    *,
    summary: str | None = None,
    bot: bool = False,
    dry_run: bool = False,
    fetcher: EntityFetcher | None = None,
    submitter: EditSubmitter | None = None,
) -> SubmitResult:
    """Plan an edit and submit it unless it is empty or ``dry_run`` is set."""

    if fetcher is None or submitter is None:
        client = WikibaseClient()
        fetcher = fetcher or client
        submitter = submitter or client

    update = plan_entity_edit(entity_id, request, fetcher=fetcher)
    if update.is_empty_edit():
        log.info("Skipping %s: requested changes are already present", entity_id)
        return SubmitResult(update=update)
    if dry_run:
        log.info("Dry run for %s, not submitting", entity_id)
        return SubmitResult(update=update)

    result = submitter.submit_update(update, summary=summary, bot=bot)
    return SubmitResult(update=update, result=result)


def list_recent_changes(
    *,
    since: datetime | None = None,
    source: RecentChangesSource | None = None,
) -> list[RecentChange]:
    effective_source = source or RecentChangesFetcher()
    return effective_source(since=since)
