"""Ports for reading and editing entities on a Wikibase instance."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime

    from wikiedit.domain.entity_updates import EntityUpdate
    from wikiedit.domain.model import EntityDocument, EntityId, RecentChange, RevisionId


@dataclass(frozen=True, slots=True)
class EditResult:
    """Outcome of one submitted edit."""

    entity_id: EntityId
    revision_id: RevisionId | None
    nochange: bool = False


@runtime_checkable
class EntityFetcher(Protocol):
    def fetch_entity(self, entity_id: EntityId) -> EntityDocument: ...


@runtime_checkable
class EditSubmitter(Protocol):
    def submit_update(
        self,
        update: EntityUpdate,
        *,
        summary: str | None = None,
        bot: bool = False,
    ) -> EditResult: ...


@runtime_checkable
class RecentChangesSource(Protocol):
    def __call__(self, *, since: datetime | None = None) -> list[RecentChange]: ...


__all__ = ["EditResult", "EditSubmitter", "EntityFetcher", "RecentChangesSource"]
