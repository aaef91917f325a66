"""Entity documents: the last-known state of one item or property."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from wikiedit.domain.model.enums import EntityType

if TYPE_CHECKING:
    from collections.abc import Mapping

    from wikiedit.domain.model.primitives import (
        EntityId,
        LanguageCode,
        MonolingualText,
        PropertyId,
        RevisionId,
        StatementId,
    )
    from wikiedit.domain.model.statements import Statement


@dataclass(frozen=True, kw_only=True)
class EntityDocument:
    """Read-only snapshot of an entity as fetched from the API.

    ``entity_id`` is ``None`` for an entity that does not exist yet.
    """

    entity_id: EntityId | None = None
    entity_type: EntityType = EntityType.ITEM
    revision_id: RevisionId | None = None
    labels: Mapping[LanguageCode, MonolingualText] = field(
        default_factory=dict["LanguageCode", "MonolingualText"]
    )
    descriptions: Mapping[LanguageCode, MonolingualText] = field(
        default_factory=dict["LanguageCode", "MonolingualText"]
    )
    aliases: Mapping[LanguageCode, tuple[MonolingualText, ...]] = field(
        default_factory=dict["LanguageCode", "tuple[MonolingualText, ...]"]
    )
    statements: tuple[Statement, ...] = ()
    datatype: str | None = None

    def statements_for(self, property_id: PropertyId) -> tuple[Statement, ...]:
        return tuple(s for s in self.statements if s.property_id == property_id)

    def statement_by_id(self, statement_id: StatementId) -> Statement | None:
        for statement in self.statements:
            if statement.statement_id == statement_id:
                return statement
        return None

    def label(self, language: LanguageCode) -> str | None:
        term = self.labels.get(language)
        return term.text if term is not None else None
