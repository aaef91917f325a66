"""Public domain model surface."""

from __future__ import annotations

from wikiedit.domain.model.changes import RecentChange
from wikiedit.domain.model.document import EntityDocument
from wikiedit.domain.model.enums import EntityType, SnakType, StatementRank, TermKind
from wikiedit.domain.model.primitives import (
    EntityId,
    LanguageCode,
    MonolingualText,
    PropertyId,
    RevisionId,
    StatementId,
)
from wikiedit.domain.model.statements import (
    ENTITY_ID_PREFIXES,
    DataValue,
    Reference,
    Snak,
    Statement,
)

__all__ = [
    "ENTITY_ID_PREFIXES",
    "DataValue",
    "EntityDocument",
    "EntityId",
    "EntityType",
    "LanguageCode",
    "MonolingualText",
    "PropertyId",
    "RecentChange",
    "Reference",
    "RevisionId",
    "Snak",
    "SnakType",
    "Statement",
    "StatementId",
    "StatementRank",
    "TermKind",
]
