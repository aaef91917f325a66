"""Domain entity update subsystem."""

from __future__ import annotations

from .request import EditRequest
from .statements import StatementMatching, StatementUpdate, build_statement_update
from .terms import (
    AliasDeletion,
    PendingAliases,
    PendingTerm,
    TermSnapshot,
    TermUpdate,
    build_term_update,
    snapshot_terms,
)
from .update import EditPayload, EntityUpdate, MissingDocumentError, build_entity_update

__all__ = [
    "AliasDeletion",
    "EditPayload",
    "EditRequest",
    "EntityUpdate",
    "MissingDocumentError",
    "PendingAliases",
    "PendingTerm",
    "StatementMatching",
    "StatementUpdate",
    "TermSnapshot",
    "TermUpdate",
    "build_entity_update",
    "build_statement_update",
    "build_term_update",
    "snapshot_terms",
]
