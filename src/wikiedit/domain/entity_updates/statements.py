"""Statement merge engine.

Turns the current statements of a document plus requested additions and
deletions into the statement part of an edit: the statements to write (new or
modified) and the ids of the statements to remove.

Processing order:
1) additions, in request order, against the working statement set
2) deletions, so a deletion requested in the same batch wins
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wikiedit.domain.model import (
        EntityDocument,
        PropertyId,
        Snak,
        Statement,
        StatementId,
    )
    from wikiedit.domain.model.statements import JsonValue


class StatementMatching(StrEnum):
    """How an incoming statement is matched against an existing one."""

    EXACT = "exact"
    CLAIM = "claim"
    MAIN_SNAK = "main_snak"

    def matches(self, existing: Statement, incoming: Statement) -> bool:
        """Qualifiers are compared per property; the order of properties is ignored."""

        if existing.main_snak != incoming.main_snak:
            return False
        if self is StatementMatching.MAIN_SNAK:
            return True
        if _qualifiers_by_property(existing) != _qualifiers_by_property(incoming):
            return False
        if self is StatementMatching.EXACT:
            return existing.rank == incoming.rank and existing.references == incoming.references
        return True

    def merge(self, existing: Statement, incoming: Statement) -> Statement:
        """Fold ``incoming`` into a matched ``existing`` statement."""

        if self is StatementMatching.EXACT:
            return existing
        merged = replace(existing, references=_union(existing.references, incoming.references))
        if self is StatementMatching.MAIN_SNAK:
            merged = replace(merged, qualifiers=_union(existing.qualifiers, incoming.qualifiers))
        return merged


@dataclass(frozen=True, slots=True)
class StatementUpdate:
    """Statement diff of one planned edit."""

    written: tuple[Statement, ...] = ()
    deleted_ids: tuple[StatementId, ...] = ()

    def is_empty(self) -> bool:
        return not self.written and not self.deleted_ids

    def as_json(self) -> list[dict[str, JsonValue]]:
        claims = [statement.to_json() for statement in self.written]
        claims.extend({"id": statement_id, "remove": ""} for statement_id in self.deleted_ids)
        return claims


@dataclass(slots=True)
class _PendingStatement:
    statement: Statement
    original: Statement | None

    @property
    def dirty(self) -> bool:
        return self.original is None or self.statement != self.original


class _StatementUpdateBuilder:
    def __init__(self, document: EntityDocument, matching: StatementMatching) -> None:
        self._matching = matching
        self._pending: list[_PendingStatement] = [
            _PendingStatement(statement=statement, original=statement)
            for statement in document.statements
        ]
        self._deleted: list[StatementId] = []

    def add(self, statement: Statement) -> None:
        if statement.statement_id is not None:
            by_id = self._find_by_id(statement.statement_id)
            if by_id is not None:
                by_id.statement = statement
                return
            statement = statement.with_id(None)

        match = self._find_match(statement)
        if match is None:
            self._pending.append(_PendingStatement(statement=statement, original=None))
            return
        match.statement = self._matching.merge(match.statement, statement)

    def delete(self, statement: Statement) -> None:
        target = (
            self._find_by_id(statement.statement_id)
            if statement.statement_id is not None
            else self._find_match(statement)
        )
        if target is None:
            return
        self._pending.remove(target)
        if target.original is not None and target.original.statement_id is not None:
            self._deleted.append(target.original.statement_id)

    def build(self) -> StatementUpdate:
        return StatementUpdate(
            written=tuple(p.statement for p in self._pending if p.dirty),
            deleted_ids=tuple(self._deleted),
        )

    def _find_by_id(self, statement_id: StatementId) -> _PendingStatement | None:
        for pending in self._pending:
            if pending.statement.statement_id == statement_id:
                return pending
        return None

    def _find_match(self, statement: Statement) -> _PendingStatement | None:
        for pending in self._pending:
            if self._matching.matches(pending.statement, statement):
                return pending
        return None


def build_statement_update(
    document: EntityDocument,
    add_statements: Iterable[Statement] = (),
    delete_statements: Iterable[Statement] = (),
    *,
    matching: StatementMatching = StatementMatching.CLAIM,
) -> StatementUpdate:
    """Plan the statement changes of an edit without redundant operations.

    Re-adding a statement already present (per ``matching``) is a no-op unless
    merging contributes new references or qualifiers; deleting a statement that
    is not present is a no-op.
    """

    builder = _StatementUpdateBuilder(document, matching)
    for statement in add_statements:
        builder.add(statement)
    for statement in delete_statements:
        builder.delete(statement)
    return builder.build()


def _union[T](existing: tuple[T, ...], incoming: tuple[T, ...]) -> tuple[T, ...]:
    merged = list(existing)
    for value in incoming:
        if value not in merged:
            merged.append(value)
    return tuple(merged)


def _qualifiers_by_property(statement: Statement) -> dict[PropertyId, tuple[Snak, ...]]:
    grouped: dict[PropertyId, list[Snak]] = {}
    for snak in statement.qualifiers:
        grouped.setdefault(snak.property_id, []).append(snak)
    return {property_id: tuple(snaks) for property_id, snaks in grouped.items()}
