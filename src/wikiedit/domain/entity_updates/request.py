"""Source-agnostic bundle of requested entity changes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .statements import StatementMatching
from .terms import AliasDeletion
from .update import build_entity_update

if TYPE_CHECKING:
    from wikiedit.domain.model import EntityDocument, MonolingualText, Statement

    from .update import EntityUpdate


@dataclass(frozen=True, slots=True, kw_only=True)
class EditRequest:
    add_statements: tuple[Statement, ...] = ()
    delete_statements: tuple[Statement, ...] = ()
    add_labels: tuple[MonolingualText, ...] = ()
    add_descriptions: tuple[MonolingualText, ...] = ()
    add_aliases: tuple[MonolingualText, ...] = ()
    delete_aliases: tuple[MonolingualText, ...] = ()
    statement_matching: StatementMatching = StatementMatching.CLAIM
    alias_deletion: AliasDeletion = AliasDeletion.ALWAYS_RESUBMIT

    def is_blank(self) -> bool:
        return not (
            self.add_statements
            or self.delete_statements
            or self.add_labels
            or self.add_descriptions
            or self.add_aliases
            or self.delete_aliases
        )

    def plan(self, document: EntityDocument | None) -> EntityUpdate:
        return build_entity_update(
            document,
            add_statements=self.add_statements,
            delete_statements=self.delete_statements,
            add_labels=self.add_labels,
            add_descriptions=self.add_descriptions,
            add_aliases=self.add_aliases,
            delete_aliases=self.delete_aliases,
            statement_matching=self.statement_matching,
            alias_deletion=self.alias_deletion,
        )
