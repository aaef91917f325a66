"""Entity updates: statement diff + term diff, projected into an edit payload."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from wikiedit.domain.model import TermKind

from .statements import StatementMatching, StatementUpdate, build_statement_update
from .terms import AliasDeletion, TermUpdate, build_term_update

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wikiedit.domain.model import (
        EntityDocument,
        EntityId,
        LanguageCode,
        MonolingualText,
        RevisionId,
        Statement,
    )
    from wikiedit.domain.model.statements import JsonValue


class MissingDocumentError(ValueError):
    """Raised when an update is planned without the entity's current state."""

    def __init__(self) -> None:
        super().__init__("An entity update requires the current entity document")


@dataclass(frozen=True, slots=True)
class EditPayload:
    """The changed parts of an entity, and nothing else."""

    labels: dict[LanguageCode, MonolingualText] = field(
        default_factory=dict["LanguageCode", "MonolingualText"]
    )
    descriptions: dict[LanguageCode, MonolingualText] = field(
        default_factory=dict["LanguageCode", "MonolingualText"]
    )
    aliases: dict[LanguageCode, tuple[MonolingualText, ...]] = field(
        default_factory=dict["LanguageCode", "tuple[MonolingualText, ...]"]
    )
    statements: StatementUpdate = field(default_factory=StatementUpdate)

    def is_empty(self) -> bool:
        return (
            self.statements.is_empty()
            and not self.labels
            and not self.descriptions
            and not self.aliases
        )

    def as_json(self) -> dict[str, JsonValue]:
        """Render the ``data`` object of a ``wbeditentity`` request.

        Empty sections are omitted: the API reads an absent field as
        "unchanged" and an empty one as "clear".
        """

        data: dict[str, JsonValue] = {}
        if self.labels:
            data[TermKind.LABEL.value] = {
                lang: term.to_json() for lang, term in self.labels.items()
            }
        if self.descriptions:
            data[TermKind.DESCRIPTION.value] = {
                lang: term.to_json() for lang, term in self.descriptions.items()
            }
        if self.aliases:
            data[TermKind.ALIAS.value] = {
                lang: [alias.to_json() for alias in aliases]
                for lang, aliases in self.aliases.items()
            }
        if not self.statements.is_empty():
            data["claims"] = self.statements.as_json()
        return data


@dataclass(frozen=True, slots=True)
class EntityUpdate:
    """A planned, immutable edit of one entity."""

    entity_id: EntityId | None
    base_revision_id: RevisionId | None
    statements: StatementUpdate
    terms: TermUpdate

    def is_empty_edit(self) -> bool:
        return self.statements.is_empty() and self.terms.is_empty()

    def to_payload(self) -> EditPayload:
        return EditPayload(
            labels=self.terms.changed_labels(),
            descriptions=self.terms.changed_descriptions(),
            aliases=self.terms.changed_aliases(),
            statements=self.statements,
        )

    def as_json(self) -> dict[str, JsonValue]:
        return self.to_payload().as_json()


def build_entity_update(
    current_document: EntityDocument | None,
    *,
    add_statements: Iterable[Statement] = (),
    delete_statements: Iterable[Statement] = (),
    add_labels: Iterable[MonolingualText] = (),
    add_descriptions: Iterable[MonolingualText] = (),
    add_aliases: Iterable[MonolingualText] = (),
    delete_aliases: Iterable[MonolingualText] = (),
    statement_matching: StatementMatching = StatementMatching.CLAIM,
    alias_deletion: AliasDeletion = AliasDeletion.ALWAYS_RESUBMIT,
) -> EntityUpdate:
    """Plan an update on the statements and terms of ``current_document``.

    Statements are merged first, then terms. Labels and descriptions overwrite
    existing values; the first alias added in a language without a label is
    used as the label; duplicate aliases are ignored.
    """

    if current_document is None:
        raise MissingDocumentError

    statements = build_statement_update(
        current_document,
        add_statements,
        delete_statements,
        matching=statement_matching,
    )
    terms = build_term_update(
        current_document,
        add_labels,
        add_descriptions,
        add_aliases,
        delete_aliases,
        alias_deletion=alias_deletion,
    )
    return EntityUpdate(
        entity_id=current_document.entity_id,
        base_revision_id=current_document.revision_id,
        statements=statements,
        terms=terms,
    )
