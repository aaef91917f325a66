"""Builders for domain objects used across tests."""

from __future__ import annotations

from wikiedit.domain.model import (
    DataValue,
    EntityDocument,
    MonolingualText,
    Reference,
    Snak,
    Statement,
)


def term(language: str, text: str) -> MonolingualText:
    return MonolingualText(language=language, text=text)


def instance_of(
    item_id: str,
    *,
    source: str | None = None,
    statement_id: str | None = None,
) -> Statement:
    references = (Reference(snaks=(Snak.of("P248", DataValue.entity(source)),)),) if source else ()
    return Statement(
        main_snak=Snak.of("P31", DataValue.entity(item_id)),
        references=references,
        statement_id=statement_id,
    )


def make_document(
    *,
    labels: dict[str, str] | None = None,
    descriptions: dict[str, str] | None = None,
    aliases: dict[str, list[str]] | None = None,
    statements: tuple[Statement, ...] = (),
    entity_id: str = "Q1",
    revision_id: int | None = 100,
) -> EntityDocument:
    return EntityDocument(
        entity_id=entity_id,
        revision_id=revision_id,
        labels={lang: term(lang, text) for lang, text in (labels or {}).items()},
        descriptions={lang: term(lang, text) for lang, text in (descriptions or {}).items()},
        aliases={
            lang: tuple(term(lang, text) for text in texts)
            for lang, texts in (aliases or {}).items()
        },
        statements=statements,
    )
