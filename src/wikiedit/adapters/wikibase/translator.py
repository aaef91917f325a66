"""Translate Wikibase API payloads into domain objects."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, cast

from wikiedit.domain.entity_updates import EditRequest
from wikiedit.domain.model import (
    ENTITY_ID_PREFIXES,
    DataValue,
    EntityDocument,
    EntityType,
    MonolingualText,
    Reference,
    Snak,
    Statement,
)

from .schema import (
    DataValuePayload,
    EditRequestPayload,
    EntityPayload,
    MonolingualTextPayload,
    ReferencePayload,
    SnakPayload,
    StatementPayload,
)

if TYPE_CHECKING:
    from collections.abc import Iterable


def parse_entity_document(payload: EntityPayload | Mapping[str, object]) -> EntityDocument:
    model = (
        payload if isinstance(payload, EntityPayload) else EntityPayload.model_validate(payload)
    )
    statements = tuple(
        parse_statement(statement)
        for statements in model.claims.values()
        for statement in statements
    )
    return EntityDocument(
        entity_id=model.id,
        entity_type=model.type or _entity_type_from_id(model.id),
        revision_id=model.lastrevid,
        labels={lang: _parse_term(term) for lang, term in model.labels.items()},
        descriptions={lang: _parse_term(term) for lang, term in model.descriptions.items()},
        aliases={
            lang: tuple(_parse_term(term) for term in terms)
            for lang, terms in model.aliases.items()
        },
        statements=statements,
        datatype=model.datatype,
    )


def parse_statement(payload: StatementPayload | Mapping[str, object]) -> Statement:
    model = (
        payload
        if isinstance(payload, StatementPayload)
        else StatementPayload.model_validate(payload)
    )
    return Statement(
        main_snak=parse_snak(model.mainsnak),
        qualifiers=_parse_snak_groups(model.qualifiers, model.qualifiers_order),
        references=tuple(_parse_reference(reference) for reference in model.references),
        rank=model.rank,
        statement_id=model.id,
    )


def parse_snak(payload: SnakPayload) -> Snak:
    return Snak(
        property_id=payload.property,
        snak_type=payload.snaktype,
        value=_parse_data_value(payload.datavalue) if payload.datavalue is not None else None,
        datatype=payload.datatype,
    )


def parse_edit_request(payload: EditRequestPayload | Mapping[str, object]) -> EditRequest:
    model = (
        payload
        if isinstance(payload, EditRequestPayload)
        else EditRequestPayload.model_validate(payload)
    )
    return EditRequest(
        add_statements=tuple(parse_statement(s) for s in model.statements),
        delete_statements=tuple(parse_statement(s) for s in model.delete_statements),
        add_labels=_parse_terms(model.labels),
        add_descriptions=_parse_terms(model.descriptions),
        add_aliases=_parse_terms(model.aliases),
        delete_aliases=_parse_terms(model.delete_aliases),
        statement_matching=model.statement_matching,
        alias_deletion=model.alias_deletion,
    )


def _parse_term(payload: MonolingualTextPayload) -> MonolingualText:
    return MonolingualText(language=payload.language, text=payload.value)


def _parse_terms(payloads: Iterable[MonolingualTextPayload]) -> tuple[MonolingualText, ...]:
    return tuple(_parse_term(payload) for payload in payloads)


def _parse_reference(payload: ReferencePayload) -> Reference:
    return Reference(
        snaks=_parse_snak_groups(payload.snaks, payload.snaks_order),
        hash=payload.hash,
    )


def _parse_snak_groups(
    groups: dict[str, list[SnakPayload]],
    order: list[str] | None,
) -> tuple[Snak, ...]:
    ordered_keys = list(order or [])
    ordered_keys.extend(key for key in groups if key not in ordered_keys)
    return tuple(parse_snak(snak) for key in ordered_keys for snak in groups.get(key, []))


def _parse_data_value(payload: DataValuePayload) -> DataValue:
    if payload.type == "wikibase-entityid" and isinstance(payload.value, Mapping):
        return _normalize_entity_id_value(cast(Mapping[str, object], payload.value))
    return DataValue(type=payload.type, value=payload.value)


def _normalize_entity_id_value(value: Mapping[str, object]) -> DataValue:
    # Older dumps and hand-written requests may omit either "id" or "numeric-id".
    entity_type = value.get("entity-type")
    if not isinstance(entity_type, str):
        entity_type = None
    entity_id = value.get("id")
    if not isinstance(entity_id, str):
        prefix = ENTITY_ID_PREFIXES.get(entity_type or "item")
        numeric = value.get("numeric-id")
        if prefix is None or not isinstance(numeric, int):
            return DataValue(type="wikibase-entityid", value=dict(value))
        entity_id = f"{prefix}{numeric}"
    return DataValue.entity(entity_id, entity_type)


def _entity_type_from_id(entity_id: str) -> EntityType:
    return EntityType.PROPERTY if entity_id.upper().startswith("P") else EntityType.ITEM
