"""Statement value objects.

Equality is content equality: statement ids, reference hashes and snak
datatypes are carried for round-tripping but never compared.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from wikiedit.domain.model.enums import SnakType, StatementRank

if TYPE_CHECKING:
    from wikiedit.domain.model.primitives import EntityId, PropertyId, StatementId

type JsonValue = Any

ENTITY_ID_PREFIXES = {"item": "Q", "property": "P", "lexeme": "L", "mediainfo": "M"}
_ENTITY_TYPES = {prefix: entity_type for entity_type, prefix in ENTITY_ID_PREFIXES.items()}
_SUB_ENTITY_TYPES = {"F": "form", "S": "sense"}


@dataclass(frozen=True, slots=True)
class DataValue:
    """Typed value of a snak as the Wikibase JSON model spells it."""

    type: str
    value: JsonValue

    @classmethod
    def string(cls, text: str) -> DataValue:
        return cls(type="string", value=text)

    @classmethod
    def entity(cls, entity_id: EntityId, entity_type: str | None = None) -> DataValue:
        """Entity reference value; ``entity_type`` defaults to the one the id prefix names.

        Forms and senses (``L7-F1``, ``L7-S1``) carry no numeric id.
        """

        entity_id = entity_id.strip().upper()
        parent, _, child = entity_id.partition("-")
        value: dict[str, JsonValue]
        if child:
            entity_type = entity_type or _SUB_ENTITY_TYPES.get(child[:1])
            value = {"entity-type": entity_type, "id": entity_id}
        else:
            entity_type = entity_type or _ENTITY_TYPES.get(parent[:1])
            numeric = int(parent[1:])
            value = {
                "entity-type": entity_type,
                "numeric-id": numeric,
                "id": f"{parent[0]}{numeric}",
            }
        if entity_type is None:
            raise ValueError(f"Cannot tell the entity type of {entity_id!r}")
        return cls(type="wikibase-entityid", value=value)

    @classmethod
    def monolingual_text(cls, language: str, text: str) -> DataValue:
        return cls(type="monolingualtext", value={"language": language, "text": text})

    @classmethod
    def quantity(cls, amount: str, *, unit: str = "1") -> DataValue:
        if not amount.startswith(("+", "-")):
            amount = f"+{amount}"
        return cls(type="quantity", value={"amount": amount, "unit": unit})

    @classmethod
    def time(
        cls,
        time: str,
        *,
        precision: int = 11,
        calendarmodel: str = "http://www.wikidata.org/entity/Q1985727",
    ) -> DataValue:
        return cls(
            type="time",
            value={
                "time": time,
                "timezone": 0,
                "before": 0,
                "after": 0,
                "precision": precision,
                "calendarmodel": calendarmodel,
            },
        )

    def to_json(self) -> dict[str, JsonValue]:
        return {"type": self.type, "value": self.value}


@dataclass(frozen=True, slots=True)
class Snak:
    property_id: PropertyId
    snak_type: SnakType = SnakType.VALUE
    value: DataValue | None = None
    datatype: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if (self.snak_type is SnakType.VALUE) != (self.value is not None):
            raise ValueError(
                f"Snak on {self.property_id}: a value is required exactly for value snaks"
            )

    @classmethod
    def of(cls, property_id: PropertyId, value: DataValue) -> Snak:
        return cls(property_id=property_id, value=value)

    def to_json(self) -> dict[str, JsonValue]:
        data: dict[str, JsonValue] = {
            "snaktype": self.snak_type.value,
            "property": self.property_id,
        }
        if self.value is not None:
            data["datavalue"] = self.value.to_json()
        if self.datatype is not None:
            data["datatype"] = self.datatype
        return data


def _group_snaks(snaks: tuple[Snak, ...]) -> tuple[dict[str, list[JsonValue]], list[str]]:
    grouped: dict[str, list[JsonValue]] = {}
    for snak in snaks:
        grouped.setdefault(snak.property_id, []).append(snak.to_json())
    return grouped, list(grouped)


@dataclass(frozen=True, slots=True)
class Reference:
    snaks: tuple[Snak, ...]
    hash: str | None = field(default=None, compare=False)

    def to_json(self) -> dict[str, JsonValue]:
        grouped, order = _group_snaks(self.snaks)
        data: dict[str, JsonValue] = {"snaks": grouped, "snaks-order": order}
        if self.hash is not None:
            data["hash"] = self.hash
        return data


@dataclass(frozen=True, slots=True)
class Statement:
    main_snak: Snak
    qualifiers: tuple[Snak, ...] = ()
    references: tuple[Reference, ...] = ()
    rank: StatementRank = StatementRank.NORMAL
    statement_id: StatementId | None = field(default=None, compare=False)

    @property
    def property_id(self) -> PropertyId:
        return self.main_snak.property_id

    def with_id(self, statement_id: StatementId | None) -> Statement:
        return replace(self, statement_id=statement_id)

    def to_json(self) -> dict[str, JsonValue]:
        data: dict[str, JsonValue] = {
            "type": "statement",
            "mainsnak": self.main_snak.to_json(),
            "rank": self.rank.value,
        }
        if self.statement_id is not None:
            data["id"] = self.statement_id
        if self.qualifiers:
            grouped, order = _group_snaks(self.qualifiers)
            data["qualifiers"] = grouped
            data["qualifiers-order"] = order
        if self.references:
            data["references"] = [reference.to_json() for reference in self.references]
        return data
