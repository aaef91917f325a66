"""Pydantic models describing Wikibase API payloads."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from wikiedit.domain.entity_updates import AliasDeletion, StatementMatching
from wikiedit.domain.model import EntityType, SnakType, StatementRank


class WikibaseBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class MonolingualTextPayload(WikibaseBaseModel):
    language: str
    value: str


class DataValuePayload(WikibaseBaseModel):
    type: str
    value: Any


class SnakPayload(WikibaseBaseModel):
    snaktype: SnakType = SnakType.VALUE
    property: str
    datavalue: DataValuePayload | None = None
    datatype: str | None = None
    hash: str | None = None


class ReferencePayload(WikibaseBaseModel):
    hash: str | None = None
    snaks: dict[str, list[SnakPayload]] = Field(default_factory=dict)
    snaks_order: list[str] | None = Field(default=None, alias="snaks-order")


class StatementPayload(WikibaseBaseModel):
    id: str | None = None
    type: Literal["statement", "claim"] = "statement"
    mainsnak: SnakPayload
    rank: StatementRank = StatementRank.NORMAL
    qualifiers: dict[str, list[SnakPayload]] = Field(default_factory=dict)
    qualifiers_order: list[str] | None = Field(default=None, alias="qualifiers-order")
    references: list[ReferencePayload] = Field(default_factory=list)


class EntityPayload(WikibaseBaseModel):
    id: str
    type: EntityType | None = None
    missing: str | None = None
    lastrevid: int | None = None
    datatype: str | None = None
    labels: dict[str, MonolingualTextPayload] = Field(default_factory=dict)
    descriptions: dict[str, MonolingualTextPayload] = Field(default_factory=dict)
    aliases: dict[str, list[MonolingualTextPayload]] = Field(default_factory=dict)
    claims: dict[str, list[StatementPayload]] = Field(default_factory=dict)

    @property
    def is_missing(self) -> bool:
        return self.missing is not None


class GetEntitiesResponse(WikibaseBaseModel):
    entities: dict[str, EntityPayload] = Field(default_factory=dict)


class ApiErrorPayload(WikibaseBaseModel):
    code: str
    info: str = ""


class ErrorResponse(WikibaseBaseModel):
    error: ApiErrorPayload


class TokensPayload(WikibaseBaseModel):
    csrftoken: str | None = None
    logintoken: str | None = None


class TokensQuery(WikibaseBaseModel):
    tokens: TokensPayload


class TokensResponse(WikibaseBaseModel):
    query: TokensQuery


class LoginResult(WikibaseBaseModel):
    result: str
    reason: str | None = None
    lgusername: str | None = None


class LoginResponse(WikibaseBaseModel):
    login: LoginResult


class EditedEntityPayload(WikibaseBaseModel):
    id: str
    lastrevid: int | None = None


class EditEntityResponse(WikibaseBaseModel):
    success: int
    entity: EditedEntityPayload
    nochange: str | None = None


class EditRequestPayload(WikibaseBaseModel):
    """File format accepted by the CLI to describe requested changes."""

    labels: list[MonolingualTextPayload] = Field(default_factory=list)
    descriptions: list[MonolingualTextPayload] = Field(default_factory=list)
    aliases: list[MonolingualTextPayload] = Field(default_factory=list)
    delete_aliases: list[MonolingualTextPayload] = Field(default_factory=list)
    statements: list[StatementPayload] = Field(default_factory=list)
    delete_statements: list[StatementPayload] = Field(default_factory=list)
    statement_matching: StatementMatching = StatementMatching.CLAIM
    alias_deletion: AliasDeletion = AliasDeletion.ALWAYS_RESUBMIT
