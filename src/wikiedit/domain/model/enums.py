"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityType(StrEnum):
    ITEM = "item"
    PROPERTY = "property"


class TermKind(StrEnum):
    """Discriminator for the three per-language term maps of an entity."""

    LABEL = "labels"
    DESCRIPTION = "descriptions"
    ALIAS = "aliases"


class SnakType(StrEnum):
    VALUE = "value"
    SOME_VALUE = "somevalue"
    NO_VALUE = "novalue"


class StatementRank(StrEnum):
    PREFERRED = "preferred"
    NORMAL = "normal"
    DEPRECATED = "deprecated"
