"""Domain primitives: scalar aliases + the monolingual term value object."""

from __future__ import annotations

from dataclasses import dataclass

type LanguageCode = str
type EntityId = str
type PropertyId = str
type StatementId = str
type RevisionId = int


@dataclass(frozen=True, slots=True)
class MonolingualText:
    """A language-tagged string: one label, description or alias."""

    language: LanguageCode
    text: str

    def to_json(self) -> dict[str, str]:
        return {"language": self.language, "value": self.text}
