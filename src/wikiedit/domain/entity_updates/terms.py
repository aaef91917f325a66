"""Term snapshot and merge engine for labels, descriptions and aliases.

Safeguards enforced while merging requested terms into the snapshot:
- labels and descriptions overwrite existing values, but writing the current
  value is a no-op
- a label and an alias never share a value in one language
- duplicate aliases are dropped
- the first alias added in a language without a label becomes the label
- aliases are added and deleted independently; deletions run last and win
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from wikiedit.domain.model import TermKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from wikiedit.domain.model import EntityDocument, LanguageCode, MonolingualText


class AliasDeletion(StrEnum):
    """When a requested alias deletion flags the language's list for writing."""

    # Any deletion request on an existing list resubmits it, removed or not.
    ALWAYS_RESUBMIT = "always_resubmit"
    ON_REMOVAL = "on_removal"


@dataclass(frozen=True, slots=True)
class PendingTerm:
    value: MonolingualText
    dirty: bool = False


@dataclass(frozen=True, slots=True)
class PendingAliases:
    aliases: tuple[MonolingualText, ...] = ()
    dirty: bool = False

    def texts(self) -> tuple[str, ...]:
        return tuple(alias.text for alias in self.aliases)


@dataclass(frozen=True, slots=True)
class TermSnapshot:
    """Planned term state of an entity, keyed by language code per term kind."""

    labels: Mapping[LanguageCode, PendingTerm] = field(
        default_factory=dict["LanguageCode", "PendingTerm"]
    )
    descriptions: Mapping[LanguageCode, PendingTerm] = field(
        default_factory=dict["LanguageCode", "PendingTerm"]
    )
    aliases: Mapping[LanguageCode, PendingAliases] = field(
        default_factory=dict["LanguageCode", "PendingAliases"]
    )

    def changed_labels(self) -> dict[LanguageCode, MonolingualText]:
        return {lang: term.value for lang, term in self.labels.items() if term.dirty}

    def changed_descriptions(self) -> dict[LanguageCode, MonolingualText]:
        return {lang: term.value for lang, term in self.descriptions.items() if term.dirty}

    def changed_aliases(self) -> dict[LanguageCode, tuple[MonolingualText, ...]]:
        return {lang: pending.aliases for lang, pending in self.aliases.items() if pending.dirty}

    def is_empty(self) -> bool:
        return not (
            self.changed_labels() or self.changed_descriptions() or self.changed_aliases()
        )


@dataclass(frozen=True, slots=True)
class TermUpdate(TermSnapshot):
    """Term state after merging requested changes; dirty entries form the edit."""


def snapshot_terms(document: EntityDocument) -> TermSnapshot:
    """Build the clean term state of ``document``; alias lists are copied."""

    return TermSnapshot(
        labels={lang: PendingTerm(term) for lang, term in document.labels.items()},
        descriptions={lang: PendingTerm(term) for lang, term in document.descriptions.items()},
        aliases={
            lang: PendingAliases(tuple(aliases)) for lang, aliases in document.aliases.items()
        },
    )


class _TermUpdateBuilder:
    def __init__(self, snapshot: TermSnapshot, alias_deletion: AliasDeletion) -> None:
        self._alias_deletion = alias_deletion
        self._original = {
            TermKind.LABEL: {lang: t.value for lang, t in snapshot.labels.items()},
            TermKind.DESCRIPTION: {lang: t.value for lang, t in snapshot.descriptions.items()},
        }
        self._terms: dict[TermKind, dict[LanguageCode, PendingTerm]] = {
            TermKind.LABEL: dict(snapshot.labels),
            TermKind.DESCRIPTION: dict(snapshot.descriptions),
        }
        self._aliases: dict[LanguageCode, list[MonolingualText]] = {
            lang: list(pending.aliases) for lang, pending in snapshot.aliases.items()
        }
        self._dirty_aliases: set[LanguageCode] = {
            lang for lang, pending in snapshot.aliases.items() if pending.dirty
        }

    def set_label(self, label: MonolingualText) -> None:
        if self._set_term(TermKind.LABEL, label):
            aliases = self._aliases.get(label.language)
            if aliases is not None and label in aliases:
                self.delete_alias(label)

    def set_description(self, description: MonolingualText) -> None:
        self._set_term(TermKind.DESCRIPTION, description)

    def add_alias(self, alias: MonolingualText) -> None:
        lang = alias.language
        label = self._terms[TermKind.LABEL].get(lang)
        if label is None:
            self._terms[TermKind.LABEL][lang] = PendingTerm(alias, dirty=True)
            if alias in self._aliases.get(lang, ()):
                self.delete_alias(alias)
            return
        if label.value == alias:
            return
        aliases = self._aliases.setdefault(lang, [])
        if alias not in aliases:
            aliases.append(alias)
            self._dirty_aliases.add(lang)

    def delete_alias(self, alias: MonolingualText) -> None:
        lang = alias.language
        aliases = self._aliases.get(lang)
        if aliases is None:
            return
        removed = alias in aliases
        if removed:
            aliases.remove(alias)
        if removed or self._alias_deletion is AliasDeletion.ALWAYS_RESUBMIT:
            self._dirty_aliases.add(lang)

    def build(self) -> TermUpdate:
        return TermUpdate(
            labels=dict(self._terms[TermKind.LABEL]),
            descriptions=dict(self._terms[TermKind.DESCRIPTION]),
            aliases={
                lang: PendingAliases(tuple(aliases), dirty=lang in self._dirty_aliases)
                for lang, aliases in self._aliases.items()
            },
        )

    def _set_term(self, kind: TermKind, term: MonolingualText) -> bool:
        pending = self._terms[kind].get(term.language)
        if pending is not None and pending.value == term:
            return False
        original = self._original[kind].get(term.language)
        self._terms[kind][term.language] = PendingTerm(term, dirty=term != original)
        return True


def build_term_update(
    document: EntityDocument,
    add_labels: Iterable[MonolingualText] = (),
    add_descriptions: Iterable[MonolingualText] = (),
    add_aliases: Iterable[MonolingualText] = (),
    delete_aliases: Iterable[MonolingualText] = (),
    *,
    alias_deletion: AliasDeletion = AliasDeletion.ALWAYS_RESUBMIT,
) -> TermUpdate:
    """Merge requested term changes into the snapshot of ``document``.

    Labels go first, then descriptions, then aliases (additions before
    deletions), because alias handling depends on the final labels.
    """

    builder = _TermUpdateBuilder(snapshot_terms(document), alias_deletion)
    for label in add_labels:
        builder.set_label(label)
    for description in add_descriptions:
        builder.set_description(description)
    for alias in add_aliases:
        builder.add_alias(alias)
    for alias in delete_aliases:
        builder.delete_alias(alias)
    return builder.build()
