"""Ports implemented by adapters."""

from __future__ import annotations

from .wikibase import EditResult, EditSubmitter, EntityFetcher, RecentChangesSource

__all__ = ["EditResult", "EditSubmitter", "EntityFetcher", "RecentChangesSource"]
