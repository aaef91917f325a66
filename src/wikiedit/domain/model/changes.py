"""Entries of the recent-changes feed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True, order=True)
class RecentChange:
    """One edit as announced by the feed: page title, time and author."""

    title: str
    timestamp: datetime
    author: str
