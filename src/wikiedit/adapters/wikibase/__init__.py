"""Public interface for the Wikibase adapter."""

from __future__ import annotations

from .client import (
    EntityNotFoundError,
    WikibaseAPIError,
    WikibaseClient,
    WikibaseLoginError,
    WikibaseMaxlagError,
)
from .recent_changes import RecentChangesFeedError, RecentChangesFetcher, parse_feed
from .schema import EditRequestPayload, EntityPayload, StatementPayload
from .translator import parse_edit_request, parse_entity_document, parse_statement

__all__ = [
    "EditRequestPayload",
    "EntityNotFoundError",
    "EntityPayload",
    "RecentChangesFeedError",
    "RecentChangesFetcher",
    "StatementPayload",
    "WikibaseAPIError",
    "WikibaseClient",
    "WikibaseLoginError",
    "WikibaseMaxlagError",
    "parse_edit_request",
    "parse_entity_document",
    "parse_feed",
    "parse_statement",
]
