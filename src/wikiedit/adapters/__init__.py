"""Adapters: HTTP transport and the Wikibase API boundary."""
