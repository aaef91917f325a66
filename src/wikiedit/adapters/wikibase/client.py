"""HTTP client for the Wikibase action API."""

from __future__ import annotations

import asyncio
import json
from logging import getLogger
from typing import TYPE_CHECKING

from wikiedit.adapters.http_resilience import ResilientClient
from wikiedit.config.wikibase import WikibaseConfig, get_wikibase_config
from wikiedit.domain.ports import EditResult

from .schema import (
    EditEntityResponse,
    ErrorResponse,
    GetEntitiesResponse,
    LoginResponse,
    TokensResponse,
)
from .translator import parse_entity_document

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from wikiedit.config.http_resilience import ResilienceConfig
    from wikiedit.domain.entity_updates import EntityUpdate
    from wikiedit.domain.model import EntityDocument, EntityId
    from wikiedit.domain.ports import EditSubmitter, EntityFetcher

log = getLogger(__name__)

MAX_IDS_PER_REQUEST = 50
ENTITY_PROPS = ("info", "datatype", "labels", "descriptions", "aliases", "claims")

type ApiParams = dict[str, str | int]


class WikibaseAPIError(RuntimeError):
    """Raised when the API answers with an application-level error."""

    def __init__(self, code: str, info: str = "") -> None:
        super().__init__(f"{code}: {info}" if info else code)
        self.code = code
        self.info = info


class WikibaseMaxlagError(WikibaseAPIError):
    """Raised when the server refuses a request because replication lag is too high."""


class WikibaseLoginError(WikibaseAPIError):
    """Raised when bot-password login is rejected."""


class EntityNotFoundError(LookupError):
    def __init__(self, entity_id: EntityId) -> None:
        super().__init__(f"Entity {entity_id} does not exist")
        self.entity_id = entity_id


class WikibaseClient:
    """Fetches entity documents and submits planned entity updates."""

    def __init__(
        self,
        *,
        config: WikibaseConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config or get_wikibase_config()
        self._resilience = self._config.resilience
        self._client_factory = client_factory or ResilientClient

    def fetch_entity(self, entity_id: EntityId) -> EntityDocument:
        documents = self.fetch_entities([entity_id])
        try:
            return documents[entity_id]
        except KeyError:
            raise EntityNotFoundError(entity_id) from None

    def fetch_entities(self, entity_ids: Sequence[EntityId]) -> dict[EntityId, EntityDocument]:
        """Fetch several entities; missing ones are absent from the result."""

        return asyncio.run(self._fetch_entities_async(entity_ids))

    def submit_update(
        self,
        update: EntityUpdate,
        *,
        summary: str | None = None,
        bot: bool = False,
    ) -> EditResult:
        return asyncio.run(self._submit_update_async(update, summary=summary, bot=bot))

    async def _fetch_entities_async(
        self, entity_ids: Sequence[EntityId]
    ) -> dict[EntityId, EntityDocument]:
        documents: dict[EntityId, EntityDocument] = {}
        async with self._client_factory(self._resilience) as client:
            for start in range(0, len(entity_ids), MAX_IDS_PER_REQUEST):
                batch = entity_ids[start : start + MAX_IDS_PER_REQUEST]
                payload = await self._get(
                    client,
                    {
                        "action": "wbgetentities",
                        "ids": "|".join(batch),
                        "props": "|".join(ENTITY_PROPS),
                    },
                )
                response = GetEntitiesResponse.model_validate(payload)
                for entity_id, entity in response.entities.items():
                    if entity.is_missing:
                        log.info("Entity %s is missing", entity_id)
                        continue
                    documents[entity_id] = parse_entity_document(entity)
        log.debug("Fetched %s of %s entities", len(documents), len(entity_ids))
        return documents

    async def _submit_update_async(
        self,
        update: EntityUpdate,
        *,
        summary: str | None,
        bot: bool,
    ) -> EditResult:
        async with self._client_factory(self._resilience) as client:
            if self._config.has_credentials:
                await self._login(client)
            token = await self._fetch_token(client, "csrf")

            params: ApiParams = {
                "action": "wbeditentity",
                "data": json.dumps(update.as_json(), ensure_ascii=False),
                "token": token,
            }
            if update.entity_id is not None:
                params["id"] = update.entity_id
            else:
                params["new"] = "item"
            if update.base_revision_id is not None:
                params["baserevid"] = update.base_revision_id
            if summary:
                params["summary"] = summary
            if bot:
                params["bot"] = 1
            if self._config.maxlag is not None:
                params["maxlag"] = self._config.maxlag

            payload = await self._post(client, params)

        response = EditEntityResponse.model_validate(payload)
        log.info(
            "Edited %s: revision=%s, nochange=%s",
            response.entity.id,
            response.entity.lastrevid,
            response.nochange is not None,
        )
        return EditResult(
            entity_id=response.entity.id,
            revision_id=response.entity.lastrevid,
            nochange=response.nochange is not None,
        )

    async def _login(self, client: ResilientClient) -> None:
        login_token = await self._fetch_token(client, "login")
        payload = await self._post(
            client,
            {
                "action": "login",
                "lgname": self._config.username or "",
                "lgpassword": self._config.password or "",
                "lgtoken": login_token,
            },
        )
        result = LoginResponse.model_validate(payload).login
        if result.result != "Success":
            raise WikibaseLoginError(result.result, result.reason or "")
        log.info("Logged in as %s", result.lgusername or self._config.username)

    async def _fetch_token(self, client: ResilientClient, token_type: str) -> str:
        payload = await self._get(
            client, {"action": "query", "meta": "tokens", "type": token_type}
        )
        tokens = TokensResponse.model_validate(payload).query.tokens
        token = tokens.logintoken if token_type == "login" else tokens.csrftoken
        if not token:
            raise WikibaseAPIError("missingtoken", f"No {token_type} token in response")
        return token

    async def _get(self, client: ResilientClient, params: ApiParams) -> dict[str, object]:
        response = await client.get(self._config.api_url, params={**params, "format": "json"})
        response.raise_for_status()
        return _check_payload(response.json())

    async def _post(self, client: ResilientClient, params: ApiParams) -> dict[str, object]:
        response = await client.post(self._config.api_url, data={**params, "format": "json"})
        response.raise_for_status()
        return _check_payload(response.json())


def _check_payload(payload: object) -> dict[str, object]:
    if not isinstance(payload, dict):
        raise WikibaseAPIError("badresponse", "Unexpected Wikibase response payload")
    if "error" in payload:
        error = ErrorResponse.model_validate(payload).error
        log.error("Wikibase API error %s: %s", error.code, error.info)
        if error.code == "maxlag":
            raise WikibaseMaxlagError(error.code, error.info)
        raise WikibaseAPIError(error.code, error.info)
    return payload


if TYPE_CHECKING:
    _fetcher_check: EntityFetcher = WikibaseClient()
    _submitter_check: EditSubmitter = WikibaseClient()
