from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
import json
import logging
from typing import Any

import httpx

from dex_pool_api.domain.entities.analytics import PoolAnalytics
from dex_pool_api.domain.entities.pool_summary import PoolSummary, TopPoolSummary
from dex_pool_api.domain.entities.tick import Tick
from dex_pool_api.domain.exceptions import ConfigurationError, TransportError, UnexpectedResponseError
from dex_pool_api.infrastructure.clients.subgraph_mappers import (
    map_pool_analytics,
    map_pool_summaries,
    map_pool_ticks,
    map_token_symbols,
    map_top_pools,
)
from dex_pool_api.infrastructure.clients.subgraph_queries import (
    POOL_ANALYTICS_QUERY,
    POOL_TICKS_QUERY,
    SEARCH_POOLS_QUERY,
    TOKEN_SYMBOLS_QUERY,
    TOP_POOLS_QUERY,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubgraphClientSettings:
    graph_gateway_base: str
    graph_api_key: str
    subgraph_id: str
    timeout_seconds: float


class SubgraphClient:
    """GraphQL client for one Uniswap v3 subgraph behind The Graph gateway.

    Every failure is logged with the offending query and variables and raised
    as a single error type. Retries are left to the caller.
    """

    def __init__(
        self,
        settings: SubgraphClientSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings
        self._transport = transport

    async def query(self, document: str, variables: dict | None = None) -> dict:
        url = self._resolve_url()
        variables = variables or {}

        try:
            async with httpx.AsyncClient(
                timeout=self._settings.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(url, json={"query": document, "variables": variables})
        except httpx.HTTPError as exc:
            self._log_failure("request_failed", str(exc), document, variables)
            raise TransportError(f"GraphQL request failed: {exc}") from exc

        if response.is_error:
            detail = f"{response.status_code} {response.reason_phrase}"
            self._log_failure("http_error", f"{detail} body={response.text[:500]}", document, variables)
            raise TransportError(
                f"GraphQL request failed: {detail}",
                status_code=response.status_code,
            )

        try:
            payload = response.json(parse_float=Decimal)
        except ValueError as exc:
            self._log_failure("invalid_json", str(exc), document, variables)
            raise UnexpectedResponseError("Subgraph returned a non-JSON response.") from exc
        if not isinstance(payload, dict):
            self._log_failure("invalid_payload", type(payload).__name__, document, variables)
            raise UnexpectedResponseError("Subgraph returned an unexpected payload.")

        errors = payload.get("errors")
        if errors:
            message = _first_error_message(errors)
            self._log_failure("graphql_errors", message, document, variables)
            raise TransportError(f"GraphQL errors: {message}")

        data = payload.get("data")
        if not isinstance(data, dict):
            self._log_failure("missing_data", "data is not an object", document, variables)
            raise UnexpectedResponseError("Subgraph response has no data object.")
        return data

    async def fetch_token_symbols(self, *, token_ids: list[str]) -> dict[str, str]:
        ids = [token_id.lower() for token_id in token_ids]
        if not ids:
            return {}
        data = await self.query(TOKEN_SYMBOLS_QUERY, {"tokenIds": ids})
        symbols = map_token_symbols(data)
        logger.info(
            "subgraph_client: fetched_token_symbols requested=%s fetched=%s",
            len(ids),
            len(symbols),
        )
        return symbols

    async def fetch_pool_ticks(self, *, pool_id: str, limit: int) -> list[Tick]:
        data = await self.query(POOL_TICKS_QUERY, {"poolId": pool_id.lower(), "first": limit})
        ticks = map_pool_ticks(data)
        logger.info("subgraph_client: fetched_pool_ticks pool=%s fetched=%s", pool_id, len(ticks))
        return ticks

    async def fetch_pool_analytics(
        self,
        *,
        pool_id: str,
        days: int,
        start_time: int,
    ) -> PoolAnalytics | None:
        data = await self.query(
            POOL_ANALYTICS_QUERY,
            {"poolId": pool_id.lower(), "days": days, "startTime": start_time},
        )
        analytics = map_pool_analytics(data)
        logger.info(
            "subgraph_client: fetched_pool_analytics pool=%s days=%s found=%s",
            pool_id,
            days,
            analytics is not None,
        )
        return analytics

    async def fetch_top_pools(
        self,
        *,
        start_time: int,
        limit: int,
        day_data_limit: int,
    ) -> list[TopPoolSummary]:
        data = await self.query(
            TOP_POOLS_QUERY,
            {"first": limit, "dayDataFirst": day_data_limit, "startTime": start_time},
        )
        pools = map_top_pools(data)
        logger.info("subgraph_client: fetched_top_pools fetched=%s", len(pools))
        return pools

    async def search_pools(self, *, text: str, limit: int) -> list[PoolSummary]:
        data = await self.query(SEARCH_POOLS_QUERY, {"text": text, "first": limit})
        pools = map_pool_summaries(data)
        logger.info("subgraph_client: searched_pools text=%s fetched=%s", text, len(pools))
        return pools

    def _resolve_url(self) -> str:
        subgraph_id = (self._settings.subgraph_id or "").strip()
        if subgraph_id.startswith("http://") or subgraph_id.startswith("https://"):
            return subgraph_id.rstrip("/")
        api_key = (self._settings.graph_api_key or "").strip()
        if not api_key:
            raise ConfigurationError("GRAPH_API_KEY is required for subgraph access.")
        if not subgraph_id:
            raise ConfigurationError("GRAPH_SUBGRAPH_ID is required for subgraph access.")
        base = self._settings.graph_gateway_base.rstrip("/")
        return f"{base}/{api_key}/subgraphs/id/{subgraph_id}"

    @staticmethod
    def _log_failure(event: str, detail: str, document: str, variables: dict) -> None:
        logger.error(
            "subgraph_client: %s detail=%s query=%s variables=%s",
            event,
            detail,
            " ".join(document.split()),
            json.dumps(variables, default=str),
        )


def _first_error_message(errors: Any) -> str:
    if isinstance(errors, list) and errors:
        first = errors[0]
        if isinstance(first, dict):
            return str(first.get("message", first))
        return str(first)
    return str(errors)
