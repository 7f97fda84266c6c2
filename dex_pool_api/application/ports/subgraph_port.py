from __future__ import annotations

from typing import Protocol

from dex_pool_api.domain.entities.analytics import PoolAnalytics
from dex_pool_api.domain.entities.pool_summary import PoolSummary, TopPoolSummary
from dex_pool_api.domain.entities.tick import Tick


class SubgraphPort(Protocol):
    async def fetch_token_symbols(self, *, token_ids: list[str]) -> dict[str, str]:
        ...

    async def fetch_pool_ticks(self, *, pool_id: str, limit: int) -> list[Tick]:
        ...

    async def fetch_pool_analytics(
        self,
        *,
        pool_id: str,
        days: int,
        start_time: int,
    ) -> PoolAnalytics | None:
        ...

    async def fetch_top_pools(
        self,
        *,
        start_time: int,
        limit: int,
        day_data_limit: int,
    ) -> list[TopPoolSummary]:
        ...

    async def search_pools(self, *, text: str, limit: int) -> list[PoolSummary]:
        ...
