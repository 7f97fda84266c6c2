from __future__ import annotations

from dex_pool_api.application.pool_data_context import PoolDataContext
from dex_pool_api.application.use_cases.cached_fetch import cached_fetch
from dex_pool_api.domain.entities.pool_summary import TopPoolSummary
from dex_pool_api.domain.services.cache_keys import TOP_POOLS_KEY


TOP_POOLS_LIMIT = 100
TOP_POOLS_DAY_DATA_LIMIT = 30
TOP_POOLS_LOOKBACK_SECONDS = 24 * 60 * 60


class GetTopPoolsUseCase:
    def __init__(self, *, context: PoolDataContext):
        self._context = context

    async def execute(self) -> tuple[TopPoolSummary, ...]:
        async def _load() -> tuple[TopPoolSummary, ...]:
            start_time = int(self._context.clock()) - TOP_POOLS_LOOKBACK_SECONDS
            pools = await self._context.subgraph.fetch_top_pools(
                start_time=start_time,
                limit=TOP_POOLS_LIMIT,
                day_data_limit=TOP_POOLS_DAY_DATA_LIMIT,
            )
            return tuple(pools)

        return await cached_fetch(self._context.cache, TOP_POOLS_KEY, _load)
