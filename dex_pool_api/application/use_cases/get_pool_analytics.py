from __future__ import annotations

from dataclasses import replace

from dex_pool_api.application.dto.pool_data import GetPoolAnalyticsInput
from dex_pool_api.application.pool_data_context import PoolDataContext
from dex_pool_api.application.use_cases.cached_fetch import cached_fetch, require_pool_id
from dex_pool_api.domain.entities.analytics import PoolAnalytics
from dex_pool_api.domain.exceptions import InvalidInputError
from dex_pool_api.domain.services.cache_keys import pool_analytics_key


SECONDS_PER_DAY = 86400
MAX_ANALYTICS_DAYS = 1000


class GetPoolAnalyticsUseCase:
    def __init__(self, *, context: PoolDataContext):
        self._context = context

    async def execute(self, command: GetPoolAnalyticsInput) -> PoolAnalytics | None:
        pool_id = require_pool_id(command.pool_address)
        days = command.days
        if isinstance(days, bool) or not isinstance(days, int):
            raise InvalidInputError("days must be an integer.")
        if days < 0:
            raise InvalidInputError("days must be zero or a positive integer.")
        if days > MAX_ANALYTICS_DAYS:
            raise InvalidInputError(f"days must be at most {MAX_ANALYTICS_DAYS}.")

        async def _load() -> PoolAnalytics | None:
            start_time = int(self._context.clock()) - days * SECONDS_PER_DAY
            analytics = await self._context.subgraph.fetch_pool_analytics(
                pool_id=pool_id,
                days=days,
                start_time=start_time,
            )
            if analytics is None:
                return None
            return replace(analytics, daily_series=tuple(analytics.daily_series[:days]))

        return await cached_fetch(self._context.cache, pool_analytics_key(pool_id, days), _load)
