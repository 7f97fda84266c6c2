from __future__ import annotations

from dex_pool_api.application.dto.pool_data import PoolAddressInput
from dex_pool_api.application.pool_data_context import PoolDataContext
from dex_pool_api.application.use_cases.cached_fetch import cached_fetch, require_pool_id
from dex_pool_api.domain.entities.tick import Tick
from dex_pool_api.domain.services.cache_keys import pool_ticks_key


MAX_POOL_TICKS = 1000


class GetPoolTicksUseCase:
    def __init__(self, *, context: PoolDataContext):
        self._context = context

    async def execute(self, command: PoolAddressInput) -> tuple[Tick, ...]:
        pool_id = require_pool_id(command.pool_address)

        async def _load() -> tuple[Tick, ...]:
            ticks = await self._context.subgraph.fetch_pool_ticks(pool_id=pool_id, limit=MAX_POOL_TICKS)
            return tuple(sorted(ticks, key=lambda tick: tick.tick_idx)[:MAX_POOL_TICKS])

        return await cached_fetch(self._context.cache, pool_ticks_key(pool_id), _load)
