from __future__ import annotations

from dataclasses import replace

from dex_pool_api.application.dto.pool_data import PoolAddressInput
from dex_pool_api.application.pool_data_context import PoolDataContext
from dex_pool_api.application.use_cases.cached_fetch import cached_fetch, require_pool_id
from dex_pool_api.domain.entities.pool import PoolSnapshot
from dex_pool_api.domain.services.cache_keys import pool_info_key
from dex_pool_api.domain.services.pool_snapshot import build_pool_snapshot


class GetPoolInfoUseCase:
    def __init__(self, *, context: PoolDataContext):
        self._context = context

    async def execute(self, command: PoolAddressInput) -> PoolSnapshot:
        pool_id = require_pool_id(command.pool_address)

        async def _load() -> PoolSnapshot:
            state = await self._context.chain_reader.read_pool_state(command.pool_address)
            return build_pool_snapshot(address=command.pool_address, state=state)

        snapshot = await cached_fetch(self._context.cache, pool_info_key(pool_id), _load)
        if snapshot.address != command.pool_address:
            return replace(snapshot, address=command.pool_address)
        return snapshot
