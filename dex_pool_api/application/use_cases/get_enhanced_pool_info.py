from __future__ import annotations

from dataclasses import replace

from dex_pool_api.application.dto.pool_data import PoolAddressInput
from dex_pool_api.application.pool_data_context import PoolDataContext
from dex_pool_api.application.use_cases.cached_fetch import cached_fetch, require_pool_id
from dex_pool_api.domain.entities.pool import EnrichedPoolInfo
from dex_pool_api.domain.services.cache_keys import enhanced_pool_info_key
from dex_pool_api.domain.services.pool_snapshot import build_enriched_pool_info


class GetEnhancedPoolInfoUseCase:
    def __init__(self, *, context: PoolDataContext):
        self._context = context

    async def execute(self, command: PoolAddressInput) -> EnrichedPoolInfo:
        pool_id = require_pool_id(command.pool_address)

        async def _load() -> EnrichedPoolInfo:
            # Token symbols are keyed by the token addresses, so the chain read goes first.
            state = await self._context.chain_reader.read_pool_state(command.pool_address)
            symbols = await self._context.subgraph.fetch_token_symbols(
                token_ids=[state.token0.lower(), state.token1.lower()]
            )
            return build_enriched_pool_info(
                address=command.pool_address,
                state=state,
                symbols=symbols,
                logo_url_template=self._context.token_logo_url_template,
            )

        info = await cached_fetch(self._context.cache, enhanced_pool_info_key(pool_id), _load)
        if info.address != command.pool_address:
            return replace(info, address=command.pool_address)
        return info
