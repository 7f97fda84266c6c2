from __future__ import annotations

from dex_pool_api.application.dto.pool_data import PoolAddressInput
from dex_pool_api.application.use_cases.cached_fetch import require_pool_id
from dex_pool_api.domain.entities.pool import PoolMetrics, PoolRange


class GetPoolMetricsUseCase:
    """Reserved extension point; no metric computation is defined yet.

    Always returns an unavailable placeholder for the requested pool.
    """

    async def execute(self, command: PoolAddressInput) -> PoolMetrics:
        require_pool_id(command.pool_address)
        return PoolMetrics(address=command.pool_address)


class GetPoolRangeUseCase:
    """Reserved extension point; returns an unavailable placeholder range."""

    async def execute(self, command: PoolAddressInput) -> PoolRange:
        require_pool_id(command.pool_address)
        return PoolRange(address=command.pool_address)
