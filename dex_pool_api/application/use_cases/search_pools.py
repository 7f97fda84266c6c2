from __future__ import annotations

from dex_pool_api.application.dto.pool_data import SearchPoolsInput
from dex_pool_api.application.pool_data_context import PoolDataContext
from dex_pool_api.domain.entities.pool_summary import PoolSummary
from dex_pool_api.domain.exceptions import InvalidInputError


SEARCH_POOLS_LIMIT = 20


class SearchPoolsUseCase:
    """Free-text pool search.

    Results are never cached: the key space is arbitrary user text and
    reuse is low.
    """

    def __init__(self, *, context: PoolDataContext):
        self._context = context

    async def execute(self, command: SearchPoolsInput) -> list[PoolSummary]:
        text = (command.query or "").strip()
        if not text:
            raise InvalidInputError("Search query is required.")
        return await self._context.subgraph.search_pools(text=text, limit=SEARCH_POOLS_LIMIT)
