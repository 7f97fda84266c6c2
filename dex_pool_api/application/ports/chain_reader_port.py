from __future__ import annotations

from typing import Protocol

from dex_pool_api.domain.entities.pool import PoolState


class ChainReaderPort(Protocol):
    async def read_pool_state(self, address: str) -> PoolState:
        ...

    async def close(self) -> None:
        ...
