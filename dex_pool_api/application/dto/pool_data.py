from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PoolAddressInput:
    pool_address: str


@dataclass(frozen=True)
class GetPoolAnalyticsInput:
    pool_address: str
    days: int = 7


@dataclass(frozen=True)
class SearchPoolsInput:
    query: str
