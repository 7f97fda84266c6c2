from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PoolDayData:
    date: int
    volume_usd: str
    tvl_usd: str
    fees_usd: str
    token0_price: str
    token1_price: str


@dataclass(frozen=True)
class PoolAnalytics:
    token0_price: str
    token1_price: str
    total_value_locked_usd: str
    volume_usd: str
    fees_usd: str
    daily_series: tuple[PoolDayData, ...]
