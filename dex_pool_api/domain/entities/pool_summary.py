from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TokenRef:
    id: str
    symbol: str


@dataclass(frozen=True)
class PoolSummary:
    id: str
    token0: TokenRef
    token1: TokenRef
    total_value_locked_usd: str
    volume_usd: str
    fee_tier: int


@dataclass(frozen=True)
class PoolDayVolume:
    volume_usd: str
    fees_usd: str


@dataclass(frozen=True)
class TopPoolSummary:
    pool: PoolSummary
    day_data: tuple[PoolDayVolume, ...]
