from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PoolState:
    token0: str
    token1: str
    fee: int
    liquidity: int
    sqrt_price_x96: int
    tick: int


@dataclass(frozen=True)
class PoolSnapshot:
    address: str
    token0: str
    token1: str
    fee: int
    liquidity: str
    sqrt_price: str
    tick: int


@dataclass(frozen=True)
class TokenInfo:
    address: str
    symbol: str
    logo: str


@dataclass(frozen=True)
class EnrichedPoolInfo:
    address: str
    token0: TokenInfo
    token1: TokenInfo
    fee: int
    liquidity: str
    sqrt_price: str
    tick: int


@dataclass(frozen=True)
class TokenMetadata:
    address: str
    symbol: str
    decimals: int


@dataclass(frozen=True)
class PoolMetrics:
    address: str
    available: bool = False
    values: dict = field(default_factory=dict)


@dataclass(frozen=True)
class PoolRange:
    address: str
    available: bool = False
    lower_tick: int | None = None
    upper_tick: int | None = None
