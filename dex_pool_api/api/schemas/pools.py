from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PoolInfoResponse(CamelModel):
    address: str
    token0: str
    token1: str
    fee: int
    liquidity: str
    sqrt_price: str
    tick: int


class TokenInfoResponse(CamelModel):
    address: str
    symbol: str
    logo: str


class EnhancedPoolInfoResponse(CamelModel):
    address: str
    token0: TokenInfoResponse
    token1: TokenInfoResponse
    fee: int
    liquidity: str
    sqrt_price: str
    tick: int


class TickResponse(CamelModel):
    tick_idx: int
    liquidity_net: str
    liquidity_gross: str
    price0: str
    price1: str


class PoolDayDataResponse(CamelModel):
    date: int
    volume_usd: str = Field(alias="volumeUSD")
    tvl_usd: str = Field(alias="tvlUSD")
    fees_usd: str = Field(alias="feesUSD")
    token0_price: str
    token1_price: str


class PoolAnalyticsResponse(CamelModel):
    token0_price: str
    token1_price: str
    total_value_locked_usd: str = Field(alias="totalValueLockedUSD")
    volume_usd: str = Field(alias="volumeUSD")
    fees_usd: str = Field(alias="feesUSD")
    pool_day_data: list[PoolDayDataResponse]


class TokenRefResponse(CamelModel):
    id: str
    symbol: str


class PoolSummaryResponse(CamelModel):
    id: str
    token0: TokenRefResponse
    token1: TokenRefResponse
    total_value_locked_usd: str = Field(alias="totalValueLockedUSD")
    volume_usd: str = Field(alias="volumeUSD")
    fee_tier: int


class PoolDayVolumeResponse(CamelModel):
    volume_usd: str = Field(alias="volumeUSD")
    fees_usd: str = Field(alias="feesUSD")


class TopPoolResponse(PoolSummaryResponse):
    pool_day_data: list[PoolDayVolumeResponse]


class PoolMetricsResponse(CamelModel):
    address: str
    available: bool
    metrics: dict


class PoolRangeResponse(CamelModel):
    address: str
    available: bool
    lower_tick: int | None = None
    upper_tick: int | None = None
