from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from dex_pool_api.api.deps import (
    get_enhanced_pool_info_use_case,
    get_pool_analytics_use_case,
    get_pool_info_use_case,
    get_pool_metrics_use_case,
    get_pool_range_use_case,
    get_pool_ticks_use_case,
    get_search_pools_use_case,
    get_top_pools_use_case,
    valid_pool_address,
)
from dex_pool_api.api.schemas.pools import (
    EnhancedPoolInfoResponse,
    PoolAnalyticsResponse,
    PoolDayDataResponse,
    PoolDayVolumeResponse,
    PoolInfoResponse,
    PoolMetricsResponse,
    PoolRangeResponse,
    PoolSummaryResponse,
    TickResponse,
    TokenInfoResponse,
    TokenRefResponse,
    TopPoolResponse,
)
from dex_pool_api.application.dto.pool_data import (
    GetPoolAnalyticsInput,
    PoolAddressInput,
    SearchPoolsInput,
)
from dex_pool_api.application.use_cases.get_enhanced_pool_info import GetEnhancedPoolInfoUseCase
from dex_pool_api.application.use_cases.get_pool_analytics import GetPoolAnalyticsUseCase
from dex_pool_api.application.use_cases.get_pool_extensions import (
    GetPoolMetricsUseCase,
    GetPoolRangeUseCase,
)
from dex_pool_api.application.use_cases.get_pool_info import GetPoolInfoUseCase
from dex_pool_api.application.use_cases.get_pool_ticks import GetPoolTicksUseCase
from dex_pool_api.application.use_cases.get_top_pools import GetTopPoolsUseCase
from dex_pool_api.application.use_cases.search_pools import SearchPoolsUseCase
from dex_pool_api.domain.entities.pool import TokenInfo
from dex_pool_api.domain.entities.pool_summary import PoolSummary
from dex_pool_api.domain.entities.tick import Tick
from dex_pool_api.domain.exceptions import (
    ChainQueryError,
    ConfigurationError,
    ConnectivityError,
    DomainError,
    InvalidInputError,
    TransportError,
    UnexpectedResponseError,
)

router = APIRouter()


def _to_http_error(exc: DomainError) -> HTTPException:
    if isinstance(exc, InvalidInputError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, ConfigurationError):
        return HTTPException(status_code=500, detail=str(exc))
    if isinstance(exc, ConnectivityError):
        return HTTPException(status_code=503, detail=str(exc))
    if isinstance(exc, (TransportError, ChainQueryError, UnexpectedResponseError)):
        return HTTPException(status_code=502, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


def _token_info(token: TokenInfo) -> TokenInfoResponse:
    return TokenInfoResponse(address=token.address, symbol=token.symbol, logo=token.logo)


def _tick(row: Tick) -> TickResponse:
    return TickResponse(
        tick_idx=row.tick_idx,
        liquidity_net=row.liquidity_net,
        liquidity_gross=row.liquidity_gross,
        price0=row.price0,
        price1=row.price1,
    )


def _summary_fields(pool: PoolSummary) -> dict:
    return {
        "id": pool.id,
        "token0": TokenRefResponse(id=pool.token0.id, symbol=pool.token0.symbol),
        "token1": TokenRefResponse(id=pool.token1.id, symbol=pool.token1.symbol),
        "total_value_locked_usd": pool.total_value_locked_usd,
        "volume_usd": pool.volume_usd,
        "fee_tier": pool.fee_tier,
    }


@router.get("/pool/{pool_address}", response_model=PoolInfoResponse)
async def get_pool_info(
    pool_address: str = Depends(valid_pool_address),
    use_case: GetPoolInfoUseCase = Depends(get_pool_info_use_case),
):
    try:
        result = await use_case.execute(PoolAddressInput(pool_address=pool_address))
    except DomainError as exc:
        raise _to_http_error(exc) from exc

    return PoolInfoResponse(
        address=result.address,
        token0=result.token0,
        token1=result.token1,
        fee=result.fee,
        liquidity=result.liquidity,
        sqrt_price=result.sqrt_price,
        tick=result.tick,
    )


@router.get("/pool/{pool_address}/info", response_model=EnhancedPoolInfoResponse)
async def get_enhanced_pool_info(
    pool_address: str = Depends(valid_pool_address),
    use_case: GetEnhancedPoolInfoUseCase = Depends(get_enhanced_pool_info_use_case),
):
    try:
        result = await use_case.execute(PoolAddressInput(pool_address=pool_address))
    except DomainError as exc:
        raise _to_http_error(exc) from exc

    return EnhancedPoolInfoResponse(
        address=result.address,
        token0=_token_info(result.token0),
        token1=_token_info(result.token1),
        fee=result.fee,
        liquidity=result.liquidity,
        sqrt_price=result.sqrt_price,
        tick=result.tick,
    )


@router.get("/pool/{pool_address}/ticks", response_model=list[TickResponse])
async def get_pool_ticks(
    pool_address: str = Depends(valid_pool_address),
    use_case: GetPoolTicksUseCase = Depends(get_pool_ticks_use_case),
):
    try:
        rows = await use_case.execute(PoolAddressInput(pool_address=pool_address))
    except DomainError as exc:
        raise _to_http_error(exc) from exc
    return [_tick(row) for row in rows]


@router.get("/pool/{pool_address}/analytics", response_model=PoolAnalyticsResponse | None)
async def get_pool_analytics(
    pool_address: str = Depends(valid_pool_address),
    days: int = 7,
    use_case: GetPoolAnalyticsUseCase = Depends(get_pool_analytics_use_case),
):
    try:
        result = await use_case.execute(GetPoolAnalyticsInput(pool_address=pool_address, days=days))
    except DomainError as exc:
        raise _to_http_error(exc) from exc

    if result is None:
        return None
    return PoolAnalyticsResponse(
        token0_price=result.token0_price,
        token1_price=result.token1_price,
        total_value_locked_usd=result.total_value_locked_usd,
        volume_usd=result.volume_usd,
        fees_usd=result.fees_usd,
        pool_day_data=[
            PoolDayDataResponse(
                date=row.date,
                volume_usd=row.volume_usd,
                tvl_usd=row.tvl_usd,
                fees_usd=row.fees_usd,
                token0_price=row.token0_price,
                token1_price=row.token1_price,
            )
            for row in result.daily_series
        ],
    )


@router.get("/pool/{pool_address}/metrics", response_model=PoolMetricsResponse)
async def get_pool_metrics(
    pool_address: str = Depends(valid_pool_address),
    use_case: GetPoolMetricsUseCase = Depends(get_pool_metrics_use_case),
):
    try:
        result = await use_case.execute(PoolAddressInput(pool_address=pool_address))
    except DomainError as exc:
        raise _to_http_error(exc) from exc
    return PoolMetricsResponse(address=result.address, available=result.available, metrics=result.values)


@router.get("/pool/{pool_address}/range", response_model=PoolRangeResponse)
async def get_pool_range(
    pool_address: str = Depends(valid_pool_address),
    use_case: GetPoolRangeUseCase = Depends(get_pool_range_use_case),
):
    try:
        result = await use_case.execute(PoolAddressInput(pool_address=pool_address))
    except DomainError as exc:
        raise _to_http_error(exc) from exc
    return PoolRangeResponse(
        address=result.address,
        available=result.available,
        lower_tick=result.lower_tick,
        upper_tick=result.upper_tick,
    )


@router.get("/search", response_model=list[PoolSummaryResponse])
async def search_pools(
    query: str | None = None,
    use_case: SearchPoolsUseCase = Depends(get_search_pools_use_case),
):
    if not query:
        raise HTTPException(status_code=400, detail="Search query is required")
    try:
        rows = await use_case.execute(SearchPoolsInput(query=query))
    except DomainError as exc:
        raise _to_http_error(exc) from exc
    return [PoolSummaryResponse(**_summary_fields(row)) for row in rows]


@router.get("/pools/top", response_model=list[TopPoolResponse])
async def get_top_pools(
    use_case: GetTopPoolsUseCase = Depends(get_top_pools_use_case),
):
    try:
        rows = await use_case.execute()
    except DomainError as exc:
        raise _to_http_error(exc) from exc
    return [
        TopPoolResponse(
            **_summary_fields(row.pool),
            pool_day_data=[
                PoolDayVolumeResponse(volume_usd=day.volume_usd, fees_usd=day.fees_usd)
                for day in row.day_data
            ],
        )
        for row in rows
    ]
