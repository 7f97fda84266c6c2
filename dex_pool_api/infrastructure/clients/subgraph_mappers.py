from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from dex_pool_api.domain.entities.analytics import PoolAnalytics, PoolDayData
from dex_pool_api.domain.entities.pool_summary import PoolDayVolume, PoolSummary, TokenRef, TopPoolSummary
from dex_pool_api.domain.entities.tick import Tick
from dex_pool_api.domain.exceptions import UnexpectedResponseError


def _require_mapping(value: Any, *, field_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise UnexpectedResponseError(f"Subgraph field '{field_name}' must be an object.")
    return value


def _require_list(value: Any, *, field_name: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise UnexpectedResponseError(f"Subgraph field '{field_name}' must be a list.")
    return value


def _number_str(row: Mapping[str, Any], field_name: str) -> str:
    value = row.get(field_name)
    if isinstance(value, bool) or value is None:
        raise UnexpectedResponseError(f"Subgraph field '{field_name}' is missing or invalid.")
    if isinstance(value, (int, Decimal)):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value
    raise UnexpectedResponseError(f"Subgraph field '{field_name}' is missing or invalid.")


def _int(row: Mapping[str, Any], field_name: str) -> int:
    try:
        return int(_number_str(row, field_name))
    except ValueError as exc:
        raise UnexpectedResponseError(f"Subgraph field '{field_name}' must be an integer.") from exc


def map_token_symbols(data: Mapping[str, Any]) -> dict[str, str]:
    symbols: dict[str, str] = {}
    for row in _require_list(data.get("tokens"), field_name="tokens"):
        token = _require_mapping(row, field_name="tokens[]")
        token_id = token.get("id")
        symbol = token.get("symbol")
        if not isinstance(token_id, str) or not isinstance(symbol, str):
            continue
        symbols[token_id.lower()] = symbol
    return symbols


def map_row_to_tick(row: Mapping[str, Any]) -> Tick:
    return Tick(
        tick_idx=_int(row, "tickIdx"),
        liquidity_net=_number_str(row, "liquidityNet"),
        liquidity_gross=_number_str(row, "liquidityGross"),
        price0=_number_str(row, "price0"),
        price1=_number_str(row, "price1"),
    )


def map_pool_ticks(data: Mapping[str, Any]) -> list[Tick]:
    pool = data.get("pool")
    if pool is None:
        return []
    pool = _require_mapping(pool, field_name="pool")
    return [
        map_row_to_tick(_require_mapping(row, field_name="pool.ticks[]"))
        for row in _require_list(pool.get("ticks"), field_name="pool.ticks")
    ]


def map_row_to_pool_day_data(row: Mapping[str, Any]) -> PoolDayData:
    return PoolDayData(
        date=_int(row, "date"),
        volume_usd=_number_str(row, "volumeUSD"),
        tvl_usd=_number_str(row, "tvlUSD"),
        fees_usd=_number_str(row, "feesUSD"),
        token0_price=_number_str(row, "token0Price"),
        token1_price=_number_str(row, "token1Price"),
    )


def map_pool_analytics(data: Mapping[str, Any]) -> PoolAnalytics | None:
    pool = data.get("pool")
    if pool is None:
        return None
    pool = _require_mapping(pool, field_name="pool")
    return PoolAnalytics(
        token0_price=_number_str(pool, "token0Price"),
        token1_price=_number_str(pool, "token1Price"),
        total_value_locked_usd=_number_str(pool, "totalValueLockedUSD"),
        volume_usd=_number_str(pool, "volumeUSD"),
        fees_usd=_number_str(pool, "feesUSD"),
        daily_series=tuple(
            map_row_to_pool_day_data(_require_mapping(row, field_name="pool.poolDayData[]"))
            for row in _require_list(pool.get("poolDayData"), field_name="pool.poolDayData")
        ),
    )


def _map_token_ref(value: Any, *, field_name: str) -> TokenRef:
    token = _require_mapping(value, field_name=field_name)
    token_id = token.get("id")
    if not isinstance(token_id, str):
        raise UnexpectedResponseError(f"Subgraph field '{field_name}.id' is missing.")
    symbol = token.get("symbol")
    return TokenRef(id=token_id, symbol=symbol if isinstance(symbol, str) else "")


def map_row_to_pool_summary(row: Mapping[str, Any]) -> PoolSummary:
    pool_id = row.get("id")
    if not isinstance(pool_id, str):
        raise UnexpectedResponseError("Subgraph field 'pools[].id' is missing.")
    return PoolSummary(
        id=pool_id,
        token0=_map_token_ref(row.get("token0"), field_name="token0"),
        token1=_map_token_ref(row.get("token1"), field_name="token1"),
        total_value_locked_usd=_number_str(row, "totalValueLockedUSD"),
        volume_usd=_number_str(row, "volumeUSD"),
        fee_tier=_int(row, "feeTier"),
    )


def map_pool_summaries(data: Mapping[str, Any]) -> list[PoolSummary]:
    return [
        map_row_to_pool_summary(_require_mapping(row, field_name="pools[]"))
        for row in _require_list(data.get("pools"), field_name="pools")
    ]


def map_top_pools(data: Mapping[str, Any]) -> list[TopPoolSummary]:
    result: list[TopPoolSummary] = []
    for row in _require_list(data.get("pools"), field_name="pools"):
        pool = _require_mapping(row, field_name="pools[]")
        day_data = tuple(
            PoolDayVolume(
                volume_usd=_number_str(day, "volumeUSD"),
                fees_usd=_number_str(day, "feesUSD"),
            )
            for day in (
                _require_mapping(item, field_name="pools[].poolDayData[]")
                for item in _require_list(pool.get("poolDayData"), field_name="pools[].poolDayData")
            )
        )
        result.append(TopPoolSummary(pool=map_row_to_pool_summary(pool), day_data=day_data))
    return result
