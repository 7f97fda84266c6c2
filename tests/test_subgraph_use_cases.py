from __future__ import annotations

import asyncio

import pytest

from dex_pool_api.application.dto.pool_data import (
    GetPoolAnalyticsInput,
    PoolAddressInput,
    SearchPoolsInput,
)
from dex_pool_api.application.pool_data_context import PoolDataContext
from dex_pool_api.application.use_cases.get_pool_analytics import GetPoolAnalyticsUseCase
from dex_pool_api.application.use_cases.get_pool_ticks import GetPoolTicksUseCase
from dex_pool_api.application.use_cases.get_top_pools import GetTopPoolsUseCase
from dex_pool_api.application.use_cases.search_pools import SearchPoolsUseCase
from dex_pool_api.domain.entities.analytics import PoolAnalytics, PoolDayData
from dex_pool_api.domain.entities.pool_summary import (
    PoolDayVolume,
    PoolSummary,
    TokenRef,
    TopPoolSummary,
)
from dex_pool_api.domain.entities.tick import Tick
from dex_pool_api.domain.exceptions import InvalidInputError, TransportError
from dex_pool_api.infrastructure.cache.ttl_cache import TtlCache


NOW = 1_700_000_000
DAY = 86400


def _tick(idx: int) -> Tick:
    return Tick(tick_idx=idx, liquidity_net="1", liquidity_gross="2", price0="1.0001", price1="0.9999")


def _day(date: int) -> PoolDayData:
    return PoolDayData(
        date=date,
        volume_usd="1000.5",
        tvl_usd="2000000",
        fees_usd="3.25",
        token0_price="1850.1",
        token1_price="0.00054",
    )


def _summary(pool_id: str, symbol0: str, symbol1: str) -> PoolSummary:
    return PoolSummary(
        id=pool_id,
        token0=TokenRef(id=f"{pool_id}-t0", symbol=symbol0),
        token1=TokenRef(id=f"{pool_id}-t1", symbol=symbol1),
        total_value_locked_usd="100",
        volume_usd="10",
        fee_tier=3000,
    )


class FakeSubgraph:
    def __init__(
        self,
        *,
        ticks: list[Tick] | None = None,
        analytics: PoolAnalytics | None = None,
        pools: list[PoolSummary] | None = None,
        error: Exception | None = None,
    ):
        self._ticks = ticks or []
        self._analytics = analytics
        self._pools = pools or []
        self._error = error
        self.calls: list[tuple[str, dict]] = []

    async def fetch_pool_ticks(self, *, pool_id: str, limit: int) -> list[Tick]:
        self.calls.append(("ticks", {"pool_id": pool_id, "limit": limit}))
        return list(self._ticks)

    async def fetch_pool_analytics(self, *, pool_id: str, days: int, start_time: int):
        self.calls.append(("analytics", {"pool_id": pool_id, "days": days, "start_time": start_time}))
        if self._error is not None:
            raise self._error
        if self._analytics is None:
            return None
        series = tuple(row for row in self._analytics.daily_series if row.date > start_time)
        return PoolAnalytics(
            token0_price=self._analytics.token0_price,
            token1_price=self._analytics.token1_price,
            total_value_locked_usd=self._analytics.total_value_locked_usd,
            volume_usd=self._analytics.volume_usd,
            fees_usd=self._analytics.fees_usd,
            daily_series=series,
        )

    async def fetch_top_pools(self, *, start_time: int, limit: int, day_data_limit: int):
        self.calls.append(
            ("top", {"start_time": start_time, "limit": limit, "day_data_limit": day_data_limit})
        )
        return [
            TopPoolSummary(pool=pool, day_data=(PoolDayVolume(volume_usd="5", fees_usd="0.1"),))
            for pool in self._pools
        ]

    async def search_pools(self, *, text: str, limit: int) -> list[PoolSummary]:
        self.calls.append(("search", {"text": text, "limit": limit}))
        needle = text.lower()
        matches = [
            pool
            for pool in self._pools
            if needle in pool.token0.symbol.lower() or needle in pool.token1.symbol.lower()
        ]
        return matches[:limit]

    def count(self, name: str) -> int:
        return len([call for call in self.calls if call[0] == name])


class FakeChainReader:
    async def read_pool_state(self, address: str):
        raise AssertionError("subgraph-only operation touched the chain reader")

    async def close(self) -> None:
        return None


def _context(subgraph: FakeSubgraph) -> PoolDataContext:
    return PoolDataContext(
        cache=TtlCache(default_ttl_seconds=300),
        chain_reader=FakeChainReader(),
        subgraph=subgraph,
        clock=lambda: float(NOW),
    )


def _analytics(days_back: int) -> PoolAnalytics:
    return PoolAnalytics(
        token0_price="1850.1",
        token1_price="0.00054",
        total_value_locked_usd="298765432.1",
        volume_usd="1500000000",
        fees_usd="750000.25",
        daily_series=tuple(_day(NOW - offset * DAY) for offset in range(days_back)),
    )


def test_ticks_are_ordered_and_capped():
    subgraph = FakeSubgraph(ticks=[_tick(idx) for idx in range(1200, 0, -1)])
    use_case = GetPoolTicksUseCase(context=_context(subgraph))

    ticks = asyncio.run(use_case.execute(PoolAddressInput(pool_address="0xPOOL")))

    assert len(ticks) == 1000
    assert [tick.tick_idx for tick in ticks] == sorted(tick.tick_idx for tick in ticks)
    assert subgraph.calls == [("ticks", {"pool_id": "0xpool", "limit": 1000})]


def test_ticks_for_unknown_pool_are_empty_and_cached():
    subgraph = FakeSubgraph(ticks=[])
    use_case = GetPoolTicksUseCase(context=_context(subgraph))

    first = asyncio.run(use_case.execute(PoolAddressInput(pool_address="0xPOOL")))
    second = asyncio.run(use_case.execute(PoolAddressInput(pool_address="0xpool")))

    assert first == ()
    assert second == ()
    assert subgraph.count("ticks") == 1


def test_analytics_window_and_length_follow_days():
    subgraph = FakeSubgraph(analytics=_analytics(days_back=20))
    use_case = GetPoolAnalyticsUseCase(context=_context(subgraph))

    result = asyncio.run(use_case.execute(GetPoolAnalyticsInput(pool_address="0xPOOL", days=7)))

    assert result is not None
    assert len(result.daily_series) <= 7
    assert all(row.date >= NOW - 7 * DAY for row in result.daily_series)
    assert result.total_value_locked_usd == "298765432.1"
    assert subgraph.calls == [
        ("analytics", {"pool_id": "0xpool", "days": 7, "start_time": NOW - 7 * DAY})
    ]


def test_analytics_zero_days_returns_empty_series():
    subgraph = FakeSubgraph(analytics=_analytics(days_back=3))
    use_case = GetPoolAnalyticsUseCase(context=_context(subgraph))

    result = asyncio.run(use_case.execute(GetPoolAnalyticsInput(pool_address="0xPOOL", days=0)))

    assert result is not None
    assert result.daily_series == ()


def test_analytics_absent_pool_is_none_and_cached_per_days():
    subgraph = FakeSubgraph(analytics=None)
    use_case = GetPoolAnalyticsUseCase(context=_context(subgraph))

    assert asyncio.run(use_case.execute(GetPoolAnalyticsInput(pool_address="0xPOOL"))) is None
    assert asyncio.run(use_case.execute(GetPoolAnalyticsInput(pool_address="0xPOOL"))) is None
    asyncio.run(use_case.execute(GetPoolAnalyticsInput(pool_address="0xPOOL", days=30)))

    assert subgraph.count("analytics") == 2


def test_analytics_graphql_error_propagates_message():
    subgraph = FakeSubgraph(error=TransportError("GraphQL errors: pool not found"))
    use_case = GetPoolAnalyticsUseCase(context=_context(subgraph))

    with pytest.raises(TransportError) as exc_info:
        asyncio.run(use_case.execute(GetPoolAnalyticsInput(pool_address="0xPOOL")))

    assert "pool not found" in str(exc_info.value)


@pytest.mark.parametrize("days", [-1, 1001])
def test_analytics_rejects_out_of_range_days(days: int):
    use_case = GetPoolAnalyticsUseCase(context=_context(FakeSubgraph()))

    with pytest.raises(InvalidInputError):
        asyncio.run(use_case.execute(GetPoolAnalyticsInput(pool_address="0xPOOL", days=days)))


def test_top_pools_uses_24h_cutoff_and_is_cached():
    subgraph = FakeSubgraph(pools=[_summary("0x1", "USDC", "WETH")])
    use_case = GetTopPoolsUseCase(context=_context(subgraph))

    first = asyncio.run(use_case.execute())
    second = asyncio.run(use_case.execute())

    assert first is second
    assert first[0].pool.id == "0x1"
    assert first[0].day_data == (PoolDayVolume(volume_usd="5", fees_usd="0.1"),)
    assert subgraph.calls == [
        ("top", {"start_time": NOW - DAY, "limit": 100, "day_data_limit": 30})
    ]


def test_search_matches_either_symbol_and_is_never_cached():
    subgraph = FakeSubgraph(
        pools=[
            _summary("0x1", "USDC", "WETH"),
            _summary("0x2", "WBTC", "usdc.e"),
            _summary("0x3", "DAI", "WETH"),
        ]
    )
    use_case = SearchPoolsUseCase(context=_context(subgraph))

    first = asyncio.run(use_case.execute(SearchPoolsInput(query="usdc")))
    second = asyncio.run(use_case.execute(SearchPoolsInput(query="usdc")))

    assert [pool.id for pool in first] == ["0x1", "0x2"]
    assert [pool.id for pool in second] == ["0x1", "0x2"]
    assert subgraph.count("search") == 2
    assert subgraph.calls[0] == ("search", {"text": "usdc", "limit": 20})


def test_search_requires_query_text():
    use_case = SearchPoolsUseCase(context=_context(FakeSubgraph()))

    with pytest.raises(InvalidInputError):
        asyncio.run(use_case.execute(SearchPoolsInput(query="   ")))


def test_cached_ticks_cannot_be_altered_by_callers():
    subgraph = FakeSubgraph(ticks=[_tick(idx) for idx in (30, -30, 0)])
    use_case = GetPoolTicksUseCase(context=_context(subgraph))

    first = asyncio.run(use_case.execute(PoolAddressInput(pool_address="0xPOOL")))
    with pytest.raises(AttributeError):
        first.clear()
    second = asyncio.run(use_case.execute(PoolAddressInput(pool_address="0xPOOL")))

    assert [tick.tick_idx for tick in second] == [-30, 0, 30]
    assert subgraph.count("ticks") == 1


def test_cached_analytics_and_top_pools_are_immutable():
    subgraph = FakeSubgraph(
        analytics=_analytics(days_back=3),
        pools=[_summary("0x1", "USDC", "WETH")],
    )
    context = _context(subgraph)
    analytics_use_case = GetPoolAnalyticsUseCase(context=context)
    top_pools_use_case = GetTopPoolsUseCase(context=context)

    analytics = asyncio.run(analytics_use_case.execute(GetPoolAnalyticsInput(pool_address="0xPOOL")))
    top_pools = asyncio.run(top_pools_use_case.execute())

    assert isinstance(analytics.daily_series, tuple)
    assert isinstance(top_pools, tuple)
    assert isinstance(top_pools[0].day_data, tuple)
    with pytest.raises(AttributeError):
        analytics.daily_series.clear()
    with pytest.raises(AttributeError):
        top_pools[0].day_data.clear()

    again = asyncio.run(analytics_use_case.execute(GetPoolAnalyticsInput(pool_address="0xPOOL")))
    assert len(again.daily_series) == 3
    assert asyncio.run(top_pools_use_case.execute())[0].day_data == (
        PoolDayVolume(volume_usd="5", fees_usd="0.1"),
    )
