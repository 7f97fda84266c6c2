from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from web3 import Web3

from dex_pool_api.application.pool_data_context import PoolDataContext
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
from dex_pool_api.infrastructure.cache.ttl_cache import TtlCache
from dex_pool_api.infrastructure.clients.chain_reader import ChainReaderSettings, Web3ChainReader
from dex_pool_api.infrastructure.clients.subgraph_client import (
    SubgraphClient,
    SubgraphClientSettings,
)
from dex_pool_api.shared.config import Settings


def build_pool_data_context(settings: Settings) -> PoolDataContext:
    return PoolDataContext(
        cache=TtlCache(
            default_ttl_seconds=settings.pool_cache_ttl_seconds,
            max_entries=settings.pool_cache_max_entries or None,
        ),
        chain_reader=Web3ChainReader(
            ChainReaderSettings(
                rpc_url=settings.rpc_url,
                timeout_seconds=settings.rpc_timeout_seconds,
            )
        ),
        subgraph=SubgraphClient(
            SubgraphClientSettings(
                graph_gateway_base=settings.graph_gateway_base,
                graph_api_key=settings.graph_api_key,
                subgraph_id=settings.graph_subgraph_id,
                timeout_seconds=settings.graph_request_timeout_seconds,
            )
        ),
        token_logo_url_template=settings.token_logo_url_template,
    )


def get_pool_data_context(request: Request) -> PoolDataContext:
    context = getattr(request.app.state, "pool_data", None)
    if context is None:
        raise HTTPException(status_code=500, detail="Pool data context is not initialized.")
    return context


def valid_pool_address(pool_address: str) -> str:
    if not Web3.is_address(pool_address.strip()):
        raise HTTPException(status_code=400, detail="Invalid Ethereum address")
    return pool_address


def get_pool_info_use_case(
    context: PoolDataContext = Depends(get_pool_data_context),
) -> GetPoolInfoUseCase:
    return GetPoolInfoUseCase(context=context)


def get_enhanced_pool_info_use_case(
    context: PoolDataContext = Depends(get_pool_data_context),
) -> GetEnhancedPoolInfoUseCase:
    return GetEnhancedPoolInfoUseCase(context=context)


def get_pool_ticks_use_case(
    context: PoolDataContext = Depends(get_pool_data_context),
) -> GetPoolTicksUseCase:
    return GetPoolTicksUseCase(context=context)


def get_pool_analytics_use_case(
    context: PoolDataContext = Depends(get_pool_data_context),
) -> GetPoolAnalyticsUseCase:
    return GetPoolAnalyticsUseCase(context=context)


def get_top_pools_use_case(
    context: PoolDataContext = Depends(get_pool_data_context),
) -> GetTopPoolsUseCase:
    return GetTopPoolsUseCase(context=context)


def get_search_pools_use_case(
    context: PoolDataContext = Depends(get_pool_data_context),
) -> SearchPoolsUseCase:
    return SearchPoolsUseCase(context=context)


def get_pool_metrics_use_case() -> GetPoolMetricsUseCase:
    return GetPoolMetricsUseCase()


def get_pool_range_use_case() -> GetPoolRangeUseCase:
    return GetPoolRangeUseCase()
