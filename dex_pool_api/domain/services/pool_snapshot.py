from __future__ import annotations

from dex_pool_api.domain.entities.pool import EnrichedPoolInfo, PoolSnapshot, PoolState, TokenInfo
from dex_pool_api.domain.services.pool_address import build_token_logo_url, resolve_token_symbol


def build_pool_snapshot(*, address: str, state: PoolState) -> PoolSnapshot:
    return PoolSnapshot(
        address=address,
        token0=state.token0,
        token1=state.token1,
        fee=int(state.fee),
        liquidity=str(state.liquidity),
        sqrt_price=str(state.sqrt_price_x96),
        tick=int(state.tick),
    )


def build_enriched_pool_info(
    *,
    address: str,
    state: PoolState,
    symbols: dict[str, str],
    logo_url_template: str,
) -> EnrichedPoolInfo:
    """Fuse on-chain state with subgraph token symbols.

    `symbols` is keyed by lowercased token address. Tokens without a record
    fall back to the unknown symbol, so partial metadata never fails the fusion.
    """
    return EnrichedPoolInfo(
        address=address,
        token0=TokenInfo(
            address=state.token0,
            symbol=resolve_token_symbol(symbols, state.token0),
            logo=build_token_logo_url(logo_url_template, state.token0),
        ),
        token1=TokenInfo(
            address=state.token1,
            symbol=resolve_token_symbol(symbols, state.token1),
            logo=build_token_logo_url(logo_url_template, state.token1),
        ),
        fee=int(state.fee),
        liquidity=str(state.liquidity),
        sqrt_price=str(state.sqrt_price_x96),
        tick=int(state.tick),
    )
