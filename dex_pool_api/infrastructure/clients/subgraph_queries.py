from __future__ import annotations


TOKEN_SYMBOLS_QUERY = """
query TokenSymbols($tokenIds: [String!]!) {
  tokens(where: { id_in: $tokenIds }) {
    id
    symbol
  }
}
"""

POOL_TICKS_QUERY = """
query PoolTicks($poolId: ID!, $first: Int!) {
  pool(id: $poolId) {
    ticks(first: $first, orderBy: tickIdx, orderDirection: asc) {
      tickIdx
      liquidityNet
      liquidityGross
      price0
      price1
    }
  }
}
"""

POOL_ANALYTICS_QUERY = """
query PoolAnalytics($poolId: ID!, $days: Int!, $startTime: Int!) {
  pool(id: $poolId) {
    token0Price
    token1Price
    totalValueLockedUSD
    volumeUSD
    feesUSD
    poolDayData(
      first: $days
      orderBy: date
      orderDirection: desc
      where: { date_gt: $startTime }
    ) {
      date
      volumeUSD
      tvlUSD
      feesUSD
      token0Price
      token1Price
    }
  }
}
"""

TOP_POOLS_QUERY = """
query TopPools($first: Int!, $dayDataFirst: Int!, $startTime: Int!) {
  pools(first: $first, orderBy: totalValueLockedUSD, orderDirection: desc) {
    id
    token0 {
      id
      symbol
    }
    token1 {
      id
      symbol
    }
    totalValueLockedUSD
    volumeUSD
    feeTier
    poolDayData(
      first: $dayDataFirst
      orderBy: date
      orderDirection: desc
      where: { date_gt: $startTime }
    ) {
      volumeUSD
      feesUSD
    }
  }
}
"""

SEARCH_POOLS_QUERY = """
query SearchPools($text: String!, $first: Int!) {
  pools(
    where: {
      or: [
        { token0_: { symbol_contains_nocase: $text } }
        { token1_: { symbol_contains_nocase: $text } }
      ]
    }
    orderBy: totalValueLockedUSD
    orderDirection: desc
    first: $first
  ) {
    id
    token0 {
      id
      symbol
    }
    token1 {
      id
      symbol
    }
    totalValueLockedUSD
    volumeUSD
    feeTier
  }
}
"""
