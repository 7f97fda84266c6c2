from __future__ import annotations


TOP_POOLS_KEY = "top-pools"


def pool_info_key(pool_id: str) -> str:
    return f"pool-{pool_id}"


def enhanced_pool_info_key(pool_id: str) -> str:
    return f"enhanced-pool-{pool_id}"


def pool_ticks_key(pool_id: str) -> str:
    return f"ticks-{pool_id}"


def pool_analytics_key(pool_id: str, days: int) -> str:
    return f"analytics-{pool_id}-{days}"
