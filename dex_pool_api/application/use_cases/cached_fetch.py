from __future__ import annotations

from collections.abc import Awaitable, Callable
import logging
from typing import Any, TypeVar

from dex_pool_api.application.ports.cache_port import CachePort
from dex_pool_api.domain.exceptions import InvalidInputError
from dex_pool_api.domain.services.pool_address import normalize_pool_address


logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISS: Any = object()


async def cached_fetch(cache: CachePort, key: str, loader: Callable[[], Awaitable[T]]) -> T:
    cached = cache.get(key, _MISS)
    if cached is not _MISS:
        logger.debug("pool_data: cache_hit key=%s", key)
        return cached

    logger.debug("pool_data: cache_miss key=%s", key)
    value = await loader()
    cache.set(key, value)
    return value


def require_pool_id(pool_address: str) -> str:
    try:
        return normalize_pool_address(pool_address)
    except ValueError as exc:
        raise InvalidInputError(str(exc)) from exc
