from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
import time

from dex_pool_api.application.ports.cache_port import CachePort
from dex_pool_api.application.ports.chain_reader_port import ChainReaderPort
from dex_pool_api.application.ports.subgraph_port import SubgraphPort
from dex_pool_api.shared.config import DEFAULT_TOKEN_LOGO_URL_TEMPLATE


@dataclass(frozen=True)
class PoolDataContext:
    """Owned collaborators shared by the pool data use cases.

    Built once per application and handed to request handlers; the cache is
    the only mutable state it carries.
    """

    cache: CachePort
    chain_reader: ChainReaderPort
    subgraph: SubgraphPort
    token_logo_url_template: str = DEFAULT_TOKEN_LOGO_URL_TEMPLATE
    clock: Callable[[], float] = field(default=time.time)
