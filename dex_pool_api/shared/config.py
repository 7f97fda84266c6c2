from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


DEFAULT_TOKEN_LOGO_URL_TEMPLATE = (
    "https://raw.githubusercontent.com/trustwallet/assets/master/"
    "blockchains/ethereum/assets/{address}/logo.png"
)


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


@dataclass(frozen=True)
class Settings:
    rpc_url: str
    rpc_timeout_seconds: float
    graph_api_key: str
    graph_gateway_base: str
    graph_subgraph_id: str
    graph_request_timeout_seconds: float
    pool_cache_ttl_seconds: float
    pool_cache_max_entries: int
    token_logo_url_template: str
    log_level: str


def get_settings() -> Settings:
    return Settings(
        rpc_url=_env("RPC_URL", ""),
        rpc_timeout_seconds=float(_env("RPC_TIMEOUT_SECONDS", "10")),
        graph_api_key=_env("GRAPH_API_KEY", ""),
        graph_gateway_base=_env("GRAPH_GATEWAY_BASE", "https://gateway.thegraph.com/api"),
        graph_subgraph_id=_env(
            "GRAPH_SUBGRAPH_ID", "5zvR82QoaXYFyDEKLZ9t6v9adgnptxYpKpSbxtgVENFV"
        ),
        graph_request_timeout_seconds=float(_env("GRAPH_REQUEST_TIMEOUT_SECONDS", "10")),
        pool_cache_ttl_seconds=float(_env("POOL_CACHE_TTL_SECONDS", "300")),
        pool_cache_max_entries=int(_env("POOL_CACHE_MAX_ENTRIES", "10000")),
        token_logo_url_template=_env("TOKEN_LOGO_URL_TEMPLATE", DEFAULT_TOKEN_LOGO_URL_TEMPLATE),
        log_level=_env("LOG_LEVEL", "INFO"),
    )
