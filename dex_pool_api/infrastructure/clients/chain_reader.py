from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any

import aiohttp
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import Web3Exception

from dex_pool_api.domain.entities.pool import PoolState, TokenMetadata
from dex_pool_api.domain.exceptions import (
    ChainQueryError,
    ConfigurationError,
    ConnectivityError,
    InvalidInputError,
    UnexpectedResponseError,
)
from dex_pool_api.infrastructure.clients.contract_abis import ERC20_METADATA_ABI, UNISWAP_V3_POOL_ABI


logger = logging.getLogger(__name__)


CONNECTIVITY_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError)
QUERY_ERRORS = (Web3Exception, ValueError)


class ConnectionState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class ChainReaderSettings:
    rpc_url: str
    timeout_seconds: float


def build_async_web3(rpc_url: str, timeout_seconds: float) -> AsyncWeb3:
    provider = AsyncHTTPProvider(
        rpc_url,
        request_kwargs={"timeout": aiohttp.ClientTimeout(total=timeout_seconds)},
    )
    return AsyncWeb3(provider)


class Web3ChainReader:
    """Read-only access to pool contracts over a single JSON-RPC connection.

    The connection is created on first use by `connect()` and reused until a
    connectivity failure invalidates it; the next call then reconnects.
    """

    def __init__(
        self,
        settings: ChainReaderSettings,
        *,
        web3_factory: Callable[[str, float], Any] = build_async_web3,
    ):
        self._settings = settings
        self._web3_factory = web3_factory
        self._web3: Any | None = None
        self._state = ConnectionState.DISCONNECTED
        self._connect_lock = asyncio.Lock()
        self._probe_task: asyncio.Task | None = None

    @property
    def state(self) -> ConnectionState:
        return self._state

    async def connect(self) -> Any:
        if self._state is ConnectionState.READY and self._web3 is not None:
            return self._web3

        async with self._connect_lock:
            if self._state is ConnectionState.READY and self._web3 is not None:
                return self._web3

            rpc_url = (self._settings.rpc_url or "").strip()
            if not rpc_url:
                raise ConfigurationError("RPC_URL is required for on-chain reads.")

            self._state = ConnectionState.CONNECTING
            try:
                web3 = self._web3_factory(rpc_url, self._settings.timeout_seconds)
            except (ValueError, OSError) as exc:
                self._state = ConnectionState.FAILED
                logger.error("chain_reader: provider_init_failed error=%s", exc)
                raise ConnectivityError("Failed to initialize Ethereum provider.") from exc

            self._web3 = web3
            self._state = ConnectionState.READY
            self._probe_task = asyncio.create_task(self._probe(web3))
            logger.info("chain_reader: provider_initialized")
            return web3

    async def close(self) -> None:
        web3 = self._web3
        self._web3 = None
        self._state = ConnectionState.DISCONNECTED
        if self._probe_task is not None and not self._probe_task.done():
            self._probe_task.cancel()
        self._probe_task = None
        if web3 is not None:
            await _disconnect(web3)

    async def read_pool_state(self, address: str) -> PoolState:
        web3 = await self.connect()
        contract = web3.eth.contract(address=self._checksum(address), abi=UNISWAP_V3_POOL_ABI)
        functions = contract.functions

        token0, token1, fee, liquidity, slot0 = await self._gather(
            web3,
            address,
            functions.token0().call(),
            functions.token1().call(),
            functions.fee().call(),
            functions.liquidity().call(),
            functions.slot0().call(),
        )
        return _parse_pool_state(
            address=address,
            token0=token0,
            token1=token1,
            fee=fee,
            liquidity=liquidity,
            slot0=slot0,
        )

    async def read_token_metadata(self, address: str) -> TokenMetadata:
        web3 = await self.connect()
        contract = web3.eth.contract(address=self._checksum(address), abi=ERC20_METADATA_ABI)
        symbol, decimals = await self._gather(
            web3,
            address,
            contract.functions.symbol().call(),
            contract.functions.decimals().call(),
        )
        if not isinstance(symbol, str) or not _is_int(decimals):
            raise UnexpectedResponseError(f"Unexpected ERC20 metadata for token {address}.")
        return TokenMetadata(address=address, symbol=symbol, decimals=int(decimals))

    async def _gather(self, web3: Any, address: str, *calls) -> list:
        # Fan-out: every call is in flight before any result is awaited.
        try:
            return await asyncio.gather(*calls)
        except CONNECTIVITY_ERRORS as exc:
            logger.error("chain_reader: rpc_unreachable address=%s error=%s", address, exc)
            await self._invalidate(web3)
            raise ConnectivityError("Failed to connect to Ethereum network.") from exc
        except QUERY_ERRORS as exc:
            logger.error("chain_reader: contract_call_failed address=%s error=%s", address, exc)
            raise ChainQueryError(f"On-chain read failed for {address}: {exc}") from exc

    async def _probe(self, web3: Any) -> None:
        try:
            chain_id = await web3.eth.chain_id
        except CONNECTIVITY_ERRORS + QUERY_ERRORS as exc:
            logger.error("chain_reader: connectivity_probe_failed error=%s", exc)
            await self._invalidate(web3)
            return
        logger.info("chain_reader: connectivity_probe_ok chain_id=%s", chain_id)

    async def _invalidate(self, web3: Any) -> None:
        if self._web3 is not web3:
            return
        self._web3 = None
        self._state = ConnectionState.FAILED
        await _disconnect(web3)

    @staticmethod
    def _checksum(address: str) -> str:
        try:
            return AsyncWeb3.to_checksum_address(address)
        except (ValueError, TypeError) as exc:
            raise InvalidInputError(f"Invalid Ethereum address: {address}") from exc


async def _disconnect(web3: Any) -> None:
    try:
        await web3.provider.disconnect()
    except CONNECTIVITY_ERRORS as exc:
        logger.warning("chain_reader: provider_disconnect_failed error=%s", exc)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_pool_state(*, address: str, token0, token1, fee, liquidity, slot0) -> PoolState:
    if not isinstance(token0, str) or not isinstance(token1, str):
        raise UnexpectedResponseError(f"Unexpected token addresses for pool {address}.")
    if not _is_int(fee) or not _is_int(liquidity):
        raise UnexpectedResponseError(f"Unexpected fee/liquidity for pool {address}.")
    if not isinstance(slot0, (list, tuple)) or len(slot0) < 2:
        raise UnexpectedResponseError(f"Unexpected slot0 for pool {address}.")
    sqrt_price_x96, tick = slot0[0], slot0[1]
    if not _is_int(sqrt_price_x96) or not _is_int(tick):
        raise UnexpectedResponseError(f"Unexpected slot0 values for pool {address}.")
    return PoolState(
        token0=token0,
        token1=token1,
        fee=fee,
        liquidity=liquidity,
        sqrt_price_x96=sqrt_price_x96,
        tick=tick,
    )
