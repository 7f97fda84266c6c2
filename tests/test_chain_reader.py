from __future__ import annotations

import asyncio

import aiohttp
import pytest
from web3.exceptions import ContractLogicError

from dex_pool_api.domain.exceptions import (
    ChainQueryError,
    ConfigurationError,
    ConnectivityError,
    InvalidInputError,
    UnexpectedResponseError,
)
from dex_pool_api.infrastructure.clients.chain_reader import (
    ChainReaderSettings,
    ConnectionState,
    Web3ChainReader,
)


POOL = "0x88e6A0c2dDD26FEEb64F039a2c41296FcB3f5640"
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"


class _FakeCall:
    def __init__(self, result, log: list[str], name: str):
        self._result = result
        self._log = log
        self._name = name

    async def call(self):
        self._log.append(self._name)
        await asyncio.sleep(0)
        if isinstance(self._result, Exception):
            raise self._result
        return self._result


class _FakeFunctions:
    def __init__(self, results: dict, log: list[str]):
        self._results = results
        self._log = log

    def __getattr__(self, name: str):
        return lambda: _FakeCall(self._results[name], self._log, name)


class _FakeContract:
    def __init__(self, results: dict, log: list[str]):
        self.functions = _FakeFunctions(results, log)


class _FakeProvider:
    def __init__(self):
        self.disconnected = False

    async def disconnect(self) -> None:
        self.disconnected = True


class _FakeEth:
    def __init__(self, results: dict, log: list[str], probe_error: Exception | None):
        self._results = results
        self._log = log
        self._probe_error = probe_error
        self.contract_addresses: list[str] = []

    def contract(self, *, address: str, abi: list):
        _ = abi
        self.contract_addresses.append(address)
        return _FakeContract(self._results, self._log)

    @property
    def chain_id(self):
        async def _chain_id() -> int:
            if self._probe_error is not None:
                raise self._probe_error
            return 1

        return _chain_id()


class _FakeWeb3:
    def __init__(self, results: dict, log: list[str], probe_error: Exception | None = None):
        self.eth = _FakeEth(results, log, probe_error)
        self.provider = _FakeProvider()


def _pool_results(**overrides) -> dict:
    results = {
        "token0": USDC,
        "token1": WETH,
        "fee": 500,
        "liquidity": 123456789012345678901234567890,
        "slot0": (79228162514264337593543950336, -201234, 1, 2, 3, 0, True),
        "symbol": "USDC",
        "decimals": 6,
    }
    results.update(overrides)
    return results


class _Factory:
    def __init__(self, results: dict, *, probe_error: Exception | None = None):
        self.results = results
        self.probe_error = probe_error
        self.calls: list[tuple[str, float]] = []
        self.log: list[str] = []
        self.instances: list[_FakeWeb3] = []

    def __call__(self, rpc_url: str, timeout_seconds: float) -> _FakeWeb3:
        self.calls.append((rpc_url, timeout_seconds))
        web3 = _FakeWeb3(self.results, self.log, self.probe_error)
        self.instances.append(web3)
        return web3


def _make_reader(factory: _Factory, *, rpc_url: str = "https://rpc.example") -> Web3ChainReader:
    return Web3ChainReader(
        ChainReaderSettings(rpc_url=rpc_url, timeout_seconds=5),
        web3_factory=factory,
    )


def test_read_pool_state_keeps_large_integers_exact():
    factory = _Factory(_pool_results())
    reader = _make_reader(factory)

    state = asyncio.run(reader.read_pool_state(POOL.lower()))

    assert state.token0 == USDC
    assert state.token1 == WETH
    assert state.fee == 500
    assert state.liquidity == 123456789012345678901234567890
    assert state.sqrt_price_x96 == 79228162514264337593543950336
    assert state.tick == -201234
    assert sorted(factory.log) == ["fee", "liquidity", "slot0", "token0", "token1"]
    assert factory.instances[0].eth.contract_addresses == [POOL]


def test_connection_is_created_once_and_reused():
    factory = _Factory(_pool_results())
    reader = _make_reader(factory)

    async def scenario() -> None:
        await asyncio.gather(
            reader.read_pool_state(POOL),
            reader.read_pool_state(POOL),
            reader.read_pool_state(POOL),
        )
        await reader.read_pool_state(POOL)

    asyncio.run(scenario())

    assert factory.calls == [("https://rpc.example", 5)]
    assert reader.state is ConnectionState.READY


def test_missing_rpc_url_raises_configuration_error_on_first_use():
    factory = _Factory(_pool_results())
    reader = _make_reader(factory, rpc_url="")

    with pytest.raises(ConfigurationError):
        asyncio.run(reader.read_pool_state(POOL))
    assert factory.calls == []


def test_failed_probe_invalidates_connection_and_next_call_reconnects():
    factory = _Factory(_pool_results(), probe_error=aiohttp.ClientConnectionError("refused"))
    reader = _make_reader(factory)

    async def scenario() -> None:
        await reader.connect()
        assert reader.state is ConnectionState.READY
        for _ in range(3):
            await asyncio.sleep(0)
        assert reader.state is ConnectionState.FAILED
        factory.probe_error = None
        await reader.read_pool_state(POOL)

    asyncio.run(scenario())

    assert len(factory.calls) == 2
    assert reader.state is ConnectionState.READY


def test_sub_call_failure_fails_whole_read():
    factory = _Factory(_pool_results(slot0=ContractLogicError("execution reverted")))
    reader = _make_reader(factory)

    with pytest.raises(ChainQueryError):
        asyncio.run(reader.read_pool_state(POOL))
    assert reader.state is ConnectionState.READY


def test_network_failure_during_read_raises_connectivity_error_and_drops_handle():
    factory = _Factory(_pool_results(liquidity=aiohttp.ClientConnectionError("reset")))
    reader = _make_reader(factory)

    with pytest.raises(ConnectivityError):
        asyncio.run(reader.read_pool_state(POOL))
    assert reader.state is ConnectionState.FAILED


def test_invalid_address_is_rejected():
    factory = _Factory(_pool_results())
    reader = _make_reader(factory)

    with pytest.raises(InvalidInputError):
        asyncio.run(reader.read_pool_state("0xPOOL1"))


def test_unexpected_slot0_shape_is_reported():
    factory = _Factory(_pool_results(slot0=(None,)))
    reader = _make_reader(factory)

    with pytest.raises(UnexpectedResponseError):
        asyncio.run(reader.read_pool_state(POOL))


def test_read_token_metadata():
    factory = _Factory(_pool_results())
    reader = _make_reader(factory)

    metadata = asyncio.run(reader.read_token_metadata(USDC))

    assert metadata.symbol == "USDC"
    assert metadata.decimals == 6


def test_close_disconnects_provider():
    factory = _Factory(_pool_results())
    reader = _make_reader(factory)

    async def scenario() -> None:
        await reader.connect()
        await reader.close()

    asyncio.run(scenario())

    assert factory.instances[0].provider.disconnected is True
    assert reader.state is ConnectionState.DISCONNECTED


def test_dropped_connections_are_disconnected():
    factory = _Factory(_pool_results(liquidity=aiohttp.ClientConnectionError("reset")))
    reader = _make_reader(factory)

    async def scenario() -> None:
        for _ in range(3):
            with pytest.raises(ConnectivityError):
                await reader.read_pool_state(POOL)
        await reader.close()

    asyncio.run(scenario())

    assert len(factory.instances) == 3
    assert [web3.provider.disconnected for web3 in factory.instances] == [True, True, True]


def test_failed_probe_disconnects_dropped_provider():
    factory = _Factory(_pool_results(), probe_error=aiohttp.ClientConnectionError("refused"))
    reader = _make_reader(factory)

    async def scenario() -> None:
        await reader.connect()
        for _ in range(3):
            await asyncio.sleep(0)

    asyncio.run(scenario())

    assert reader.state is ConnectionState.FAILED
    assert factory.instances[0].provider.disconnected is True
