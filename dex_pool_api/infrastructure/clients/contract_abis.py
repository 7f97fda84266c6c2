from __future__ import annotations


def _view(name: str, outputs: list[dict]) -> dict:
    return {
        "inputs": [],
        "name": name,
        "outputs": outputs,
        "stateMutability": "view",
        "type": "function",
    }


UNISWAP_V3_POOL_ABI = [
    _view("token0", [{"internalType": "address", "name": "", "type": "address"}]),
    _view("token1", [{"internalType": "address", "name": "", "type": "address"}]),
    _view("fee", [{"internalType": "uint24", "name": "", "type": "uint24"}]),
    _view("liquidity", [{"internalType": "uint128", "name": "", "type": "uint128"}]),
    _view(
        "slot0",
        [
            {"internalType": "uint160", "name": "sqrtPriceX96", "type": "uint160"},
            {"internalType": "int24", "name": "tick", "type": "int24"},
            {"internalType": "uint16", "name": "observationIndex", "type": "uint16"},
            {"internalType": "uint16", "name": "observationCardinality", "type": "uint16"},
            {"internalType": "uint16", "name": "observationCardinalityNext", "type": "uint16"},
            {"internalType": "uint8", "name": "feeProtocol", "type": "uint8"},
            {"internalType": "bool", "name": "unlocked", "type": "bool"},
        ],
    ),
]

ERC20_METADATA_ABI = [
    _view("symbol", [{"internalType": "string", "name": "", "type": "string"}]),
    _view("decimals", [{"internalType": "uint8", "name": "", "type": "uint8"}]),
]
