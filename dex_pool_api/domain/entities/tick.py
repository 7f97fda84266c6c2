from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Tick:
    tick_idx: int
    liquidity_net: str
    liquidity_gross: str
    price0: str
    price1: str
