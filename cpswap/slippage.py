"""Slippage adjustment of token amounts."""

from __future__ import annotations

import math

U64_MAX = (1 << 64) - 1


def amount_with_slippage(amount: int, slippage: float, round_up: bool) -> int:
    """Scale ``amount`` by ``1 + slippage`` (rounded up) or ``1 - slippage`` (rounded down).

    The result is clamped to the unsigned 64-bit range; a NaN result gives 0.
    """
    factor = 1.0 + slippage if round_up else 1.0 - slippage
    scaled = float(amount) * factor
    if math.isnan(scaled) or scaled <= 0:
        return 0
    if scaled >= float(1 << 64):
        return U64_MAX
    rounded = math.ceil(scaled) if round_up else math.floor(scaled)
    return min(rounded, U64_MAX)