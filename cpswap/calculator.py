"""Swap calculations with a reserve-dependent trading fee."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from math import isqrt

from .constant_product import (
    RoundDirection,
    TradingTokenResult,
    lp_tokens_to_trading_tokens,
    swap_base_input_without_fees,
    swap_base_output_without_fees,
)
from .errors import ErrorCode, SwapError
from .fees import (
    _checked_add,
    _checked_sub,
    calculate_pre_fee_amount,
    fund_fee,
    protocol_fee,
    trading_fee,
)

__all__ = [
    "RoundDirection",
    "SwapResult",
    "TradeDirection",
    "TradingTokenResult",
    "calculate_dynamic_fee_rate",
    "lp_tokens_to_trading_tokens",
    "map_zero_to_none",
    "swap_base_input",
    "swap_base_output",
    "validate_supply",
]

MAX_FEE_BPS = 5000
_U64_MASK = (1 << 64) - 1
_U64_MAX = _U64_MASK
_U256_MAX = (1 << 256) - 1
_PRECISION_ONE = 10**12
_FEE_THRESHOLD = 1_000_000_000 * 5_000_000_000 * 10**15


class TradeDirection(Enum):
    """Which pool token goes in and which comes out."""

    ZERO_FOR_ONE = 0
    ONE_FOR_ZERO = 1

    def opposite(self) -> TradeDirection:
        """The reverse direction of this trade."""
        if self is TradeDirection.ZERO_FOR_ONE:
            return TradeDirection.ONE_FOR_ZERO
        return TradeDirection.ZERO_FOR_ONE


@dataclass(frozen=True)
class SwapResult:
    """Outcome of swapping a source token for a destination token."""

    new_swap_source_amount: int
    new_swap_destination_amount: int
    source_amount_swapped: int
    destination_amount_swapped: int
    trade_fee: int
    protocol_fee: int
    fund_fee: int


def map_zero_to_none(x: int) -> int | None:
    """Return ``None`` for zero, otherwise ``x``."""
    return None if x == 0 else x


def validate_supply(token_0_amount: int, token_1_amount: int) -> None:
    """Raise SwapError(EMPTY_SUPPLY) if either side of the pool is empty."""
    if token_0_amount == 0 or token_1_amount == 0:
        raise SwapError(ErrorCode.EMPTY_SUPPLY)


def _rounded_sqrt(value: int) -> int:
    root = isqrt(value)
    # Round to nearest: value > (root + 0.5)^2 exactly when value > root^2 + root.
    return root + 1 if value - root * root > root else root


def calculate_dynamic_fee_rate(quote_amount: int, base_amount: int) -> int:
    """Fee rate scaled linearly with the geometric mean of the two reserves.

    Raises OverflowError when the intermediate arithmetic overflows.
    """
    if quote_amount * base_amount * _PRECISION_ONE > _U256_MAX:
        raise OverflowError("reserve product exceeds precise number range")
    geo_mean_value = _rounded_sqrt(quote_amount * base_amount)
    if geo_mean_value == 0:
        return 0
    capped = min(geo_mean_value, _FEE_THRESHOLD) & _U64_MASK
    scaled = capped * MAX_FEE_BPS
    if scaled > _U64_MAX:
        raise OverflowError(f"{capped} * {MAX_FEE_BPS} overflows u64")
    threshold = _FEE_THRESHOLD & _U64_MASK
    if threshold == 0:
        raise ZeroDivisionError("fee threshold truncates to zero")
    return scaled // threshold


def swap_base_input(
    source_amount: int,
    swap_source_amount: int,
    swap_destination_amount: int,
    trade_fee_rate: int,
    protocol_fee_rate: int,
    fund_fee_rate: int,
    quote_reserve: int,
    base_reserve: int,
) -> SwapResult:
    """Swap an exact input amount; the fee rate comes from the reserves.

    ``trade_fee_rate`` is accepted for compatibility but the dynamic rate is used.
    """
    dynamic_fee_rate = calculate_dynamic_fee_rate(quote_reserve, base_reserve)
    trade_fee = trading_fee(source_amount, dynamic_fee_rate)
    protocol = protocol_fee(trade_fee, protocol_fee_rate)
    fund = fund_fee(trade_fee, fund_fee_rate)

    source_amount_less_fees = _checked_sub(source_amount, trade_fee)
    destination_amount_swapped = swap_base_input_without_fees(
        source_amount_less_fees, swap_source_amount, swap_destination_amount
    )
    return SwapResult(
        new_swap_source_amount=_checked_add(swap_source_amount, source_amount),
        new_swap_destination_amount=_checked_sub(
            swap_destination_amount, destination_amount_swapped
        ),
        source_amount_swapped=source_amount,
        destination_amount_swapped=destination_amount_swapped,
        trade_fee=trade_fee,
        protocol_fee=protocol,
        fund_fee=fund,
    )


def swap_base_output(
    destination_amount: int,
    swap_source_amount: int,
    swap_destination_amount: int,
    trade_fee_rate: int,
    protocol_fee_rate: int,
    fund_fee_rate: int,
    quote_reserve: int,
    base_reserve: int,
) -> SwapResult:
    """Swap for an exact output amount; the fee rate comes from the reserves.

    ``trade_fee_rate`` is accepted for compatibility but the dynamic rate is used.
    """
    source_amount_swapped = swap_base_output_without_fees(
        destination_amount, swap_source_amount, swap_destination_amount
    )
    dynamic_fee_rate = calculate_dynamic_fee_rate(quote_reserve, base_reserve)
    source_amount = calculate_pre_fee_amount(source_amount_swapped, dynamic_fee_rate)

    trade_fee = trading_fee(source_amount, dynamic_fee_rate)
    protocol = protocol_fee(trade_fee, protocol_fee_rate)
    fund = fund_fee(trade_fee, fund_fee_rate)

    return SwapResult(
        new_swap_source_amount=_checked_add(swap_source_amount, source_amount),
        new_swap_destination_amount=_checked_sub(
            swap_destination_amount, destination_amount
        ),
        source_amount_swapped=source_amount,
        destination_amount_swapped=destination_amount,
        trade_fee=trade_fee,
        protocol_fee=protocol,
        fund_fee=fund,
    )