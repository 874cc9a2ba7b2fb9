"""Constant product (x * y = k) curve arithmetic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .fees import _checked_add, _checked_div, _checked_mul, _checked_rem, _checked_sub


class RoundDirection(Enum):
    """Rounding used when converting pool tokens to trading tokens."""

    FLOOR = 0
    CEILING = 1


@dataclass(frozen=True)
class TradingTokenResult:
    """Amounts of both trading tokens matching a number of pool tokens."""

    token_0_amount: int
    token_1_amount: int


def swap_base_input_without_fees(
    source_amount: int, swap_source_amount: int, swap_destination_amount: int
) -> int:
    """Destination tokens received for ``source_amount``, rounded down."""
    numerator = _checked_mul(source_amount, swap_destination_amount)
    denominator = _checked_add(swap_source_amount, source_amount)
    return _checked_div(numerator, denominator)


def swap_base_output_without_fees(
    destination_amount: int, swap_source_amount: int, swap_destination_amount: int
) -> int:
    """Source tokens needed to receive ``destination_amount``, rounded up."""
    numerator = _checked_mul(swap_source_amount, destination_amount)
    denominator = _checked_sub(swap_destination_amount, destination_amount)
    quotient, remainder = divmod(numerator, denominator) if denominator else (None, None)
    if quotient is None:
        raise ZeroDivisionError("destination amount drains the whole pool")
    return quotient + 1 if remainder else quotient


def lp_tokens_to_trading_tokens(
    lp_token_amount: int,
    lp_token_supply: int,
    swap_token_0_amount: int,
    swap_token_1_amount: int,
    round_direction: RoundDirection,
) -> TradingTokenResult:
    """Trading tokens corresponding to ``lp_token_amount`` of the pool supply.

    Raises OverflowError or ZeroDivisionError when the calculation fails.
    """
    product_0 = _checked_mul(lp_token_amount, swap_token_0_amount)
    token_0_amount = _checked_div(product_0, lp_token_supply)
    product_1 = _checked_mul(lp_token_amount, swap_token_1_amount)
    token_1_amount = _checked_div(product_1, lp_token_supply)

    if round_direction is RoundDirection.CEILING:
        # A zero amount is left as is so that tiny requests are rejected later
        # rather than rounded up to a whole token.
        if _checked_rem(product_0, lp_token_supply) > 0 and token_0_amount > 0:
            token_0_amount += 1
        if _checked_rem(product_1, lp_token_supply) > 0 and token_1_amount > 0:
            token_1_amount += 1

    return TradingTokenResult(token_0_amount, token_1_amount)