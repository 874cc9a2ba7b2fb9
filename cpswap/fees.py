"""Fee arithmetic on unsigned 128-bit token amounts."""

from __future__ import annotations

FEE_RATE_DENOMINATOR_VALUE = 1_000_000
U128_MAX = (1 << 128) - 1


def _checked_mul(a: int, b: int) -> int:
    result = a * b
    if result > U128_MAX:
        raise OverflowError(f"{a} * {b} overflows u128")
    return result


def _checked_add(a: int, b: int) -> int:
    result = a + b
    if result > U128_MAX:
        raise OverflowError(f"{a} + {b} overflows u128")
    return result


def _checked_sub(a: int, b: int) -> int:
    if b > a:
        raise OverflowError(f"{a} - {b} underflows u128")
    return a - b


def _checked_div(a: int, b: int) -> int:
    if b == 0:
        raise ZeroDivisionError(f"{a} divided by zero")
    return a // b


def _checked_rem(a: int, b: int) -> int:
    if b == 0:
        raise ZeroDivisionError(f"{a} modulo zero")
    return a % b


def ceil_div(token_amount: int, fee_numerator: int, fee_denominator: int) -> int:
    """Return ``token_amount * fee_numerator / fee_denominator`` rounded up."""
    product = _checked_mul(token_amount, fee_numerator)
    shifted = _checked_sub(_checked_add(product, fee_denominator), 1)
    return _checked_div(shifted, fee_denominator)


def floor_div(token_amount: int, fee_numerator: int, fee_denominator: int) -> int:
    """Return ``token_amount * fee_numerator / fee_denominator`` rounded down."""
    return _checked_div(_checked_mul(token_amount, fee_numerator), fee_denominator)


def trading_fee(amount: int, trade_fee_rate: int) -> int:
    """Trading fee in trading tokens, rounded up."""
    return ceil_div(amount, trade_fee_rate, FEE_RATE_DENOMINATOR_VALUE)


def protocol_fee(amount: int, protocol_fee_rate: int) -> int:
    """Protocol share of a trading fee, rounded down."""
    return floor_div(amount, protocol_fee_rate, FEE_RATE_DENOMINATOR_VALUE)


def fund_fee(amount: int, fund_fee_rate: int) -> int:
    """Fund share of a trading fee, rounded down."""
    return floor_div(amount, fund_fee_rate, FEE_RATE_DENOMINATOR_VALUE)


def calculate_pre_fee_amount(post_fee_amount: int, trade_fee_rate: int) -> int:
    """Smallest input amount that leaves ``post_fee_amount`` after the trading fee."""
    if trade_fee_rate == 0:
        return post_fee_amount
    numerator = _checked_mul(post_fee_amount, FEE_RATE_DENOMINATOR_VALUE)
    denominator = _checked_sub(FEE_RATE_DENOMINATOR_VALUE, trade_fee_rate)
    shifted = _checked_sub(_checked_add(numerator, denominator), 1)
    return _checked_div(shifted, denominator)