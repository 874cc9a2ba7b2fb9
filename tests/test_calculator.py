import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from cpswap.calculator import (
    SwapResult,
    TradeDirection,
    calculate_dynamic_fee_rate,
    map_zero_to_none,
    swap_base_input,
    swap_base_output,
    validate_supply,
)
from cpswap.errors import ErrorCode, SwapError

reserves = st.integers(min_value=1_000_000, max_value=999_999_999_999)
amounts = st.integers(min_value=1_000, max_value=999_999_999)


def test_opposite_direction():
    assert TradeDirection.ZERO_FOR_ONE.opposite() is TradeDirection.ONE_FOR_ZERO
    assert TradeDirection.ONE_FOR_ZERO.opposite() is TradeDirection.ZERO_FOR_ONE


def test_map_zero_to_none():
    assert map_zero_to_none(0) is None
    assert map_zero_to_none(7) == 7


@pytest.mark.parametrize("amounts_pair", [(0, 5), (5, 0), (0, 0)])
def test_validate_supply_rejects_empty(amounts_pair):
    with pytest.raises(SwapError) as info:
        validate_supply(*amounts_pair)
    assert info.value.code is ErrorCode.EMPTY_SUPPLY


def test_validate_supply_accepts_nonempty():
    assert validate_supply(1, 1) is None


def test_dynamic_fee_rate_zero_reserve():
    assert calculate_dynamic_fee_rate(0, 1_000_000) == 0


def test_dynamic_fee_rate_overflow():
    big = (1 << 128) - 1
    with pytest.raises(OverflowError):
        calculate_dynamic_fee_rate(big, big)


@settings(max_examples=200)
@given(quote=reserves, base=reserves)
def test_dynamic_fee_rate_variations(quote, base):
    fee = calculate_dynamic_fee_rate(quote, base)
    assert 0 <= fee <= 5000


def test_swap_base_input_without_dynamic_fee():
    result = swap_base_input(100, 1000, 1000, 100, 10, 10, 0, 1000)
    assert result == SwapResult(
        new_swap_source_amount=1100,
        new_swap_destination_amount=910,
        source_amount_swapped=100,
        destination_amount_swapped=90,
        trade_fee=0,
        protocol_fee=0,
        fund_fee=0,
    )


def test_swap_base_output_without_dynamic_fee():
    result = swap_base_output(90, 1000, 1000, 100, 10, 10, 0, 1000)
    assert result.source_amount_swapped == 99
    assert result.destination_amount_swapped == 90
    assert result.new_swap_source_amount == 1099
    assert result.new_swap_destination_amount == 910
    assert result.trade_fee == 0


def test_swap_base_output_draining_pool_fails():
    with pytest.raises(ZeroDivisionError):
        swap_base_output(1000, 1000, 1000, 100, 10, 10, 1000, 1000)


@settings(max_examples=200)
@given(dest_amount=amounts, quote=reserves, base=reserves)
def test_swap_output_with_dynamic_fees(dest_amount, quote, base):
    if dest_amount >= base:
        with pytest.raises((ZeroDivisionError, OverflowError)):
            swap_base_output(dest_amount, quote, base, 100, 10, 10, quote, base)
        return
    swap = swap_base_output(dest_amount, quote, base, 100, 10, 10, quote, base)
    assert swap.trade_fee <= swap.source_amount_swapped
    assert swap.protocol_fee <= swap.trade_fee
    assert swap.fund_fee <= swap.trade_fee
    assert swap.new_swap_source_amount > quote
    assert swap.new_swap_destination_amount < base
    assert swap.destination_amount_swapped == dest_amount


@settings(max_examples=200)
@given(source_amount=amounts)
def test_extreme_pool_ratios(source_amount):
    huge_amount = 1_000_000_000_000_000
    tiny_amount = 1_000_000

    result1 = swap_base_input(
        source_amount, huge_amount, tiny_amount, 100, 10, 10, huge_amount, tiny_amount
    )
    assert result1.source_amount_swapped == source_amount
    assert result1.new_swap_source_amount == huge_amount + source_amount

    result2 = swap_base_input(
        source_amount, tiny_amount, huge_amount, 100, 10, 10, tiny_amount, huge_amount
    )
    assert result2.source_amount_swapped == source_amount
    assert result2.new_swap_destination_amount <= huge_amount
    assert (
        result2.new_swap_source_amount * result2.new_swap_destination_amount
        >= tiny_amount * huge_amount
    )