import pytest
from hypothesis import given
from hypothesis import strategies as st

from cpswap.slippage import U64_MAX, amount_with_slippage


@pytest.mark.parametrize("amount", [0, 1, 999, 123_456_789])
def test_zero_slippage_keeps_amount(amount):
    assert amount_with_slippage(amount, 0.0, True) == amount
    assert amount_with_slippage(amount, 0.0, False) == amount


@given(
    st.integers(min_value=0, max_value=10**12),
    st.floats(min_value=0.0, max_value=1.0),
)
def test_round_up_never_below_amount(amount, slippage):
    assert amount_with_slippage(amount, slippage, True) >= amount


@given(
    st.integers(min_value=0, max_value=10**12),
    st.floats(min_value=0.0, max_value=1.0),
)
def test_round_down_never_above_amount(amount, slippage):
    result = amount_with_slippage(amount, slippage, False)
    assert 0 <= result <= amount


def test_negative_result_clamps_to_zero():
    assert amount_with_slippage(100, 2.0, False) == 0


def test_large_result_saturates():
    assert amount_with_slippage(U64_MAX, 1.0, True) == U64_MAX


def test_half_slippage_exact():
    assert amount_with_slippage(100, 0.5, True) == 150
    assert amount_with_slippage(100, 0.5, False) == 50