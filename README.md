# cpswap

Integer arithmetic for a constant-product (x · y = k) liquidity pool. The package also has helpers
that decode the pool program's instruction data and transaction logs.

All amounts are plain Python integers. Intermediate values are held to the unsigned 128-bit range
the on-chain program works in. A calculation that would overflow or underflow that range raises
`OverflowError`. A division by zero raises `ZeroDivisionError`. The package has no runtime
dependencies.

## Installation

```
pip install .
pip install ".[test]"   # pytest and hypothesis for the test suite
```

## Modules

- `cpswap.errors`: `ErrorCode` is the enumeration of pool error conditions. Each member has a
  `message` and a `number`, counted from 6000 in declaration order. `SwapError` is the exception
  that carries one of these codes as its `code` attribute.
- `cpswap.fees`: fee arithmetic over a denominator of 1,000,000 (`FEE_RATE_DENOMINATOR_VALUE`).
  - `trading_fee` rounds up.
  - `protocol_fee` and `fund_fee` round down.
  - `calculate_pre_fee_amount` gives the smallest input that still leaves a given amount after
    the trading fee.
  - `ceil_div` and `floor_div` are the underlying helpers.
- `cpswap.constant_product`: the curve without fees.
  - `swap_base_input_without_fees` returns the output for an exact input, rounded down.
  - `swap_base_output_without_fees` returns the input needed for an exact output, rounded up.
  - `lp_tokens_to_trading_tokens` converts pool tokens into a `TradingTokenResult`, using
    `RoundDirection.FLOOR` or `RoundDirection.CEILING`. With `CEILING`, an amount of zero is
    left at zero.
- `cpswap.calculator`: full swaps that return a `SwapResult`.
  - `swap_base_input` and `swap_base_output` take the trading fee rate from
    `calculate_dynamic_fee_rate`, which scales with the geometric mean of the quote and base
    reserves and is capped at 5000. They accept a `trade_fee_rate` argument but do not use it.
  - `validate_supply` raises `SwapError(ErrorCode.EMPTY_SUPPLY)` when either side of the pool is
    empty.
  - `map_zero_to_none` maps 0 to `None`.
  - `TradeDirection` has `ZERO_FOR_ONE`, `ONE_FOR_ZERO` and the `opposite()` method.
- `cpswap.slippage`: `amount_with_slippage` widens an amount by `1 + slippage` and rounds up, or
  narrows it by `1 - slippage` and rounds down. The result is clamped to the unsigned 64-bit range.
- `cpswap.logparse`: decoding helpers.
  - `decode_instruction` decodes instruction data given as hex, base64 or base58 (see
    `InstructionDecodeType`). It returns one of `CreateAmmConfig`, `UpdateAmmConfig`,
    `Initialize`, `UpdatePoolStatus`, `CollectProtocolFee`, `CollectFundFee`, `Deposit`,
    `Withdraw`, `SwapBaseInput` or `SwapBaseOutput`. It returns `None` for an unknown
    discriminator and raises `ValueError` for malformed data.
  - `decode_instruction_bytes` returns the raw bytes only.
  - `instruction_discriminator` computes the 8-byte prefix for an instruction name.
  - `Execution` and `handle_system_log` track the program call stack through log lines.
  - `program_data_logs` yields the base64-decoded data lines that a given program itself emitted.

## Example

```python
from cpswap.constant_product import RoundDirection, lp_tokens_to_trading_tokens
from cpswap.calculator import swap_base_input
from cpswap.slippage import amount_with_slippage

share = lp_tokens_to_trading_tokens(5, 10, 2, 49, RoundDirection.CEILING)
print(share.token_0_amount, share.token_1_amount)   # 1 25

result = swap_base_input(
    1_000_000, 500_000_000, 800_000_000,
    2500, 120_000, 40_000,
    500_000_000, 800_000_000,
)
minimum_out = amount_with_slippage(result.destination_amount_swapped, 0.01, False)
```

## Decoding an instruction

```python
from cpswap.logparse import InstructionDecodeType, decode_instruction, instruction_discriminator

data = (instruction_discriminator("swap_base_input")
        + (1000).to_bytes(8, "little") + (990).to_bytes(8, "little"))
print(decode_instruction(data.hex(), InstructionDecodeType.BASE_HEX))
# SwapBaseInput(amount_in=1000, minimum_amount_out=990)
```

## What this package does not do

This is a calculation and decoding library only. It has no command-line tool. It does not:

- read configuration or keypair files
- connect to an RPC node
- fetch pool or token accounts
- build, sign or send transactions

Token transfer fees are not computed either. `program_data_logs` yields raw event bytes; it does
not decode them into swap or liquidity events.