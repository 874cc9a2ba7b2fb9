"""Error codes reported by the swap program."""

from __future__ import annotations

from enum import Enum

ERROR_CODE_OFFSET = 6000


class ErrorCode(Enum):
    """Program error codes, each carrying its user-facing message."""

    NOT_APPROVED = "Not approved"
    INVALID_OWNER = "Input account owner is not the program address"
    EMPTY_SUPPLY = "Input token account empty"
    INVALID_INPUT = "InvalidInput"
    INCORRECT_LP_MINT = "Address of the provided lp token mint is incorrect"
    EXCEEDED_SLIPPAGE = "Exceeds desired slippage limit"
    ZERO_TRADING_TOKENS = "Given pool token amount results in zero trading tokens"
    NOT_SUPPORT_MINT = "Not support token_2022 mint extension"
    INVALID_VAULT = "invaild vault"
    INIT_LP_AMOUNT_TOO_LESS = (
        "Init lp amount is too less(Because 100 amount lp will be locked)"
    )

    @property
    def message(self) -> str:
        return self.value

    @property
    def number(self) -> int:
        """Numeric code, counted from the custom error offset in declaration order."""
        return ERROR_CODE_OFFSET + list(type(self)).index(self)


class SwapError(Exception):
    """Raised when an operation fails with one of the program's error codes."""

    def __init__(self, code: ErrorCode) -> None:
        super().__init__(code.message)
        self.code = code