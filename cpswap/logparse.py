"""Decoding of swap program instructions and transaction logs."""

from __future__ import annotations

import base64
import binascii
import hashlib
import re
import struct
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

PROGRAM_LOG = "Program log: "
PROGRAM_DATA = "Program data: "

_INVOKE_RE = re.compile(r"Program (.*) invoke.*")
_SUCCESS_RE = re.compile(r"Program (.*) success*")

_B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_B58_INDEX = {char: index for index, char in enumerate(_B58_ALPHABET)}


class InstructionDecodeType(Enum):
    """Text encoding of instruction data."""

    BASE_HEX = "hex"
    BASE64 = "base64"
    BASE58 = "base58"


@dataclass
class Execution:
    """Stack of programs currently executing while walking a transaction log."""

    stack: list[str] = field(default_factory=list)

    @classmethod
    def from_first_log(cls, log: str) -> Execution:
        """Start from the first log line, which must be a program invocation."""
        match = _INVOKE_RE.fullmatch(log)
        if match is None:
            raise ValueError(f"could not parse log: {log}")
        return cls([match.group(1)])

    def program(self) -> str:
        """The program executing right now."""
        if not self.stack:
            raise IndexError("execution stack is empty")
        return self.stack[-1]

    def is_empty(self) -> bool:
        return not self.stack

    def push(self, program: str) -> None:
        self.stack.append(program)

    def pop(self) -> None:
        if not self.stack:
            raise IndexError("execution stack is empty")
        self.stack.pop()


def handle_system_log(program_id: str, log: str) -> tuple[str | None, bool]:
    """Return the program a log line switches to, and whether a program returned."""
    if log.startswith(f"Program {program_id} invoke"):
        return program_id, False
    if "invoke" in log:
        return "cpi", False
    if _SUCCESS_RE.fullmatch(log):
        return None, True
    return None, False


def _strip_program_prefix(line: str) -> str | None:
    for prefix in (PROGRAM_LOG, PROGRAM_DATA):
        if line.startswith(prefix):
            return line[len(prefix):]
    return None


def program_data_logs(program_id: str, logs: Iterable[str]) -> Iterator[bytes]:
    """Yield the decoded event data that ``program_id`` itself emitted.

    Nested invocations are tracked so that data logged by other programs is
    skipped. Logs that do not begin with an invocation yield nothing, and
    data that is not valid base64 is skipped.
    """
    lines = iter(logs)
    first = next(lines, None)
    if first is None:
        return
    try:
        execution = Execution.from_first_log(first)
    except ValueError:
        return

    for line in lines:
        if not execution.is_empty() and execution.program() == program_id:
            payload = _strip_program_prefix(line)
            if payload is not None:
                if line.startswith("Program log:"):
                    continue
                try:
                    yield base64.b64decode(payload, validate=True)
                except binascii.Error:
                    pass
                continue
        new_program, did_pop = handle_system_log(program_id, line)
        if new_program is not None:
            execution.push(new_program)
        if did_pop:
            execution.pop()


@dataclass(frozen=True)
class CreateAmmConfig:
    index: int
    trade_fee_rate: int
    protocol_fee_rate: int
    fund_fee_rate: int
    create_pool_fee: int


@dataclass(frozen=True)
class UpdateAmmConfig:
    param: int
    value: int


@dataclass(frozen=True)
class Initialize:
    init_amount_0: int
    init_amount_1: int
    open_time: int


@dataclass(frozen=True)
class UpdatePoolStatus:
    status: int


@dataclass(frozen=True)
class CollectProtocolFee:
    amount_0_requested: int
    amount_1_requested: int


@dataclass(frozen=True)
class CollectFundFee:
    amount_0_requested: int
    amount_1_requested: int


@dataclass(frozen=True)
class Deposit:
    lp_token_amount: int
    maximum_token_0_amount: int
    maximum_token_1_amount: int


@dataclass(frozen=True)
class Withdraw:
    lp_token_amount: int
    minimum_token_0_amount: int
    minimum_token_1_amount: int


@dataclass(frozen=True)
class SwapBaseInput:
    amount_in: int
    minimum_amount_out: int


@dataclass(frozen=True)
class SwapBaseOutput:
    max_amount_in: int
    amount_out: int


Instruction = (
    CreateAmmConfig
    | UpdateAmmConfig
    | Initialize
    | UpdatePoolStatus
    | CollectProtocolFee
    | CollectFundFee
    | Deposit
    | Withdraw
    | SwapBaseInput
    | SwapBaseOutput
)


def instruction_discriminator(name: str) -> bytes:
    """The 8-byte prefix identifying the instruction with snake-case ``name``."""
    return hashlib.sha256(f"global:{name}".encode()).digest()[:8]


_LAYOUTS = [
    ("create_amm_config", CreateAmmConfig, "<HQQQQ"),
    ("update_amm_config", UpdateAmmConfig, "<BQ"),
    ("initialize", Initialize, "<QQQ"),
    ("update_pool_status", UpdatePoolStatus, "<B"),
    ("collect_protocol_fee", CollectProtocolFee, "<QQ"),
    ("collect_fund_fee", CollectFundFee, "<QQ"),
    ("deposit", Deposit, "<QQQ"),
    ("withdraw", Withdraw, "<QQQ"),
    ("swap_base_input", SwapBaseInput, "<QQ"),
    ("swap_base_output", SwapBaseOutput, "<QQ"),
]

_INSTRUCTIONS = {
    instruction_discriminator(name): (cls, struct.Struct(fmt))
    for name, cls, fmt in _LAYOUTS
}


def _b58decode(text: str) -> bytes:
    value = 0
    for char in text:
        digit = _B58_INDEX.get(char)
        if digit is None:
            raise ValueError(f"invalid base58 character {char!r}")
        value = value * 58 + digit
    leading = len(text) - len(text.lstrip("1"))
    body = value.to_bytes((value.bit_length() + 7) // 8, "big") if value else b""
    return b"\x00" * leading + body


def decode_instruction_bytes(instr_data: str, decode_type: InstructionDecodeType) -> bytes:
    """Decode instruction text into raw bytes; raises ValueError if it is malformed."""
    if decode_type is InstructionDecodeType.BASE_HEX:
        return binascii.unhexlify(instr_data)
    if decode_type is InstructionDecodeType.BASE64:
        return base64.b64decode(instr_data, validate=True)
    return _b58decode(instr_data)


def decode_instruction(
    instr_data: str, decode_type: InstructionDecodeType
) -> Instruction | None:
    """Decode an instruction; ``None`` if its discriminator is unknown.

    Raises ValueError if the text or the instruction arguments are malformed.
    """
    data = decode_instruction_bytes(instr_data, decode_type)
    if len(data) < 8:
        raise ValueError("instruction data is shorter than its discriminator")
    entry = _INSTRUCTIONS.get(data[:8])
    if entry is None:
        return None
    cls, layout = entry
    body = data[8:]
    if len(body) < layout.size:
        raise ValueError(f"instruction {cls.__name__} did not deserialize")
    return cls(*layout.unpack_from(body))