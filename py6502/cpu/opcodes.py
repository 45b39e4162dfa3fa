"""Opcode metadata for the 6502 core."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Final, Iterable, List, Sequence


class AddressingMode(Enum):
    """Addressing modes understood by the operand resolver."""

    IMMEDIATE = auto()
    ZERO_PAGE = auto()
    ZERO_PAGE_X = auto()
    ZERO_PAGE_Y = auto()
    ABSOLUTE = auto()
    ABSOLUTE_X = auto()
    ABSOLUTE_Y = auto()
    INDIRECT_X = auto()
    INDIRECT_Y = auto()


@dataclass(frozen=True)
class Instruction:
    """Metadata describing a single opcode.

    ``cycles`` is the nominal cost with no page crossing. The cost actually
    charged comes from the memory accesses the handler performs.
    """

    opcode: int
    mnemonic: str
    mode: AddressingMode
    cycles: int
    handler: str
    register: str | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.opcode <= 0xFF:
            raise ValueError(f"opcode out of range: {self.opcode}")
        if self.cycles <= 0:
            raise ValueError("cycles must be positive")


class OpcodeTable:
    """Mutable builder for the 256-entry instruction table."""

    _TABLE_SIZE: Final[int] = 0x100

    def __init__(self) -> None:
        self._table: List[Instruction | None] = [None] * self._TABLE_SIZE

    def register(self, instruction: Instruction) -> None:
        opcode = instruction.opcode
        existing = self._table[opcode]
        if existing is not None:
            raise ValueError(
                f"opcode {opcode:#04x} already registered as {existing.mnemonic}")
        self._table[opcode] = instruction

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def freeze(self) -> Sequence[Instruction | None]:
        return tuple(self._table)


def build_instruction_table(instructions: Iterable[Instruction]) -> Sequence[Instruction | None]:
    """Build a 256-entry instruction lookup table."""

    table = OpcodeTable()
    table.register_all(instructions)
    return table.freeze()


INS_LDA_IM: Final[int] = 0xA9
INS_LDA_ZP: Final[int] = 0xA5
INS_LDA_ZPX: Final[int] = 0xB5
INS_LDA_ABS: Final[int] = 0xAD
INS_LDA_ABSX: Final[int] = 0xBD
INS_LDA_ABSY: Final[int] = 0xB9
INS_LDA_INDX: Final[int] = 0xA1
INS_LDA_INDY: Final[int] = 0xB1
INS_JSR: Final[int] = 0x20


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    # LDA
    Instruction(INS_LDA_IM, "LDA", AddressingMode.IMMEDIATE, 2, "op_load_register", register="A"),
    Instruction(INS_LDA_ZP, "LDA", AddressingMode.ZERO_PAGE, 3, "op_load_register", register="A"),
    Instruction(INS_LDA_ZPX, "LDA", AddressingMode.ZERO_PAGE_X, 4, "op_load_register", register="A"),
    Instruction(INS_LDA_ABS, "LDA", AddressingMode.ABSOLUTE, 4, "op_load_register", register="A"),
    Instruction(INS_LDA_ABSX, "LDA", AddressingMode.ABSOLUTE_X, 4, "op_load_register", register="A"),
    Instruction(INS_LDA_ABSY, "LDA", AddressingMode.ABSOLUTE_Y, 4, "op_load_register", register="A"),
    Instruction(INS_LDA_INDX, "LDA", AddressingMode.INDIRECT_X, 6, "op_load_register", register="A"),
    Instruction(INS_LDA_INDY, "LDA", AddressingMode.INDIRECT_Y, 5, "op_load_register", register="A"),
    # LDX
    Instruction(0xA2, "LDX", AddressingMode.IMMEDIATE, 2, "op_load_register", register="X"),
    Instruction(0xA6, "LDX", AddressingMode.ZERO_PAGE, 3, "op_load_register", register="X"),
    Instruction(0xB6, "LDX", AddressingMode.ZERO_PAGE_Y, 4, "op_load_register", register="X"),
    Instruction(0xAE, "LDX", AddressingMode.ABSOLUTE, 4, "op_load_register", register="X"),
    Instruction(0xBE, "LDX", AddressingMode.ABSOLUTE_Y, 4, "op_load_register", register="X"),
    # LDY
    Instruction(0xA0, "LDY", AddressingMode.IMMEDIATE, 2, "op_load_register", register="Y"),
    Instruction(0xA4, "LDY", AddressingMode.ZERO_PAGE, 3, "op_load_register", register="Y"),
    Instruction(0xB4, "LDY", AddressingMode.ZERO_PAGE_X, 4, "op_load_register", register="Y"),
    Instruction(0xAC, "LDY", AddressingMode.ABSOLUTE, 4, "op_load_register", register="Y"),
    Instruction(0xBC, "LDY", AddressingMode.ABSOLUTE_X, 4, "op_load_register", register="Y"),
    # Subroutine
    Instruction(INS_JSR, "JSR", AddressingMode.ABSOLUTE, 6, "op_jsr"),
)


OPCODE_TABLE: Sequence[Instruction | None] = build_instruction_table(DEFAULT_INSTRUCTIONS)
