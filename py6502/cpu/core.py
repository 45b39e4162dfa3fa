"""Fetch/decode/execute core for the 6502 CPU."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import ClassVar, Sequence

from py6502.bus import Memory
from py6502.utils import TraceRecorder, debug_enabled, debug_log

from .opcodes import OPCODE_TABLE, AddressingMode, Instruction


class CPUError(Exception):
    """Base error for CPU-related failures."""


class IllegalOpcodeError(CPUError):
    """Raised when the CPU fetches an opcode with no registered handler."""

    def __init__(self, opcode: int, address: int) -> None:
        super().__init__(f"illegal opcode {opcode:#04x} at {address:#06x}")
        self.opcode = opcode
        self.address = address


FLAG_C = 0x01
FLAG_Z = 0x02
FLAG_I = 0x04
FLAG_D = 0x08
FLAG_B = 0x10
FLAG_UNUSED = 0x20
FLAG_V = 0x40
FLAG_N = 0x80


@dataclass
class CPUState:
    """Register file and status flags of the 6502."""

    pc: int = 0xFFFC
    sp: int = 0xFF
    a: int = 0x00
    x: int = 0x00
    y: int = 0x00
    c: bool = False
    z: bool = False
    i: bool = False
    d: bool = False
    b: bool = False
    v: bool = False
    n: bool = False

    def clone(self) -> "CPUState":
        return replace(self)

    def status_byte(self) -> int:
        """Pack the flags as ``NV-BDIZC``; bit 5 always reads as set."""

        value = FLAG_UNUSED
        for flag, mask in (
            (self.c, FLAG_C),
            (self.z, FLAG_Z),
            (self.i, FLAG_I),
            (self.d, FLAG_D),
            (self.b, FLAG_B),
            (self.v, FLAG_V),
            (self.n, FLAG_N),
        ):
            if flag:
                value |= mask
        return value


@dataclass
class MOS6502:
    """6502 core driven by an explicit cycle budget.

    The budget is threaded through every helper: each one takes the remaining
    cycles and returns the updated count next to its result.
    """

    instruction_table: Sequence[Instruction | None] = field(default=OPCODE_TABLE)
    trace: TraceRecorder | None = None

    RESET_VECTOR: ClassVar[int] = 0xFFFC
    INITIAL_SP: ClassVar[int] = 0xFF

    state: CPUState = field(default_factory=CPUState)
    cycle_count: int = 0

    def reset(self, memory: Memory) -> None:
        """Restore power-on registers and zero ``memory``."""

        self.state = CPUState(pc=self.RESET_VECTOR, sp=self.INITIAL_SP)
        self.cycle_count = 0
        memory.init()

    def execute(self, cycles: int, memory: Memory) -> int:
        """Run instructions until ``cycles`` is spent; return the cycles used.

        The budget is only checked before an instruction starts, so the last
        instruction always completes and the result may exceed ``cycles``.
        """

        requested = cycles
        while cycles > 0:
            pc_before = self.state.pc
            budget_before = cycles
            opcode, cycles = self.fetch_byte(cycles, memory)
            instruction = self._decode(opcode, pc_before)
            handler = getattr(self, instruction.handler, None)
            if handler is None:
                raise CPUError(f"handler '{instruction.handler}' not implemented")

            cycles = handler(instruction, cycles, memory)
            spent = budget_before - cycles
            if self.trace is not None:
                self.trace.record_step(pc_before, self.state, opcode, spent, mnemonic=instruction.mnemonic)
            if debug_enabled("cpu"):
                debug_log(
                    "cpu",
                    "pc=%04x opcode=%02x %s cycles=%d",
                    pc_before,
                    opcode,
                    instruction.mnemonic,
                    spent,
                )

        used = requested - cycles
        self.cycle_count += used
        if debug_enabled("exec"):
            debug_log("exec", "requested=%d used=%d total=%d", requested, used, self.cycle_count)
        return used

    # ------------------------------------------------------------------
    # Fetch helpers

    def fetch_byte(self, cycles: int, memory: Memory) -> tuple[int, int]:
        value = memory[self.state.pc]
        self.state.pc = (self.state.pc + 1) & 0xFFFF
        return value, cycles - 1

    def fetch_word(self, cycles: int, memory: Memory) -> tuple[int, int]:
        lo = memory[self.state.pc]
        self.state.pc = (self.state.pc + 1) & 0xFFFF
        hi = memory[self.state.pc]
        self.state.pc = (self.state.pc + 1) & 0xFFFF
        return lo | (hi << 8), cycles - 2

    # ------------------------------------------------------------------
    # Memory helpers

    @staticmethod
    def read_byte(cycles: int, address: int, memory: Memory) -> tuple[int, int]:
        return memory[address & 0xFFFF], cycles - 1

    @classmethod
    def read_word(cls, cycles: int, address: int, memory: Memory) -> tuple[int, int]:
        lo, cycles = cls.read_byte(cycles, address, memory)
        hi, cycles = cls.read_byte(cycles, address + 1, memory)
        return lo | (hi << 8), cycles

    @classmethod
    def _read_zero_page_word(cls, cycles: int, pointer: int, memory: Memory) -> tuple[int, int]:
        # The high byte of a zero-page pointer at 0xFF comes from 0x00.
        lo, cycles = cls.read_byte(cycles, pointer & 0xFF, memory)
        hi, cycles = cls.read_byte(cycles, (pointer + 1) & 0xFF, memory)
        return lo | (hi << 8), cycles

    def _decode(self, opcode: int, address: int) -> Instruction:
        instruction = self.instruction_table[opcode]
        if instruction is None:
            if self.trace is not None:
                self.trace.record_step(address, self.state, opcode, 1, note="illegal")
            if debug_enabled("cpu"):
                debug_log("cpu", "illegal opcode=%02x pc=%04x", opcode, address)
            raise IllegalOpcodeError(opcode, address)
        return instruction

    # ------------------------------------------------------------------
    # Addressing helpers

    def _fetch_operand(self, mode: AddressingMode, cycles: int, memory: Memory) -> tuple[int, int]:
        if mode == AddressingMode.IMMEDIATE:
            return self.fetch_byte(cycles, memory)
        address, cycles = self._resolve_address(mode, cycles, memory)
        return self.read_byte(cycles, address, memory)

    def _resolve_address(self, mode: AddressingMode, cycles: int, memory: Memory) -> tuple[int, int]:
        if mode == AddressingMode.ZERO_PAGE:
            return self.fetch_byte(cycles, memory)
        if mode in (AddressingMode.ZERO_PAGE_X, AddressingMode.ZERO_PAGE_Y):
            base, cycles = self.fetch_byte(cycles, memory)
            index = self.state.x if mode == AddressingMode.ZERO_PAGE_X else self.state.y
            return (base + index) & 0xFF, cycles - 1
        if mode == AddressingMode.ABSOLUTE:
            return self.fetch_word(cycles, memory)
        if mode in (AddressingMode.ABSOLUTE_X, AddressingMode.ABSOLUTE_Y):
            base, cycles = self.fetch_word(cycles, memory)
            index = self.state.x if mode == AddressingMode.ABSOLUTE_X else self.state.y
            address = (base + index) & 0xFFFF
            if self._page_crossed(base, address):
                cycles -= 1
            return address, cycles
        if mode == AddressingMode.INDIRECT_X:
            pointer, cycles = self.fetch_byte(cycles, memory)
            pointer = (pointer + self.state.x) & 0xFF
            return self._read_zero_page_word(cycles - 1, pointer, memory)
        if mode == AddressingMode.INDIRECT_Y:
            pointer, cycles = self.fetch_byte(cycles, memory)
            # The pointer is a full address here: a pointer at 0xFF takes its high byte from 0x0100.
            base, cycles = self.read_word(cycles, pointer, memory)
            address = (base + self.state.y) & 0xFFFF
            if self._page_crossed(base, address):
                cycles -= 1
            return address, cycles
        raise CPUError(f"addressing mode {mode} cannot be resolved to an address")

    @staticmethod
    def _page_crossed(base: int, effective: int) -> bool:
        """Coarse page-cross test: the index added was at least 0xFF.

        This is not a high-byte comparison. 0x4480 + 0x80 is not charged, and
        neither is a sum that wraps past 0xFFFF.
        """

        return effective - base >= 0xFF

    # ------------------------------------------------------------------
    # Instruction handlers

    def op_load_register(self, instruction: Instruction, cycles: int, memory: Memory) -> int:
        register = self._require_register(instruction)
        value, cycles = self._fetch_operand(instruction.mode, cycles, memory)
        self._set_register(register, value)
        self._update_nz_flags(value)
        return cycles

    def op_jsr(self, _: Instruction, cycles: int, memory: Memory) -> int:
        target, cycles = self.fetch_word(cycles, memory)
        return_address = (self.state.pc - 1) & 0xFFFF
        cycles = memory.write_word(return_address, self.state.sp, cycles)
        self.state.sp = (self.state.sp - 2) & 0xFF
        self.state.pc = target
        return cycles - 1

    # ------------------------------------------------------------------
    # Register helpers

    def _set_register(self, which: str, value: int) -> None:
        value &= 0xFF
        if which == "A":
            self.state.a = value
        elif which == "X":
            self.state.x = value
        elif which == "Y":
            self.state.y = value
        else:
            raise CPUError(f"unknown register {which}")

    def _require_register(self, instruction: Instruction) -> str:
        if instruction.register is None:
            raise CPUError(f"instruction {instruction.mnemonic} missing register metadata")
        return instruction.register

    # ------------------------------------------------------------------
    # Flag helpers

    def _update_nz_flags(self, value: int) -> None:
        value &= 0xFF
        self.state.z = value == 0
        self.state.n = (value & 0x80) != 0
