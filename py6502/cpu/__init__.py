"""CPU package for the 6502 core."""

from .core import MOS6502, CPUError, CPUState, IllegalOpcodeError
from . import opcodes

__all__ = [
    "MOS6502",
    "CPUState",
    "CPUError",
    "IllegalOpcodeError",
    "opcodes",
]
