"""Bus-related helpers for the 6502 core."""

from .memory import MAX_MEM, Memory, MemoryError

__all__ = [
    "MAX_MEM",
    "Memory",
    "MemoryError",
]
