"""Flat 64 KiB memory image for the 6502 core.

Reads and writes are cost-neutral; cycle accounting lives in the CPU helpers.
The one exception is :meth:`Memory.write_word`, which charges two cycles to the
budget handed in by the caller and returns what is left.
"""

from __future__ import annotations

from typing import Iterable

MAX_MEM = 0x10000


class MemoryError(Exception):
    """Raised when memory is addressed outside the 16-bit address space."""


class Memory:
    """Byte-addressable storage covering the whole 6502 address space."""

    def __init__(self) -> None:
        self._data = bytearray(MAX_MEM)

    def __len__(self) -> int:
        return MAX_MEM

    def __getitem__(self, address: int) -> int:
        return self.read(address)

    def __setitem__(self, address: int, value: int) -> None:
        self.write(address, value)

    def init(self) -> None:
        """Set every cell back to zero."""

        self._data[:] = bytes(MAX_MEM)

    def read(self, address: int) -> int:
        return self._data[self._check(address)]

    def write(self, address: int, value: int) -> None:
        self._data[self._check(address)] = value & 0xFF

    def write_word(self, value: int, address: int, cycles: int) -> int:
        """Store ``value`` little-endian at ``address`` and charge two cycles."""

        self._check(address)
        self._check(address + 1)
        self._data[address] = value & 0xFF
        self._data[address + 1] = (value >> 8) & 0xFF
        return cycles - 2

    def load(self, address: int, data: Iterable[int]) -> int:
        """Copy ``data`` into memory starting at ``address``; return the byte count."""

        payload = bytes(data)
        if not payload:
            return 0
        self._check(address)
        self._check(address + len(payload) - 1)
        self._data[address : address + len(payload)] = payload
        return len(payload)

    def snapshot(self, start: int = 0, length: int = MAX_MEM) -> bytes:
        if length <= 0:
            return b""
        self._check(start)
        self._check(start + length - 1)
        return bytes(self._data[start : start + length])

    @staticmethod
    def _check(address: int) -> int:
        if not 0 <= address < MAX_MEM:
            raise MemoryError(f"address {address:#06x} outside 0x0000-0xffff")
        return address
