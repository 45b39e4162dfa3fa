"""Hex grid rendering of a memory image."""

from __future__ import annotations

import sys
from typing import List, TextIO

from py6502.bus import MAX_MEM, Memory


def format_memory(memory: Memory, start: int = 0, end: int = MAX_MEM, columns: int = 32) -> List[str]:
    """Return ``[start, end)`` as rows of ``columns`` hex bytes.

    Each row is prefixed with the address of its first byte.
    """

    if columns <= 0:
        raise ValueError("columns must be positive")
    if not 0 <= start <= end <= MAX_MEM:
        raise ValueError(f"invalid range {start:#06x}-{end:#06x}")

    data = memory.snapshot(start, end - start)
    lines: list[str] = []
    for offset in range(0, len(data), columns):
        row = data[offset : offset + columns]
        cells = " ".join(f"{value:02x}" for value in row)
        lines.append(f"{start + offset:04x}: {cells}")
    return lines


def print_memory(
    memory: Memory,
    start: int = 0,
    end: int = MAX_MEM,
    columns: int = 32,
    stream: TextIO | None = None,
) -> None:
    out = stream if stream is not None else sys.stdout
    for line in format_memory(memory, start, end, columns):
        out.write(line + "\n")
