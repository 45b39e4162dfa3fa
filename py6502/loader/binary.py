"""Loader for raw binary 6502 images."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from py6502.bus import MAX_MEM, Memory
from py6502.utils import debug_log

from .program import ProgramImage


class ImageFormatError(RuntimeError):
    """Raised when a program image cannot be placed in memory."""


def load_binary(stream: BinaryIO, memory: Memory, start: int, *, name: str = "") -> ProgramImage:
    """Copy the whole of ``stream`` into ``memory`` beginning at ``start``."""

    if not 0 <= start < MAX_MEM:
        raise ImageFormatError(f"start address {start:#06x} outside address space")

    payload = stream.read()
    if start + len(payload) > MAX_MEM:
        raise ImageFormatError(
            f"image of {len(payload)} bytes at {start:#06x} exceeds address space")

    program = ProgramImage(name=name)
    if payload:
        memory.load(start, payload)
        program.add_region(start, start + len(payload) - 1)
    debug_log("loader", "binary name=%s start=%04x length=%d", name or "-", start, len(payload))
    return program


def load_binary_from_path(path: Path, memory: Memory, start: int) -> ProgramImage:
    """Load a raw binary image from the filesystem."""

    with path.open("rb") as handle:
        return load_binary(handle, memory, start, name=path.name)
