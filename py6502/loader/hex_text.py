"""Loader for hex listing text files.

Each non-empty line has the form ``ADDR: BB BB ...`` where ``ADDR`` is a
16-bit hex address and each ``BB`` a hex byte. Text after ``#`` or ``;`` is a
comment::

    # LDA #$84
    FFFC: A9 84
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TextIO

from py6502.bus import MAX_MEM, Memory
from py6502.utils import debug_log

from .binary import ImageFormatError
from .program import ProgramImage

_ADDRESS = re.compile(r"^(?:\$|0x)?([0-9A-Fa-f]{1,4})$")
_HEX_PAIR = re.compile(r"^[0-9A-Fa-f]{2}$")


def load_hex_text(handle: TextIO, memory: Memory, *, name: str = "") -> ProgramImage:
    """Load every line of a hex listing from ``handle`` into ``memory``."""

    program = ProgramImage(name=name)
    for line_number, raw_line in enumerate(handle, start=1):
        line = _strip_comment(raw_line)
        if not line:
            continue

        address, payload = _parse_line(line, line_number)
        if address + len(payload) > MAX_MEM:
            raise ImageFormatError(f"line {line_number}: data runs past 0xffff")
        if payload:
            memory.load(address, payload)
            program.add_region(address, address + len(payload) - 1, f"line {line_number}")

    debug_log("loader", "hex name=%s regions=%d bytes=%d", name or "-", len(program.regions), program.total_bytes())
    return program


def load_hex_text_from_path(path: Path, memory: Memory, *, encoding: str = "utf-8") -> ProgramImage:
    """Load a hex listing from ``path``."""

    with path.open("r", encoding=encoding) as handle:
        return load_hex_text(handle, memory, name=path.name)


def _strip_comment(raw_line: str) -> str:
    for marker in ("#", ";"):
        index = raw_line.find(marker)
        if index >= 0:
            raw_line = raw_line[:index]
    return raw_line.strip()


def _parse_line(line: str, line_number: int) -> tuple[int, bytes]:
    head, separator, tail = line.partition(":")
    if not separator:
        raise ImageFormatError(f"line {line_number}: missing ':' after address")

    match = _ADDRESS.match(head.strip())
    if match is None:
        raise ImageFormatError(f"line {line_number}: invalid address {head.strip()!r}")
    address = int(match.group(1), 16)

    values = bytearray()
    for token in tail.split():
        if not _HEX_PAIR.match(token):
            raise ImageFormatError(f"line {line_number}: invalid byte {token!r}")
        values.append(int(token, 16))
    return address, bytes(values)
