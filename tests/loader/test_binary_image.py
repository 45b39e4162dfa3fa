"""Tests for the raw binary image loader."""

from __future__ import annotations

import io

import pytest

from py6502.bus import Memory
from py6502.loader import ImageFormatError, load_binary, load_binary_from_path


def test_load_binary_places_bytes_at_start() -> None:
    memory = Memory()

    program = load_binary(io.BytesIO(b"\xa9\x84"), memory, 0xFFFC)

    assert memory[0xFFFC] == 0xA9
    assert memory[0xFFFD] == 0x84
    assert len(program.regions) == 1
    region = program.regions[0]
    assert (region.start, region.end, region.length()) == (0xFFFC, 0xFFFD, 2)


def test_load_binary_fills_to_top_of_memory() -> None:
    memory = Memory()

    load_binary(io.BytesIO(b"\x01\x02\x03\x04"), memory, 0xFFFC)

    assert memory.snapshot(0xFFFC, 4) == b"\x01\x02\x03\x04"


def test_load_binary_rejects_overflow() -> None:
    memory = Memory()

    with pytest.raises(ImageFormatError):
        load_binary(io.BytesIO(b"\x01\x02\x03\x04\x05"), memory, 0xFFFC)
    assert memory[0xFFFC] == 0x00


def test_load_binary_rejects_bad_start() -> None:
    with pytest.raises(ImageFormatError):
        load_binary(io.BytesIO(b"\x01"), Memory(), 0x10000)


def test_empty_image_has_no_regions() -> None:
    program = load_binary(io.BytesIO(b""), Memory(), 0x0200)

    assert program.regions == []
    assert program.total_bytes() == 0


def test_load_binary_from_path(tmp_path) -> None:
    path = tmp_path / "prog.bin"
    path.write_bytes(bytes([0xA5, 0x42]))
    memory = Memory()

    program = load_binary_from_path(path, memory, 0x0600)

    assert program.name == "prog.bin"
    assert memory.snapshot(0x0600, 2) == b"\xa5\x42"
