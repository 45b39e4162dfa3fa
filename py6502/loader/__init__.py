"""Loaders for 6502 program images."""

from __future__ import annotations

from .binary import ImageFormatError, load_binary, load_binary_from_path
from .hex_text import load_hex_text, load_hex_text_from_path
from .program import AddressRegion, ProgramImage

__all__ = [
    "AddressRegion",
    "ProgramImage",
    "ImageFormatError",
    "load_binary",
    "load_binary_from_path",
    "load_hex_text",
    "load_hex_text_from_path",
]
