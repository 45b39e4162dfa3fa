"""6502 CPU emulator core.

``bus`` holds the 64 KiB memory image, ``cpu`` the fetch/decode/execute
engine, and ``loader``, ``utils`` and ``ui`` the helpers used by ``run.py``.
"""

from __future__ import annotations

from . import bus, cpu, loader, ui, utils

__all__: list[str] = [
    "bus",
    "cpu",
    "loader",
    "ui",
    "utils",
]
