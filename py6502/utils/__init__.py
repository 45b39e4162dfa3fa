"""Utility helpers for the 6502 emulator."""

from .debug import debug_enabled, debug_log, reload_categories
from .dump import format_memory, print_memory
from .trace import TraceEntry, TraceRecorder

__all__ = [
    "debug_enabled",
    "debug_log",
    "reload_categories",
    "format_memory",
    "print_memory",
    "TraceEntry",
    "TraceRecorder",
]
