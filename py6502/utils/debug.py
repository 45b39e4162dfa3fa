"""Lightweight debug logging helpers for the 6502 emulator.

Set ``PY6502_DEBUG`` to a comma-separated list of categories, or ``all``:

``cpu``
    one line per executed instruction, plus illegal opcodes
``exec``
    budget summary at the end of each ``MOS6502.execute`` call
``loader``
    bytes and regions written by the binary and hex-listing loaders
``app``
    program images loaded by the headless runner
``monitor``
    single steps taken in the pygame monitor
"""

from __future__ import annotations

import os
from typing import Iterable

ENV_VAR = "PY6502_DEBUG"

_CATEGORIES: set[str] | None = None


def _load_categories() -> set[str]:
    global _CATEGORIES
    if _CATEGORIES is not None:
        return _CATEGORIES
    value = os.environ.get(ENV_VAR, "")
    if not value:
        _CATEGORIES = set()
        return _CATEGORIES
    parts: Iterable[str] = (part.strip().lower() for part in value.split(","))
    _CATEGORIES = {part for part in parts if part}
    return _CATEGORIES


def reload_categories() -> None:
    """Forget the cached categories so the next check re-reads the environment."""

    global _CATEGORIES
    _CATEGORIES = None


def debug_enabled(category: str | None = None) -> bool:
    categories = _load_categories()
    if not categories:
        return False
    if "all" in categories:
        return True
    if category is None:
        return True
    return category.lower() in categories


def debug_log(category: str, message: str, *args) -> None:
    if not debug_enabled(category):
        return
    prefix = f"[6502][{category}]"
    if args:
        try:
            message = message % args
        except (TypeError, ValueError):
            message = f"{message} {args!r}"
    print(f"{prefix} {message}")
