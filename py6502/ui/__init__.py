"""Interactive front ends for the 6502 core."""

from .monitor import MonitorApp, MonitorConfig

__all__ = [
    "MonitorApp",
    "MonitorConfig",
]
