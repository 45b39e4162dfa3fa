"""Headless runner and monitor bootstrap used by ``run.py``."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

from py6502.bus import Memory
from py6502.cpu import MOS6502
from py6502.loader import ProgramImage, load_binary_from_path, load_hex_text_from_path
from py6502.utils import TraceRecorder, debug_enabled, debug_log, print_memory

from .monitor import MonitorApp, MonitorConfig

HEX_SUFFIXES = (".hex", ".txt")


@dataclass
class AppConfig:
    """Options collected from the command line."""

    program_path: Optional[Path] = None
    load_address: int = MOS6502.RESET_VECTOR
    start_pc: Optional[int] = None
    cycles: int = 2
    dump_range: Optional[tuple[int, int]] = None
    trace_depth: int = 0
    monitor: bool = False
    scale: int = 2


class EmulatorApp:
    """Owns one CPU/memory pair for the lifetime of a run."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self.memory = Memory()
        trace = TraceRecorder(config.trace_depth) if config.trace_depth > 0 else None
        self.cpu = MOS6502(trace=trace)
        self.program: ProgramImage | None = None

    def prepare(self) -> None:
        """Reset the CPU, then load the program (reset zeroes memory)."""

        self.cpu.reset(self.memory)
        if self._config.program_path is not None:
            self.program = self._load_program(self._config.program_path)
        if self._config.start_pc is not None:
            self.cpu.state.pc = self._config.start_pc & 0xFFFF

    def run(self, out: TextIO | None = None) -> int:
        """Prepare and execute; return the cycles used.

        :class:`IllegalOpcodeError` propagates after the trace is written.
        """

        stream = out if out is not None else sys.stdout
        self.prepare()

        if self._config.monitor:
            MonitorApp(self.cpu, self.memory, MonitorConfig(scale=self._config.scale)).run()
            return self.cpu.cycle_count

        try:
            used = self.cpu.execute(self._config.cycles, self.memory)
        finally:
            self._write_trace(stream)

        self._write_registers(stream, used)
        if self._config.dump_range is not None:
            start, end = self._config.dump_range
            print_memory(self.memory, start, end, stream=stream)
        return used

    def _load_program(self, path: Path) -> ProgramImage:
        if path.suffix.lower() in HEX_SUFFIXES:
            program = load_hex_text_from_path(path, self.memory)
        else:
            program = load_binary_from_path(path, self.memory, self._config.load_address)
        if debug_enabled("app"):
            debug_log("app", "loaded %s regions=%d", path, len(program.regions))
        return program

    def _write_registers(self, stream: TextIO, used: int) -> None:
        state = self.cpu.state
        stream.write(f"cycles used: {used}\n")
        stream.write(
            f"PC={state.pc:04X} SP={state.sp:02X} A={state.a:02X} X={state.x:02X} "
            f"Y={state.y:02X} P={state.status_byte():02X}\n"
        )

    def _write_trace(self, stream: TextIO) -> None:
        trace = self.cpu.trace
        if trace is None:
            return
        for line in trace.format_entries():
            stream.write(line + "\n")

