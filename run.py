"""Command-line entry point for the 6502 emulator core.

Loads an optional program image, resets the CPU and runs it for a cycle
budget, printing the registers afterwards. ``--monitor`` opens the pygame
monitor instead of running headless.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from py6502.bus import MemoryError
from py6502.cpu import CPUError
from py6502.ui.app import AppConfig, EmulatorApp


def _int(text: str) -> int:
    return int(text, 0)


def _range(text: str) -> tuple[int, int]:
    start, separator, end = text.partition(":")
    if not separator:
        raise argparse.ArgumentTypeError("expected START:END")
    try:
        return int(start, 0), int(end, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="6502 CPU emulator core",
    )
    parser.add_argument(
        "--program",
        type=Path,
        help="Program image; .hex/.txt files are hex listings, anything else raw binary",
    )
    parser.add_argument(
        "--load-address",
        type=_int,
        default=0xFFFC,
        help="Start address for raw binary images (default: 0xFFFC)",
    )
    parser.add_argument(
        "--pc",
        type=_int,
        help="Override the program counter after reset",
    )
    parser.add_argument(
        "--cycles",
        type=_int,
        default=2,
        help="Cycle budget passed to execute (default: 2)",
    )
    parser.add_argument(
        "--dump",
        type=_range,
        metavar="START:END",
        help="Print memory in [START, END) after execution",
    )
    parser.add_argument(
        "--trace",
        type=_int,
        default=0,
        metavar="N",
        help="Keep and print the last N executed instructions",
    )
    parser.add_argument(
        "--monitor",
        action="store_true",
        help="Open the pygame monitor instead of running headless",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=2,
        help="Monitor font scale (default: 2)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.program and not args.program.exists():
        parser.error(f"Program file not found: {args.program}")

    config = AppConfig(
        program_path=args.program,
        load_address=args.load_address,
        start_pc=args.pc,
        cycles=args.cycles,
        dump_range=args.dump,
        trace_depth=args.trace,
        monitor=args.monitor,
        scale=args.scale,
    )
    app = EmulatorApp(config)
    try:
        app.run()
    except (CPUError, MemoryError, RuntimeError, ValueError) as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
