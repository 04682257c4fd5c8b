"""Command-line entry point for the CHIP-8 emulator."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.cpu import Quirks, disassemble
from pychip8.loader import ProgramFormatError, load_program_from_path
from pychip8.ui import AppConfig, Chip8App


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 emulator",
    )
    parser.add_argument(
        "program",
        type=Path,
        help="Path to the CHIP-8 program image (.ch8)",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=10,
        help="Integer window scale factor (default: 10)",
    )
    parser.add_argument(
        "--ticks-per-frame",
        type=int,
        default=10,
        help="Instructions executed per 60 Hz frame (default: 10)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=60,
        help="Host frames per second (default: 60)",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Launch the emulator in fullscreen mode",
    )
    parser.add_argument(
        "--mute",
        action="store_true",
        help="Disable the sound-timer tone",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the RND instruction's random source",
    )
    parser.add_argument(
        "--wrap-sprites",
        action="store_true",
        help="Wrap sprites around the screen edges instead of clamping them",
    )
    parser.add_argument(
        "--strict-shift",
        action="store_true",
        help="Store the shifted-out bit in VF instead of the nibble mask",
    )
    parser.add_argument(
        "--disassemble",
        action="store_true",
        help="Print a disassembly of the program and exit",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.program.exists():
        parser.error(f"Program file not found: {args.program}")
    for name in ("scale", "ticks_per_frame", "fps"):
        if getattr(args, name) <= 0:
            parser.error(f"--{name.replace('_', '-')} must be positive")

    if args.disassemble:
        try:
            image = load_program_from_path(args.program)
        except ProgramFormatError as exc:
            parser.exit(1, f"run.py: {exc}\n")
        for line in disassemble(image.data, image.start):
            print(line)
        return 0

    config = AppConfig(
        program_path=args.program,
        scale=args.scale,
        ticks_per_frame=args.ticks_per_frame,
        frame_rate=args.fps,
        fullscreen=args.fullscreen,
        mute=args.mute,
        seed=args.seed,
        quirks=Quirks(
            shift_flag_nibble=not args.strict_shift,
            clip_sprites=not args.wrap_sprites,
        ),
    )
    app = Chip8App(config)
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
