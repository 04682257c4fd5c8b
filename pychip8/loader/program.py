"""Program image loading for the CHIP-8 interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from pychip8.bus import MAX_PROGRAM_SIZE, PROGRAM_START


class ProgramFormatError(RuntimeError):
    """Raised when a program image cannot be used."""


@dataclass
class ProgramImage:
    """Raw program bytes alongside where they came from."""

    data: bytes
    name: str = ""
    start: int = PROGRAM_START

    @property
    def end(self) -> int:
        return self.start + len(self.data) - 1

    def __len__(self) -> int:
        return len(self.data)


def load_program(stream: BinaryIO, *, name: str = "") -> ProgramImage:
    """Read a raw program image from ``stream``."""

    # One extra byte is enough to tell that the image is too large.
    data = stream.read(MAX_PROGRAM_SIZE + 1)
    if not data:
        raise ProgramFormatError(f"program {name or '<stream>'} is empty")
    if len(data) > MAX_PROGRAM_SIZE:
        raise ProgramFormatError(
            f"program {name or '<stream>'} exceeds {MAX_PROGRAM_SIZE} bytes"
        )
    return ProgramImage(data=bytes(data), name=name)


def load_program_from_path(path: Path) -> ProgramImage:
    """Load a program image from the filesystem."""

    with path.open("rb") as handle:
        return load_program(handle, name=path.stem)
