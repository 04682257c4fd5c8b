"""Flat 4 KiB memory for the CHIP-8 interpreter.

Every access is range checked against the 12-bit address space; reads and
writes outside ``[0, 4096)`` raise :class:`MemoryAccessError` instead of being
masked, so that corrupt programs surface as errors rather than silently
wrapping around into the glyph area.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START


class MemoryAccessError(Exception):
    """Raised when an address falls outside the interpreter's memory."""


class ProgramSizeError(MemoryAccessError):
    """Raised when a program image does not fit above ``PROGRAM_START``."""


@dataclass
class Memory:
    """Byte-addressable RAM block."""

    length: int = MEMORY_SIZE

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise MemoryAccessError("memory must have a positive length")
        self._data = bytearray(self.length)

    def _check(self, address: int, count: int = 1) -> None:
        if address < 0 or count < 0 or address + count > self.length:
            end = address + max(count, 1) - 1
            raise MemoryAccessError(
                f"access {address:#06x}-{end:#06x} outside memory 0x0000-{self.length - 1:#06x}"
            )

    def load8(self, address: int) -> int:
        self._check(address)
        return self._data[address]

    def store8(self, address: int, value: int) -> None:
        self._check(address)
        self._data[address] = value & 0xFF

    def load16(self, address: int) -> int:
        """Read a big-endian word (high byte first)."""

        self._check(address, 2)
        return (self._data[address] << 8) | self._data[address + 1]

    def read_block(self, address: int, count: int) -> bytes:
        self._check(address, count)
        return bytes(self._data[address : address + count])

    def write_block(self, address: int, data: Iterable[int]) -> None:
        payload = bytes(value & 0xFF for value in data)
        self._check(address, len(payload))
        self._data[address : address + len(payload)] = payload

    def clear(self) -> None:
        self._data[:] = bytes(self.length)

    def snapshot(self) -> bytes:
        return bytes(self._data)

    def load_program(self, program: bytes, start: int = PROGRAM_START) -> None:
        """Copy ``program`` into memory starting at ``start``."""

        room = self.length - start
        if len(program) > room:
            raise ProgramSizeError(
                f"program is {len(program)} bytes but only {room} fit at {start:#05x}"
            )
        self.write_block(start, program)
