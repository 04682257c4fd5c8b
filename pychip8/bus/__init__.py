"""Memory bus for the CHIP-8 interpreter."""

from .memory import (
    MAX_PROGRAM_SIZE,
    MEMORY_SIZE,
    PROGRAM_START,
    Memory,
    MemoryAccessError,
    ProgramSizeError,
)

__all__ = [
    "Memory",
    "MemoryAccessError",
    "ProgramSizeError",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "MAX_PROGRAM_SIZE",
]
