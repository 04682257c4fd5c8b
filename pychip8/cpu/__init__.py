"""CHIP-8 interpreter core."""

from .core import (
    CPUError,
    Interpreter,
    MachineState,
    Quirks,
    StackOverflowError,
    StackUnderflowError,
    random_byte_source,
)
from .opcodes import Instruction, Op, decode, disassemble
from . import opcodes

__all__ = [
    "Interpreter",
    "MachineState",
    "Quirks",
    "CPUError",
    "StackUnderflowError",
    "StackOverflowError",
    "random_byte_source",
    "Instruction",
    "Op",
    "decode",
    "disassemble",
    "opcodes",
]
