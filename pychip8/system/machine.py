"""CHIP-8 machine assembly."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from pychip8.audio import AudioDevice, SilentAudio
from pychip8.cpu import Interpreter, Quirks, random_byte_source
from pychip8.cpu.core import DEFAULT_STACK_LIMIT, RandomSource
from pychip8.io import Keypad
from pychip8.utils import TraceRecorder


@dataclass
class MachineConfig:
    """Runtime configuration for a CHIP-8 machine."""

    program: Optional[bytes] = None
    quirks: Quirks = field(default_factory=Quirks)
    stack_limit: int | None = DEFAULT_STACK_LIMIT
    seed: int | None = None
    random_source: Optional[RandomSource] = None
    audio: Optional[AudioDevice] = None
    keypad: Optional[Keypad] = None
    trace_capacity: int = 0


@dataclass
class Machine:
    """Interpreter together with the host devices it talks to."""

    interpreter: Interpreter
    keypad: Keypad
    audio: AudioDevice
    program: Optional[bytes] = None
    trace: TraceRecorder | None = None

    def run_frame(self, ticks: int) -> bool:
        """Run ``ticks`` instructions and report whether the screen needs redrawing."""

        interpreter = self.interpreter
        for _ in range(ticks):
            try:
                interpreter.tick()
            except Exception:
                if self.trace is not None:
                    self._record(interpreter, note="failed")
                raise
            if self.trace is not None:
                self._record(interpreter)
        return interpreter.draw_flag

    def restart(self) -> None:
        """Reset the interpreter and reload the current program, if any."""

        self.interpreter.reset()
        self.keypad.reset()
        if self.audio.is_active():
            self.audio.stop()
        if self.program is not None:
            self.interpreter.load(self.program)
        if self.trace is not None:
            self.trace.clear()

    def _record(self, interpreter: Interpreter, note: str = "") -> None:
        instruction = interpreter.last_instruction
        self.trace.record_step(
            interpreter.state,
            None if instruction is None else instruction.word,
            mnemonic="" if instruction is None else instruction.mnemonic,
            note=note,
        )


def create_machine(config: MachineConfig) -> Machine:
    """Instantiate a CHIP-8 machine and load the configured program."""

    keypad = config.keypad if config.keypad is not None else Keypad()
    audio = config.audio if config.audio is not None else SilentAudio()
    random_source = config.random_source or random_byte_source(config.seed)

    interpreter = Interpreter(
        keypad,
        audio,
        random_source=random_source,
        quirks=config.quirks,
        stack_limit=config.stack_limit,
    )
    if config.program is not None:
        interpreter.load(config.program)

    trace = TraceRecorder(config.trace_capacity) if config.trace_capacity > 0 else None

    return Machine(
        interpreter=interpreter,
        keypad=keypad,
        audio=audio,
        program=config.program,
        trace=trace,
    )
