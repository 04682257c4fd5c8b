"""CHIP-8 interpreter core.

One :meth:`Interpreter.tick` fetches the word at the program counter, decodes
it, runs the matching handler and then steps the delay and sound timers.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Optional

from pychip8.audio import AudioDevice, SilentAudio
from pychip8.bus import Memory, PROGRAM_START
from pychip8.io import KEY_COUNT, KeyInput, Keypad
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import FONT_SET, FONT_START, Framebuffer, glyph_address

from .opcodes import Instruction, decode

REGISTER_COUNT = 16
FLAG_REGISTER = 0xF
DEFAULT_STACK_LIMIT = 16

RandomSource = Callable[[], int]


class CPUError(Exception):
    """Base error for interpreter failures."""


class StackUnderflowError(CPUError):
    """Raised when a subroutine return finds the call stack empty."""


class StackOverflowError(CPUError):
    """Raised when a subroutine call exceeds the configured stack depth."""


@dataclass(frozen=True)
class Quirks:
    """Behaviour switches where CHIP-8 interpreters historically disagree.

    ``shift_flag_nibble`` stores ``Vx & 0x0F`` (right) or ``Vx & 0xF0`` (left)
    in VF instead of the bit shifted out. ``clip_sprites`` clamps pixels that
    fall off the display to the last row/column instead of wrapping them.

    Not a switch: arithmetic with VF as the target always leaves the flag in
    VF, where interpreters that set VF before the result leave the result.
    """

    shift_flag_nibble: bool = True
    clip_sprites: bool = True


@dataclass
class MachineState:
    """Register file, call stack and timers."""

    pc: int = PROGRAM_START
    i: int = PROGRAM_START
    v: bytearray = field(default_factory=lambda: bytearray(REGISTER_COUNT))
    stack: list[int] = field(default_factory=list)
    delay_timer: int = 0
    sound_timer: int = 0


def random_byte_source(seed: int | None = None) -> RandomSource:
    """Return a callable drawing bytes from a (optionally seeded) generator."""

    rng = random.Random(seed)
    return lambda: rng.getrandbits(8)


class Interpreter:
    """Fetch/decode/execute loop over an owned :class:`MachineState`."""

    def __init__(
        self,
        keypad: Optional[KeyInput] = None,
        audio: Optional[AudioDevice] = None,
        *,
        random_source: Optional[RandomSource] = None,
        quirks: Optional[Quirks] = None,
        stack_limit: int | None = DEFAULT_STACK_LIMIT,
    ) -> None:
        if stack_limit is not None and stack_limit <= 0:
            raise ValueError("stack_limit must be positive or None")
        self.keypad: KeyInput = keypad if keypad is not None else Keypad()
        self.audio: AudioDevice = audio if audio is not None else SilentAudio()
        self.random_source = random_source or random_byte_source()
        self.quirks = quirks or Quirks()
        self.stack_limit = stack_limit
        self.memory = Memory()
        self.display = Framebuffer()
        self.state = MachineState()
        self.draw_flag = False
        self.tick_count = 0
        self.last_instruction: Instruction | None = None
        self.reset()

    @classmethod
    def create(cls) -> "Interpreter":
        return cls()

    def reset(self) -> None:
        """Restore the power-on state: glyphs resident, registers and screen clear."""

        self.state = MachineState()
        self.memory.clear()
        self.memory.write_block(FONT_START, FONT_SET)
        self.display.clear()
        self.draw_flag = False
        self.tick_count = 0
        self.last_instruction = None

    def load(self, program: bytes) -> None:
        """Copy ``program`` into memory at ``0x200``."""

        self.memory.load_program(bytes(program), PROGRAM_START)
        if debug_enabled("cpu"):
            debug_log("cpu", "loaded %d bytes at %03x", len(program), PROGRAM_START)

    def framebuffer(self) -> tuple[bytes, ...]:
        return self.display.snapshot()

    def acknowledge_redraw(self) -> None:
        """Clear the redraw flag once the host has presented the frame."""

        self.draw_flag = False

    def tick(self) -> None:
        """Execute one instruction, then step the timers."""

        pc_before = self.state.pc
        instruction = decode(self.memory.load16(pc_before))
        self.last_instruction = instruction
        if debug_enabled("cpu"):
            debug_log("cpu", "pc=%03x op=%04x %s", pc_before, instruction.word, instruction.mnemonic)

        handler: Callable[[Instruction], None] = getattr(self, instruction.op.handler)
        handler(instruction)
        self.tick_count += 1
        self._step_timers()

    # ------------------------------------------------------------------
    # Instruction handlers

    def op_unknown(self, instruction: Instruction) -> None:
        if debug_enabled("cpu"):
            debug_log("cpu", "ignored opcode %04x", instruction.word)
        self._next()

    def op_cls(self, _: Instruction) -> None:
        self.display.clear()
        self.draw_flag = True
        self._next()

    def op_ret(self, _: Instruction) -> None:
        if not self.state.stack:
            raise StackUnderflowError(f"return with empty call stack at {self.state.pc:#05x}")
        self.state.pc = self.state.stack.pop()

    def op_jp(self, instruction: Instruction) -> None:
        self.state.pc = instruction.nnn

    def op_call(self, instruction: Instruction) -> None:
        if self.stack_limit is not None and len(self.state.stack) >= self.stack_limit:
            raise StackOverflowError(
                f"call to {instruction.nnn:#05x} exceeds stack depth {self.stack_limit}"
            )
        self.state.stack.append(self.state.pc + 2)
        self.state.pc = instruction.nnn

    def op_se_vx_nn(self, instruction: Instruction) -> None:
        self._skip_if(self.state.v[instruction.x] == instruction.nn)

    def op_sne_vx_nn(self, instruction: Instruction) -> None:
        self._skip_if(self.state.v[instruction.x] != instruction.nn)

    def op_se_vx_vy(self, instruction: Instruction) -> None:
        v = self.state.v
        self._skip_if(v[instruction.x] == v[instruction.y])

    def op_sne_vx_vy(self, instruction: Instruction) -> None:
        v = self.state.v
        self._skip_if(v[instruction.x] != v[instruction.y])

    def op_ld_vx_nn(self, instruction: Instruction) -> None:
        self._set_v(instruction.x, instruction.nn)

    def op_add_vx_nn(self, instruction: Instruction) -> None:
        self._set_v(instruction.x, self.state.v[instruction.x] + instruction.nn)

    def op_ld_vx_vy(self, instruction: Instruction) -> None:
        self._set_v(instruction.x, self.state.v[instruction.y])

    def op_or(self, instruction: Instruction) -> None:
        v = self.state.v
        self._set_v(instruction.x, v[instruction.x] | v[instruction.y])

    def op_and(self, instruction: Instruction) -> None:
        v = self.state.v
        self._set_v(instruction.x, v[instruction.x] & v[instruction.y])

    def op_xor(self, instruction: Instruction) -> None:
        v = self.state.v
        self._set_v(instruction.x, v[instruction.x] ^ v[instruction.y])

    def op_add_vx_vy(self, instruction: Instruction) -> None:
        vx, vy = self.state.v[instruction.x], self.state.v[instruction.y]
        total = vx + vy
        self._set_v_with_flag(instruction.x, total, 1 if total > 0xFF else 0)

    def op_sub(self, instruction: Instruction) -> None:
        vx, vy = self.state.v[instruction.x], self.state.v[instruction.y]
        self._set_v_with_flag(instruction.x, vx - vy, 0 if vy > vx else 1)

    def op_subn(self, instruction: Instruction) -> None:
        vx, vy = self.state.v[instruction.x], self.state.v[instruction.y]
        self._set_v_with_flag(instruction.x, vy - vx, 0 if vy < vx else 1)

    def op_shr(self, instruction: Instruction) -> None:
        vx = self.state.v[instruction.x]
        flag = vx & 0x0F if self.quirks.shift_flag_nibble else vx & 0x01
        self._set_v_with_flag(instruction.x, vx >> 1, flag)

    def op_shl(self, instruction: Instruction) -> None:
        vx = self.state.v[instruction.x]
        flag = vx & 0xF0 if self.quirks.shift_flag_nibble else (vx >> 7) & 0x01
        self._set_v_with_flag(instruction.x, vx << 1, flag)

    def op_ld_i(self, instruction: Instruction) -> None:
        self._set_i(instruction.nnn)

    def op_jp_v0(self, instruction: Instruction) -> None:
        self.state.pc = instruction.nnn + self.state.v[0]

    def op_rnd(self, instruction: Instruction) -> None:
        self._set_v(instruction.x, instruction.nn & self.random_source())

    def op_drw(self, instruction: Instruction) -> None:
        v = self.state.v
        sprite = self.memory.read_block(self.state.i, instruction.n)
        collided = self._blit(v[instruction.x], v[instruction.y], sprite)
        v[FLAG_REGISTER] = 1 if collided else 0
        self.draw_flag = True
        self._next()

    def op_skp(self, instruction: Instruction) -> None:
        self._skip_if(self._key_pressed(self.state.v[instruction.x]))

    def op_sknp(self, instruction: Instruction) -> None:
        self._skip_if(not self._key_pressed(self.state.v[instruction.x]))

    def op_ld_vx_dt(self, instruction: Instruction) -> None:
        self._set_v(instruction.x, self.state.delay_timer)

    def op_ld_vx_k(self, instruction: Instruction) -> None:
        # Leaving pc untouched re-fetches this instruction on the next tick.
        for key in range(KEY_COUNT):
            if self.keypad.is_key_pressed(key):
                self._set_v(instruction.x, key)
                return

    def op_ld_dt(self, instruction: Instruction) -> None:
        self.state.delay_timer = self.state.v[instruction.x]
        self._next()

    def op_ld_st(self, instruction: Instruction) -> None:
        self.state.sound_timer = self.state.v[instruction.x]
        self._next()

    def op_add_i(self, instruction: Instruction) -> None:
        self._set_i(self.state.i + self.state.v[instruction.x])

    def op_ld_f(self, instruction: Instruction) -> None:
        self._set_i(glyph_address(self.state.v[instruction.x]))

    def op_ld_b(self, instruction: Instruction) -> None:
        value = self.state.v[instruction.x]
        self.memory.write_block(self.state.i, (value // 100, (value // 10) % 10, value % 10))
        self._next()

    def op_ld_mem_vx(self, instruction: Instruction) -> None:
        self.memory.write_block(self.state.i, self.state.v[: instruction.x + 1])
        self._next()

    def op_ld_vx_mem(self, instruction: Instruction) -> None:
        count = instruction.x + 1
        self.state.v[:count] = self.memory.read_block(self.state.i, count)
        self._next()

    # ------------------------------------------------------------------
    # Helpers

    def _next(self) -> None:
        self.state.pc += 2

    def _skip_if(self, condition: bool) -> None:
        self.state.pc += 4 if condition else 2

    def _set_v(self, index: int, value: int) -> None:
        self.state.v[index] = value & 0xFF
        self._next()

    def _set_v_with_flag(self, index: int, value: int, flag: int) -> None:
        # Result first, then VF: with x == F the flag is what remains. Some
        # interpreters write VF first and keep the result there instead.
        self.state.v[index] = value & 0xFF
        self.state.v[FLAG_REGISTER] = flag & 0xFF
        self._next()

    def _set_i(self, value: int) -> None:
        self.state.i = value & 0xFFFF
        self._next()

    def _key_pressed(self, key: int) -> bool:
        return self.keypad.is_key_pressed(key)

    def _blit(self, origin_x: int, origin_y: int, sprite: bytes) -> bool:
        width, height = self.display.width, self.display.height
        clip = self.quirks.clip_sprites
        collided = False
        for row, bits in enumerate(sprite):
            for column in range(8):
                if not bits & (0x80 >> column):
                    continue
                x = origin_x + column
                y = origin_y + row
                if clip:
                    x = min(x, width - 1)
                    y = min(y, height - 1)
                else:
                    x %= width
                    y %= height
                if self.display.toggle(x, y):
                    collided = True
        return collided

    def _step_timers(self) -> None:
        state = self.state
        if state.delay_timer > 0:
            state.delay_timer -= 1

        if state.sound_timer > 0:
            if not self.audio.is_active():
                self.audio.start()
            state.sound_timer -= 1
            if state.sound_timer == 0:
                self.audio.stop()
