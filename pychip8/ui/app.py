"""Pygame frontend for the CHIP-8 interpreter."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pychip8.audio import AudioDevice, SilentAudio, SquareWaveBeeper
from pychip8.bus import MemoryAccessError
from pychip8.cpu import CPUError, Quirks
from pychip8.loader import ProgramFormatError, load_program_from_path
from pychip8.system import Machine, MachineConfig, create_machine
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import DISPLAY_HEIGHT, DISPLAY_WIDTH, OCEAN, Renderer

_TRACE_CAPACITY = 512


@dataclass
class AppConfig:
    """Configuration for the pygame frontend."""

    program_path: Optional[Path] = None
    scale: int = 10
    ticks_per_frame: int = 10
    frame_rate: int = 60
    fullscreen: bool = False
    mute: bool = False
    seed: int | None = None
    quirks: Quirks = field(default_factory=Quirks)

    def __post_init__(self) -> None:
        if self.scale <= 0:
            raise ValueError("scale must be positive")
        if self.ticks_per_frame <= 0:
            raise ValueError("ticks_per_frame must be positive")
        if self.frame_rate <= 0:
            raise ValueError("frame_rate must be positive")


class Chip8App:
    """Drive a :class:`Machine` from the pygame event loop."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._running = False
        self._paused = False
        self._machine: Machine | None = None
        self._beeper: SquareWaveBeeper | None = None
        self._pygame = None
        self._perf_enabled = debug_enabled("perf")
        self._perf_frame = 0
        self._trace_enabled = debug_enabled("trace")

    @property
    def machine(self) -> Machine | None:
        return self._machine

    @property
    def paused(self) -> bool:
        return self._paused

    def build_machine(self, audio: AudioDevice | None = None) -> Machine:
        """Load the configured program and assemble a machine around it."""

        if self._config.program_path is None:
            raise RuntimeError("a program image is required; pass a path to a .ch8 file")
        try:
            image = load_program_from_path(self._config.program_path)
        except FileNotFoundError as exc:
            raise RuntimeError(f"Program file not found: {self._config.program_path}") from exc
        except ProgramFormatError as exc:
            raise RuntimeError(f"Failed to load program {self._config.program_path}: {exc}") from exc

        machine = create_machine(
            MachineConfig(
                program=image.data,
                quirks=self._config.quirks,
                seed=self._config.seed,
                audio=audio,
                trace_capacity=_TRACE_CAPACITY if self._trace_enabled else 0,
            )
        )
        self._machine = machine
        return machine

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        if not self._config.mute:
            pygame.mixer.pre_init(44_100, -16, 1, 512)
        pygame.init()
        pygame.display.set_caption("CHIP-8")
        self._pygame = pygame

        audio = self._open_audio(pygame)
        machine = self.build_machine(audio)
        renderer = Renderer(OCEAN)

        scale = self._config.scale
        flags = pygame.FULLSCREEN if self._config.fullscreen else 0
        screen = pygame.display.set_mode((DISPLAY_WIDTH * scale, DISPLAY_HEIGHT * scale), flags)
        clock = pygame.time.Clock()

        self._running = True
        self._present(screen, renderer, machine)
        try:
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        self.handle_key(pygame.key.name(event.key), pressed=True)
                    elif event.type == pygame.KEYUP:
                        self.handle_key(pygame.key.name(event.key), pressed=False)

                if not self._paused:
                    frame_start = time.perf_counter()
                    if self.step_frame():
                        self._present(screen, renderer, machine)
                    if self._perf_enabled:
                        self._report_perf(time.perf_counter() - frame_start)

                clock.tick(self._config.frame_rate)
        finally:
            if self._beeper is not None:
                self._beeper.shutdown()
            pygame.quit()

    def step_frame(self) -> bool:
        """Run one frame's worth of ticks; return whether a redraw is due."""

        machine = self._machine
        if machine is None:
            raise RuntimeError("machine not initialised")
        try:
            return machine.run_frame(self._config.ticks_per_frame)
        except (CPUError, MemoryAccessError) as exc:
            if machine.trace is not None:
                machine.trace.dump("trace", limit=32)
            pc = machine.interpreter.state.pc
            raise RuntimeError(f"program halted at {pc:#05x}: {exc}") from exc

    def handle_key(self, name: str, *, pressed: bool) -> None:
        """Route a host key event to the keypad or to a frontend command."""

        machine = self._machine
        if machine is None:
            return
        if debug_enabled("input"):
            debug_log("input", "event=%s pressed=%s", name, pressed)

        if pressed and name == "escape":
            self._running = False
        elif pressed and name == "space":
            self._paused = not self._paused
            if self._paused and machine.audio.is_active():
                machine.audio.stop()
        elif pressed and name == "f5":
            machine.restart()
            self._paused = False
        elif pressed:
            machine.keypad.press(name)
        else:
            machine.keypad.release(name)

    def _open_audio(self, pygame) -> AudioDevice:
        if self._config.mute or pygame.mixer.get_init() is None:
            if debug_enabled("audio"):
                debug_log("audio", "using silent audio device")
            return SilentAudio()
        try:
            self._beeper = SquareWaveBeeper(sample_rate=pygame.mixer.get_init()[0])
        except RuntimeError as exc:
            if debug_enabled("audio"):
                debug_log("audio", "beeper_init_failed=%s", exc)
            return SilentAudio()
        return self._beeper

    def _present(self, screen, renderer: Renderer, machine: Machine) -> None:
        frame = renderer.render(machine.interpreter.framebuffer(), scale=self._config.scale)
        screen.blit(frame.to_surface(), (0, 0))
        self._pygame.display.flip()
        machine.interpreter.acknowledge_redraw()

    def _report_perf(self, duration: float) -> None:
        self._perf_frame += 1
        debug_log(
            "perf",
            "frame=%d ticks=%d frame_ms=%.3f",
            self._perf_frame,
            self._config.ticks_per_frame,
            duration * 1000.0,
        )
