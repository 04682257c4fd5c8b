"""Audio device contract consumed by the interpreter's sound timer."""

from __future__ import annotations

from typing import Protocol

from pychip8.utils import debug_enabled, debug_log


class AudioDevice(Protocol):
    """Edge-triggered tone output: started while the sound timer runs."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def is_active(self) -> bool: ...


class SilentAudio:
    """Headless device that only records the tone state."""

    def __init__(self) -> None:
        self._active = False
        self.start_count = 0
        self.stop_count = 0

    def start(self) -> None:
        if self._active:
            return
        self._active = True
        self.start_count += 1
        if debug_enabled("audio"):
            debug_log("audio", "silent_start count=%d", self.start_count)

    def stop(self) -> None:
        if not self._active:
            return
        self._active = False
        self.stop_count += 1
        if debug_enabled("audio"):
            debug_log("audio", "silent_stop count=%d", self.stop_count)

    def is_active(self) -> bool:
        return self._active


__all__ = ["AudioDevice", "SilentAudio"]
