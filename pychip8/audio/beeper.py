"""Square-wave beeper driven by the sound timer."""

from __future__ import annotations

from array import array
import math
from typing import Optional

from pychip8.utils import debug_enabled, debug_log


class SquareWaveBeeper:
    """Play a looping band-limited square wave through pygame's mixer."""

    def __init__(
        self,
        *,
        frequency: float = 440.0,
        sample_rate: int = 44_100,
        volume: float = 0.35,
    ) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required for audio output") from exc

        if pygame.mixer.get_init() is None:
            raise RuntimeError("pygame mixer must be initialised before creating SquareWaveBeeper")
        if frequency <= 0.0:
            raise ValueError("frequency must be positive")

        self._pygame = pygame
        self._frequency = frequency
        self._sample_rate = max(1, sample_rate)
        self._volume = max(0.0, min(1.0, volume))
        self._channel: Optional[pygame.mixer.Channel] = None
        self._sound: Optional[pygame.mixer.Sound] = None

    # ------------------------------------------------------------------
    # AudioDevice API

    def start(self) -> None:
        if self.is_active():
            return
        if self._sound is None:
            self._sound = self._build_sound(self._frequency)
        channel = self._pygame.mixer.find_channel(True)
        if channel is None:
            if debug_enabled("audio"):
                debug_log("audio", "no_free_channel")
            return
        channel.play(self._sound, loops=-1)
        channel.set_volume(self._volume)
        self._channel = channel
        if debug_enabled("audio"):
            debug_log("audio", "tone_start freq=%.1f", self._frequency)

    def stop(self) -> None:
        if self._channel is None:
            return
        self._channel.stop()
        self._channel = None
        if debug_enabled("audio"):
            debug_log("audio", "tone_stop")

    def is_active(self) -> bool:
        return self._channel is not None

    def shutdown(self) -> None:
        """Stop any active tone and release the cached sample."""

        self.stop()
        self._sound = None

    # ------------------------------------------------------------------
    # Internals

    def _build_sound(self, frequency: float) -> "pygame.mixer.Sound":
        period_samples = max(32, int(round(self._sample_rate / frequency)))
        rank = int(((self._sample_rate / (2.0 * frequency)) + 1.0) / 2.0)
        rank = max(1, min(30, rank))

        buffer = array("h")
        amplitude = 12_000
        scale = (4.0 / math.pi) * amplitude
        for index in range(period_samples):
            phase = (2.0 * math.pi * index) / period_samples
            total = 0.0
            for harmonic in range(rank):
                k = 2 * harmonic + 1
                total += math.sin(k * phase) / k
            value = max(-amplitude, min(amplitude, total * scale))
            buffer.append(int(value))

        return self._pygame.mixer.Sound(buffer=buffer.tobytes())


__all__ = ["SquareWaveBeeper"]
