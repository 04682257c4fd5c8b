"""Audio output for the CHIP-8 sound timer."""

from .beeper import SquareWaveBeeper
from .device import AudioDevice, SilentAudio

__all__ = ["AudioDevice", "SilentAudio", "SquareWaveBeeper"]
