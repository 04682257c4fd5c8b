"""CHIP-8 interpreter with a pygame frontend.

The interpreter core lives in :mod:`pychip8.cpu`; the remaining subpackages
provide the memory, display, audio and keypad collaborators it talks to, plus
program loading and the pygame host loop used by ``run.py``.
"""

from __future__ import annotations

from . import audio, bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "audio",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]
