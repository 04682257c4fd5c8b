"""Convert framebuffer snapshots into scaled RGB images."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .palette import OCEAN, RGBColor, validate_palette


@dataclass
class RenderResult:
    """RGB image produced by :class:`Renderer` (3 bytes per pixel, row-major)."""

    width: int
    height: int
    pixels: bytes

    def get_pixel(self, x: int, y: int) -> RGBColor:
        offset = (y * self.width + x) * 3
        return (self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2])

    def to_surface(self):
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build surfaces") from exc
        return pygame.image.frombuffer(self.pixels, (self.width, self.height), "RGB")


class Renderer:
    """Scale a bit grid up by an integer factor using a two-colour palette."""

    def __init__(self, palette: Sequence[RGBColor] = OCEAN) -> None:
        background, foreground = validate_palette(palette)
        self._colors = (bytes(background), bytes(foreground))

    def render(self, rows: Sequence[bytes], *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        if not rows:
            raise ValueError("framebuffer snapshot is empty")

        width = len(rows[0]) * scale
        height = len(rows) * scale
        out = bytearray()
        for row in rows:
            line = b"".join(self._colors[1 if cell else 0] * scale for cell in row)
            out += line * scale
        return RenderResult(width=width, height=height, pixels=bytes(out))
