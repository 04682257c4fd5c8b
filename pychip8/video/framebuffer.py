"""Monochrome 64x32 framebuffer."""

from __future__ import annotations

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32


class Framebuffer:
    """Grid of single-bit pixels stored row-major as one bytearray per row."""

    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("framebuffer dimensions must be positive")
        self.width = width
        self.height = height
        self._rows = [bytearray(width) for _ in range(height)]

    def clear(self) -> None:
        for row in self._rows:
            row[:] = bytes(self.width)

    def get_pixel(self, x: int, y: int) -> int:
        return self._rows[y][x]

    def toggle(self, x: int, y: int) -> bool:
        """XOR the pixel at ``(x, y)`` with 1 and return whether it was set."""

        row = self._rows[y]
        was_set = row[x] == 1
        row[x] ^= 1
        return was_set

    def lit_count(self) -> int:
        return sum(sum(row) for row in self._rows)

    def snapshot(self) -> tuple[bytes, ...]:
        return tuple(bytes(row) for row in self._rows)
