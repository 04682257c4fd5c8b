"""Display helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .font import FONT_SET, FONT_START, GLYPH_BYTES, get_glyph, glyph_address
from .framebuffer import DISPLAY_HEIGHT, DISPLAY_WIDTH, Framebuffer
from .palette import MONOCHROME, OCEAN, validate_palette
from .renderer import RenderResult, Renderer

__all__ = [
    "FONT_SET",
    "FONT_START",
    "GLYPH_BYTES",
    "get_glyph",
    "glyph_address",
    "Framebuffer",
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",
    "Renderer",
    "RenderResult",
    "MONOCHROME",
    "OCEAN",
    "validate_palette",
]
