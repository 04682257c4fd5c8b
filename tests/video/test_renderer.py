"""Unit tests for the framebuffer, glyph set and renderer."""

from __future__ import annotations

import pytest

from pychip8.video import (
    FONT_SET,
    MONOCHROME,
    Framebuffer,
    Renderer,
    get_glyph,
    glyph_address,
    validate_palette,
)

CANONICAL_GLYPHS = {
    0x0: (0xF0, 0x90, 0x90, 0x90, 0xF0),
    0x1: (0x20, 0x60, 0x20, 0x20, 0x70),
    0x2: (0xF0, 0x10, 0xF0, 0x80, 0xF0),
    0x3: (0xF0, 0x10, 0xF0, 0x10, 0xF0),
    0x4: (0x90, 0x90, 0xF0, 0x10, 0x10),
    0x5: (0xF0, 0x80, 0xF0, 0x10, 0xF0),
    0x6: (0xF0, 0x80, 0xF0, 0x90, 0xF0),
    0x7: (0xF0, 0x10, 0x20, 0x40, 0x40),
    0x8: (0xF0, 0x90, 0xF0, 0x90, 0xF0),
    0x9: (0xF0, 0x90, 0xF0, 0x10, 0xF0),
    0xA: (0xF0, 0x90, 0xF0, 0x90, 0x90),
    0xB: (0xE0, 0x90, 0xE0, 0x90, 0xE0),
    0xC: (0xF0, 0x80, 0x80, 0x80, 0xF0),
    0xD: (0xE0, 0x90, 0x90, 0x90, 0xE0),
    0xE: (0xF0, 0x80, 0xF0, 0x80, 0xF0),
    0xF: (0xF0, 0x80, 0xF0, 0x80, 0x80),
}


@pytest.mark.parametrize("digit", range(16))
def test_glyphs_match_canonical_bitmaps(digit: int) -> None:
    assert get_glyph(digit) == bytes(CANONICAL_GLYPHS[digit])
    address = glyph_address(digit)
    assert FONT_SET[address : address + 5] == bytes(CANONICAL_GLYPHS[digit])


def test_framebuffer_toggle_reports_prior_state() -> None:
    fb = Framebuffer()
    assert fb.toggle(3, 4) is False
    assert fb.get_pixel(3, 4) == 1
    assert fb.toggle(3, 4) is True
    assert fb.get_pixel(3, 4) == 0


def test_framebuffer_snapshot_is_detached() -> None:
    fb = Framebuffer()
    snapshot = fb.snapshot()
    fb.toggle(0, 0)

    assert snapshot[0][0] == 0
    assert len(snapshot) == 32
    assert all(len(row) == 64 for row in snapshot)


def test_render_single_pixel() -> None:
    renderer = Renderer(MONOCHROME)
    fb = Framebuffer()
    fb.toggle(1, 0)

    result = renderer.render(fb.snapshot())

    assert result.width == 64
    assert result.height == 32
    assert result.get_pixel(0, 0) == (0, 0, 0)
    assert result.get_pixel(1, 0) == (255, 255, 255)


def test_render_scale_factor() -> None:
    renderer = Renderer(MONOCHROME)
    fb = Framebuffer()
    fb.toggle(0, 0)

    result = renderer.render(fb.snapshot(), scale=2)

    assert (result.width, result.height) == (128, 64)
    assert result.get_pixel(1, 1) == (255, 255, 255)
    assert result.get_pixel(2, 0) == (0, 0, 0)
    assert result.get_pixel(0, 2) == (0, 0, 0)
    assert len(result.pixels) == 128 * 64 * 3


def test_render_rejects_bad_scale() -> None:
    with pytest.raises(ValueError):
        Renderer().render(Framebuffer().snapshot(), scale=0)


def test_validate_palette() -> None:
    assert validate_palette([(0, 0, 256), (1, 2, 3)]) == ((0, 0, 0), (1, 2, 3))
    with pytest.raises(ValueError):
        validate_palette([(0, 0, 0)])
    with pytest.raises(ValueError):
        validate_palette([(0, 0, 0), (1, 2)])


def test_palette_order_is_off_then_on() -> None:
    rows = [bytes((0, 1))]
    result = Renderer(((1, 2, 3), (4, 5, 6))).render(rows)

    assert result.get_pixel(0, 0) == (1, 2, 3)
    assert result.get_pixel(1, 0) == (4, 5, 6)
