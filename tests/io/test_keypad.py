"""Tests for the hexadecimal keypad."""

from __future__ import annotations

import pytest

from pychip8.io import KEY_MAP, Keypad


def test_key_down_and_up() -> None:
    keypad = Keypad()

    keypad.press("w")
    assert keypad.is_key_pressed(0x5)

    keypad.release("w")
    assert not keypad.is_key_pressed(0x5)


def test_layout_covers_all_sixteen_keys() -> None:
    assert sorted(KEY_MAP.values()) == list(range(16))


def test_names_are_case_insensitive() -> None:
    keypad = Keypad()
    keypad.press("V")
    assert keypad.is_key_pressed(0xF)


def test_unmapped_keys_are_ignored() -> None:
    keypad = Keypad()
    keypad.press("p")
    keypad.release("p")
    assert not any(keypad.snapshot())


def test_repeated_presses_are_counted() -> None:
    keypad = Keypad()
    keypad.press("1")
    keypad.press("[1]")

    keypad.release("1")
    assert keypad.is_key_pressed(0x1)

    keypad.release("[1]")
    assert not keypad.is_key_pressed(0x1)


def test_out_of_range_queries_report_released() -> None:
    keypad = Keypad()
    assert keypad.is_key_pressed(0x15) is False

    with pytest.raises(ValueError):
        keypad.press_key(16)


def test_release_without_press_is_ignored() -> None:
    keypad = Keypad()
    keypad.release("x")
    keypad.press("x")

    assert keypad.is_key_pressed(0x0) is True

    keypad.release("x")
    assert keypad.is_key_pressed(0x0) is False


def test_reset_clears_state() -> None:
    keypad = Keypad()
    keypad.press("q")
    keypad.reset()
    assert keypad.snapshot() == (False,) * 16
