"""Input helpers for the CHIP-8 interpreter."""

from .keyboard import KEY_COUNT, KEY_MAP, KeyInput, Keypad

__all__ = ["Keypad", "KeyInput", "KEY_MAP", "KEY_COUNT"]
