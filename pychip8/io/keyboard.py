"""16-key hexadecimal keypad."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Protocol

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16


class KeyInput(Protocol):
    """Input contract queried synchronously by the key instructions."""

    def is_key_pressed(self, key: int) -> bool: ...


# Host key name -> keypad index. The physical layout
#   1 2 3 4        1 2 3 C
#   q w e r   ->   4 5 6 D
#   a s d f        7 8 9 E
#   z x c v        A 0 B F
KEY_MAP: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


ALIAS_TABLE: Mapping[str, str] = {
    "[1]": "1",
    "[2]": "2",
    "[3]": "3",
    "[4]": "4",
}


@dataclass
class Keypad:
    """Pressed-state tracker for the 16 keypad keys."""

    _active: Dict[int, int] = field(default_factory=dict)

    def press(self, key_name: str) -> None:
        key = self.lookup(key_name)
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_press=%s", key_name)
            return
        self.press_key(key)

    def release(self, key_name: str) -> None:
        key = self.lookup(key_name)
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_release=%s", key_name)
            return
        self.release_key(key)

    def press_key(self, key: int) -> None:
        _check_key(key)
        count = self._active.get(key, 0)
        self._active[key] = count + 1
        if debug_enabled("input"):
            debug_log("input", "key_press key=%x count=%d", key, count + 1)

    def release_key(self, key: int) -> None:
        _check_key(key)
        count = self._active.get(key, 0)
        if count == 0:
            return
        if count == 1:
            self._active.pop(key)
        else:
            self._active[key] = count - 1
        if debug_enabled("input"):
            debug_log("input", "key_release key=%x count=%d", key, self._active.get(key, 0))

    def is_key_pressed(self, key: int) -> bool:
        return self._active.get(key, 0) > 0

    def reset(self) -> None:
        self._active.clear()

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self.is_key_pressed(key) for key in range(KEY_COUNT))

    @staticmethod
    def lookup(key_name: str) -> int | None:
        name = key_name.lower()
        name = ALIAS_TABLE.get(name, name)
        return KEY_MAP.get(name)


def _check_key(key: int) -> None:
    if not 0 <= key < KEY_COUNT:
        raise ValueError(f"keypad index out of range: {key}")


__all__ = ["Keypad", "KeyInput", "KEY_MAP", "KEY_COUNT"]
