"""Category-filtered debug output controlled by ``CHIP8_DEBUG``.

Set ``CHIP8_DEBUG`` to a comma separated list of categories, or ``all``:

``cpu``    program loads, executed instructions and ignored opcodes
``input``  keypad presses, releases and unmapped host keys
``audio``  beeper start/stop and mixer failures
``trace``  recent instruction trace, dumped when a program halts
``perf``   frame timing reported by the pygame frontend
"""

from __future__ import annotations

import os
from typing import Iterable

ENV_VAR = "CHIP8_DEBUG"

_CATEGORIES: set[str] | None = None


def _load_categories() -> set[str]:
    global _CATEGORIES
    if _CATEGORIES is not None:
        return _CATEGORIES
    value = os.environ.get(ENV_VAR, "")
    parts: Iterable[str] = (part.strip().lower() for part in value.split(","))
    _CATEGORIES = {part for part in parts if part}
    return _CATEGORIES


def reload_categories() -> None:
    """Forget the cached categories so the next check re-reads the environment."""

    global _CATEGORIES
    _CATEGORIES = None


def debug_enabled(category: str | None = None) -> bool:
    """True when ``category`` (or any category, for ``None``) is switched on."""

    categories = _load_categories()
    if not categories:
        return False
    if category is None or "all" in categories:
        return True
    return category.lower() in categories


def debug_log(category: str, message: str, *args) -> None:
    """Print ``message % args`` as ``[CHIP8][category] ...`` when enabled."""

    if not debug_enabled(category):
        return
    if args:
        try:
            message = message % args
        except (TypeError, ValueError):
            message = f"{message} {args!r}"
    print(f"[CHIP8][{category}] {message}")
