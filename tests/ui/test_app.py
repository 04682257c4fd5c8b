"""Tests for the frontend logic that does not need a window."""

from __future__ import annotations

import pytest

from pychip8.ui import AppConfig, Chip8App


def _write_program(tmp_path, data: bytes):
    path = tmp_path / "game.ch8"
    path.write_bytes(data)
    return path


def test_build_machine_loads_program(tmp_path) -> None:
    path = _write_program(tmp_path, b"\x00\xE0\x12\x02")
    app = Chip8App(AppConfig(program_path=path))

    machine = app.build_machine()

    assert app.machine is machine
    assert machine.interpreter.memory.read_block(0x200, 4) == b"\x00\xE0\x12\x02"


def test_build_machine_requires_program() -> None:
    with pytest.raises(RuntimeError):
        Chip8App(AppConfig()).build_machine()


def test_build_machine_reports_missing_file(tmp_path) -> None:
    app = Chip8App(AppConfig(program_path=tmp_path / "missing.ch8"))
    with pytest.raises(RuntimeError, match="not found"):
        app.build_machine()


def test_build_machine_reports_empty_file(tmp_path) -> None:
    app = Chip8App(AppConfig(program_path=_write_program(tmp_path, b"")))
    with pytest.raises(RuntimeError, match="Failed to load"):
        app.build_machine()


def test_step_frame_runs_configured_ticks(tmp_path) -> None:
    # CLS then spin
    path = _write_program(tmp_path, b"\x00\xE0\x12\x02")
    app = Chip8App(AppConfig(program_path=path, ticks_per_frame=3))
    machine = app.build_machine()

    assert app.step_frame() is True
    assert machine.interpreter.tick_count == 3


def test_step_frame_wraps_interpreter_errors(tmp_path) -> None:
    path = _write_program(tmp_path, b"\x00\xEE")
    app = Chip8App(AppConfig(program_path=path))
    app.build_machine()

    with pytest.raises(RuntimeError, match="halted at 0x200"):
        app.step_frame()


def test_key_events_reach_keypad(tmp_path) -> None:
    app = Chip8App(AppConfig(program_path=_write_program(tmp_path, b"\x12\x00")))
    machine = app.build_machine()

    app.handle_key("a", pressed=True)
    assert machine.keypad.is_key_pressed(0x7)

    app.handle_key("a", pressed=False)
    assert not machine.keypad.is_key_pressed(0x7)


def test_space_toggles_pause_and_f5_restarts(tmp_path) -> None:
    app = Chip8App(AppConfig(program_path=_write_program(tmp_path, b"\x60\x01\x12\x02")))
    machine = app.build_machine()
    app.step_frame()
    assert machine.interpreter.state.v[0] == 1

    app.handle_key("space", pressed=True)
    assert app.paused is True

    app.handle_key("f5", pressed=True)
    assert app.paused is False
    assert machine.interpreter.state.pc == 0x200
    assert machine.interpreter.state.v[0] == 0


@pytest.mark.parametrize("field", ["scale", "ticks_per_frame", "frame_rate"])
def test_config_rejects_non_positive_values(field: str) -> None:
    with pytest.raises(ValueError):
        AppConfig(**{field: 0})
