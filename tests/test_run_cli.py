"""Tests for the ``run.py`` command-line entry point."""

from __future__ import annotations

import pytest

import run


def test_parser_defaults(tmp_path) -> None:
    args = run.build_arg_parser().parse_args([str(tmp_path / "game.ch8")])

    assert args.scale == 10
    assert args.ticks_per_frame == 10
    assert args.fps == 60
    assert args.mute is False
    assert args.seed is None
    assert args.wrap_sprites is False
    assert args.strict_shift is False


def test_missing_program_is_an_error(tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run.main([str(tmp_path / "missing.ch8")])
    assert excinfo.value.code == 2


def test_non_positive_scale_is_an_error(tmp_path) -> None:
    path = tmp_path / "game.ch8"
    path.write_bytes(b"\x12\x00")
    with pytest.raises(SystemExit):
        run.main([str(path), "--scale", "0"])


def test_disassemble_prints_listing(tmp_path, capsys) -> None:
    path = tmp_path / "game.ch8"
    path.write_bytes(b"\x00\xE0\x12\x00")

    assert run.main([str(path), "--disassemble"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out == ["200: 00E0  CLS", "202: 1200  JP 200"]


def test_disassemble_reports_empty_program(tmp_path, capsys) -> None:
    path = tmp_path / "empty.ch8"
    path.write_bytes(b"")

    with pytest.raises(SystemExit) as excinfo:
        run.main([str(path), "--disassemble"])

    assert excinfo.value.code == 1
    assert "empty" in capsys.readouterr().err
