"""Unit tests for the interpreter memory."""

from __future__ import annotations

import pytest

from pychip8.bus import MAX_PROGRAM_SIZE, Memory, MemoryAccessError, ProgramSizeError


def test_store_and_load() -> None:
    memory = Memory()
    memory.store8(0x000, 0x12)
    memory.store8(0xFFF, 0x1FF)

    assert memory.load8(0x000) == 0x12
    assert memory.load8(0xFFF) == 0xFF


def test_load16_is_big_endian() -> None:
    memory = Memory()
    memory.write_block(0x200, b"\xAB\xCD")
    assert memory.load16(0x200) == 0xABCD


@pytest.mark.parametrize("address", [-1, 0x1000, 0x2000])
def test_out_of_range_access_raises(address: int) -> None:
    memory = Memory()
    with pytest.raises(MemoryAccessError):
        memory.load8(address)
    with pytest.raises(MemoryAccessError):
        memory.store8(address, 0)


def test_block_access_is_range_checked() -> None:
    memory = Memory()
    assert memory.read_block(0xFFE, 2) == b"\x00\x00"

    with pytest.raises(MemoryAccessError):
        memory.read_block(0xFFE, 3)
    with pytest.raises(MemoryAccessError):
        memory.write_block(0xFFF, b"\x01\x02")
    assert memory.load8(0xFFF) == 0


def test_load_program_size_limit() -> None:
    memory = Memory()
    memory.load_program(b"\x01" * MAX_PROGRAM_SIZE)

    with pytest.raises(ProgramSizeError):
        memory.load_program(b"\x02" * (MAX_PROGRAM_SIZE + 1))
    assert memory.load8(0x200) == 0x01


def test_clear_zeroes_memory() -> None:
    memory = Memory()
    memory.write_block(0x100, b"\xFF" * 16)
    memory.clear()
    assert memory.snapshot() == bytes(0x1000)


def test_invalid_length() -> None:
    with pytest.raises(MemoryAccessError):
        Memory(0)
