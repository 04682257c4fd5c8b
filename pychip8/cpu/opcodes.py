"""Instruction decoding for the CHIP-8 instruction set.

Decoding is a pure function of the 16-bit instruction word. The top nibble
selects the family; families with several members are resolved by a second
lookup on the low byte or the low nibble. Words that match nothing decode to
:attr:`Op.UNKNOWN`, which the interpreter executes as a two-byte no-op.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Mapping


class Op(Enum):
    """Decoded operation; the value names the interpreter handler."""

    CLS = "op_cls"
    RET = "op_ret"
    JP = "op_jp"
    CALL = "op_call"
    SE_VX_NN = "op_se_vx_nn"
    SNE_VX_NN = "op_sne_vx_nn"
    SE_VX_VY = "op_se_vx_vy"
    LD_VX_NN = "op_ld_vx_nn"
    ADD_VX_NN = "op_add_vx_nn"
    LD_VX_VY = "op_ld_vx_vy"
    OR = "op_or"
    AND = "op_and"
    XOR = "op_xor"
    ADD_VX_VY = "op_add_vx_vy"
    SUB = "op_sub"
    SHR = "op_shr"
    SUBN = "op_subn"
    SHL = "op_shl"
    SNE_VX_VY = "op_sne_vx_vy"
    LD_I = "op_ld_i"
    JP_V0 = "op_jp_v0"
    RND = "op_rnd"
    DRW = "op_drw"
    SKP = "op_skp"
    SKNP = "op_sknp"
    LD_VX_DT = "op_ld_vx_dt"
    LD_VX_K = "op_ld_vx_k"
    LD_DT = "op_ld_dt"
    LD_ST = "op_ld_st"
    ADD_I = "op_add_i"
    LD_F = "op_ld_f"
    LD_B = "op_ld_b"
    LD_MEM_VX = "op_ld_mem_vx"
    LD_VX_MEM = "op_ld_vx_mem"
    UNKNOWN = "op_unknown"

    @property
    def handler(self) -> str:
        return self.value


_FAMILY: Final[Mapping[int, Op]] = {
    0x1: Op.JP,
    0x2: Op.CALL,
    0x3: Op.SE_VX_NN,
    0x4: Op.SNE_VX_NN,
    0x5: Op.SE_VX_VY,
    0x6: Op.LD_VX_NN,
    0x7: Op.ADD_VX_NN,
    0x9: Op.SNE_VX_VY,
    0xA: Op.LD_I,
    0xB: Op.JP_V0,
    0xC: Op.RND,
    0xD: Op.DRW,
}

_BY_LOW_BYTE: Final[Mapping[int, Mapping[int, Op]]] = {
    0x0: {
        0xE0: Op.CLS,
        0xEE: Op.RET,
    },
    0xE: {
        0x9E: Op.SKP,
        0xA1: Op.SKNP,
    },
    0xF: {
        0x07: Op.LD_VX_DT,
        0x0A: Op.LD_VX_K,
        0x15: Op.LD_DT,
        0x18: Op.LD_ST,
        0x1E: Op.ADD_I,
        0x29: Op.LD_F,
        0x33: Op.LD_B,
        0x55: Op.LD_MEM_VX,
        0x65: Op.LD_VX_MEM,
    },
}

_BY_LOW_NIBBLE: Final[Mapping[int, Mapping[int, Op]]] = {
    0x8: {
        0x0: Op.LD_VX_VY,
        0x1: Op.OR,
        0x2: Op.AND,
        0x3: Op.XOR,
        0x4: Op.ADD_VX_VY,
        0x5: Op.SUB,
        0x6: Op.SHR,
        0x7: Op.SUBN,
        0xE: Op.SHL,
    },
}

_MNEMONICS: Final[Mapping[Op, str]] = {
    Op.CLS: "CLS",
    Op.RET: "RET",
    Op.JP: "JP {nnn:03X}",
    Op.CALL: "CALL {nnn:03X}",
    Op.SE_VX_NN: "SE V{x:X}, {nn:02X}",
    Op.SNE_VX_NN: "SNE V{x:X}, {nn:02X}",
    Op.SE_VX_VY: "SE V{x:X}, V{y:X}",
    Op.LD_VX_NN: "LD V{x:X}, {nn:02X}",
    Op.ADD_VX_NN: "ADD V{x:X}, {nn:02X}",
    Op.LD_VX_VY: "LD V{x:X}, V{y:X}",
    Op.OR: "OR V{x:X}, V{y:X}",
    Op.AND: "AND V{x:X}, V{y:X}",
    Op.XOR: "XOR V{x:X}, V{y:X}",
    Op.ADD_VX_VY: "ADD V{x:X}, V{y:X}",
    Op.SUB: "SUB V{x:X}, V{y:X}",
    Op.SHR: "SHR V{x:X}",
    Op.SUBN: "SUBN V{x:X}, V{y:X}",
    Op.SHL: "SHL V{x:X}",
    Op.SNE_VX_VY: "SNE V{x:X}, V{y:X}",
    Op.LD_I: "LD I, {nnn:03X}",
    Op.JP_V0: "JP V0, {nnn:03X}",
    Op.RND: "RND V{x:X}, {nn:02X}",
    Op.DRW: "DRW V{x:X}, V{y:X}, {n:X}",
    Op.SKP: "SKP V{x:X}",
    Op.SKNP: "SKNP V{x:X}",
    Op.LD_VX_DT: "LD V{x:X}, DT",
    Op.LD_VX_K: "LD V{x:X}, K",
    Op.LD_DT: "LD DT, V{x:X}",
    Op.LD_ST: "LD ST, V{x:X}",
    Op.ADD_I: "ADD I, V{x:X}",
    Op.LD_F: "LD F, V{x:X}",
    Op.LD_B: "LD B, V{x:X}",
    Op.LD_MEM_VX: "LD [I], V{x:X}",
    Op.LD_VX_MEM: "LD V{x:X}, [I]",
    Op.UNKNOWN: "DW {word:04X}",
}


@dataclass(frozen=True)
class Instruction:
    """A decoded instruction word and its operand fields."""

    word: int
    op: Op
    nnn: int
    nn: int
    n: int
    x: int
    y: int

    def __post_init__(self) -> None:
        if not 0 <= self.word <= 0xFFFF:
            raise ValueError(f"instruction word out of range: {self.word}")

    @property
    def family(self) -> int:
        return self.word >> 12

    @property
    def mnemonic(self) -> str:
        return _MNEMONICS[self.op].format(
            word=self.word, nnn=self.nnn, nn=self.nn, n=self.n, x=self.x, y=self.y
        )


def decode(word: int) -> Instruction:
    """Split ``word`` into its fields and resolve the operation."""

    word &= 0xFFFF
    family = word >> 12
    nn = word & 0x00FF
    n = word & 0x000F

    op = _FAMILY.get(family)
    if op is None:
        if family in _BY_LOW_BYTE:
            op = _BY_LOW_BYTE[family].get(nn, Op.UNKNOWN)
        elif family in _BY_LOW_NIBBLE:
            op = _BY_LOW_NIBBLE[family].get(n, Op.UNKNOWN)
        else:  # pragma: no cover - every family is covered by a table
            op = Op.UNKNOWN

    return Instruction(
        word=word,
        op=op,
        nnn=word & 0x0FFF,
        nn=nn,
        n=n,
        x=(word & 0x0F00) >> 8,
        y=(word & 0x00F0) >> 4,
    )


def disassemble(program: bytes, origin: int = 0x200) -> list[str]:
    """Render ``program`` as one ``addr: word mnemonic`` line per word."""

    lines: list[str] = []
    for offset in range(0, len(program) - 1, 2):
        word = (program[offset] << 8) | program[offset + 1]
        instruction = decode(word)
        lines.append(f"{origin + offset:03X}: {word:04X}  {instruction.mnemonic}")
    if len(program) % 2:
        lines.append(f"{origin + len(program) - 1:03X}: {program[-1]:02X}    DB {program[-1]:02X}")
    return lines
