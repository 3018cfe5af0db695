# src/mips_sim/encoding.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from .instructions import Instruction, RegisterOp, ImmediateArith, ImmediateMem, Jump
from .isa import OP_R, FUNCT_TO_MNEMONIC, OPCODE_TO_MNEMONIC, spec
from .utils import u32, bits, sign_extend, is_signed_nbit, is_unsigned_nbit
from .diagnostics import Diagnostic, parameter_error

# Layout clásico de 32 bits:
#   R: opcode(6)=0 | rs(5) | rt(5) | rd(5) | shamt(5) | funct(6)
#   I: opcode(6)   | rs(5) | rt(5) | imm(16)
#   J: opcode(6)   | address(26)

@dataclass(frozen=True)
class EncodeResult:
    word: Optional[int]
    diagnostics: List[Diagnostic] = field(default_factory=list)

# ---------------- Helpers de empaquetado de bits ----------------

def _pack_R(rs: int, rt: int, rd: int, shamt: int, funct: int) -> int:
    return u32((OP_R & 0x3F) << 26 |
               (rs & 0x1F) << 21 |
               (rt & 0x1F) << 16 |
               (rd & 0x1F) << 11 |
               (shamt & 0x1F) << 6 |
               (funct & 0x3F))

def _pack_I(opc: int, rs: int, rt: int, imm16: int) -> int:
    return u32((opc & 0x3F) << 26 |
               (rs & 0x1F) << 21 |
               (rt & 0x1F) << 16 |
               (imm16 & 0xFFFF))

def _pack_J(opc: int, addr26: int) -> int:
    return u32((opc & 0x3F) << 26 | (addr26 & 0x3FFFFFF))

# ---------------- Codificador ----------------

def encode(ins: Instruction) -> EncodeResult:
    """Empaqueta una instrucción en su palabra de 32 bits.

    Los campos que no caben (inmediato de 16 bits con signo, dirección de 26
    bits) se informan como error de parámetro y la palabra queda en None.
    """
    diags: List[Diagnostic] = []

    if isinstance(ins, RegisterOp):
        return EncodeResult(_pack_R(ins.rs, ins.rt, ins.rd, 0, ins.funct), diags)

    if isinstance(ins, (ImmediateArith, ImmediateMem)):
        if not is_signed_nbit(ins.immediate, 16):
            diags.append(parameter_error(
                f"Inmediato de {ins.mnemonic} no cabe en 16 bits con signo: {ins.immediate}",
                hint="rango -32768..32767"))
            return EncodeResult(None, diags)
        return EncodeResult(_pack_I(ins.opcode, ins.rs, ins.rt, ins.immediate), diags)

    if isinstance(ins, Jump):
        if not is_unsigned_nbit(ins.address, 26):
            diags.append(parameter_error(f"Dirección de {ins.op} no cabe en 26 bits: {ins.address}"))
            return EncodeResult(None, diags)
        return EncodeResult(_pack_J(ins.opcode, ins.address), diags)

    raise TypeError(f"instrucción desconocida: {ins!r}")

# ---------------- Decodificador de palabras ----------------

def decode_word(word: int) -> Instruction:
    """Inverso de encode para los códigos soportados; ValueError si no lo es."""
    word = u32(word)
    opc = bits(word, 31, 26)
    rs = bits(word, 25, 21)
    rt = bits(word, 20, 16)

    if opc == OP_R:
        funct = bits(word, 5, 0)
        mnem = FUNCT_TO_MNEMONIC.get(funct)
        if mnem is None:
            raise ValueError(f"Código de función desconocido: 0x{funct:02X}")
        if mnem == "jr":
            return RegisterOp(function="jr", rs=rs)
        return RegisterOp(function=mnem, rd=bits(word, 15, 11), rs=rs, rt=rt)

    mnem = OPCODE_TO_MNEMONIC.get(opc)
    if mnem is None:
        raise ValueError(f"Opcode desconocido: 0x{opc:02X}")
    itype = spec(mnem).itype
    if itype == "J":
        return Jump(op=mnem, address=bits(word, 25, 0))
    imm = sign_extend(bits(word, 15, 0), 16)
    if itype == "M":
        return ImmediateMem(op=mnem, rs=rs, rt=rt, immediate=imm)
    return ImmediateArith(op=mnem, rs=rs, rt=rt, immediate=imm)
