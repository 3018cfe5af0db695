'''
tabla formal del subconjunto MIPS (opcodes, funct, formatos, formas de operandos)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

@dataclass(frozen=True)
class ISpec:
    """Especificación de una instrucción del subconjunto.

    - itype: 'R' (rd,rs,rt), 'JR' (sólo rs), 'I' (aritmética/rama), 'M' (memoria), 'J'
    - opcode: campo de 6 bits
    - funct: código de función (sólo tipo R)
    - form: forma textual de los operandos
    """
    itype: str
    opcode: int
    funct: Optional[int] = None
    form: str = ""

# Opcodes
OP_R    = 0x00
OP_J    = 0x02
OP_JAL  = 0x03
OP_BEQ  = 0x04
OP_ADDI = 0x08
OP_LW   = 0x23
OP_SW   = 0x2B

# Códigos de función (tipo R)
FUNCT_JR  = 0x08
FUNCT_ADD = 0x20
FUNCT_SUB = 0x22
FUNCT_AND = 0x24
FUNCT_OR  = 0x25
FUNCT_SLT = 0x2A

SPEC: Dict[str, ISpec] = {
    # Tipo R
    "add":  ISpec("R", OP_R, FUNCT_ADD, "$rd,$rs,$rt"),
    "sub":  ISpec("R", OP_R, FUNCT_SUB, "$rd,$rs,$rt"),
    "and":  ISpec("R", OP_R, FUNCT_AND, "$rd,$rs,$rt"),
    "or":   ISpec("R", OP_R, FUNCT_OR,  "$rd,$rs,$rt"),
    "slt":  ISpec("R", OP_R, FUNCT_SLT, "$rd,$rs,$rt"),
    "jr":   ISpec("JR", OP_R, FUNCT_JR, "$rs"),
    # Tipo I
    "addi": ISpec("I", OP_ADDI, form="$rt,$rs,imm"),
    "beq":  ISpec("I", OP_BEQ,  form="$rt,$rs,offset"),
    "lw":   ISpec("M", OP_LW,   form="$rt,imm($rs)"),
    "sw":   ISpec("M", OP_SW,   form="$rt,imm($rs)"),
    # Tipo J
    "j":    ISpec("J", OP_J,   form="addr"),
    "jal":  ISpec("J", OP_JAL, form="addr"),
}

# Búsquedas inversas para el decodificador de palabras
FUNCT_TO_MNEMONIC: Dict[int, str] = {s.funct: m for m, s in SPEC.items() if s.opcode == OP_R}
OPCODE_TO_MNEMONIC: Dict[int, str] = {s.opcode: m for m, s in SPEC.items() if s.opcode != OP_R}

def spec(mnemonic: str) -> ISpec:
    """Devuelve la especificación de una instrucción por mnemónico (sensible a mayúsculas)."""
    if mnemonic not in SPEC:
        raise KeyError(f"Instrucción desconocida: {mnemonic}")
    return SPEC[mnemonic]
