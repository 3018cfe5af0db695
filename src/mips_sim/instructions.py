'''
dataclases de instrucción decodificada: una variante por formato
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Union

from .isa import spec

RFunction = Literal["add", "sub", "and", "or", "slt", "jr"]
ArithOp = Literal["addi", "beq"]
MemOp = Literal["lw", "sw"]
JumpOp = Literal["j", "jal"]

@dataclass(frozen=True)
class RegisterOp:
    """Tipo R: rd = rs <función> rt. Para 'jr' sólo rs tiene sentido (rd = rt = 0)."""
    function: RFunction
    rd: int = 0
    rs: int = 0
    rt: int = 0

    @property
    def mnemonic(self) -> str:
        return self.function

    @property
    def opcode(self) -> int:
        return spec(self.function).opcode

    @property
    def funct(self) -> int:
        return spec(self.function).funct or 0

@dataclass(frozen=True)
class ImmediateArith:
    """Tipo I aritmético: addi (rt = rs + imm) o beq (desplazamiento en palabras)."""
    op: ArithOp
    rs: int = 0
    rt: int = 0
    immediate: int = 0

    @property
    def mnemonic(self) -> str:
        return self.op

    @property
    def opcode(self) -> int:
        return spec(self.op).opcode

@dataclass(frozen=True)
class ImmediateMem:
    """Tipo I de memoria: dirección de palabra = registers[rs] + immediate."""
    op: MemOp
    rs: int = 0
    rt: int = 0
    immediate: int = 0

    @property
    def mnemonic(self) -> str:
        return self.op

    @property
    def opcode(self) -> int:
        return spec(self.op).opcode

@dataclass(frozen=True)
class Jump:
    """Tipo J: address es un índice de palabra (destino en bytes = address * 4)."""
    op: JumpOp
    address: int = 0

    @property
    def mnemonic(self) -> str:
        return self.op

    @property
    def opcode(self) -> int:
        return spec(self.op).opcode

Instruction = Union[RegisterOp, ImmediateArith, ImmediateMem, Jump]

def to_text(ins: Instruction) -> str:
    """Forma textual canónica, aceptada de vuelta por el decodificador."""
    if isinstance(ins, RegisterOp):
        if ins.function == "jr":
            return f"jr ${ins.rs}"
        return f"{ins.function} ${ins.rd},${ins.rs},${ins.rt}"
    if isinstance(ins, ImmediateArith):
        return f"{ins.op} ${ins.rt},${ins.rs},{ins.immediate}"
    if isinstance(ins, ImmediateMem):
        return f"{ins.op} ${ins.rt},{ins.immediate}(${ins.rs})"
    if isinstance(ins, Jump):
        return f"{ins.op} {ins.address}"
    raise TypeError(f"instrucción desconocida: {ins!r}")
