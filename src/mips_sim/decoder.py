# src/mips_sim/decoder.py
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import List, Optional

from .lexer import split_mnemonic_operands, split_fields, split_mem_operand
from .instructions import Instruction, RegisterOp, ImmediateArith, ImmediateMem, Jump
from .isa import SPEC
from .machine import MAX_INSTRUCTION_LEN, is_valid_register
from .regs import reg_token_num
from .utils import is_signed_nbit, is_unsigned_nbit
from .diagnostics import Diagnostic, parameter_error, register_error

DEC_IMM_RE = re.compile(r"^[+-]?\d+$")

@dataclass(frozen=True)
class DecodeResult:
    """Resultado de decodificar una línea: instrucción o diagnóstico, nunca ambos."""
    instruction: Optional[Instruction] = None
    diagnostic: Optional[Diagnostic] = None

    @property
    def ok(self) -> bool:
        return self.instruction is not None

class _Reject(Exception):
    """Corta la decodificación en el primer campo inválido."""
    def __init__(self, diag: Diagnostic):
        super().__init__(diag.message)
        self.diag = diag

def _reg(token: str, role: str) -> int:
    n = reg_token_num(token)
    if n is None:
        raise _Reject(parameter_error(f"Registro mal formado en {role}: '{token}'",
                                      hint="use la forma $N"))
    if not is_valid_register(n):
        raise _Reject(register_error(f"Registro inválido en {role}: ${n}",
                                     hint="los registros van de $0 a $31"))
    return n

def _imm(token: str, role: str = "inmediato") -> int:
    t = token.strip()
    if not DEC_IMM_RE.match(t):
        raise _Reject(parameter_error(f"{role.capitalize()} inválido: '{token}'",
                                      hint="se espera un entero decimal"))
    v = int(t, 10)
    if not is_signed_nbit(v, 32):
        raise _Reject(parameter_error(f"{role.capitalize()} fuera de rango de 32 bits: {v}"))
    return v

def _address(token: str) -> int:
    t = token.strip()
    if not DEC_IMM_RE.match(t):
        raise _Reject(parameter_error(f"Dirección de salto inválida: '{token}'",
                                      hint="se espera un índice de palabra decimal"))
    v = int(t, 10)
    # la dirección es un índice de palabra sin signo: "j -1" se rechaza aquí, no al ejecutar
    if not is_unsigned_nbit(v, 32):
        raise _Reject(parameter_error(f"Dirección de salto fuera de rango: {v}"))
    return v

def _fields(op_str: str, n: int, mnemonic: str, form: str) -> List[str]:
    fields = split_fields(op_str)
    if len(fields) != n:
        raise _Reject(parameter_error(f"{mnemonic} espera {n} operandos, hay {len(fields)}",
                                      hint=f"{mnemonic} {form}"))
    return fields

def _decode(mnemonic: str, op_str: str) -> Instruction:
    sp = SPEC.get(mnemonic)
    if sp is None:
        raise _Reject(parameter_error(f"Instrucción desconocida: {mnemonic}",
                                      hint="escriba 'help' para ver las instrucciones"))

    if sp.itype == "R":
        rd_t, rs_t, rt_t = _fields(op_str, 3, mnemonic, sp.form)
        rd = _reg(rd_t, "rd")
        rs = _reg(rs_t, "rs")
        rt = _reg(rt_t, "rt")
        return RegisterOp(function=mnemonic, rd=rd, rs=rs, rt=rt)

    if sp.itype == "JR":
        (rs_t,) = _fields(op_str, 1, mnemonic, sp.form)
        return RegisterOp(function=mnemonic, rs=_reg(rs_t, "rs"))

    if sp.itype == "I":
        rt_t, rs_t, imm_t = _fields(op_str, 3, mnemonic, sp.form)
        rt = _reg(rt_t, "rt")
        rs = _reg(rs_t, "rs")
        imm = _imm(imm_t, "desplazamiento" if mnemonic == "beq" else "inmediato")
        return ImmediateArith(op=mnemonic, rs=rs, rt=rt, immediate=imm)

    if sp.itype == "M":
        parts = split_mem_operand(op_str)
        if parts is None:
            raise _Reject(parameter_error(f"Operando de memoria inválido: '{op_str}'",
                                          hint=f"{mnemonic} {sp.form}"))
        rt_t, imm_t, rs_t = parts
        rt = _reg(rt_t, "rt")
        imm = _imm(imm_t, "desplazamiento")
        rs = _reg(rs_t, "rs")
        return ImmediateMem(op=mnemonic, rs=rs, rt=rt, immediate=imm)

    if sp.itype == "J":
        (addr_t,) = _fields(op_str, 1, mnemonic, sp.form)
        return Jump(op=mnemonic, address=_address(addr_t))

    raise _Reject(parameter_error(f"Tipo de instrucción no soportado: {sp.itype}"))

def decode(line: str) -> DecodeResult:
    """
    Decodifica una línea de ensamblador en una instrucción tipada.

    Reglas:
      - Líneas de MAX_INSTRUCTION_LEN - 1 caracteres o más se rechazan antes de decodificar.
      - Mnemónico y operandos se separan por el primer bloque de espacios; ambos son obligatorios.
      - Registros '$N' con N en [0, 31]; un N fuera de rango es error de registro,
        cualquier otra forma mal escrita es error de parámetro.
      - Se informa sólo el primer error, recorriendo los campos de izquierda a derecha.

    No lanza excepciones por texto mal formado y no toca ningún estado compartido.
    """
    if len(line) >= MAX_INSTRUCTION_LEN - 1:
        return DecodeResult(diagnostic=parameter_error(
            f"Instrucción demasiado larga ({len(line)} caracteres)",
            hint=f"máximo {MAX_INSTRUCTION_LEN - 2}"))

    mnemonic, op_str = split_mnemonic_operands(line)
    if not mnemonic or not op_str:
        return DecodeResult(diagnostic=parameter_error(
            f"Se esperaba '<instrucción> <operandos>': '{line.strip()}'"))

    try:
        return DecodeResult(instruction=_decode(mnemonic, op_str))
    except _Reject as rej:
        return DecodeResult(diagnostic=rej.diag)
