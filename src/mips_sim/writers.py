from __future__ import annotations
from typing import List

from .instructions import Instruction, RegisterOp, ImmediateArith, ImmediateMem, Jump
from .encoding import encode
from .machine import MachineState, NUM_REGS, is_valid_address
from .regs import abi_name
from .utils import to_hex32

HELP_TEXT = """\
Instrucciones disponibles:
Tipo R: add, sub, and, or, slt, jr
  Formato: <instruccion> $rd,$rs,$rt
  Ejemplo: add $1,$2,$3
  Ejemplo: jr $31

Tipo I: addi, lw, sw, beq
  Formato addi: addi $rt,$rs,inmediato
  Formato lw/sw: lw/sw $rt,desplazamiento($rs)
  Formato beq: beq $rt,$rs,desplazamiento
  Ejemplo: addi $1,$2,100
  Ejemplo: lw $1,0($2)
  Ejemplo: beq $1,$2,10

Tipo J: j, jal
  Formato: <instruccion> direccion
  Ejemplo: j 100

Comandos especiales:
  help              - muestra esta ayuda
  regs              - muestra los registros y el PC
  mem <inicio> <fin> - muestra el contenido de la memoria
  sair | salir      - termina el programa
"""

def format_registers(state: MachineState) -> str:
    """Registros de 4 en 4 (número, nombre ABI y valor) y el PC al final."""
    rows: List[str] = ["Registros:"]
    for base in range(0, NUM_REGS, 4):
        cells = [f"${i:<2d} {abi_name(i):<5}: {state.register(i):<11d}" for i in range(base, base + 4)]
        rows.append("  ".join(cells).rstrip())
    rows.append(f"PC: {state.pc}")
    return "\n".join(rows)

def format_memory(state: MachineState, start: int, end: int) -> str:
    if not (is_valid_address(start) and is_valid_address(end)) or start > end:
        raise ValueError(f"parámetros inválidos para mostrar la memoria: {start}..{end}")
    rows: List[str] = [f"Memoria [{start}-{end}]:"]
    cur: List[str] = []
    for addr in range(start, end + 1):
        if addr % 4 == 0 and cur:
            rows.append("  ".join(cur))
            cur = []
        cur.append(f"[{addr:4d}]: {state.word(addr):<11d}")
    if cur:
        rows.append("  ".join(cur))
    return "\n".join(r.rstrip() for r in rows)

def format_instruction(ins: Instruction) -> str:
    """Campos de la instrucción decodificada y su palabra, si cabe en 32 bits."""
    lines: List[str] = []
    if isinstance(ins, RegisterOp):
        lines += ["Tipo R:",
                  f"Opcode: {ins.opcode} (0x{ins.opcode:02X})",
                  f"rs: ${ins.rs}", f"rt: ${ins.rt}", f"rd: ${ins.rd}",
                  "shamt: 0",
                  f"Funcion: {ins.funct} (0x{ins.funct:02X})"]
    elif isinstance(ins, (ImmediateArith, ImmediateMem)):
        lines += ["Tipo I:",
                  f"Opcode: {ins.opcode} (0x{ins.opcode:02X})",
                  f"rs: ${ins.rs}", f"rt: ${ins.rt}",
                  f"Inmediato: {ins.immediate}"]
    elif isinstance(ins, Jump):
        lines += ["Tipo J:",
                  f"Opcode: {ins.opcode} (0x{ins.opcode:02X})",
                  f"Direccion: {ins.address}"]
    else:
        raise TypeError(f"instrucción desconocida: {ins!r}")
    enc = encode(ins)
    if enc.word is not None:
        lines.append(f"Palabra: {to_hex32(enc.word)}")
    return "\n".join(lines)
