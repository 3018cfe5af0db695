# src/mips_sim/executor.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .instructions import Instruction, RegisterOp, ImmediateArith, ImmediateMem, Jump
from .machine import MachineState, WORD_SIZE, RA, is_valid_register, is_valid_address, is_valid_target
from .utils import is_signed_nbit
from .diagnostics import Diagnostic, OVERFLOW, register_error, memory_error, overflow_warning

# ---------------- Resultado de un paso ----------------

@dataclass(frozen=True)
class StepResult:
    """Resultado de ejecutar una instrucción. ``diagnostic`` es None si todo fue bien."""
    diagnostic: Optional[Diagnostic] = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None

    @property
    def overflow(self) -> bool:
        return self.diagnostic is not None and self.diagnostic.kind == OVERFLOW

_OK = StepResult()

# ---------------- Helpers ----------------

def _registers_of(ins: Instruction) -> tuple:
    if isinstance(ins, RegisterOp):
        return (ins.rd, ins.rs, ins.rt)
    if isinstance(ins, (ImmediateArith, ImmediateMem)):
        return (ins.rs, ins.rt)
    return ()

def _bad_target(target: int, what: str) -> Diagnostic:
    return memory_error(f"Salto a dirección inválida ({what}): {target}",
                        hint="destino alineado a 4 dentro de [0, 4096)")

def _next_pc(state: MachineState) -> Optional[int]:
    nxt = state.pc + WORD_SIZE
    return nxt if is_valid_target(nxt) else None

def _checked_add(a: int, b: int) -> Optional[int]:
    r = a + b
    return r if is_signed_nbit(r, 32) else None

# ---------------- Formatos ----------------

def _exec_r(state: MachineState, ins: RegisterOp) -> StepResult:
    regs = state.registers
    a, b = regs[ins.rs], regs[ins.rt]

    if ins.function == "jr":
        target = a
        if not is_valid_target(target):
            return StepResult(_bad_target(target, "jr"))
        state.pc = target
        return _OK

    nxt = _next_pc(state)
    if nxt is None:
        return StepResult(_bad_target(state.pc + WORD_SIZE, "pc + 4"))

    if ins.function == "add":
        r = _checked_add(a, b)
        if r is None:
            return StepResult(overflow_warning(f"overflow en la operación ADD ({a} + {b})"))
    elif ins.function == "sub":
        r = _checked_add(a, -b)
        if r is None:
            return StepResult(overflow_warning(f"overflow en la operación SUB ({a} - {b})"))
    elif ins.function == "and":
        r = a & b
    elif ins.function == "or":
        r = a | b
    elif ins.function == "slt":
        r = 1 if a < b else 0
    else:
        raise ValueError(f"función R no soportada: {ins.function}")

    regs[ins.rd] = r
    state.pc = nxt
    return _OK

def _exec_arith(state: MachineState, ins: ImmediateArith) -> StepResult:
    regs = state.registers

    if ins.op == "beq":
        if regs[ins.rs] != regs[ins.rt]:
            nxt = _next_pc(state)
            if nxt is None:
                return StepResult(_bad_target(state.pc + WORD_SIZE, "pc + 4"))
            state.pc = nxt
            return _OK
        # relativo al PC actual, no al siguiente
        target = state.pc + ins.immediate * WORD_SIZE
        if not is_valid_target(target):
            return StepResult(_bad_target(target, "beq"))
        state.pc = target
        return _OK

    if ins.op == "addi":
        nxt = _next_pc(state)
        if nxt is None:
            return StepResult(_bad_target(state.pc + WORD_SIZE, "pc + 4"))
        a = regs[ins.rs]
        r = _checked_add(a, ins.immediate)
        if r is None:
            return StepResult(overflow_warning(f"overflow en la operación ADDI ({a} + {ins.immediate})"))
        regs[ins.rt] = r
        state.pc = nxt
        return _OK

    raise ValueError(f"opcode I no soportado: {ins.op}")

def _exec_mem(state: MachineState, ins: ImmediateMem) -> StepResult:
    regs = state.registers
    addr = regs[ins.rs] + ins.immediate
    if not is_valid_address(addr):
        return StepResult(memory_error(f"Acceso inválido a memoria: {addr}",
                                       hint="índices de palabra de 0 a 1023"))
    nxt = _next_pc(state)
    if nxt is None:
        return StepResult(_bad_target(state.pc + WORD_SIZE, "pc + 4"))

    if ins.op == "lw":
        regs[ins.rt] = state.memory[addr]
    elif ins.op == "sw":
        state.memory[addr] = regs[ins.rt]
    else:
        raise ValueError(f"opcode de memoria no soportado: {ins.op}")
    state.pc = nxt
    return _OK

def _exec_jump(state: MachineState, ins: Jump) -> StepResult:
    target = ins.address * WORD_SIZE
    if not is_valid_target(target):
        return StepResult(_bad_target(target, ins.op))
    if ins.op == "jal":
        state.registers[RA] = state.pc + WORD_SIZE
    elif ins.op != "j":
        raise ValueError(f"opcode J no soportado: {ins.op}")
    state.pc = target
    return _OK

# ---------------- Ejecutor principal ----------------

def execute(state: MachineState, ins: Instruction) -> StepResult:
    """Aplica una instrucción al estado, mutándolo en el sitio.

    Todo fallo se detecta antes de escribir nada, de modo que el estado queda
    intacto. El overflow es el único fallo continuable: se devuelve como
    advertencia y es el llamador quien decide cómo seguir. $0 vale 0 antes y
    después del paso.
    """
    state.registers[0] = 0

    for r in _registers_of(ins):
        if not is_valid_register(r):
            return StepResult(register_error(f"Registro inválido: ${r}"))

    if isinstance(ins, RegisterOp):
        result = _exec_r(state, ins)
    elif isinstance(ins, ImmediateArith):
        result = _exec_arith(state, ins)
    elif isinstance(ins, ImmediateMem):
        result = _exec_mem(state, ins)
    elif isinstance(ins, Jump):
        result = _exec_jump(state, ins)
    else:
        raise TypeError(f"instrucción desconocida: {ins!r}")

    state.registers[0] = 0
    return result
