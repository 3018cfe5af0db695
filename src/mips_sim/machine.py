'''
estado de la máquina (registros, memoria, PC) y predicados de rango compartidos
'''

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

NUM_REGS = 32
MEM_WORDS = 1024            # memoria direccionada por palabra
WORD_SIZE = 4               # bytes por instrucción
PC_LIMIT = MEM_WORDS * WORD_SIZE   # 4096: espacio de direcciones en bytes
MAX_INSTRUCTION_LEN = 100   # búfer de 100 bytes incluyendo el terminador
RA = 31

def is_valid_register(r: int) -> bool:
    """Índice de registro en [0, 31]."""
    return 0 <= r < NUM_REGS

def is_valid_address(addr: int) -> bool:
    """Índice de palabra de memoria en [0, 1023]."""
    return 0 <= addr < MEM_WORDS

def is_valid_target(pc: int) -> bool:
    """Destino de salto: dirección en bytes dentro de [0, 4096) y alineada a palabra."""
    return 0 <= pc < PC_LIMIT and pc % WORD_SIZE == 0

@dataclass
class MachineState:
    """Registros, memoria y contador de programa.

    Sólo el ejecutor muta este estado. ``registers[0]`` se fuerza a 0 en cada
    paso, de modo que una escritura en $0 nunca es observable.
    """
    registers: List[int] = field(default_factory=lambda: [0] * NUM_REGS)
    memory: List[int] = field(default_factory=lambda: [0] * MEM_WORDS)
    pc: int = 0

    def __post_init__(self):
        if len(self.registers) != NUM_REGS:
            raise ValueError(f"se esperaban {NUM_REGS} registros, hay {len(self.registers)}")
        if len(self.memory) != MEM_WORDS:
            raise ValueError(f"se esperaban {MEM_WORDS} palabras de memoria, hay {len(self.memory)}")
        if not is_valid_target(self.pc):
            raise ValueError(f"PC inválido: {self.pc}")

    def register(self, idx: int) -> int:
        if not is_valid_register(idx):
            raise IndexError(f"registro fuera de rango: ${idx}")
        return self.registers[idx] if idx != 0 else 0

    def word(self, addr: int) -> int:
        """Palabra de memoria en el índice addr (0..1023)."""
        if not is_valid_address(addr):
            raise IndexError(f"dirección de memoria fuera de rango: {addr}")
        return self.memory[addr]

    def copy(self) -> "MachineState":
        return MachineState(registers=list(self.registers), memory=list(self.memory), pc=self.pc)

    def reset(self) -> None:
        """Vuelve al estado inicial: todo a cero y PC = 0."""
        self.registers[:] = [0] * NUM_REGS
        self.memory[:] = [0] * MEM_WORDS
        self.pc = 0
