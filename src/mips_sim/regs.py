'''
registros '$N': reconocimiento del token y nombres ABI para los volcados
'''

from __future__ import annotations
import re
from typing import Dict, Optional

from .machine import NUM_REGS

# '$' seguido de un entero decimal; el rango se valida aparte
REG_TOKEN_RE = re.compile(r"^\$(?P<num>[+-]?\d+)$")

# Nombres convencionales, para la columna ABI del volcado de registros
REG_NAMES: Dict[int, str] = {
    0: "$zero", 1: "$at",
    2: "$v0", 3: "$v1",
    4: "$a0", 5: "$a1", 6: "$a2", 7: "$a3",
    8: "$t0", 9: "$t1", 10: "$t2", 11: "$t3", 12: "$t4", 13: "$t5", 14: "$t6", 15: "$t7",
    16: "$s0", 17: "$s1", 18: "$s2", 19: "$s3", 20: "$s4", 21: "$s5", 22: "$s6", 23: "$s7",
    24: "$t8", 25: "$t9",
    26: "$k0", 27: "$k1",
    28: "$gp", 29: "$sp", 30: "$fp", 31: "$ra",
}

def reg_token_num(token: str) -> Optional[int]:
    """Entero del token '$N' (sin validar rango), o None si el token no tiene esa forma."""
    m = REG_TOKEN_RE.match(token.strip())
    if not m:
        return None
    return int(m.group("num"))

def abi_name(n: int) -> str:
    if not 0 <= n < NUM_REGS:
        raise ValueError(f"Registro inválido: ${n}")
    return REG_NAMES[n]
