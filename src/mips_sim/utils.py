'''
aritmética de 32 bits (u32, rangos con signo, campos de bits, formatos)
'''

from __future__ import annotations

U32_MASK = 0xFFFFFFFF

def u32(x: int) -> int:
    """Vista sin signo de los 32 bits bajos de x."""
    return x & U32_MASK

def sign_extend(x: int, bits: int) -> int:
    """Extiende el signo de un campo de 'bits' bits (p.ej. el imm16 de tipo I)."""
    if bits <= 0:
        raise ValueError("bits debe ser positivo")
    x &= (1 << bits) - 1
    sign_bit = 1 << (bits - 1)
    return (x ^ sign_bit) - sign_bit

def is_unsigned_nbit(x: int, n: int) -> bool:
    """True si x cabe como entero sin signo de n bits."""
    if n <= 0:
        raise ValueError("n debe ser positivo")
    return 0 <= x < (1 << n)

def is_signed_nbit(x: int, n: int) -> bool:
    """True si x cabe como entero con signo de n bits."""
    if n <= 0:
        raise ValueError("n debe ser positivo")
    return -(1 << (n - 1)) <= x < (1 << (n - 1))

def bits(word: int, hi: int, lo: int) -> int:
    """Campo [hi:lo] (inclusivo) de una palabra."""
    if hi < lo or lo < 0:
        raise ValueError("rango de bits inválido")
    return (word >> lo) & ((1 << (hi - lo + 1)) - 1)

def to_hex32(x: int, *, prefix: bool = True) -> str:
    """Palabra en hexadecimal (8 dígitos), con o sin prefijo 0x."""
    s = format(u32(x), "08x")
    return ("0x" + s) if prefix else s
