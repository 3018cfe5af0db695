'''
clase Diagnostic y helpers (tipos de error del simulador)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Literal

# Severidad de los diagnósticos (en español)
Severity = Literal["error", "advertencia", "nota"]

# Taxonomía cerrada de errores del decodificador y del ejecutor
ErrorKind = Literal["parametro", "registro", "memoria", "overflow"]

PARAMETRO: ErrorKind = "parametro"
REGISTRO: ErrorKind = "registro"
MEMORIA: ErrorKind = "memoria"
OVERFLOW: ErrorKind = "overflow"

_SEV_TO_LABEL = {
    "error": "ERROR",
    "advertencia": "ADVERTENCIA",
    "nota": "NOTA",
}

# Códigos numéricos históricos del simulador en C
_KIND_TO_CODE = {
    PARAMETRO: -1,
    REGISTRO: -2,
    MEMORIA: -3,
    OVERFLOW: -4,
}

@dataclass(frozen=True)
class Diagnostic:
    """Estructura de un diagnóstico para reportar problemas.

    Abarca errores, advertencias y notas. ``kind`` clasifica el fallo dentro de
    la taxonomía del simulador (parámetro, registro, memoria, overflow); la
    ubicación (archivo, línea, columna) sólo se rellena en modo lote.
    """
    severity: Severity
    message: str
    kind: Optional[ErrorKind] = None
    line: Optional[int] = None
    col: Optional[int] = None
    hint: Optional[str] = None
    file: Optional[str] = None

    @property
    def code(self) -> int:
        """Código numérico (-1..-4) equivalente; 0 si no hay tipo."""
        if self.kind is None:
            return 0
        return _KIND_TO_CODE[self.kind]

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    def __str__(self) -> str:
        loc = ""
        if self.file is not None:
            loc += f"{self.file}:"
        if self.line is not None:
            loc += f"{self.line}"
            if self.col is not None:
                loc += f":{self.col}"
        if loc:
            loc += ": "
        sev = _SEV_TO_LABEL.get(self.severity, str(self.severity).upper())
        core = f"{sev}: {self.message}"
        if self.kind is not None:
            core += f" (codigo: {self.code})"
        if self.hint:
            core += f"  (pista: {self.hint})"
        return loc + core

def error(message: str, *, kind: ErrorKind | None = None, line: int | None = None,
          col: int | None = None, file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo error."""
    return Diagnostic("error", message, kind, line, col, hint, file)

def warning(message: str, *, kind: ErrorKind | None = None, line: int | None = None,
            col: int | None = None, file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo advertencia."""
    return Diagnostic("advertencia", message, kind, line, col, hint, file)

def parameter_error(message: str, *, hint: str | None = None) -> Diagnostic:
    return error(message, kind=PARAMETRO, hint=hint)

def register_error(message: str, *, hint: str | None = None) -> Diagnostic:
    return error(message, kind=REGISTRO, hint=hint)

def memory_error(message: str, *, hint: str | None = None) -> Diagnostic:
    return error(message, kind=MEMORIA, hint=hint)

def overflow_warning(message: str) -> Diagnostic:
    """El overflow es el único fallo continuable: se reporta como advertencia."""
    return warning(message, kind=OVERFLOW)

def located(d: Diagnostic, *, line: int | None = None, file: str | None = None) -> Diagnostic:
    """Copia del diagnóstico con ubicación (archivo/línea) añadida."""
    return Diagnostic(d.severity, d.message, d.kind, line, d.col, d.hint, file)
