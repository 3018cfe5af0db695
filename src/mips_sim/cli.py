from __future__ import annotations
import argparse, sys
from typing import List, Optional, TextIO, Tuple

from .decoder import decode
from .executor import execute
from .instructions import Instruction
from .machine import MachineState
from .diagnostics import Diagnostic, located
from .writers import HELP_TEXT, format_registers, format_memory, format_instruction

PROMPT = "Instrucción MIPS> "
QUIT_COMMANDS = ("sair", "salir")

def step_text(state: MachineState, line: str) -> Tuple[Optional[Instruction], List[Diagnostic]]:
    """Decodifica y ejecuta una línea. Devuelve (instrucción ejecutada o None, diagnósticos)."""
    dec = decode(line)
    if not dec.ok:
        return None, [dec.diagnostic]
    res = execute(state, dec.instruction)
    if res.diagnostic is None:
        return dec.instruction, []
    # el overflow es continuable: la instrucción cuenta como ejecutada
    return (dec.instruction if res.overflow else None), [res.diagnostic]

def _mem_command(state: MachineState, args: List[str], out: TextIO, err: TextIO) -> None:
    try:
        if len(args) != 2:
            raise ValueError(args)
        start, end = int(args[0], 10), int(args[1], 10)
    except ValueError:
        print("Uso correcto: mem <inicio> <fin>", file=err)
        return
    try:
        print(format_memory(state, start, end), file=out)
    except ValueError as ex:
        print(f"ERROR: {ex}", file=err)

def repl(state: MachineState, inp: TextIO, out: TextIO, err: TextIO) -> int:
    """Bucle interactivo: una instrucción por línea hasta 'sair'/'salir' o fin de entrada."""
    print("Simulador MIPS", file=out)
    print("Escriba 'help' para ver las instrucciones disponibles", file=out)
    while True:
        print(PROMPT, end="", file=out, flush=True)
        raw = inp.readline()
        if raw == "":
            print(file=out)
            return 0
        line = raw.rstrip("\r\n")
        cmd = line.strip()
        if not cmd:
            continue
        if cmd in QUIT_COMMANDS:
            return 0
        if cmd == "help":
            print(HELP_TEXT, file=out)
            continue
        if cmd == "regs":
            print(format_registers(state), file=out)
            continue
        if cmd.startswith("mem ") or cmd == "mem":
            _mem_command(state, cmd.split()[1:], out, err)
            continue

        ins, diags = step_text(state, line)
        for d in diags:
            print(d, file=err)
        if ins is not None:
            print(format_instruction(ins), file=out)
            print(format_registers(state), file=out)

def run_source(state: MachineState, text: str, *, filename: Optional[str] = None,
               out: Optional[TextIO] = None, err: Optional[TextIO] = None,
               trace: bool = False) -> List[Diagnostic]:
    """Ejecuta una vez, en orden, cada línea no vacía del texto. Devuelve los diagnósticos."""
    out = out or sys.stdout
    err = err or sys.stderr
    diags: List[Diagnostic] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        if not raw.strip():
            continue
        ins, step_diags = step_text(state, raw)
        for d in step_diags:
            d = located(d, line=lineno, file=filename)
            diags.append(d)
            print(d, file=err)
        if trace and ins is not None:
            print(format_instruction(ins), file=out)
            print(format_registers(state), file=out)
    return diags

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Simulador MIPS de una instrucción por paso")
    ap.add_argument("source", nargs="?", help="archivo con una instrucción por línea (modo lote)")
    ap.add_argument("--trace", action="store_true", help="en modo lote, mostrar cada paso")
    args = ap.parse_args(argv)

    state = MachineState()
    if args.source is None:
        return repl(state, sys.stdin, sys.stdout, sys.stderr)

    try:
        with open(args.source, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as ex:
        print(f"ERROR: no pude leer {args.source}: {ex}", file=sys.stderr)
        return 2

    diags = run_source(state, text, filename=args.source, trace=args.trace)
    print(format_registers(state))
    return 1 if any(d.is_error for d in diags) else 0

if __name__ == "__main__":
    raise SystemExit(main())
