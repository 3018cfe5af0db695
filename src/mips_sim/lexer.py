from __future__ import annotations
from typing import List, Optional, Tuple

def split_mnemonic_operands(line: str) -> Tuple[str, str]:
    """Split 'mnemonic operands' on the first whitespace run.

    Mnemonics are case-sensitive, so the token is returned as written.
    """
    s = line.strip()
    if not s:
        return "", ""
    parts = s.split(None, 1)
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()

def split_fields(op_str: str) -> List[str]:
    """Comma-separated fields, stripped. Empty fields are kept so the caller can reject them."""
    if not op_str.strip():
        return []
    return [f.strip() for f in op_str.split(",")]

def split_mem_operand(op_str: str) -> Optional[Tuple[str, str, str]]:
    """Split 'rt, imm(rs)' into (rt, imm, rs); None if a delimiter is missing."""
    comma = op_str.find(",")
    if comma < 0:
        return None
    rt = op_str[:comma]
    rest = op_str[comma + 1:]
    lpar = rest.find("(")
    if lpar < 0:
        return None
    imm = rest[:lpar]
    rpar = rest.find(")", lpar + 1)
    if rpar < 0:
        return None
    rs = rest[lpar + 1:rpar]
    # nothing may follow ')'
    if rest[rpar + 1:].strip():
        return None
    return rt.strip(), imm.strip(), rs.strip()
