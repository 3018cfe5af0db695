import pytest
from src.mips_sim.decoder import decode
from src.mips_sim.executor import execute
from src.mips_sim.instructions import RegisterOp, ImmediateArith, ImmediateMem, Jump
from src.mips_sim.machine import MachineState

INT_MAX = 2147483647
INT_MIN = -2147483648

def _run(state, line):
    dec = decode(line)
    assert dec.ok, str(dec.diagnostic)
    return execute(state, dec.instruction)

def _machine(pc=0, **regs):
    st = MachineState(pc=pc)
    for name, value in regs.items():
        st.registers[int(name[1:])] = value
    return st

# --- aritmética ---

def test_add_and_pc_advance():
    st = _machine(r2=5, r3=7)
    res = _run(st, "add $1,$2,$3")
    assert res.ok
    assert st.registers[1] == 12
    assert st.pc == 4

def test_sub():
    st = _machine(r2=5, r3=7)
    assert _run(st, "sub $1,$2,$3").ok
    assert st.registers[1] == -2

@pytest.mark.parametrize("line, a, b", [
    ("add $1,$2,$3", INT_MAX, 1),
    ("add $1,$2,$3", INT_MIN, -1),
    ("sub $1,$2,$3", INT_MIN, 1),
    ("sub $1,$2,$3", INT_MAX, -1),
    ("sub $1,$2,$3", 0, INT_MIN),
])
def test_overflow_leaves_state_untouched(line, a, b):
    st = _machine(pc=8, r1=77, r2=a, r3=b)
    before = st.copy()
    res = _run(st, line)
    assert res.overflow
    assert res.diagnostic.severity == "advertencia"
    assert st == before

def test_add_at_the_edges_does_not_overflow():
    st = _machine(r2=INT_MAX, r3=INT_MIN)
    assert _run(st, "add $1,$2,$3").ok
    assert st.registers[1] == -1
    st = _machine(r2=-1, r3=INT_MAX)
    assert _run(st, "sub $1,$2,$3").ok
    assert st.registers[1] == INT_MIN

def test_addi_overflow():
    st = _machine(r2=INT_MAX)
    before = st.copy()
    res = _run(st, "addi $1,$2,1")
    assert res.overflow
    assert st == before
    assert st.pc == 0

def test_addi():
    st = _machine(r2=10)
    assert _run(st, "addi $1,$2,-15").ok
    assert st.registers[1] == -5

def test_and_or_slt():
    st = _machine(r2=0b1100, r3=0b1010, r4=-1)
    assert _run(st, "and $5,$2,$3").ok
    assert _run(st, "or $6,$2,$3").ok
    assert _run(st, "and $7,$4,$2").ok
    assert _run(st, "slt $8,$4,$2").ok
    assert _run(st, "slt $9,$2,$4").ok
    assert st.registers[5:10] == [0b1000, 0b1110, 0b1100, 1, 0]
    assert st.pc == 20

# --- registro $0 ---

@pytest.mark.parametrize("line", ["add $0,$2,$3", "addi $0,$2,9", "lw $0,0($0)", "slt $0,$0,$2"])
def test_register_zero_stays_zero(line):
    st = _machine(r2=5, r3=7)
    st.memory[0] = 123
    assert _run(st, line).ok
    assert st.registers[0] == 0
    assert st.register(0) == 0

# --- memoria ---

def test_sw_then_lw():
    st = _machine(r1=99)
    assert _run(st, "sw $1,4($0)").ok
    assert st.memory[4] == 99
    assert _run(st, "lw $2,4($0)").ok
    assert st.registers[2] == 99
    assert st.pc == 8

@pytest.mark.parametrize("line, base", [
    ("lw $2,1024($0)", 0),
    ("sw $2,-1($0)", 0),
    ("lw $2,1($3)", 1023),
    ("sw $2,0($3)", -5),
])
def test_memory_out_of_range(line, base):
    st = _machine(r2=8, r3=base)
    before = st.copy()
    res = _run(st, line)
    assert res.diagnostic.kind == "memoria"
    assert st == before

def test_last_word_is_addressable():
    st = _machine(r3=1000, r2=-3)
    assert _run(st, "sw $2,23($3)").ok
    assert st.word(1023) == -3

# --- saltos ---

def test_beq_taken_is_relative_to_current_pc():
    st = _machine(pc=8, r1=3, r2=3)
    assert _run(st, "beq $1,$2,2").ok
    assert st.pc == 16

def test_beq_zero_offset_stays_put():
    st = _machine(pc=8)
    assert _run(st, "beq $1,$2,0").ok
    assert st.pc == 8

def test_beq_not_taken():
    st = _machine(pc=8, r1=3, r2=4)
    assert _run(st, "beq $1,$2,-2").ok
    assert st.pc == 12

def test_beq_out_of_range():
    st = _machine(r1=1, r2=1)
    res = _run(st, "beq $1,$2,-1")
    assert res.diagnostic.kind == "memoria"
    assert st.pc == 0

def test_j_and_range():
    st = _machine()
    assert _run(st, "j 1023").ok
    assert st.pc == 4092
    res = _run(st, "j 1024")
    assert res.diagnostic.kind == "memoria"
    assert st.pc == 4092

def test_jal_links_then_jumps():
    st = _machine(pc=8)
    assert _run(st, "jal 10").ok
    assert st.registers[31] == 12
    assert st.pc == 40

def test_jal_out_of_range_does_not_link():
    st = _machine(pc=8)
    res = _run(st, "jal 5000")
    assert res.diagnostic.kind == "memoria"
    assert st.registers[31] == 0
    assert st.pc == 8

def test_jr():
    st = _machine(r31=40)
    res = _run(st, "jr $31")
    assert res.ok
    assert st.pc == 40

@pytest.mark.parametrize("target", [4096, -4, 6])
def test_jr_invalid_target(target):
    st = _machine(pc=12, r5=target)
    res = _run(st, "jr $5")
    assert res.diagnostic.kind == "memoria"
    assert st.pc == 12

def test_sequential_step_cannot_leave_address_space():
    st = _machine(pc=4092, r2=1)
    before = st.copy()
    res = _run(st, "addi $1,$2,1")
    assert res.diagnostic.kind == "memoria"
    assert st == before

# --- instrucciones construidas a mano ---

@pytest.mark.parametrize("ins", [
    RegisterOp(function="add", rd=32, rs=1, rt=2),
    ImmediateArith(op="addi", rs=-1, rt=1, immediate=0),
    ImmediateMem(op="lw", rs=0, rt=40, immediate=0),
])
def test_executor_rejects_bad_register_fields(ins):
    st = _machine(r1=1)
    before = st.copy()
    res = execute(st, ins)
    assert res.diagnostic.kind == "registro"
    assert st == before

def test_execute_is_deterministic():
    a = _machine(r2=INT_MAX, r3=1)
    b = a.copy()
    ins = RegisterOp(function="add", rd=1, rs=2, rt=3)
    assert execute(a, ins) == execute(b, ins)
    assert a == b
