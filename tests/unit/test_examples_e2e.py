from src.mips_sim.decoder import decode
from src.mips_sim.executor import execute
from src.mips_sim.machine import MachineState

def _step(st, line):
    dec = decode(line)
    assert dec.ok, str(dec.diagnostic)
    return execute(st, dec.instruction)

def test_add_two_registers():
    st = MachineState()
    st.registers[2], st.registers[3] = 5, 7
    assert _step(st, "add $1,$2,$3").ok
    assert st.registers[1] == 12 and st.pc == 4

def test_addi_overflow_warning():
    st = MachineState()
    st.registers[2] = 2147483647
    res = _step(st, "addi $1,$2,1")
    assert res.diagnostic.kind == "overflow"
    assert st.registers[1] == 0
    assert st.pc == 0

def test_store_then_load():
    st = MachineState()
    st.registers[1] = 99
    assert _step(st, "sw $1,4($0)").ok
    assert st.memory[4] == 99
    assert _step(st, "lw $2,4($0)").ok
    assert st.registers[2] == 99

def test_beq_before_start_of_memory():
    st = MachineState()
    st.registers[1] = st.registers[2] = 3
    res = _step(st, "beq $1,$2,-1")
    assert res.diagnostic.kind == "memoria"
    assert st.pc == 0

def test_jump_past_end_of_memory():
    st = MachineState()
    res = _step(st, "j 1024")
    assert res.diagnostic.kind == "memoria"
    assert st.pc == 0

def test_jal_from_pc_8():
    st = MachineState(pc=8)
    assert _step(st, "jal 10").ok
    assert st.registers[31] == 12 and st.pc == 40

def test_decode_errors():
    assert decode("addx $1,$2,$3").diagnostic.kind == "parametro"
    assert decode("add $1,$40,$3").diagnostic.kind == "registro"

def test_small_loop_with_call_and_return():
    # cuenta $1 hasta 3 llamando a una "subrutina" en la palabra 20
    st = MachineState()
    program = {
        0: "addi $2,$0,3",
        4: "jal 20",
        8: "beq $1,$2,3",
        12: "j 1",
        20 * 4: "addi $1,$1,1",
        20 * 4 + 4: "jr $31",
    }
    steps = 0
    while st.pc in program and steps < 50:
        res = _step(st, program[st.pc])
        assert res.ok
        steps += 1
    assert st.registers[1] == 3
    assert st.pc == 20
    assert st.registers[0] == 0 and st.pc % 4 == 0
