"""Decoder: nibble split, derived fields and fetch bounds."""

import pytest

from pychip8 import Instruction, MachineState, MemoryBoundsError, addr12, fetch, imm8


def test_fetch_splits_two_bytes_into_nibbles():
    state = MachineState()
    state.load_program(b"\x12\x34")
    ins = fetch(state)
    assert ins == Instruction(0x1, 0x2, 0x3, 0x4)
    assert (ins.x, ins.y, ins.n) == (0x2, 0x3, 0x4)

def test_fetch_has_no_side_effects():
    state = MachineState()
    state.load_program(b"\xA2\xF0")
    fetch(state)
    fetch(state)
    assert state.pc == 0x200

def test_addr12_and_imm8():
    ins = Instruction(0xA, 0x2, 0xF, 0x0)
    assert addr12(ins) == 0x2F0
    assert imm8(ins) == 0xF0

def test_opcode_and_str():
    ins = Instruction(0x0, 0x0, 0xE, 0xE)
    assert ins.opcode == 0x00EE
    assert str(ins) == "00EE"

def test_fetch_at_last_whole_word():
    state = MachineState()
    state.memory[4094] = 0xAB
    state.memory[4095] = 0xCD
    state.pc = 4094
    assert fetch(state) == Instruction(0xA, 0xB, 0xC, 0xD)

@pytest.mark.parametrize("pc", [4095, 4096, 0x10FE])
def test_fetch_past_end_of_memory_is_fatal(pc):
    state = MachineState()
    state.pc = pc
    with pytest.raises(MemoryBoundsError):
        fetch(state)
