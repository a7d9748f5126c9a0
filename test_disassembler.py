#!/usr/bin/env python3
"""
Test the read-only disassembler
"""

from disassembler import disassemble, format_instruction


def test_disassemble_range(memory):
    memory.load(
        0x8000,
        [
            0xA9, 0x42,  # LDA #$42
            0xD0, 0xFA,  # BNE -6
            0x6C, 0xFF, 0x02,  # JMP ($02FF)
            0x02,  # undocumented
        ],
    )

    lines = disassemble(memory, 0x8000, 0x8007)

    assert list(lines) == [0x8000, 0x8002, 0x8004, 0x8007]
    assert lines[0x8000] == "$8000: LDA #$42 {immediate}"
    assert lines[0x8002] == "$8002: BNE $FA [$7FFE] {relative}"
    assert lines[0x8004] == "$8004: JMP ($02FF) {indirect}"
    assert lines[0x8007] == "$8007: ??? {implied}"


def test_disassemble_does_not_touch_bus(memory):
    memory.load(0x8000, [0xAD, 0x34, 0x12, 0xEA])
    memory.write(0x0000, 0x99)
    reads = memory.read_count

    disassemble(memory, 0x8000, 0x8003)

    assert memory.read_count == reads
    assert memory.bus == 0x99


def test_disassemble_wraps_at_top_of_memory(memory):
    memory.load(0xFFFE, [0xEA, 0xA9, 0x10, 0xEA])

    lines = disassemble(memory, 0xFFFE, 0x0001)

    assert list(lines) == [0xFFFE, 0xFFFF, 0x0001]
    assert lines[0xFFFF] == "$FFFF: LDA #$10 {immediate}"


def test_format_indexed_modes():
    assert format_instruction("LDA", "absolute_x", 0x1234, 0x8000) == (
        "$8000: LDA $1234,X {absolute_x}"
    )
    assert format_instruction("LDX", "zero_page_y", 0x10, 0x8000) == (
        "$8000: LDX $10,Y {zero_page_y}"
    )
    assert format_instruction("STA", "indirect_indexed", 0x20, 0x8000) == (
        "$8000: STA ($20),Y {indirect_indexed}"
    )
    assert format_instruction("LDA", "indexed_indirect", 0x20, 0x8000) == (
        "$8000: LDA ($20,X) {indexed_indirect}"
    )


def test_disassemble_full_address_space_terminates(memory):
    memory.load(0x0000, [0xAD, 0x34, 0x12])  # LDA $1234
    memory.load(0x0003, [0xEA] * (0xFFFF - 0x0003))
    memory.write(0xFFFF, 0xA9)  # LDA #, operand wraps to $0000

    lines = disassemble(memory, 0x0000, 0xFFFF)

    assert len(lines) == 0xFFFE
    assert lines[0x0000] == "$0000: LDA $1234 {absolute}"
    assert lines[0xFFFF] == "$FFFF: LDA #$AD {immediate}"


def test_disassemble_full_range_from_middle(memory):
    memory.load(0x0000, [0xEA] * 0x10000)
    memory.load(0x7FFE, [0x8D, 0x00, 0x02])  # STA $0200 across the stop address

    lines = disassemble(memory, 0x8000, 0x7FFF)

    # NOPs from $8000 up through the wrap, then the STA at $7FFE
    assert list(lines)[0] == 0x8000
    assert list(lines)[-1] == 0x7FFE
    assert lines[0x7FFE] == "$7FFE: STA $0200 {absolute}"


def test_brk_shows_signature_byte(memory):
    memory.load(0x8000, [0x00, 0xEA, 0xE8])  # BRK $EA, INX

    lines = disassemble(memory, 0x8000, 0x8002)

    assert list(lines) == [0x8000, 0x8002]
    assert lines[0x8000] == "$8000: BRK $EA {implied}"
    assert lines[0x8002] == "$8002: INX {implied}"
