"""
6502 disassembler
Decodes a memory range with read-only bus accesses so that inspecting memory
never disturbs device or open-bus state.
"""

from addressing import OPERAND_LENGTH
from opcodes import build_opcode_table
from utils import hex_byte, hex_word

_OPCODE_TABLE = build_opcode_table()

# Implied-mode instructions followed by a byte the CPU skips at runtime
SIGNATURE_BYTE = {"BRK"}


def format_instruction(name, mode, operand, addr):
    """Render one instruction in assembler syntax; operand is a byte or word"""
    if mode == "implied":
        if name in SIGNATURE_BYTE:
            text = f"{name} {hex_byte(operand)}"
        else:
            text = name
    elif mode == "immediate":
        text = f"{name} #{hex_byte(operand)}"
    elif mode == "zero_page":
        text = f"{name} {hex_byte(operand)}"
    elif mode == "zero_page_x":
        text = f"{name} {hex_byte(operand)},X"
    elif mode == "zero_page_y":
        text = f"{name} {hex_byte(operand)},Y"
    elif mode == "indexed_indirect":
        text = f"{name} ({hex_byte(operand)},X)"
    elif mode == "indirect_indexed":
        text = f"{name} ({hex_byte(operand)}),Y"
    elif mode == "absolute":
        text = f"{name} {hex_word(operand)}"
    elif mode == "absolute_x":
        text = f"{name} {hex_word(operand)},X"
    elif mode == "absolute_y":
        text = f"{name} {hex_word(operand)},Y"
    elif mode == "indirect":
        text = f"{name} ({hex_word(operand)})"
    elif mode == "relative":
        offset = operand - 0x100 if operand & 0x80 else operand
        target = (addr + 2 + offset) & 0xFFFF
        text = f"{name} {hex_byte(operand)} [{hex_word(target)}]"
    else:
        text = f"{name} ?"
    return f"{hex_word(addr)}: {text} {{{mode}}}"


def disassemble(memory, start, stop):
    """
    Disassemble [start, stop] into an ordered {address: line} mapping.

    Operands that run past $FFFF wrap to $0000. Every read is issued with
    read_only=True.
    """
    lines = {}
    addr = start & 0xFFFF
    span = (stop - start) & 0xFFFF
    consumed = 0
    while consumed <= span:
        opcode = memory.read(addr, True)
        instruction = _OPCODE_TABLE[opcode]
        length = OPERAND_LENGTH[instruction.mode]
        if instruction.name in SIGNATURE_BYTE:
            length = 1

        operand = 0
        for i in range(length):
            operand |= memory.read((addr + 1 + i) & 0xFFFF, True) << (8 * i)

        lines[addr] = format_instruction(instruction.name, instruction.mode, operand, addr)

        consumed += 1 + length
        addr = (addr + 1 + length) & 0xFFFF
    return lines
