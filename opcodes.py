"""
6502 opcode table

256 immutable entries, indexed by opcode byte. The low nibble of the opcode
selects the column of CYCLE_LOOKUP and the high nibble the row.
"""

from collections import namedtuple

from addressing import ADDRESSING_MODES
from config import ILLEGAL_OPCODE_POLICY
from instructions import OPERATIONS

Instruction = namedtuple("Instruction", ["name", "operate", "mode", "cycles"])


class CPUError(Exception):
    """Base error for CPU-related failures."""


class OpcodeTableError(CPUError):
    """Raised when the opcode table is malformed at construction time."""


# Base cycle count for every opcode, documented or not
# fmt: off
CYCLE_LOOKUP = (
    # 0  1  2  3  4  5  6  7  8  9  A  B  C  D  E  F
    7, 6, 2, 8, 3, 3, 5, 5, 3, 2, 2, 2, 4, 4, 6, 6,  # 0
    2, 5, 2, 8, 4, 4, 6, 6, 2, 4, 2, 7, 4, 4, 7, 7,  # 1
    6, 6, 2, 8, 3, 3, 5, 5, 4, 2, 2, 2, 4, 4, 6, 6,  # 2
    2, 5, 2, 8, 4, 4, 6, 6, 2, 4, 2, 7, 4, 4, 7, 7,  # 3
    6, 6, 2, 8, 3, 3, 5, 5, 3, 2, 2, 2, 3, 4, 6, 6,  # 4
    2, 5, 2, 8, 4, 4, 6, 6, 2, 4, 2, 7, 4, 4, 7, 7,  # 5
    6, 6, 2, 8, 3, 3, 5, 5, 4, 2, 2, 2, 5, 4, 6, 6,  # 6
    2, 5, 2, 8, 4, 4, 6, 6, 2, 4, 2, 7, 4, 4, 7, 7,  # 7
    2, 6, 2, 6, 3, 3, 3, 3, 2, 2, 2, 2, 4, 4, 4, 4,  # 8
    2, 6, 2, 6, 4, 4, 4, 4, 2, 5, 2, 5, 5, 5, 5, 5,  # 9
    2, 6, 2, 6, 3, 3, 3, 3, 2, 2, 2, 2, 4, 4, 4, 4,  # A
    2, 5, 2, 5, 4, 4, 4, 4, 2, 4, 2, 4, 4, 4, 4, 4,  # B
    2, 6, 2, 8, 3, 3, 5, 5, 2, 2, 2, 2, 4, 4, 6, 6,  # C
    2, 5, 2, 8, 4, 4, 6, 6, 2, 4, 2, 7, 4, 4, 7, 7,  # D
    2, 6, 2, 8, 3, 3, 5, 5, 2, 2, 2, 2, 4, 4, 6, 6,  # E
    2, 5, 2, 8, 4, 4, 6, 6, 2, 4, 2, 7, 4, 4, 7, 7,  # F
)
# fmt: on

# Documented instruction set: opcode -> (mnemonic, addressing mode)
DOCUMENTED_OPCODES = {
    # Load/Store
    0xA9: ("LDA", "immediate"),
    0xA5: ("LDA", "zero_page"),
    0xB5: ("LDA", "zero_page_x"),
    0xAD: ("LDA", "absolute"),
    0xBD: ("LDA", "absolute_x"),
    0xB9: ("LDA", "absolute_y"),
    0xA1: ("LDA", "indexed_indirect"),
    0xB1: ("LDA", "indirect_indexed"),
    0xA2: ("LDX", "immediate"),
    0xA6: ("LDX", "zero_page"),
    0xB6: ("LDX", "zero_page_y"),
    0xAE: ("LDX", "absolute"),
    0xBE: ("LDX", "absolute_y"),
    0xA0: ("LDY", "immediate"),
    0xA4: ("LDY", "zero_page"),
    0xB4: ("LDY", "zero_page_x"),
    0xAC: ("LDY", "absolute"),
    0xBC: ("LDY", "absolute_x"),
    0x85: ("STA", "zero_page"),
    0x95: ("STA", "zero_page_x"),
    0x8D: ("STA", "absolute"),
    0x9D: ("STA", "absolute_x"),
    0x99: ("STA", "absolute_y"),
    0x81: ("STA", "indexed_indirect"),
    0x91: ("STA", "indirect_indexed"),
    0x86: ("STX", "zero_page"),
    0x96: ("STX", "zero_page_y"),
    0x8E: ("STX", "absolute"),
    0x84: ("STY", "zero_page"),
    0x94: ("STY", "zero_page_x"),
    0x8C: ("STY", "absolute"),
    # Transfer
    0xAA: ("TAX", "implied"),
    0xA8: ("TAY", "implied"),
    0xBA: ("TSX", "implied"),
    0x8A: ("TXA", "implied"),
    0x9A: ("TXS", "implied"),
    0x98: ("TYA", "implied"),
    # Stack
    0x48: ("PHA", "implied"),
    0x68: ("PLA", "implied"),
    0x08: ("PHP", "implied"),
    0x28: ("PLP", "implied"),
    # Arithmetic
    0x69: ("ADC", "immediate"),
    0x65: ("ADC", "zero_page"),
    0x75: ("ADC", "zero_page_x"),
    0x6D: ("ADC", "absolute"),
    0x7D: ("ADC", "absolute_x"),
    0x79: ("ADC", "absolute_y"),
    0x61: ("ADC", "indexed_indirect"),
    0x71: ("ADC", "indirect_indexed"),
    0xE9: ("SBC", "immediate"),
    0xE5: ("SBC", "zero_page"),
    0xF5: ("SBC", "zero_page_x"),
    0xED: ("SBC", "absolute"),
    0xFD: ("SBC", "absolute_x"),
    0xF9: ("SBC", "absolute_y"),
    0xE1: ("SBC", "indexed_indirect"),
    0xF1: ("SBC", "indirect_indexed"),
    # Logic
    0x29: ("AND", "immediate"),
    0x25: ("AND", "zero_page"),
    0x35: ("AND", "zero_page_x"),
    0x2D: ("AND", "absolute"),
    0x3D: ("AND", "absolute_x"),
    0x39: ("AND", "absolute_y"),
    0x21: ("AND", "indexed_indirect"),
    0x31: ("AND", "indirect_indexed"),
    0x49: ("EOR", "immediate"),
    0x45: ("EOR", "zero_page"),
    0x55: ("EOR", "zero_page_x"),
    0x4D: ("EOR", "absolute"),
    0x5D: ("EOR", "absolute_x"),
    0x59: ("EOR", "absolute_y"),
    0x41: ("EOR", "indexed_indirect"),
    0x51: ("EOR", "indirect_indexed"),
    0x09: ("ORA", "immediate"),
    0x05: ("ORA", "zero_page"),
    0x15: ("ORA", "zero_page_x"),
    0x0D: ("ORA", "absolute"),
    0x1D: ("ORA", "absolute_x"),
    0x19: ("ORA", "absolute_y"),
    0x01: ("ORA", "indexed_indirect"),
    0x11: ("ORA", "indirect_indexed"),
    # Shift/Rotate (implied form operates on A)
    0x0A: ("ASL", "implied"),
    0x06: ("ASL", "zero_page"),
    0x16: ("ASL", "zero_page_x"),
    0x0E: ("ASL", "absolute"),
    0x1E: ("ASL", "absolute_x"),
    0x4A: ("LSR", "implied"),
    0x46: ("LSR", "zero_page"),
    0x56: ("LSR", "zero_page_x"),
    0x4E: ("LSR", "absolute"),
    0x5E: ("LSR", "absolute_x"),
    0x2A: ("ROL", "implied"),
    0x26: ("ROL", "zero_page"),
    0x36: ("ROL", "zero_page_x"),
    0x2E: ("ROL", "absolute"),
    0x3E: ("ROL", "absolute_x"),
    0x6A: ("ROR", "implied"),
    0x66: ("ROR", "zero_page"),
    0x76: ("ROR", "zero_page_x"),
    0x6E: ("ROR", "absolute"),
    0x7E: ("ROR", "absolute_x"),
    # Compare
    0xC9: ("CMP", "immediate"),
    0xC5: ("CMP", "zero_page"),
    0xD5: ("CMP", "zero_page_x"),
    0xCD: ("CMP", "absolute"),
    0xDD: ("CMP", "absolute_x"),
    0xD9: ("CMP", "absolute_y"),
    0xC1: ("CMP", "indexed_indirect"),
    0xD1: ("CMP", "indirect_indexed"),
    0xE0: ("CPX", "immediate"),
    0xE4: ("CPX", "zero_page"),
    0xEC: ("CPX", "absolute"),
    0xC0: ("CPY", "immediate"),
    0xC4: ("CPY", "zero_page"),
    0xCC: ("CPY", "absolute"),
    # Bit Test
    0x24: ("BIT", "zero_page"),
    0x2C: ("BIT", "absolute"),
    # Increment/Decrement
    0xE6: ("INC", "zero_page"),
    0xF6: ("INC", "zero_page_x"),
    0xEE: ("INC", "absolute"),
    0xFE: ("INC", "absolute_x"),
    0xE8: ("INX", "implied"),
    0xC8: ("INY", "implied"),
    0xC6: ("DEC", "zero_page"),
    0xD6: ("DEC", "zero_page_x"),
    0xCE: ("DEC", "absolute"),
    0xDE: ("DEC", "absolute_x"),
    0xCA: ("DEX", "implied"),
    0x88: ("DEY", "implied"),
    # Branches
    0x10: ("BPL", "relative"),
    0x30: ("BMI", "relative"),
    0x50: ("BVC", "relative"),
    0x70: ("BVS", "relative"),
    0x90: ("BCC", "relative"),
    0xB0: ("BCS", "relative"),
    0xD0: ("BNE", "relative"),
    0xF0: ("BEQ", "relative"),
    # Jumps/Calls
    0x4C: ("JMP", "absolute"),
    0x6C: ("JMP", "indirect"),
    0x20: ("JSR", "absolute"),
    0x60: ("RTS", "implied"),
    # Interrupts
    0x00: ("BRK", "implied"),
    0x40: ("RTI", "implied"),
    # Flags
    0x18: ("CLC", "implied"),
    0x38: ("SEC", "implied"),
    0x58: ("CLI", "implied"),
    0x78: ("SEI", "implied"),
    0xB8: ("CLV", "implied"),
    0xD8: ("CLD", "implied"),
    0xF8: ("SED", "implied"),
    # No Operation
    0xEA: ("NOP", "implied"),
}


def build_opcode_table():
    """Build the 256-entry lookup; undocumented slots become no-ops"""
    table = []
    for opcode in range(256):
        if opcode in DOCUMENTED_OPCODES:
            name, mode = DOCUMENTED_OPCODES[opcode]
        else:
            name = ILLEGAL_OPCODE_POLICY["mnemonic"]
            mode = ILLEGAL_OPCODE_POLICY["addressing_mode"]
        table.append(Instruction(name, OPERATIONS.get(name), mode, CYCLE_LOOKUP[opcode]))
    table = tuple(table)
    validate_table(table)
    return table


def validate_table(table):
    """Reject a table the engine could not dispatch from"""
    if len(table) != 256:
        raise OpcodeTableError(f"Opcode table has {len(table)} entries, expected 256")

    for opcode, instruction in enumerate(table):
        if not isinstance(instruction, Instruction):
            raise OpcodeTableError(f"Opcode 0x{opcode:02X} has no instruction entry")
        if instruction.mode not in ADDRESSING_MODES:
            raise OpcodeTableError(
                f"Opcode 0x{opcode:02X} ({instruction.name}) uses unknown addressing mode '{instruction.mode}'"
            )
        if not callable(instruction.operate):
            raise OpcodeTableError(
                f"Opcode 0x{opcode:02X} ({instruction.name}) has no operation"
            )
        if not 1 <= instruction.cycles <= 8:
            raise OpcodeTableError(
                f"Opcode 0x{opcode:02X} ({instruction.name}) has invalid cycle count {instruction.cycles}"
            )
