"""
6502 addressing modes

The 6502 can address $0000-$FFFF. The high byte selects the page and the low
byte the offset into it. Each mode reads its operand bytes at PC, advances PC
past them and leaves its result in exactly one of cpu.abs_addr, cpu.rel_addr
or cpu.fetched. The return value is 1 when the mode may cost an extra cycle;
the CPU only grants it when the operation agrees (see CPU.clock).
"""


def _page_crossed(addr1, addr2):
    """Check if two addresses are on different pages"""
    return (addr1 & 0xFF00) != (addr2 & 0xFF00)


def _read_word_at_pc(cpu):
    low = cpu.read(cpu.PC)
    cpu.PC = (cpu.PC + 1) & 0xFFFF
    high = cpu.read(cpu.PC)
    cpu.PC = (cpu.PC + 1) & 0xFFFF
    return (high << 8) | low


def _read_zero_page_word(cpu, pointer):
    """Little-endian word from the zero page; the high byte wraps to $00"""
    low = cpu.read(pointer & 0xFF)
    high = cpu.read((pointer + 1) & 0xFF)
    return (high << 8) | low


def implied(cpu):
    # No operand bytes; the address is informational only
    cpu.abs_addr = cpu.PC
    return 0


def immediate(cpu):
    cpu.fetched = cpu.read(cpu.PC)
    cpu.PC = (cpu.PC + 1) & 0xFFFF
    cpu.operand_ready = True
    return 0


def zero_page(cpu):
    cpu.abs_addr = cpu.read(cpu.PC) & 0x00FF
    cpu.PC = (cpu.PC + 1) & 0xFFFF
    return 0


def zero_page_x(cpu):
    # Wraps within page zero, so no page-cross penalty exists
    cpu.abs_addr = (cpu.read(cpu.PC) + cpu.X) & 0x00FF
    cpu.PC = (cpu.PC + 1) & 0xFFFF
    return 0


def zero_page_y(cpu):
    cpu.abs_addr = (cpu.read(cpu.PC) + cpu.Y) & 0x00FF
    cpu.PC = (cpu.PC + 1) & 0xFFFF
    return 0


def relative(cpu):
    """Branch displacement, sign-extended to 16 bits (-128..+127)"""
    offset = cpu.read(cpu.PC)
    cpu.PC = (cpu.PC + 1) & 0xFFFF
    if offset & 0x80:
        offset |= 0xFF00
    cpu.rel_addr = offset
    return 0


def absolute(cpu):
    cpu.abs_addr = _read_word_at_pc(cpu)
    return 0


def absolute_x(cpu):
    base_addr = _read_word_at_pc(cpu)
    cpu.abs_addr = (base_addr + cpu.X) & 0xFFFF
    return 1 if _page_crossed(base_addr, cpu.abs_addr) else 0


def absolute_y(cpu):
    base_addr = _read_word_at_pc(cpu)
    cpu.abs_addr = (base_addr + cpu.Y) & 0xFFFF
    return 1 if _page_crossed(base_addr, cpu.abs_addr) else 0


def indirect(cpu):
    """
    JMP ($xxxx). The pointer holds the low byte of the target and the next
    location the high byte. On the real chip the increment never carries into
    the pointer's high byte: a pointer ending in $FF takes its high byte from
    the start of the same page.
    """
    pointer = _read_word_at_pc(cpu)
    low = cpu.read(pointer)
    if pointer & 0x00FF == 0x00FF:
        # Page-wrap defect
        high = cpu.read(pointer & 0xFF00)
    else:
        high = cpu.read(pointer + 1)
    cpu.abs_addr = (high << 8) | low
    return 0


def indexed_indirect(cpu):
    """(zp,X): operand + X, discarding the carry, points at the target in page zero"""
    base = cpu.read(cpu.PC)
    cpu.PC = (cpu.PC + 1) & 0xFFFF
    cpu.abs_addr = _read_zero_page_word(cpu, base + cpu.X)
    return 0


def indirect_indexed(cpu):
    """(zp),Y: the word in page zero plus Y; a carry into the high byte costs a cycle"""
    pointer = cpu.read(cpu.PC)
    cpu.PC = (cpu.PC + 1) & 0xFFFF
    base_addr = _read_zero_page_word(cpu, pointer)
    cpu.abs_addr = (base_addr + cpu.Y) & 0xFFFF
    return 1 if _page_crossed(base_addr, cpu.abs_addr) else 0


ADDRESSING_MODES = {
    "implied": implied,
    "immediate": immediate,
    "zero_page": zero_page,
    "zero_page_x": zero_page_x,
    "zero_page_y": zero_page_y,
    "relative": relative,
    "absolute": absolute,
    "absolute_x": absolute_x,
    "absolute_y": absolute_y,
    "indirect": indirect,
    "indexed_indirect": indexed_indirect,
    "indirect_indexed": indirect_indexed,
}

# Operand bytes following the opcode, used by the disassembler
OPERAND_LENGTH = {
    "implied": 0,
    "immediate": 1,
    "zero_page": 1,
    "zero_page_x": 1,
    "zero_page_y": 1,
    "relative": 1,
    "absolute": 2,
    "absolute_x": 2,
    "absolute_y": 2,
    "indirect": 2,
    "indexed_indirect": 1,
    "indirect_indexed": 1,
}
