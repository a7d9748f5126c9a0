"""
6502 instruction implementations

Every operation takes the CPU, reads its operand through cpu.fetch() (or
cpu.abs_addr / cpu.rel_addr) and returns 1 when it is an instruction that pays
the page-crossing penalty, 0 otherwise. The CPU adds the extra cycle only when
the addressing mode reported a page crossing as well.

Decimal mode is not emulated: ADC and SBC are always binary.
"""

from config import ILLEGAL_OPCODE_POLICY, VECTORS
from flags import FLAG_B, FLAG_U
from utils import debug_print


def _add_with_carry(cpu, value):
    """
    A + M + C -> A, shared by ADC and SBC.

    Overflow is set when both inputs carry the same sign and the result's
    sign differs:

        A  M  R | V   (A^R) & ~(A^M)
        0  0  1 | 1   1
        1  1  0 | 1   1
        (every other combination is 0)
    """
    result = cpu.A + value + cpu.C

    cpu.V = 1 if ((cpu.A ^ result) & ~(cpu.A ^ value)) & 0x80 else 0
    cpu.C = 1 if result > 0xFF else 0

    cpu.A = result & 0xFF
    cpu.set_zero_negative(cpu.A)


# Arithmetic
def execute_adc(cpu):
    _add_with_carry(cpu, cpu.fetch())
    return 1


def execute_sbc(cpu):
    # A - M - (1 - C) == A + (M ^ $FF) + C in eight bits, so the carry flag
    # doubles as an inverted borrow
    _add_with_carry(cpu, cpu.fetch() ^ 0xFF)
    return 1


# Logic
def execute_and(cpu):
    cpu.A = cpu.A & cpu.fetch()
    cpu.set_zero_negative(cpu.A)
    return 1


def execute_eor(cpu):
    cpu.A = cpu.A ^ cpu.fetch()
    cpu.set_zero_negative(cpu.A)
    return 1


def execute_ora(cpu):
    cpu.A = cpu.A | cpu.fetch()
    cpu.set_zero_negative(cpu.A)
    return 1


def execute_bit(cpu):
    """Bit Test - Test bits in memory with accumulator"""
    value = cpu.fetch()
    cpu.Z = 1 if (cpu.A & value) == 0 else 0
    cpu.V = 1 if value & 0x40 else 0
    cpu.N = 1 if value & 0x80 else 0
    return 0


# Compare
def _compare(cpu, register):
    value = cpu.fetch()
    cpu.C = 1 if register >= value else 0
    cpu.set_zero_negative((register - value) & 0xFF)


def execute_cmp(cpu):
    _compare(cpu, cpu.A)
    return 1


def execute_cpx(cpu):
    _compare(cpu, cpu.X)
    return 0


def execute_cpy(cpu):
    _compare(cpu, cpu.Y)
    return 0


# Load/Store
def execute_lda(cpu):
    cpu.A = cpu.fetch()
    cpu.set_zero_negative(cpu.A)
    return 1


def execute_ldx(cpu):
    cpu.X = cpu.fetch()
    cpu.set_zero_negative(cpu.X)
    return 1


def execute_ldy(cpu):
    cpu.Y = cpu.fetch()
    cpu.set_zero_negative(cpu.Y)
    return 1


def execute_sta(cpu):
    cpu.write(cpu.abs_addr, cpu.A)
    return 0


def execute_stx(cpu):
    cpu.write(cpu.abs_addr, cpu.X)
    return 0


def execute_sty(cpu):
    cpu.write(cpu.abs_addr, cpu.Y)
    return 0


# Transfer
def execute_tax(cpu):
    cpu.X = cpu.A
    cpu.set_zero_negative(cpu.X)
    return 0


def execute_tay(cpu):
    cpu.Y = cpu.A
    cpu.set_zero_negative(cpu.Y)
    return 0


def execute_tsx(cpu):
    cpu.X = cpu.S
    cpu.set_zero_negative(cpu.X)
    return 0


def execute_txa(cpu):
    cpu.A = cpu.X
    cpu.set_zero_negative(cpu.A)
    return 0


def execute_txs(cpu):
    cpu.S = cpu.X
    return 0


def execute_tya(cpu):
    cpu.A = cpu.Y
    cpu.set_zero_negative(cpu.A)
    return 0


# Stack
def execute_pha(cpu):
    cpu.push_stack(cpu.A)
    return 0


def execute_pla(cpu):
    cpu.A = cpu.pop_stack()
    cpu.set_zero_negative(cpu.A)
    return 0


def execute_php(cpu):
    # B and bit 5 are always set in the pushed copy
    cpu.push_stack(cpu.get_status_byte() | FLAG_B | FLAG_U)
    return 0


def execute_plp(cpu):
    # B and bit 5 do not exist as latches; keep the current values
    status = cpu.pop_stack()
    cpu.set_status_byte((status & ~(FLAG_B | FLAG_U)) | (cpu.P & (FLAG_B | FLAG_U)))
    return 0


# Increment/Decrement
def execute_inc(cpu):
    value = (cpu.fetch() + 1) & 0xFF
    cpu.write(cpu.abs_addr, value)
    cpu.set_zero_negative(value)
    return 0


def execute_inx(cpu):
    cpu.X = (cpu.X + 1) & 0xFF
    cpu.set_zero_negative(cpu.X)
    return 0


def execute_iny(cpu):
    cpu.Y = (cpu.Y + 1) & 0xFF
    cpu.set_zero_negative(cpu.Y)
    return 0


def execute_dec(cpu):
    value = (cpu.fetch() - 1) & 0xFF
    cpu.write(cpu.abs_addr, value)
    cpu.set_zero_negative(value)
    return 0


def execute_dex(cpu):
    cpu.X = (cpu.X - 1) & 0xFF
    cpu.set_zero_negative(cpu.X)
    return 0


def execute_dey(cpu):
    cpu.Y = (cpu.Y - 1) & 0xFF
    cpu.set_zero_negative(cpu.Y)
    return 0


# Shift/Rotate
def _read_modify_write(cpu, operate):
    """Apply operate(value) -> result to A (implied form) or to memory"""
    if cpu.addressing_mode == "implied":
        cpu.A = operate(cpu.A)
        cpu.set_zero_negative(cpu.A)
    else:
        value = operate(cpu.fetch())
        cpu.write(cpu.abs_addr, value)
        cpu.set_zero_negative(value)
    return 0


def execute_asl(cpu):
    def operate(value):
        cpu.C = 1 if value & 0x80 else 0
        return (value << 1) & 0xFF

    return _read_modify_write(cpu, operate)


def execute_lsr(cpu):
    def operate(value):
        cpu.C = value & 1
        return value >> 1

    return _read_modify_write(cpu, operate)


def execute_rol(cpu):
    def operate(value):
        old_carry = cpu.C
        cpu.C = 1 if value & 0x80 else 0
        return ((value << 1) | old_carry) & 0xFF

    return _read_modify_write(cpu, operate)


def execute_ror(cpu):
    def operate(value):
        old_carry = cpu.C
        cpu.C = value & 1
        return (value >> 1) | (old_carry << 7)

    return _read_modify_write(cpu, operate)


# Branches
def _branch(cpu, condition):
    """
    Taken branches cost one cycle, and one more when the target lies on a
    different page from the next instruction. These are charged directly
    rather than through the mode/operation signal.
    """
    if condition:
        cpu.cycles += 1
        target = (cpu.PC + cpu.rel_addr) & 0xFFFF
        if (target & 0xFF00) != (cpu.PC & 0xFF00):
            cpu.cycles += 1
        cpu.abs_addr = target
        cpu.PC = target
    return 0


def execute_bcc(cpu):
    return _branch(cpu, cpu.C == 0)


def execute_bcs(cpu):
    return _branch(cpu, cpu.C == 1)


def execute_beq(cpu):
    return _branch(cpu, cpu.Z == 1)


def execute_bmi(cpu):
    return _branch(cpu, cpu.N == 1)


def execute_bne(cpu):
    return _branch(cpu, cpu.Z == 0)


def execute_bpl(cpu):
    return _branch(cpu, cpu.N == 0)


def execute_bvc(cpu):
    return _branch(cpu, cpu.V == 0)


def execute_bvs(cpu):
    return _branch(cpu, cpu.V == 1)


# Jumps/Calls
def execute_jmp(cpu):
    cpu.PC = cpu.abs_addr
    return 0


def execute_jsr(cpu):
    # The pushed address is the last byte of the JSR itself
    return_addr = (cpu.PC - 1) & 0xFFFF
    cpu.push_word(return_addr)
    cpu.PC = cpu.abs_addr
    return 0


def execute_rts(cpu):
    cpu.PC = (cpu.pop_word() + 1) & 0xFFFF
    return 0


# Interrupts
def execute_brk(cpu):
    # BRK is a 2-byte instruction; the padding byte is skipped
    cpu.PC = (cpu.PC + 1) & 0xFFFF
    cpu.push_word(cpu.PC)
    cpu.push_stack(cpu.get_status_byte() | FLAG_B | FLAG_U)
    cpu.I = 1
    cpu.PC = cpu.read_word(VECTORS["IRQ"])
    debug_print(f"CPU: BRK, jumping to IRQ/BRK vector 0x{cpu.PC:04X}")
    return 0


def execute_rti(cpu):
    status = cpu.pop_stack()
    cpu.set_status_byte((status & ~(FLAG_B | FLAG_U)) | (cpu.P & (FLAG_B | FLAG_U)))
    cpu.PC = cpu.pop_word()
    return 0


# Flags
def execute_clc(cpu):
    cpu.C = 0
    return 0


def execute_cld(cpu):
    cpu.D = 0
    return 0


def execute_cli(cpu):
    cpu.I = 0
    return 0


def execute_clv(cpu):
    cpu.V = 0
    return 0


def execute_sec(cpu):
    cpu.C = 1
    return 0


def execute_sed(cpu):
    cpu.D = 1
    return 0


def execute_sei(cpu):
    cpu.I = 1
    return 0


# No Operation
def execute_nop(cpu):
    return 0


def execute_xxx(cpu):
    """Undocumented opcode: a no-op that only burns its cycles"""
    if ILLEGAL_OPCODE_POLICY["log"]:
        debug_print(
            f"CPU: Undocumented opcode 0x{cpu.opcode:02X} at PC: 0x{(cpu.PC - 1) & 0xFFFF:04X}"
        )
    return 0


OPERATIONS = {
    "ADC": execute_adc,
    "AND": execute_and,
    "ASL": execute_asl,
    "BCC": execute_bcc,
    "BCS": execute_bcs,
    "BEQ": execute_beq,
    "BIT": execute_bit,
    "BMI": execute_bmi,
    "BNE": execute_bne,
    "BPL": execute_bpl,
    "BRK": execute_brk,
    "BVC": execute_bvc,
    "BVS": execute_bvs,
    "CLC": execute_clc,
    "CLD": execute_cld,
    "CLI": execute_cli,
    "CLV": execute_clv,
    "CMP": execute_cmp,
    "CPX": execute_cpx,
    "CPY": execute_cpy,
    "DEC": execute_dec,
    "DEX": execute_dex,
    "DEY": execute_dey,
    "EOR": execute_eor,
    "INC": execute_inc,
    "INX": execute_inx,
    "INY": execute_iny,
    "JMP": execute_jmp,
    "JSR": execute_jsr,
    "LDA": execute_lda,
    "LDX": execute_ldx,
    "LDY": execute_ldy,
    "LSR": execute_lsr,
    "NOP": execute_nop,
    "ORA": execute_ora,
    "PHA": execute_pha,
    "PHP": execute_php,
    "PLA": execute_pla,
    "PLP": execute_plp,
    "ROL": execute_rol,
    "ROR": execute_ror,
    "RTI": execute_rti,
    "RTS": execute_rts,
    "SBC": execute_sbc,
    "SEC": execute_sec,
    "SED": execute_sed,
    "SEI": execute_sei,
    "STA": execute_sta,
    "STX": execute_stx,
    "STY": execute_sty,
    "TAX": execute_tax,
    "TAY": execute_tay,
    "TSX": execute_tsx,
    "TXA": execute_txa,
    "TXS": execute_txs,
    "TYA": execute_tya,
    "???": execute_xxx,
}
