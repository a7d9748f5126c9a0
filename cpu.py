"""
MOS 6502 CPU Emulator
Instruction-level emulation driven one clock pulse at a time. Each instruction
is executed in full on its first pulse and the remaining pulses are counted
down, so cycle totals match the hardware at instruction granularity.
"""

import utils
from addressing import ADDRESSING_MODES
from config import CPU_DEFAULTS, STACK_PAGE, VECTORS
from flags import FLAG_B, FLAG_C, FLAG_D, FLAG_I, FLAG_N, FLAG_U, FLAG_V, FLAG_Z
from opcodes import build_opcode_table
from utils import debug_print, format_status


def _flag(mask, doc):
    """Expose one status bit as a 0/1 attribute backed by P"""

    def getter(self):
        return 1 if self.P & mask else 0

    def setter(self, value):
        if value:
            self.P |= mask
        else:
            self.P &= ~mask & 0xFF

    return property(getter, setter, doc=doc)


class CPU:
    C = _flag(FLAG_C, "Carry flag")
    Z = _flag(FLAG_Z, "Zero flag")
    I = _flag(FLAG_I, "Interrupt disable")  # noqa: E741
    D = _flag(FLAG_D, "Decimal mode (ignored by ADC/SBC)")
    B = _flag(FLAG_B, "Break flag")
    U = _flag(FLAG_U, "Unused, forced to 1 around every instruction")
    V = _flag(FLAG_V, "Overflow flag")
    N = _flag(FLAG_N, "Negative flag")

    def __init__(self, memory):
        # Borrowed, not owned: the caller wires and tears down the bus
        self.memory = memory

        # Registers
        self.A = 0  # Accumulator
        self.X = 0  # X Register
        self.Y = 0  # Y Register
        self.PC = 0  # Program Counter
        self.S = CPU_DEFAULTS["reset_stack_pointer"]  # Stack Pointer
        self.P = CPU_DEFAULTS["reset_status"]  # Status register

        # Execution state for the instruction in flight
        self.opcode = 0
        self.fetched = 0  # Operand value once materialized
        self.abs_addr = 0  # Effective address
        self.rel_addr = 0  # Sign-extended branch displacement
        self.operand_ready = False

        # Latched interrupt serviced at the next instruction boundary: None, "NMI" or "IRQ"
        self.interrupt_pending = None

        # Cycle tracking
        self.cycles = 0  # Remaining cycles for the current instruction
        self.total_cycles = 0  # Total clock pulses seen

        # Read-only for the lifetime of the CPU
        self.lookup = build_opcode_table()

    # Bus access
    def read(self, addr):
        return self.memory.read(addr & 0xFFFF)

    def read_word(self, addr):
        low = self.read(addr)
        high = self.read((addr + 1) & 0xFFFF)
        return (high << 8) | low

    def write(self, addr, value):
        self.memory.write(addr & 0xFFFF, value & 0xFF)

    # Status register
    def get_flag(self, mask):
        return 1 if self.P & mask else 0

    def set_flag(self, mask, condition):
        """Set the bit when condition holds, clear it otherwise"""
        if condition:
            self.P |= mask
        else:
            self.P &= ~mask & 0xFF

    def get_status_byte(self):
        """Get the status register as a byte"""
        return self.P

    def set_status_byte(self, value):
        """Set the status register from a byte"""
        self.P = value & 0xFF

    def set_zero_negative(self, value):
        """Set zero and negative flags based on value"""
        self.Z = 1 if value == 0 else 0
        self.N = 1 if value & 0x80 else 0

    # Stack
    def push_stack(self, value):
        """Push a byte onto the stack"""
        self.write(STACK_PAGE + self.S, value)
        self.S = (self.S - 1) & 0xFF

    def pop_stack(self):
        """Pop a byte from the stack"""
        self.S = (self.S + 1) & 0xFF
        return self.read(STACK_PAGE + self.S)

    def push_word(self, value):
        # High byte first, so the word sits little-endian in memory
        self.push_stack((value >> 8) & 0xFF)
        self.push_stack(value & 0xFF)

    def pop_word(self):
        low = self.pop_stack()
        high = self.pop_stack()
        return (high << 8) | low

    @property
    def addressing_mode(self):
        """Addressing mode tag of the instruction in flight"""
        return self.lookup[self.opcode].mode

    def fetch(self):
        """
        Operand for the current instruction. Immediate operands are already
        resolved; anything else is read once from abs_addr and cached until
        the next opcode fetch.
        """
        if not self.operand_ready:
            self.fetched = self.read(self.abs_addr)
            self.operand_ready = True
        return self.fetched

    def clock(self):
        """Advance the CPU by one clock pulse"""
        if self.cycles == 0 and self.interrupt_pending:
            self._service_interrupt()

        if self.cycles == 0:
            self.opcode = self.read(self.PC)
            self.PC = (self.PC + 1) & 0xFFFF
            instruction = self.lookup[self.opcode]

            self.U = 1
            self.cycles = instruction.cycles
            self.operand_ready = False

            if utils.DEBUG_MODE:
                debug_print(
                    f"CPU: {instruction.name} at PC=0x{(self.PC - 1) & 0xFFFF:04X}, "
                    f"opcode=0x{self.opcode:02X}, {self.state_string()}"
                )

            mode_cycles = ADDRESSING_MODES[instruction.mode](self)
            operate_cycles = instruction.operate(self)

            # The penalty applies only when both the mode crossed a page and
            # the instruction is one that pays for it
            self.cycles += mode_cycles & operate_cycles

            self.U = 1

        self.cycles -= 1
        self.total_cycles += 1

    def complete(self):
        """True at an instruction boundary"""
        return self.cycles == 0

    def run_instruction(self):
        """Clock until the instruction in flight finishes; returns the pulses used"""
        pulses = 0
        while True:
            self.clock()
            pulses += 1
            if self.cycles == 0:
                return pulses

    def reset(self):
        """Reset the CPU to initial state"""
        self.A = 0
        self.X = 0
        self.Y = 0
        self.S = CPU_DEFAULTS["reset_stack_pointer"]
        self.P = CPU_DEFAULTS["reset_status"]

        # Read reset vector
        self.PC = self.read_word(VECTORS["RESET"])

        self.opcode = 0
        self.fetched = 0
        self.abs_addr = 0
        self.rel_addr = 0
        self.operand_ready = False
        self.interrupt_pending = None

        self.cycles = CPU_DEFAULTS["reset_cycles"]
        debug_print(f"CPU: Reset, PC=0x{self.PC:04X}")

    def irq(self):
        """Maskable interrupt request; ignored while I is set"""
        if self.I:
            debug_print(f"CPU: IRQ masked (I={self.I}), PC=0x{self.PC:04X}")
            return
        # NMI takes precedence over IRQ
        if self.interrupt_pending != "NMI":
            self.interrupt_pending = "IRQ"
        debug_print(f"CPU: Interrupt triggered: IRQ, PC=0x{self.PC:04X}")

    def nmi(self):
        """Non-maskable interrupt"""
        self.interrupt_pending = "NMI"
        debug_print(f"CPU: Interrupt triggered: NMI, PC=0x{self.PC:04X}")

    def _service_interrupt(self):
        """Run the latched interrupt; called only at an instruction boundary"""
        kind = self.interrupt_pending
        self.interrupt_pending = None
        if kind == "NMI":
            self._interrupt(VECTORS["NMI"], CPU_DEFAULTS["nmi_cycles"], "NMI")
        elif not self.I:
            self._interrupt(VECTORS["IRQ"], CPU_DEFAULTS["irq_cycles"], "IRQ")
        else:
            debug_print(f"CPU: IRQ dropped, I set before boundary, PC=0x{self.PC:04X}")

    def _interrupt(self, vector_addr, cycles, kind):
        old_pc = self.PC
        self.push_word(self.PC)

        # Hardware interrupts push B clear and bit 5 set
        self.push_stack((self.P & ~FLAG_B) | FLAG_U)
        self.I = 1

        self.PC = self.read_word(vector_addr)
        self.cycles = cycles
        debug_print(
            f"CPU: Handling {kind}, vector=0x{vector_addr:04X}, "
            f"jumping to 0x{self.PC:04X}, old PC=0x{old_pc:04X}"
        )

    def state_string(self):
        return (
            f"A={self.A:02X} X={self.X:02X} Y={self.Y:02X} S={self.S:02X} "
            f"P={format_status(self.P)} cycles={self.total_cycles}"
        )

    def __repr__(self):
        return f"CPU(PC=0x{self.PC:04X} {self.state_string()})"
