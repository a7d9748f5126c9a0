"""
6502 Memory
Flat 64KB RAM bus implementing the memory port the CPU reads and writes through
"""


class Memory:
    """
    Any object with the same two methods can stand in for this class:

        read(addr, read_only=False) -> int
        write(addr, value)

    read_only marks debugger/disassembler reads that must not have side
    effects on the bus.
    """

    SIZE = 0x10000

    def __init__(self):
        self.ram = bytearray(self.SIZE)

        # Open bus state: last value driven by a real read or write
        self.bus = 0

        # Instrumentation counters
        self.read_count = 0
        self.write_count = 0

    def read(self, addr, read_only=False):
        """Read from CPU memory"""
        value = self.ram[addr & 0xFFFF]
        if not read_only:
            self.bus = value
            self.read_count += 1
        return value

    def write(self, addr, value):
        """Write to CPU memory"""
        value = value & 0xFF
        self.bus = value
        self.write_count += 1
        self.ram[addr & 0xFFFF] = value

    def load(self, start, data):
        """Copy raw bytes into RAM starting at start, wrapping at $FFFF"""
        for offset, value in enumerate(data):
            self.ram[(start + offset) & 0xFFFF] = value & 0xFF

    def set_vector(self, vector_addr, target):
        """Store a little-endian 16-bit vector"""
        self.ram[vector_addr & 0xFFFF] = target & 0xFF
        self.ram[(vector_addr + 1) & 0xFFFF] = (target >> 8) & 0xFF

    def clear(self):
        self.ram[:] = bytes(self.SIZE)
        self.bus = 0
        self.read_count = 0
        self.write_count = 0
