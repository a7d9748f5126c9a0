"""
6502 status register (P) bit masks, lsb to msb
"""

FLAG_C = 0x01  # Carry
FLAG_Z = 0x02  # Zero
FLAG_I = 0x04  # Interrupt disable
FLAG_D = 0x08  # Decimal mode (stored, never used by ADC/SBC)
FLAG_B = 0x10  # Break
FLAG_U = 0x20  # Unused, reads back as 1
FLAG_V = 0x40  # Overflow
FLAG_N = 0x80  # Negative
