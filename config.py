"""
Configuration for the 6502 core
Power-on state, interrupt vectors and opcode policy used by the CPU
"""

from utils import debug_print

# Register state loaded by CPU.reset()
CPU_DEFAULTS = {
    "reset_stack_pointer": 0xFD,
    "reset_status": 0x24,  # U | I
    "reset_cycles": 8,
    "irq_cycles": 7,
    "nmi_cycles": 8,
}

# Little-endian vector locations read at reset/interrupt time
VECTORS = {
    "NMI": 0xFFFA,
    "RESET": 0xFFFC,
    "IRQ": 0xFFFE,  # shared with BRK
}

# The hardware stack lives in page one
STACK_PAGE = 0x0100

# Undocumented opcodes execute as a one-byte no-op costing the standard cycle count
ILLEGAL_OPCODE_POLICY = {
    "mnemonic": "???",
    "addressing_mode": "implied",
    "log": True,  # report each one through debug_print
}


def describe_config():
    """Report the active core settings"""
    lines = []
    for category, opts in [
        ("Defaults", CPU_DEFAULTS),
        ("Vectors", VECTORS),
        ("Illegal opcodes", ILLEGAL_OPCODE_POLICY),
    ]:
        rendered = ", ".join(
            f"{k}=0x{v:04X}" if isinstance(v, int) and not isinstance(v, bool) else f"{k}={v}"
            for k, v in opts.items()
        )
        lines.append(f"  {category}: {rendered}")
    debug_print("6502 core configuration:")
    for line in lines:
        debug_print(line)
    return lines
