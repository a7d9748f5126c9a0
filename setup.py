import os

from setuptools import setup, Extension

MODULES = [
    "addressing",
    "config",
    "cpu",
    "disassembler",
    "flags",
    "instructions",
    "memory",
    "opcodes",
    "utils",
]

# Hot path modules; compiled only when NEZ6502_CYTHON=1
ACCELERATED = ["addressing", "instructions", "cpu"]

ext_modules = []
if os.environ.get("NEZ6502_CYTHON") == "1":
    from Cython.Build import cythonize

    extensions = [Extension(name, [f"{name}.py"]) for name in ACCELERATED]
    ext_modules = cythonize(extensions, compiler_directives={
        "boundscheck": False,
        "wraparound": False,
        "cdivision": True,
        "language_level": 3,
    })

setup(
    name="nez6502",
    version="0.1.0",
    description="Instruction-level MOS 6502 CPU core",
    python_requires=">=3.8",
    py_modules=MODULES,
    ext_modules=ext_modules,
    extras_require={
        "accel": ["Cython>=3.0"],
        "test": ["pytest>=7", "hypothesis>=6"],
    },
)
