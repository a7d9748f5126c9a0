#!/usr/bin/env python3
"""
Test configuration reporting
"""

from config import CPU_DEFAULTS, VECTORS, describe_config
from utils import set_debug


def test_describe_config_lines():
    lines = describe_config()

    assert len(lines) == 3
    assert "reset_stack_pointer=0x00FD" in lines[0]
    assert "RESET=0xFFFC" in lines[1]
    assert "mnemonic=???" in lines[2]
    assert "log=True" in lines[2]


def test_describe_config_prints_only_in_debug(capsys):
    describe_config()
    assert capsys.readouterr().out == ""

    set_debug(True)
    describe_config()
    out = capsys.readouterr().out

    assert "6502 core configuration:" in out
    assert "IRQ=0xFFFE" in out


def test_vectors_are_distinct_words():
    assert len(set(VECTORS.values())) == 3
    for addr in VECTORS.values():
        assert 0xFFF0 <= addr <= 0xFFFE
    assert CPU_DEFAULTS["reset_status"] & 0x20
