#!/usr/bin/env python3
"""
Test ADC/SBC results and flag derivation
"""

import pytest
from hypothesis import given, strategies as st

from cpu import CPU
from instructions import execute_adc, execute_sbc
from memory import Memory

byte = st.integers(min_value=0, max_value=0xFF)
bit = st.integers(min_value=0, max_value=1)

ADC_IMMEDIATE = 0x69
SBC_IMMEDIATE = 0xE9


def run_immediate(opcode, a, m, carry, cpu=None):
    """Execute OPC #m with the given accumulator and carry; returns the CPU"""
    if cpu is None:
        cpu = CPU(Memory())
    cpu.memory.load(0x0200, [opcode, m])
    cpu.PC = 0x0200
    cpu.A = a
    cpu.C = carry
    cpu.run_instruction()
    return cpu


def flags(cpu):
    return {"C": cpu.C, "Z": cpu.Z, "V": cpu.V, "N": cpu.N}


@pytest.mark.parametrize(
    "a, m, carry, result, expected_flags",
    [
        (127, 10, 0, 137, {"C": 0, "Z": 0, "V": 1, "N": 1}),
        (250, 10, 0, 4, {"C": 1, "Z": 0, "V": 0, "N": 0}),
        (0x00, 0x00, 0, 0x00, {"C": 0, "Z": 1, "V": 0, "N": 0}),
        (0xFF, 0x00, 1, 0x00, {"C": 1, "Z": 1, "V": 0, "N": 0}),
        (0x80, 0x80, 0, 0x00, {"C": 1, "Z": 1, "V": 1, "N": 0}),
        (0x50, 0x10, 1, 0x61, {"C": 0, "Z": 0, "V": 0, "N": 0}),
    ],
)
def test_adc(a, m, carry, result, expected_flags):
    cpu = run_immediate(ADC_IMMEDIATE, a, m, carry)

    assert cpu.A == result
    assert flags(cpu) == expected_flags


@pytest.mark.parametrize(
    "a, m, carry, result, expected_flags",
    [
        (5, 10, 1, 251, {"C": 0, "Z": 0, "V": 0, "N": 1}),
        (5, 5, 1, 0, {"C": 1, "Z": 1, "V": 0, "N": 0}),
        (5, 5, 0, 0xFF, {"C": 0, "Z": 0, "V": 0, "N": 1}),
        (0x80, 0x01, 1, 0x7F, {"C": 1, "Z": 0, "V": 1, "N": 0}),
        (0x7F, 0xFF, 1, 0x80, {"C": 0, "Z": 0, "V": 1, "N": 1}),
    ],
)
def test_sbc(a, m, carry, result, expected_flags):
    cpu = run_immediate(SBC_IMMEDIATE, a, m, carry)

    assert cpu.A == result
    assert flags(cpu) == expected_flags


def test_decimal_flag_is_ignored():
    cpu = CPU(Memory())
    cpu.D = 1

    run_immediate(ADC_IMMEDIATE, 0x09, 0x01, 0, cpu=cpu)

    assert cpu.A == 0x0A
    assert cpu.D == 1


@pytest.mark.parametrize("operate", [execute_adc, execute_sbc])
def test_arithmetic_requests_page_cross_cycle(cpu, operate):
    cpu.fetched = 0x01
    cpu.operand_ready = True

    assert operate(cpu) == 1


def test_adc_reads_operand_through_fetch(cpu, memory):
    memory.write(0x1234, 0x22)
    cpu.abs_addr = 0x1234
    cpu.operand_ready = False
    cpu.A = 0x11

    execute_adc(cpu)

    assert cpu.A == 0x33


@given(a=byte, m=byte, carry=bit)
def test_adc_matches_wide_addition(a, m, carry):
    cpu = run_immediate(ADC_IMMEDIATE, a, m, carry)
    total = a + m + carry
    signed = (a - 256 if a & 0x80 else a) + (m - 256 if m & 0x80 else m) + carry

    assert cpu.A == total & 0xFF
    assert cpu.C == (1 if total > 0xFF else 0)
    assert cpu.Z == (1 if total & 0xFF == 0 else 0)
    assert cpu.N == (total >> 7) & 1
    assert cpu.V == (1 if not -128 <= signed <= 127 else 0)


@given(a=byte, m=byte, carry=bit)
def test_sbc_is_adc_of_complement(a, m, carry):
    subtracted = run_immediate(SBC_IMMEDIATE, a, m, carry)
    added = run_immediate(ADC_IMMEDIATE, a, m ^ 0xFF, carry)

    assert subtracted.A == added.A
    assert flags(subtracted) == flags(added)


@given(a=byte, m=byte, carry=bit)
def test_sbc_borrow_is_inverted_carry(a, m, carry):
    cpu = run_immediate(SBC_IMMEDIATE, a, m, carry)
    difference = a - m - (1 - carry)

    assert cpu.A == difference & 0xFF
    assert cpu.C == (0 if difference < 0 else 1)


@given(a=byte, m=byte)
def test_sbc_undoes_adc(a, m):
    cpu = run_immediate(ADC_IMMEDIATE, a, m, 0)
    run_immediate(SBC_IMMEDIATE, cpu.A, m, 1, cpu=cpu)

    assert cpu.A == a
