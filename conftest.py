"""
Pytest configuration for the 6502 core test suite.
"""

import pytest

from cpu import CPU
from memory import Memory
from utils import set_debug


@pytest.fixture
def memory():
    return Memory()


@pytest.fixture
def cpu(memory):
    return CPU(memory)


@pytest.fixture(autouse=True)
def quiet_debug():
    """Tests that turn debug output on must not leak it into the next test"""
    yield
    set_debug(False)
