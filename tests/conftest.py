"""Shared fixtures for the test suite."""

import os
import sys
import warnings
from typing import Callable, List, Tuple

import pytest

# Silence DeprecationWarnings raised from inside pysnmp; they are not actionable here.
warnings.filterwarnings("ignore", category=DeprecationWarning, module=r"pysnmp.*")

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from snmp_records import mib  # noqa: E402
from snmp_records.oid_tree import OidTree  # noqa: E402
from snmp_records.oid_utils import Oid  # noqa: E402
from snmp_records.value import Value  # noqa: E402

SYSTEM = Oid("1.3.6.1.2.1.1")
IF_NUMBER = Oid("1.3.6.1.2.1.2.1")
IF_ENTRY = Oid("1.3.6.1.2.1.2.2.1")

@pytest.fixture
def base_tree() -> OidTree:
    """Tree with only the internet root and its well-known children."""
    return mib.base()

@pytest.fixture
def full_tree() -> OidTree:
    """Tree with MIB-2 and the Cisco definitions populated."""
    return mib.full()

@pytest.fixture
def system_values() -> List[Tuple[Oid, Value]]:
    """A walk of the system group, in no particular order."""
    return [
        (SYSTEM + (5, 0), Value.octet_string("switch-1")),
        (SYSTEM + (1, 0), Value.octet_string("Test Switch v1.0")),
        (SYSTEM + (3, 0), Value.timeticks(123456)),
        (SYSTEM + (2, 0), Value.object_identifier("1.3.6.1.4.1.9.6.1.101")),
        (SYSTEM + (4, 0), Value.octet_string("noc@example.com")),
        (SYSTEM + (7, 0), Value.integer(72)),
        (SYSTEM + (6, 0), Value.octet_string("Rack 4")),
        (SYSTEM + (8, 0), Value.timeticks(10)),
        # sysORTable rows sit under system but are not scalars
        (SYSTEM + (9, 1, 2, 1), Value.object_identifier("1.3.6.1.6.3.1")),
        (SYSTEM + (9, 1, 3, 1), Value.octet_string("SNMPv2-MIB")),
    ]

def interface_row(index: int) -> List[Tuple[Oid, Value]]:
    """All decoded ifTable columns for one row."""
    columns = [
        (1, Value.integer(index)),
        (2, Value.octet_string(f"eth{index}")),
        (3, Value.integer(6)),
        (4, Value.integer(1500)),
        (5, Value.gauge32(1_000_000_000)),
        (6, Value.octet_string(bytes([0, 0x1B, 0x21, 0, 0, index]))),
        (7, Value.integer(1)),
        (8, Value.integer(1 if index % 2 else 2)),
        (9, Value.timeticks(0)),
        (10, Value.counter32(1000 * index)),
        (14, Value.counter32(0)),
        (16, Value.counter32(2000 * index)),
        (20, Value.counter32(1)),
    ]
    return [(IF_ENTRY + (column, index), value) for column, value in columns]

@pytest.fixture
def interface_values() -> List[Tuple[Oid, Value]]:
    """A walk of the interfaces group with three rows."""
    values = [(IF_NUMBER + (0,), Value.integer(3))]
    for index in (3, 1, 2):
        values.extend(interface_row(index))
    return values

@pytest.fixture
def make_interface_row() -> Callable[[int], List[Tuple[Oid, Value]]]:
    """Factory for the ifTable columns of one row."""
    return interface_row
