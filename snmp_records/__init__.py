"""Symbolic SNMP namespaces and typed records from walked values."""

from snmp_records.errors import SnmpRecordsError
from snmp_records.oid_tree import OidName, OidTree, add_from_instructions_under
from snmp_records.oid_utils import Oid
from snmp_records.record import FieldMap, Record
from snmp_records.value import Value, ValueDecoder, ValueKind
from snmp_records.walk import WalkedValues

__all__ = [
    "FieldMap",
    "Oid",
    "OidName",
    "OidTree",
    "Record",
    "SnmpRecordsError",
    "Value",
    "ValueDecoder",
    "ValueKind",
    "WalkedValues",
    "add_from_instructions_under",
]
