"""Tests for Value construction and the pysnmp boundary."""

import ipaddress

import pytest
from pysnmp.proto import rfc1902
from pysnmp.proto.rfc1905 import EndOfMibView

from snmp_records.oid_utils import Oid
from snmp_records.value import Value, ValueKind


@pytest.mark.parametrize(
    "obj, kind, payload",
    [
        (rfc1902.Integer32(-5), ValueKind.INTEGER, -5),
        (rfc1902.Integer(7), ValueKind.INTEGER, 7),
        (rfc1902.Counter32(10), ValueKind.COUNTER32, 10),
        (rfc1902.Gauge32(11), ValueKind.UNSIGNED32, 11),
        (rfc1902.Unsigned32(12), ValueKind.UNSIGNED32, 12),
        (rfc1902.TimeTicks(13), ValueKind.TIMETICKS, 13),
        (rfc1902.Counter64(2**40), ValueKind.COUNTER64, 2**40),
        (rfc1902.OctetString(b"abc"), ValueKind.OCTET_STRING, b"abc"),
        (rfc1902.Opaque(b"\x01\x02"), ValueKind.OPAQUE, b"\x01\x02"),
        (rfc1902.IpAddress("10.0.0.1"), ValueKind.IP_ADDRESS, b"\x0a\x00\x00\x01"),
        (rfc1902.ObjectIdentifier((1, 3, 6, 1)), ValueKind.OBJECT_IDENTIFIER, Oid("1.3.6.1")),
    ],
)
def test_from_pysnmp(obj: object, kind: ValueKind, payload: object) -> None:
    value = Value.from_pysnmp(obj)
    assert value.kind is kind
    assert value.payload == payload


def test_from_pysnmp_rejects_markers() -> None:
    with pytest.raises(TypeError):
        Value.from_pysnmp(EndOfMibView())


def test_to_pysnmp_preserves_kind() -> None:
    assert isinstance(Value.counter32(5).to_pysnmp(), rfc1902.Counter32)
    assert isinstance(Value.gauge32(5).to_pysnmp(), rfc1902.Gauge32)
    assert isinstance(Value.counter64(5).to_pysnmp(), rfc1902.Counter64)
    assert Value.from_pysnmp(Value.octet_string("x").to_pysnmp()) == Value.octet_string("x")
    assert Value.from_pysnmp(Value.ip_address("192.0.2.1").to_pysnmp()) == Value.ip_address(
        "192.0.2.1"
    )


@pytest.mark.parametrize(
    "kind, payload",
    [
        (ValueKind.INTEGER, 2**31),
        (ValueKind.INTEGER, -(2**31) - 1),
        (ValueKind.COUNTER32, -1),
        (ValueKind.TIMETICKS, 2**32),
        (ValueKind.COUNTER64, 2**64),
    ],
)
def test_integer_ranges_are_enforced(kind: ValueKind, payload: int) -> None:
    with pytest.raises(ValueError):
        Value(kind, payload)


def test_payload_types_are_enforced() -> None:
    with pytest.raises(TypeError):
        Value(ValueKind.INTEGER, "5")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        Value(ValueKind.OCTET_STRING, 5)
    with pytest.raises(ValueError):
        Value(ValueKind.IP_ADDRESS, b"\x01\x02")


def test_values_are_immutable_and_comparable() -> None:
    value = Value.octet_string(bytearray(b"abc"))  # type: ignore[arg-type]
    assert value.payload == b"abc"
    assert isinstance(value.payload, bytes)
    assert value == Value(ValueKind.OCTET_STRING, b"abc")
    with pytest.raises(AttributeError):
        value.payload = b"x"  # type: ignore[misc]


def test_object_identifier_payload_is_oid() -> None:
    value = Value(ValueKind.OBJECT_IDENTIFIER, (1, 3, 6))  # type: ignore[arg-type]
    assert isinstance(value.payload, Oid)


def test_repr() -> None:
    assert repr(Value.integer(5)) == "Integer32(5)"
    assert repr(Value.octet_string("hi")) == "OctetString('hi')"
    assert repr(Value.object_identifier("1.3.6")) == "ObjectIdentifier(<oid:1.3.6>)"
    assert repr(Value.ip_address(ipaddress.IPv4Address("10.1.2.3"))) == "IpAddress(10.1.2.3)"
