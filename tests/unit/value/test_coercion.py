"""Tests for the coercion rules of ValueDecoder."""

import ipaddress

import pytest

from snmp_records.errors import UnsupportedShapeError, Utf8DecodeError, ValueShapeError
from snmp_records.oid_utils import Oid
from snmp_records.value import Value, ValueDecoder

UNSIGNED32_FAMILY = [Value.counter32, Value.gauge32, Value.timeticks]


def decoder(value: Value) -> ValueDecoder:
    return ValueDecoder(value, "test")


@pytest.mark.parametrize("bits", [8, 16, 32, 64])
def test_signed_integer_from_integer(bits: int) -> None:
    assert decoder(Value.integer(-100)).decode_int(bits) == -100


@pytest.mark.parametrize("make", UNSIGNED32_FAMILY)
def test_unsigned32_family_widens_to_signed(make: object) -> None:
    value = make(2**32 - 1)  # type: ignore[operator]
    assert decoder(value).decode_int(64) == 2**32 - 1
    with pytest.raises(ValueShapeError):
        decoder(value).decode_int(32)


def test_integer_out_of_width_fails() -> None:
    assert decoder(Value.integer(127)).decode_int(8) == 127
    with pytest.raises(ValueShapeError):
        decoder(Value.integer(128)).decode_int(8)
    with pytest.raises(ValueShapeError):
        decoder(Value.integer(-129)).decode_int(8)


def test_negative_integer_as_unsigned_fails() -> None:
    assert decoder(Value.integer(5)).decode_uint(8) == 5
    with pytest.raises(ValueShapeError):
        decoder(Value.integer(-1)).decode_uint(32)


@pytest.mark.parametrize("make", UNSIGNED32_FAMILY)
def test_unsigned32_family_as_unsigned(make: object) -> None:
    assert decoder(make(4_000_000_000)).decode_uint(32) == 4_000_000_000  # type: ignore[operator]
    with pytest.raises(ValueShapeError):
        decoder(make(70_000)).decode_uint(16)  # type: ignore[operator]


def test_counter64_narrowing() -> None:
    value = Value.counter64(2**32)
    assert decoder(value).decode_uint(64) == 2**32
    assert decoder(value).decode_int(64) == 2**32
    with pytest.raises(ValueShapeError):
        decoder(value).decode_int(32)
    with pytest.raises(ValueShapeError):
        decoder(value).decode_uint(32)


def test_counter64_beyond_signed_range() -> None:
    value = Value.counter64(2**64 - 1)
    assert decoder(value).decode_uint(64) == 2**64 - 1
    with pytest.raises(ValueShapeError):
        decoder(value).decode_int(64)


@pytest.mark.parametrize(
    "value",
    [
        Value.octet_string("5"),
        Value.object_identifier("1.3"),
        Value.opaque(b"\x05"),
        Value.ip_address("10.0.0.1"),
    ],
)
def test_integers_from_non_numeric_kinds_fail(value: Value) -> None:
    with pytest.raises(ValueShapeError):
        decoder(value).decode_int(32)
    with pytest.raises(ValueShapeError):
        decoder(value).decode_uint(32)


def test_invalid_width() -> None:
    with pytest.raises(ValueError):
        decoder(Value.integer(1)).decode_int(24)


def test_string() -> None:
    assert decoder(Value.octet_string("héllo")).decode_str() == "héllo"
    with pytest.raises(Utf8DecodeError):
        decoder(Value.octet_string(b"\xff\xfe")).decode_str()
    with pytest.raises(ValueShapeError):
        decoder(Value.opaque(b"text")).decode_str()
    with pytest.raises(ValueShapeError):
        decoder(Value.integer(1)).decode_str()


def test_bytes() -> None:
    assert decoder(Value.octet_string(b"\xff")).decode_bytes() == b"\xff"
    assert decoder(Value.opaque(b"\x00")).decode_bytes() == b"\x00"
    with pytest.raises(ValueShapeError):
        decoder(Value.ip_address("10.0.0.1")).decode_bytes()
    with pytest.raises(ValueShapeError):
        decoder(Value.integer(1)).decode_bytes()


def test_oid() -> None:
    assert decoder(Value.object_identifier("1.3.6.1.4.1.9")).decode_oid() == Oid("1.3.6.1.4.1.9")
    with pytest.raises(ValueShapeError):
        decoder(Value.octet_string("1.3.6")).decode_oid()


def test_ip_address() -> None:
    value = Value.ip_address("192.0.2.7")
    assert decoder(value).decode_ip_address() == ipaddress.IPv4Address("192.0.2.7")
    with pytest.raises(ValueShapeError):
        decoder(Value.octet_string(b"\xc0\x00\x02\x07")).decode_ip_address()


@pytest.mark.parametrize(
    "method",
    ["decode_bool", "decode_float", "decode_char", "decode_map", "decode_struct", "decode_enum"],
)
def test_unsupported_shapes_always_fail(method: str) -> None:
    for value in (Value.integer(1), Value.octet_string("true")):
        with pytest.raises(UnsupportedShapeError):
            getattr(decoder(value), method)()


@pytest.mark.parametrize(
    "value, expected",
    [
        (Value.integer(-3), -3),
        (Value.counter32(3), 3),
        (Value.timeticks(4), 4),
        (Value.counter64(2**63), 2**63),
        (Value.octet_string("abc"), "abc"),
        (Value.object_identifier("1.3.6"), Oid("1.3.6")),
        (Value.opaque(b"\x01"), b"\x01"),
        (Value.ip_address("10.0.0.1"), ipaddress.IPv4Address("10.0.0.1")),
    ],
)
def test_decode_any_dispatches_by_kind(value: Value, expected: object) -> None:
    assert decoder(value).decode_any() == expected


def test_decode_any_binary_string_fails() -> None:
    with pytest.raises(Utf8DecodeError):
        decoder(Value.octet_string(b"\x80")).decode_any()


def test_errors_name_the_origin() -> None:
    with pytest.raises(ValueShapeError, match="ifDescr"):
        ValueDecoder(Value.integer(1), "ifDescr").decode_str()
