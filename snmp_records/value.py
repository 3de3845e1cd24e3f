"""
SNMP values and the coercion rules that narrow them into Python types.

A ``Value`` is one of the SMIv2 application types carried in a varbind. Record
shapes never look at the kind directly; they ask a ``ValueDecoder`` for the
shape they want (an unsigned 32-bit integer, a UTF-8 string, an OID) and the
decoder either produces it or raises. The rules live here and nowhere else.
"""

from __future__ import annotations

import enum
import ipaddress
import logging
from dataclasses import dataclass
from typing import Any, Tuple, Union

from pyasn1.type import univ
from pysnmp.proto import rfc1902

from snmp_records.errors import (
    UnsupportedShapeError,
    Utf8DecodeError,
    ValueShapeError,
)
from snmp_records.oid_utils import U32_MAX, Oid

logger = logging.getLogger(__name__)

I32_MIN = -(2**31)
I32_MAX = 2**31 - 1
I64_MAX = 2**63 - 1
U64_MAX = 2**64 - 1

Payload = Union[int, bytes, Oid]


class ValueKind(enum.Enum):
    INTEGER = "Integer32"
    COUNTER32 = "Counter32"
    UNSIGNED32 = "Unsigned32"
    TIMETICKS = "TimeTicks"
    COUNTER64 = "Counter64"
    OCTET_STRING = "OctetString"
    OBJECT_IDENTIFIER = "ObjectIdentifier"
    OPAQUE = "Opaque"
    IP_ADDRESS = "IpAddress"


# Counter32, Gauge32/Unsigned32 and TimeTicks share every coercion rule.
UNSIGNED32_FAMILY = frozenset({ValueKind.COUNTER32, ValueKind.UNSIGNED32, ValueKind.TIMETICKS})

# Order matters: pysnmp derives IpAddress and Bits from OctetString and Integer
# from Integer32, so subclasses must be tested first.
_PYSNMP_KINDS: Tuple[Tuple[type, ValueKind], ...] = (
    (rfc1902.Counter64, ValueKind.COUNTER64),
    (rfc1902.Counter32, ValueKind.COUNTER32),
    (rfc1902.TimeTicks, ValueKind.TIMETICKS),
    (rfc1902.Gauge32, ValueKind.UNSIGNED32),
    (rfc1902.Unsigned32, ValueKind.UNSIGNED32),
    (rfc1902.Integer32, ValueKind.INTEGER),
    (rfc1902.Integer, ValueKind.INTEGER),
    (rfc1902.IpAddress, ValueKind.IP_ADDRESS),
    (rfc1902.Opaque, ValueKind.OPAQUE),
    (rfc1902.Bits, ValueKind.OCTET_STRING),
    (rfc1902.OctetString, ValueKind.OCTET_STRING),
    (univ.ObjectIdentifier, ValueKind.OBJECT_IDENTIFIER),
)


@dataclass(frozen=True)
class Value:
    """An immutable SNMP value: a kind plus its payload.

    Integers carry an ``int``, octet strings / opaque / IP addresses carry
    ``bytes`` and object identifiers carry an ``Oid``.
    """

    kind: ValueKind
    payload: Payload

    def __post_init__(self) -> None:
        kind, payload = self.kind, self.payload
        if kind is ValueKind.INTEGER:
            _check_int(kind, payload, I32_MIN, I32_MAX)
        elif kind in UNSIGNED32_FAMILY:
            _check_int(kind, payload, 0, U32_MAX)
        elif kind is ValueKind.COUNTER64:
            _check_int(kind, payload, 0, U64_MAX)
        elif kind is ValueKind.OBJECT_IDENTIFIER:
            if not isinstance(payload, Oid):
                object.__setattr__(self, "payload", Oid(payload))  # type: ignore[arg-type]
        else:
            if not isinstance(payload, (bytes, bytearray)):
                raise TypeError(f"{kind.value} payload must be bytes, got {type(payload)}")
            if isinstance(payload, bytearray):
                object.__setattr__(self, "payload", bytes(payload))
            if kind is ValueKind.IP_ADDRESS and len(self.payload) != 4:  # type: ignore[arg-type]
                raise ValueError(f"IpAddress must be 4 octets, got {len(payload)}")

    # Convenience constructors

    @classmethod
    def integer(cls, value: int) -> "Value":
        return cls(ValueKind.INTEGER, value)

    @classmethod
    def counter32(cls, value: int) -> "Value":
        return cls(ValueKind.COUNTER32, value)

    @classmethod
    def unsigned32(cls, value: int) -> "Value":
        return cls(ValueKind.UNSIGNED32, value)

    gauge32 = unsigned32

    @classmethod
    def timeticks(cls, value: int) -> "Value":
        return cls(ValueKind.TIMETICKS, value)

    @classmethod
    def counter64(cls, value: int) -> "Value":
        return cls(ValueKind.COUNTER64, value)

    @classmethod
    def octet_string(cls, value: Union[str, bytes]) -> "Value":
        if isinstance(value, str):
            value = value.encode("utf-8")
        return cls(ValueKind.OCTET_STRING, value)

    @classmethod
    def object_identifier(cls, value: Union[str, Tuple[int, ...]]) -> "Value":
        return cls(ValueKind.OBJECT_IDENTIFIER, Oid(value))

    @classmethod
    def opaque(cls, value: bytes) -> "Value":
        return cls(ValueKind.OPAQUE, value)

    @classmethod
    def ip_address(cls, value: Union[str, ipaddress.IPv4Address]) -> "Value":
        return cls(ValueKind.IP_ADDRESS, ipaddress.IPv4Address(value).packed)

    # pysnmp boundary

    @classmethod
    def from_pysnmp(cls, obj: Any) -> "Value":
        """
        Wrap a ``pysnmp.proto.rfc1902`` value.

        Raises:
            TypeError: If ``obj`` is not one of the SMIv2 value types (for
                example a ``noSuchObject`` or ``endOfMibView`` marker)
        """
        for pysnmp_type, kind in _PYSNMP_KINDS:
            if isinstance(obj, pysnmp_type):
                break
        else:
            raise TypeError(f"unsupported SNMP value type {type(obj).__name__}")

        if kind is ValueKind.OBJECT_IDENTIFIER:
            return cls(kind, Oid(int(x) for x in obj))
        if kind in (ValueKind.OCTET_STRING, ValueKind.OPAQUE, ValueKind.IP_ADDRESS):
            return cls(kind, bytes(obj.asOctets()))
        return cls(kind, int(obj))

    def to_pysnmp(self) -> Any:
        """Build the matching ``pysnmp.proto.rfc1902`` object (for SET requests)."""
        kind = self.kind
        if kind is ValueKind.INTEGER:
            return rfc1902.Integer32(self.payload)
        if kind is ValueKind.COUNTER32:
            return rfc1902.Counter32(self.payload)
        if kind is ValueKind.UNSIGNED32:
            return rfc1902.Gauge32(self.payload)
        if kind is ValueKind.TIMETICKS:
            return rfc1902.TimeTicks(self.payload)
        if kind is ValueKind.COUNTER64:
            return rfc1902.Counter64(self.payload)
        if kind is ValueKind.OBJECT_IDENTIFIER:
            return rfc1902.ObjectIdentifier(tuple(self.payload))  # type: ignore[arg-type]
        if kind is ValueKind.OPAQUE:
            return rfc1902.Opaque(self.payload)
        if kind is ValueKind.IP_ADDRESS:
            return rfc1902.IpAddress(self.payload)
        return rfc1902.OctetString(self.payload)

    def __repr__(self) -> str:
        if self.kind is ValueKind.OCTET_STRING:
            assert isinstance(self.payload, bytes)
            shown = repr(self.payload.decode("utf-8", errors="replace"))
        elif self.kind is ValueKind.OBJECT_IDENTIFIER:
            shown = f"<oid:{self.payload}>"
        elif self.kind is ValueKind.IP_ADDRESS:
            assert isinstance(self.payload, bytes)
            shown = str(ipaddress.IPv4Address(self.payload))
        else:
            shown = repr(self.payload)
        return f"{self.kind.value}({shown})"


def _check_int(kind: ValueKind, payload: Any, lo: int, hi: int) -> None:
    if isinstance(payload, bool) or not isinstance(payload, int):
        raise TypeError(f"{kind.value} payload must be int, got {type(payload)}")
    if not lo <= payload <= hi:
        raise ValueError(f"{kind.value} value {payload} out of range")


class ValueDecoder:
    """
    Narrows a single ``Value`` into the shape a record field asks for.

    Args:
        value: The value to decode
        where: Description of the value's origin (field name, OID) used in
            error messages
    """

    def __init__(self, value: Value, where: str = "value") -> None:
        self.value = value
        self.where = where

    def _shape_error(self, expected: str) -> ValueShapeError:
        return ValueShapeError(f"{self.where}: expected {expected}, found {self.value!r}")

    def _as_i64(self) -> int:
        kind, payload = self.value.kind, self.value.payload
        if kind is ValueKind.INTEGER or kind in UNSIGNED32_FAMILY:
            return payload  # type: ignore[return-value]
        if kind is ValueKind.COUNTER64:
            if payload > I64_MAX:  # type: ignore[operator]
                raise self._shape_error("an i64")
            return payload  # type: ignore[return-value]
        raise self._shape_error("an i64")

    def _as_u64(self) -> int:
        kind, payload = self.value.kind, self.value.payload
        if kind is ValueKind.INTEGER:
            if payload < 0:  # type: ignore[operator]
                raise self._shape_error("a u64")
            return payload  # type: ignore[return-value]
        if kind in UNSIGNED32_FAMILY or kind is ValueKind.COUNTER64:
            return payload  # type: ignore[return-value]
        raise self._shape_error("a u64")

    def decode_int(self, bits: int = 32) -> int:
        """Decode a signed integer of ``bits`` width (8, 16, 32 or 64)."""
        _check_width(bits)
        value = self._as_i64()
        lo, hi = -(2 ** (bits - 1)), 2 ** (bits - 1) - 1
        if not lo <= value <= hi:
            raise self._shape_error(f"an i{bits}")
        return value

    def decode_uint(self, bits: int = 32) -> int:
        """Decode an unsigned integer of ``bits`` width (8, 16, 32 or 64)."""
        _check_width(bits)
        value = self._as_u64()
        if value > 2**bits - 1:
            raise self._shape_error(f"a u{bits}")
        return value

    def decode_str(self) -> str:
        if self.value.kind is not ValueKind.OCTET_STRING:
            raise self._shape_error("a valid UTF-8 string")
        assert isinstance(self.value.payload, bytes)
        try:
            return self.value.payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise Utf8DecodeError(
                f"{self.where}: {self.value.payload!r} is not a valid UTF-8 string"
            ) from e

    def decode_bytes(self) -> bytes:
        if self.value.kind not in (ValueKind.OCTET_STRING, ValueKind.OPAQUE):
            raise self._shape_error("an opaque or a string")
        return self.value.payload  # type: ignore[return-value]

    def decode_oid(self) -> Oid:
        """Decode an OBJECT IDENTIFIER value as a sequence of u32 components."""
        if self.value.kind is not ValueKind.OBJECT_IDENTIFIER:
            raise self._shape_error("an object ID")
        return self.value.payload  # type: ignore[return-value]

    def decode_ip_address(self) -> ipaddress.IPv4Address:
        if self.value.kind is not ValueKind.IP_ADDRESS:
            raise self._shape_error("an IpAddress")
        return ipaddress.IPv4Address(self.value.payload)

    def decode_any(self) -> Union[int, str, bytes, Oid, ipaddress.IPv4Address]:
        """Decode by the value's own kind."""
        kind = self.value.kind
        if kind is ValueKind.INTEGER:
            return self.decode_int(32)
        if kind in UNSIGNED32_FAMILY:
            return self.decode_uint(32)
        if kind is ValueKind.COUNTER64:
            return self.decode_uint(64)
        if kind is ValueKind.OCTET_STRING:
            return self.decode_str()
        if kind is ValueKind.OBJECT_IDENTIFIER:
            return self.decode_oid()
        if kind is ValueKind.OPAQUE:
            return self.decode_bytes()
        return self.decode_ip_address()

    # Shapes the SNMP value model cannot represent

    def _unsupported(self, shape: str) -> UnsupportedShapeError:
        return UnsupportedShapeError(f"{self.where}: no {shape} support")

    def decode_bool(self) -> bool:
        raise self._unsupported("bool")

    def decode_float(self) -> float:
        raise self._unsupported("float")

    def decode_char(self) -> str:
        raise self._unsupported("char")

    def decode_map(self) -> dict:  # type: ignore[type-arg]
        raise self._unsupported("map")

    def decode_struct(self) -> Any:
        raise self._unsupported("struct")

    def decode_enum(self) -> Any:
        raise self._unsupported("enum")


def _check_width(bits: int) -> None:
    if bits not in (8, 16, 32, 64):
        raise ValueError(f"unsupported integer width {bits}")
