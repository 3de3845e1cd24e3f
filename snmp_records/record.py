"""
Decoding contract between walked values and typed records.

A record shape subclasses ``Record`` and implements ``from_fields``, asking the
``FieldMap`` for each of its fields in the shape it needs::

    @dataclass(frozen=True)
    class System(Record):
        descr: str
        up_time: int

        @classmethod
        def from_fields(cls, fields: FieldMap) -> "System":
            return cls(
                descr=fields.string("Descr"),
                up_time=fields.unsigned("UpTime"),
            )

The coercion rules themselves live in ``ValueDecoder``.
"""

from __future__ import annotations

import ipaddress
from typing import Any, Dict, Iterator, Mapping, Type, TypeVar, Union

from snmp_records.errors import MissingFieldError
from snmp_records.oid_utils import Oid
from snmp_records.value import Value, ValueDecoder

R = TypeVar("R", bound="Record")


class FieldMap(Mapping[str, Value]):
    """Read-only mapping of field name to ``Value`` with typed accessors.

    Args:
        values: Field name to value
        where: Description of where the fields came from (an OID, a table
            row) used in error messages
    """

    def __init__(self, values: Mapping[str, Value], where: str = "") -> None:
        self._values: Dict[str, Value] = dict(values)
        self.where = where

    def __getitem__(self, name: str) -> Value:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"FieldMap({self._values!r})"

    def decoder(self, name: str) -> ValueDecoder:
        """Return a decoder for field ``name``.

        Raises:
            MissingFieldError: If the field was not in the walk
        """
        value = self._values.get(name)
        if value is None:
            suffix = f" in {self.where}" if self.where else ""
            raise MissingFieldError(f"missing field {name!r}{suffix}")
        label = f"{self.where} field {name!r}" if self.where else f"field {name!r}"
        return ValueDecoder(value, label)

    def integer(self, name: str, bits: int = 32) -> int:
        return self.decoder(name).decode_int(bits)

    def unsigned(self, name: str, bits: int = 32) -> int:
        return self.decoder(name).decode_uint(bits)

    def string(self, name: str) -> str:
        return self.decoder(name).decode_str()

    def octets(self, name: str) -> bytes:
        return self.decoder(name).decode_bytes()

    def oid(self, name: str) -> Oid:
        return self.decoder(name).decode_oid()

    def ip_address(self, name: str) -> ipaddress.IPv4Address:
        return self.decoder(name).decode_ip_address()

    def any(self, name: str) -> Union[int, str, bytes, Oid, ipaddress.IPv4Address]:
        return self.decoder(name).decode_any()

    def boolean(self, name: str) -> bool:
        return self.decoder(name).decode_bool()

    def floating(self, name: str) -> float:
        return self.decoder(name).decode_float()

    def char(self, name: str) -> str:
        return self.decoder(name).decode_char()

    def mapping(self, name: str) -> Dict[Any, Any]:
        return self.decoder(name).decode_map()

    def struct(self, name: str) -> Any:
        return self.decoder(name).decode_struct()

    def enum(self, name: str) -> Any:
        return self.decoder(name).decode_enum()


class Record:
    """Base class for record shapes built from a ``FieldMap``."""

    @classmethod
    def from_fields(cls: Type[R], fields: FieldMap) -> R:
        raise NotImplementedError(f"{cls.__name__} must implement from_fields()")
