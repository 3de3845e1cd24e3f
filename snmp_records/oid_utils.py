"""OID type and conversion helpers.

OIDs are represented as ``Oid`` values throughout the package: immutable tuples
of unsigned 32-bit integers. Because ``Oid`` is a tuple, two OIDs compare
lexicographically component by component and a strict prefix always sorts
before any of its extensions. The walk extractor relies on that ordering to
scan a subtree as one contiguous range.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple, Union

from snmp_records.errors import InvalidAddressError

U32_MAX = 2**32 - 1


class Oid(tuple):  # type: ignore[type-arg]
    """An SNMP object identifier (or a relative one).

    Examples:
        >>> Oid([1, 3, 6, 1]).child(2)
        Oid('1.3.6.1.2')
        >>> Oid("1.3.6.1.2.1").relative_to(Oid("1.3.6.1"))
        Oid('2.1')
    """

    __slots__ = ()

    def __new__(cls, components: Union[str, Iterable[int]] = ()) -> "Oid":
        if isinstance(components, str):
            components = oid_str_to_tuple(components)
        values = tuple(components)
        for value in values:
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidAddressError(f"OID component {value!r} is not an integer")
            if value < 0 or value > U32_MAX:
                raise InvalidAddressError(f"OID component {value} out of range")
        return super().__new__(cls, values)

    def __repr__(self) -> str:
        return f"Oid({str(self)!r})"

    def __str__(self) -> str:
        return oid_tuple_to_str(self)

    def __add__(self, other: Iterable[int]) -> "Oid":  # type: ignore[override]
        return Oid(tuple(self) + tuple(other))

    def parent(self) -> Optional["Oid"]:
        """Return the OID with the last component removed, or None if empty."""
        if not self:
            return None
        return Oid(self[:-1])

    def child(self, component: int) -> "Oid":
        """Return the OID with ``component`` appended."""
        return Oid(tuple(self) + (component,))

    def is_prefix_of(self, other: Tuple[int, ...]) -> bool:
        return len(other) >= len(self) and tuple(other[: len(self)]) == tuple(self)

    def relative_to(self, base: Tuple[int, ...]) -> Optional["Oid"]:
        """Return the suffix of this OID under ``base``.

        Returns None when ``base`` is not a prefix of this OID.
        """
        if not Oid(base).is_prefix_of(self):
            return None
        return Oid(self[len(base):])

    def next_sibling(self) -> Optional["Oid"]:
        """Return the smallest OID greater than every OID under this one.

        The last component is incremented under the parent. A component
        already at the 32-bit maximum carries into the parent; when nothing
        can be incremented there is no upper bound and None is returned.
        """
        if not self:
            return None
        last = self[-1]
        parent = Oid(self[:-1])
        if last < U32_MAX:
            return parent.child(last + 1)
        return parent.next_sibling()


def oid_str_to_tuple(oid_str: str) -> Tuple[int, ...]:
    """Convert OID string to tuple of integers.

    Handles various OID string formats:
    - With leading dot: ".1.3.6.1.2.1.1.1.0"
    - Without leading dot: "1.3.6.1.2.1.1.1.0"
    - Empty strings return empty tuple

    Args:
        oid_str: OID string with dot-separated integers

    Returns:
        Tuple of integers representing the OID

    Raises:
        InvalidAddressError: If a component is not a decimal number

    Examples:
        >>> oid_str_to_tuple("1.3.6.1.2.1.1.1.0")
        (1, 3, 6, 1, 2, 1, 1, 1, 0)
        >>> oid_str_to_tuple("")
        ()
    """
    oid_str = oid_str.strip()
    if oid_str.startswith("."):
        oid_str = oid_str[1:]
    if not oid_str:
        return tuple()
    parts = oid_str.split(".")
    if not all(part.isdigit() for part in parts):
        raise InvalidAddressError(f"invalid OID string: {oid_str!r}")
    return tuple(int(x) for x in parts)


def oid_tuple_to_str(oid_tuple: Tuple[int, ...]) -> str:
    """Convert OID tuple to dot-separated string.

    Examples:
        >>> oid_tuple_to_str((1, 3, 6, 1, 2, 1, 1, 1, 0))
        "1.3.6.1.2.1.1.1.0"
        >>> oid_tuple_to_str(())
        ""
    """
    return ".".join(str(x) for x in oid_tuple)


def normalize_oid(oid: Union[str, Tuple[int, ...], List[int]]) -> Oid:
    """Normalize an OID given as string, tuple, or list into an ``Oid``.

    Raises:
        TypeError: If ``oid`` is none of the accepted types
    """
    if isinstance(oid, Oid):
        return oid
    if isinstance(oid, (str, list, tuple)):
        return Oid(oid)
    raise TypeError(f"OID must be string, tuple, or list, got {type(oid)}")


def looks_like_oid(text: str) -> bool:
    """Return True if ``text`` is a dotted-decimal OID rather than a name."""
    stripped = text.strip().lstrip(".")
    return bool(stripped) and all(part.isdigit() for part in stripped.split("."))
