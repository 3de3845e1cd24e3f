"""Exception hierarchy for namespace, decoding, extraction and transport failures."""

from __future__ import annotations


class SnmpRecordsError(Exception):
    """Base class for every error raised by this package."""

    pass


# ============================================================================
# Namespace errors
# ============================================================================


class NamespaceError(SnmpRecordsError):
    """Raised when the OID tree cannot build or map a name."""

    pass


class NameSyntaxError(NamespaceError):
    """A symbolic name is empty or contains disallowed characters."""

    pass


class NameResolutionError(NamespaceError):
    """A component of a dotted name could not be matched in the tree."""

    pass


class DuplicateDefinitionError(NamespaceError):
    """A batch of instructions introduced the same name twice."""

    pass


class AddressNotFoundError(NamespaceError):
    """An OID has no corresponding node in the tree."""

    pass


class InvalidAddressError(NamespaceError, ValueError):
    """An OID is empty where one is required, or has an out-of-range component."""

    pass


# ============================================================================
# Decoding errors
# ============================================================================


class DecodeError(SnmpRecordsError):
    """Raised when a value cannot be narrowed into the requested shape."""

    pass


class ValueShapeError(DecodeError):
    """The requested shape is incompatible with the value kind present."""

    pass


class Utf8DecodeError(DecodeError):
    """An octet string requested as text is not valid UTF-8."""

    pass


class UnsupportedShapeError(DecodeError):
    """The requested shape has no representation in the SNMP value model."""

    pass


class MissingFieldError(DecodeError):
    """A record asked for a field that was not present in the walk."""

    pass


# ============================================================================
# Extraction errors
# ============================================================================


class ExtractionError(SnmpRecordsError):
    """Raised when walked values cannot be assembled into records."""

    pass


class DuplicateOidError(ExtractionError):
    """The same OID was returned more than once by a walk."""

    pass


class TableSizeError(ExtractionError):
    """The table size scalar is absent, not an integer, or negative."""

    pass


class TableStructureError(ExtractionError):
    """Table entries do not follow the <entry>.<column>.<row> layout."""

    pass


class TableIndexGapError(TableStructureError):
    """A row index between 1 and the table size is missing."""

    def __init__(self, message: str, index: int) -> None:
        super().__init__(message)
        self.index = index


class DuplicateColumnError(ExtractionError):
    """The same column name appeared twice within one row or object."""

    pass


class NamePrefixMismatchError(ExtractionError):
    """A resolved field name does not carry the expected prefix."""

    pass


# ============================================================================
# Transport errors
# ============================================================================


class TransportError(SnmpRecordsError):
    """Raised when an SNMP GET/SET/WALK operation fails."""

    pass
