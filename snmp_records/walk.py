"""
WalkedValues: assembles records from the flat result of an SNMP walk.

Scalars follow the ``<object>.0`` instance convention; table cells follow
``<entry>.<column>.<row>``. Both extractors scan a single contiguous slice of
the sorted OID list (see ``range_for_oid``) and map each OID back to a field
name through the shared ``OidTree``.
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Type

from snmp_records.errors import (
    DecodeError,
    DuplicateColumnError,
    DuplicateOidError,
    NamePrefixMismatchError,
    TableIndexGapError,
    TableSizeError,
    TableStructureError,
)
from snmp_records.oid_tree import OidTree
from snmp_records.oid_utils import Oid
from snmp_records.record import FieldMap, R
from snmp_records.value import Value, ValueDecoder

logger = logging.getLogger(__name__)


def range_for_oid(oid: Oid) -> Tuple[Oid, Optional[Oid]]:
    """
    Return the half-open range ``[oid, end)`` covering ``oid`` and every OID below it.

    ``end`` is ``oid`` with its last component incremented, or None when the
    subtree runs to the end of the OID space.
    """
    if not oid:
        return oid, None
    return oid, oid.next_sibling()


class WalkedValues:
    """
    Sorted OID to ``Value`` mapping bound to the tree that names it.

    Args:
        tree: Namespace used to name fields; shared, never modified
        values: ``(oid, value)`` pairs in any order

    Raises:
        DuplicateOidError: If an OID appears more than once in ``values``
    """

    def __init__(self, tree: OidTree, values: Iterable[Tuple[Sequence[int], Value]]) -> None:
        self.tree = tree
        self._values: Dict[Oid, Value] = {}
        for oid, value in values:
            oid = Oid(oid)
            if oid in self._values:
                raise DuplicateOidError(
                    f"{oid} returned twice: {self._values[oid]!r} and {value!r}"
                )
            self._values[oid] = value
        self._oids: List[Oid] = sorted(self._values)

    def __len__(self) -> int:
        return len(self._oids)

    def __iter__(self) -> Iterator[Oid]:
        return iter(self._oids)

    def __contains__(self, oid: object) -> bool:
        return oid in self._values

    def get(self, oid: Sequence[int]) -> Optional[Value]:
        return self._values.get(Oid(oid))

    def items(self) -> Iterator[Tuple[Oid, Value]]:
        for oid in self._oids:
            yield oid, self._values[oid]

    def subtree(self, root: Sequence[int]) -> Iterator[Tuple[Oid, Value]]:
        """Yield ``(oid, value)`` for ``root`` and its descendants, in order."""
        start, end = range_for_oid(Oid(root))
        lo = bisect_left(self._oids, start)
        hi = len(self._oids) if end is None else bisect_left(self._oids, end)
        for oid in self._oids[lo:hi]:
            yield oid, self._values[oid]

    def _field_name(self, oid: Oid, strip_name_prefix: str) -> str:
        parent = oid.parent()
        assert parent is not None
        basename = self.tree.oid_name(parent).basename
        if not basename.startswith(strip_name_prefix):
            raise NamePrefixMismatchError(
                f"name {basename} not prefixed with {strip_name_prefix!r} (at {oid})"
            )
        return basename[len(strip_name_prefix):]

    def extract_object(self, record: Type[R], root: Sequence[int], strip_name_prefix: str) -> R:
        """
        Build a single record from the scalars directly below ``root``.

        Only ``<root>.<field>.0`` entries are used; deeper objects (tables,
        for instance) that live in the same subtree are skipped.

        Args:
            record: Record shape to build
            root: OID of the group holding the scalars
            strip_name_prefix: Prefix removed from each scalar's name to get
                the field name (``"sys"`` turns ``sysDescr`` into ``Descr``)

        Raises:
            NamePrefixMismatchError: If a scalar's name lacks the prefix
            DuplicateColumnError: If two scalars map to the same field name
            DecodeError: If the record cannot be built from the fields
        """
        root = Oid(root)
        fields: Dict[str, Value] = {}
        for oid, value in self.subtree(root):
            rel = oid.relative_to(root)
            assert rel is not None
            if len(rel) != 2 or rel[1] != 0:
                continue

            name = self._field_name(oid, strip_name_prefix)
            if name in fields:
                raise DuplicateColumnError(f"duplicate {name!r} value under {root}?")
            fields[name] = value

        logger.debug(f"Extracting {record.__name__} from {len(fields)} scalars under {root}")
        return record.from_fields(FieldMap(fields, where=str(root)))

    def table_size(self, table_size: Sequence[int]) -> int:
        """
        Read the row count held in the scalar at ``<table_size>.0``.

        Raises:
            TableSizeError: If absent, not an integer, or negative
        """
        table_size = Oid(table_size)
        value = self._values.get(table_size.child(0))
        if value is None:
            raise TableSizeError(f"could not locate table size at {table_size}")
        try:
            size = ValueDecoder(value, f"table size at {table_size}").decode_int(64)
        except DecodeError as e:
            raise TableSizeError(f"invalid size {value!r} at {table_size}") from e
        if size < 0:
            raise TableSizeError(f"invalid size {size} at {table_size}")
        return size

    def extract_table(
        self,
        record: Type[R],
        table_size: Sequence[int],
        table_entry: Sequence[int],
        strip_name_prefix: str,
    ) -> Dict[int, R]:
        """
        Build one record per row of a conceptual table.

        Args:
            record: Record shape for a row
            table_size: OID of the scalar holding the number of rows
                (``ifNumber`` for ``ifTable``)
            table_entry: OID of the table's entry object (``ifEntry``)
            strip_name_prefix: Prefix removed from each column's name

        Returns:
            Row index to record, in ascending index order

        Raises:
            TableSizeError: If the row count cannot be read
            TableStructureError: If an entry is not ``<entry>.<column>.<row>``
                with a non-zero row
            TableIndexGapError: If a row between 1 and the row count is missing
            DuplicateColumnError: If a column repeats within a row
            NamePrefixMismatchError: If a column's name lacks the prefix
            DecodeError: If a row cannot be built from its fields
        """
        size = self.table_size(table_size)
        table_entry = Oid(table_entry)

        rows: Dict[int, Dict[str, Value]] = {}
        for oid, value in self.subtree(table_entry):
            rel = oid.relative_to(table_entry)
            assert rel is not None
            if len(rel) != 2 or rel[1] == 0:
                raise TableStructureError(f"unusual table structure: {rel} under {table_entry}?")

            name = self._field_name(oid, strip_name_prefix)
            index = rel[1]
            row = rows.setdefault(index, {})
            if name in row:
                raise DuplicateColumnError(f"duplicate {name!r}[{index}] value?")
            row[name] = value

        for index in range(1, size + 1):
            if index not in rows:
                raise TableIndexGapError(f"table is missing index {index}?", index)

        logger.debug(
            f"Extracting {len(rows)} {record.__name__} rows under {table_entry} (size {size})"
        )
        return {
            index: record.from_fields(FieldMap(rows[index], where=f"{table_entry} row {index}"))
            for index in sorted(rows)
        }
