"""
OidTree: symbolic namespace layered over numeric OIDs.

The tree is an arena of nodes. Each node stores one OID component, the arena
index of its parent and an optional name. Roots are named entry points for
name resolution (``internet``, for instance); names below a root are only
unique among siblings, so ``resolve_name("internet.mgmt")`` looks up ``mgmt``
among the children of ``internet``.

The tree is populated once at startup and then only read, so it can be shared
between any number of clients and walked result sets.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from snmp_records.errors import (
    AddressNotFoundError,
    DuplicateDefinitionError,
    InvalidAddressError,
    NameResolutionError,
    NameSyntaxError,
)
from snmp_records.oid_utils import Oid

logger = logging.getLogger(__name__)

_NAME_CHARS = re.compile(r"^[A-Za-z0-9.-]+$")

# (new name, name of parent, component under that parent)
Instruction = Tuple[str, str, int]


@dataclass
class OidTreeNode:
    """A single node of the tree."""

    id: int
    value: int
    parent: Optional[int]
    name: Optional[str] = None
    root: bool = False


@dataclass(frozen=True)
class OidName:
    """Structured result of a reverse lookup.

    ``components`` holds the rendered name parts, from the root down. The last
    ``len(suffix)`` of them are OID components that had no node in the tree
    (table row indices, usually) and were carried over as bare numbers.
    """

    components: Tuple[str, ...]
    anchor: Oid
    suffix: Oid = field(default_factory=Oid)

    @property
    def basename(self) -> str:
        return self.components[-1]

    @property
    def named_components(self) -> Tuple[str, ...]:
        """Name parts that came from tree nodes (excludes the numeric suffix)."""
        return self.components[: len(self.components) - len(self.suffix)]

    def __str__(self) -> str:
        return ".".join(self.components)


def split_name(name: str) -> List[str]:
    """Split a dotted symbolic name into its components.

    Raises:
        NameSyntaxError: If the name is empty, has characters outside
            ``[A-Za-z0-9.-]`` or has an empty component
    """
    if not name or not _NAME_CHARS.match(name):
        raise NameSyntaxError(f"invalid OID name: {name!r}")
    parts = name.split(".")
    if any(part == "" for part in parts):
        raise NameSyntaxError(f"invalid OID name: {name!r}")
    return parts


def _check_node_name(name: str) -> None:
    if not name or "." in name or not _NAME_CHARS.match(name):
        raise NameSyntaxError(f"invalid node name: {name!r}")
    # All-digit parts of a dotted name address unnamed nodes.
    if name.isdigit():
        raise NameSyntaxError(f"node name {name!r} must not be all digits")


class OidTree:
    """Forest of named OID nodes with forward and reverse lookup."""

    def __init__(self) -> None:
        self._nodes: List[OidTreeNode] = []
        # (parent id, component) -> node id
        self._index: Dict[Tuple[Optional[int], int], int] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def copy(self) -> "OidTree":
        """Return an independent snapshot of this tree."""
        other = OidTree()
        other._nodes = [replace(node) for node in self._nodes]
        other._index = dict(self._index)
        return other

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_root(self, oid: Sequence[int], name: str) -> Oid:
        """
        Add a named root at ``oid``, creating unnamed intermediate nodes.

        Args:
            oid: Absolute OID of the root
            name: Name of the root, used as the first component of dotted names

        Returns:
            The OID of the root

        Raises:
            InvalidAddressError: If ``oid`` is empty
            NameSyntaxError: If ``name`` is empty or malformed
        """
        oid = Oid(oid)
        if not oid:
            raise InvalidAddressError(f"cannot add root {name!r} at an empty OID")
        _check_node_name(name)

        node = self._populate(None, oid)
        node.root = True
        node.name = name
        logger.debug(f"Added root {name} at {oid}")
        return oid

    def add_under(self, parent: Sequence[int], suffix: Sequence[int], name: str) -> Oid:
        """
        Add a named node at ``parent`` + ``suffix``.

        Adding the same node twice is harmless: existing nodes are reused and
        the name is (re)assigned.

        Args:
            parent: Absolute OID of an existing node
            suffix: Components relative to ``parent``
            name: Name for the terminal node

        Returns:
            The absolute OID of the named node

        Raises:
            InvalidAddressError: If ``suffix`` is empty
            NameSyntaxError: If ``name`` is empty or malformed
            AddressNotFoundError: If ``parent`` is not in the tree
        """
        parent = Oid(parent)
        suffix = Oid(suffix)
        if not suffix:
            raise InvalidAddressError(f"cannot add {name!r} with an empty suffix")
        _check_node_name(name)

        anchor = self._find(parent)
        if anchor is None:
            raise AddressNotFoundError(f"no node for parent OID {parent}")

        node = self._populate(anchor.id, suffix)
        node.root = False
        node.name = name
        full = parent + suffix
        logger.debug(f"Added {name} at {full}")
        return full

    def _populate(self, start: Optional[int], components: Iterable[int]) -> OidTreeNode:
        """Walk down from ``start``, creating any missing nodes."""
        prior = start
        for value in components:
            node_id = self._index.get((prior, value))
            if node_id is None:
                node_id = len(self._nodes)
                self._nodes.append(OidTreeNode(id=node_id, value=value, parent=prior))
                self._index[(prior, value)] = node_id
            prior = node_id
        assert prior is not None
        return self._nodes[prior]

    # ------------------------------------------------------------------
    # Forward lookup
    # ------------------------------------------------------------------

    def resolve_name(self, name: str) -> Oid:
        """
        Map a dotted name such as ``internet.mgmt.mib-2`` to its OID.

        Raises:
            NameSyntaxError: If the name is malformed
            NameResolutionError: If the root or any child is unknown
        """
        parts = split_name(name)
        root = next(
            (n for n in self._nodes if n.root and n.name == parts[0]),
            None,
        )
        if root is None:
            raise NameResolutionError(f"could not find root node {parts[0]!r}")

        try:
            terminus = self._walk_down(root, parts[1:])
        except NameResolutionError as e:
            raise NameResolutionError(f"mapping OID {name!r}: {e}") from e
        return self._oid_for_node(terminus)

    def resolve_name_under(self, parent: Sequence[int], name: str) -> Oid:
        """
        Map a dotted name relative to the node at ``parent`` to its OID.

        Raises:
            NameSyntaxError: If the name is malformed
            NameResolutionError: If ``parent`` has no node or a child is unknown
        """
        parent = Oid(parent)
        parts = split_name(name)
        anchor = self._find(parent)
        if anchor is None:
            raise NameResolutionError(f"no name found for parent OID {parent}")

        try:
            terminus = self._walk_down(anchor, parts)
        except NameResolutionError as e:
            raise NameResolutionError(f"mapping OID {name!r} under {parent}: {e}") from e
        return self._oid_for_node(terminus)

    def _walk_down(self, prior: OidTreeNode, names: Sequence[str]) -> OidTreeNode:
        for part in names:
            match = next(
                (
                    n
                    for n in self._nodes
                    if not n.root and n.parent == prior.id and n.name == part
                ),
                None,
            )
            # Unnamed intermediate nodes render as their number.
            if match is None and part.isdigit():
                node_id = self._index.get((prior.id, int(part)))
                if node_id is not None and self._nodes[node_id].name is None:
                    match = self._nodes[node_id]
            if match is None:
                raise NameResolutionError(f"could not find {part!r}")
            prior = match
        return prior

    def _oid_for_node(self, node: OidTreeNode) -> Oid:
        out = [node.value]
        while node.parent is not None:
            node = self._nodes[node.parent]
            out.append(node.value)
        out.reverse()
        return Oid(out)

    def _find(self, oid: Sequence[int]) -> Optional[OidTreeNode]:
        """Return the node at exactly ``oid``, or None."""
        prior: Optional[int] = None
        for value in oid:
            node_id = self._index.get((prior, value))
            if node_id is None:
                return None
            prior = node_id
        if prior is None:
            return None
        return self._nodes[prior]

    def contains(self, oid: Sequence[int]) -> bool:
        return self._find(Oid(oid)) is not None

    def children(self, oid: Sequence[int]) -> List[Tuple[int, Optional[str]]]:
        """Return ``(component, name)`` for each child of the node at ``oid``."""
        node = self._find(Oid(oid))
        if node is None:
            raise AddressNotFoundError(f"no node for OID {Oid(oid)}")
        return sorted((n.value, n.name) for n in self._nodes if n.parent == node.id)

    # ------------------------------------------------------------------
    # Reverse lookup
    # ------------------------------------------------------------------

    def oid_name(self, oid: Sequence[int]) -> OidName:
        """
        Map an OID back to a name.

        Trailing components with no node in the tree (row indices, the ``.0``
        of a scalar instance) are kept as bare numbers after the name of the
        longest known prefix.

        Raises:
            AddressNotFoundError: If no prefix of ``oid`` is in the tree
        """
        oid = Oid(oid)
        n = len(oid)
        anchor: Optional[OidTreeNode] = None
        while n > 0:
            anchor = self._find(oid[:n])
            if anchor is not None:
                break
            n -= 1
        if anchor is None:
            raise AddressNotFoundError(f"cannot find a name for OID {oid}")

        out: List[str] = []
        node = anchor
        while True:
            out.append(node.name if node.name is not None else str(node.value))
            if node.root or node.parent is None:
                break
            node = self._nodes[node.parent]
        out.reverse()

        suffix = Oid(oid[n:])
        out.extend(str(v) for v in suffix)
        return OidName(components=tuple(out), anchor=Oid(oid[:n]), suffix=suffix)

    def describe_address(self, oid: Sequence[int]) -> str:
        """Render ``oid`` as a dotted name, e.g. ``internet.mgmt.mib-2.system.sysDescr.0``."""
        return str(self.oid_name(oid))


def add_from_instructions_under(
    tree: OidTree,
    anchor_name: str,
    anchor_oid: Sequence[int],
    instructions: Sequence[Instruction],
) -> Dict[str, Oid]:
    """
    Add a batch of named nodes below ``anchor_oid``.

    Each instruction is ``(name, parent_name, component)``. ``parent_name``
    must be ``anchor_name`` or a name introduced earlier in the same batch.
    The whole batch is checked before any node is added, so a failing batch
    leaves the tree unchanged.

    Args:
        tree: Tree to populate
        anchor_name: Name by which instructions refer to ``anchor_oid``
        anchor_oid: Existing OID all instructions hang from
        instructions: Ordered instructions

    Returns:
        Mapping of every name in the batch (anchor included) to its OID

    Raises:
        NameResolutionError: On a reference to a parent not yet defined
        DuplicateDefinitionError: If a name appears twice in the batch
        NameSyntaxError: If a name is not a valid node name
        InvalidAddressError: If a component is not an unsigned 32-bit integer
        AddressNotFoundError: If ``anchor_oid`` is not in the tree
    """
    anchor = Oid(anchor_oid)
    seen: Dict[str, Oid] = {anchor_name: anchor}

    for name, under, rel in instructions:
        parent = seen.get(under)
        if parent is None:
            raise NameResolutionError(
                f"adding: could not find {{ {under!r} {rel} }} for {name!r}"
            )
        if name in seen:
            raise DuplicateDefinitionError(
                f"adding: duplicate? {name!r} -> {{ {under!r} {rel} }}"
            )
        _check_node_name(name)
        seen[name] = parent.child(rel)

    if instructions and not tree.contains(anchor):
        raise AddressNotFoundError(f"no node for {anchor_name!r} at {anchor}")

    for name, under, rel in instructions:
        tree.add_under(seen[under], [rel], name)

    logger.debug(f"Added {len(instructions)} names under {anchor_name}")
    return seen
