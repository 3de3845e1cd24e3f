"""
Static namespace definitions.

``base()`` returns a tree holding the top of the Internet OID hierarchy. Device
and MIB modules (``mib_2``, ``cisco``) add their own names to such a tree
through ``populate(tree)`` before it is shared with clients.
"""

from __future__ import annotations

from snmp_records.oid_tree import OidTree, add_from_instructions_under


def base() -> OidTree:
    """Return a new tree rooted at ``internet`` (1.3.6.1)."""
    tree = OidTree()

    # iso(1) org(3) dod(6) internet(1): nothing above internet is useful
    # here, so it is the root.
    internet = tree.add_root([1, 3, 6, 1], "internet")

    add_from_instructions_under(
        tree,
        "internet",
        internet,
        [
            ("directory", "internet", 1),
            ("mgmt", "internet", 2),
            ("experimental", "internet", 3),
            ("private", "internet", 4),
            ("security", "internet", 5),
            ("snmpV2", "internet", 6),
            ("enterprises", "private", 1),
        ],
    )
    return tree


def full() -> OidTree:
    """Return a base tree with every bundled MIB module populated."""
    from snmp_records.mib import cisco, mib_2

    tree = base()
    mib_2.populate(tree)
    cisco.populate(tree)
    return tree


__all__ = ["base", "full"]
