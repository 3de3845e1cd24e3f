"""CLI: translate between symbolic names and numeric OIDs using the bundled MIBs."""

from __future__ import annotations

import argparse
import sys

from snmp_records import mib
from snmp_records.errors import SnmpRecordsError
from snmp_records.oid_utils import Oid, looks_like_oid


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Resolve dotted names (internet.mgmt.mib-2.system) to OIDs, "
        "or describe numeric OIDs (1.3.6.1.2.1.1.5.0) as names."
    )
    parser.add_argument("items", nargs="+", help="Names or numeric OIDs")
    parser.add_argument(
        "--children",
        action="store_true",
        help="Also list the named children of each item",
    )

    args = parser.parse_args(argv)
    tree = mib.full()

    status = 0
    for item in args.items:
        try:
            if looks_like_oid(item):
                oid = Oid(item)
                name = tree.oid_name(oid)
                line = f"{oid} = {name}"
                if name.suffix:
                    line += f"  (unnamed suffix: {name.suffix})"
                print(line)
            else:
                oid = tree.resolve_name(item)
                print(f"{item} = {oid}")
            if args.children and tree.contains(oid):
                for component, child in tree.children(oid):
                    print(f"  {component}: {child or '-'}")
        except SnmpRecordsError as e:
            print(f"Error: {item}: {e}", file=sys.stderr)
            status = 1

    return status


if __name__ == "__main__":
    sys.exit(main())
