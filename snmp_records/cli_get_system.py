"""CLI: fetch and print the MIB-2 system group and interface table of a device."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
from typing import Any, Optional

from snmp_records import mib
from snmp_records.app_config import DEFAULT_CONFIG, AppConfig
from snmp_records.app_logger import AppLogger
from snmp_records.client import ClientSettings, SnmpClient
from snmp_records.errors import SnmpRecordsError
from snmp_records.mib import mib_2

logger = logging.getLogger(__name__)


async def _fetch(client: SnmpClient) -> None:
    system = await mib_2.fetch_system(client)
    print(f"system = {system}")
    print(f"vendor OID is {system.object_id}")
    try:
        print(f"   = {client.tree.describe_address(system.object_id)}")
    except SnmpRecordsError:
        print("   = ?")
    print()

    interfaces = await mib_2.fetch_interfaces(client)
    print(f"{len(interfaces)} interfaces:")
    for index, interface in interfaces.items():
        print(
            f"  [{index}] {interface.descr} admin={interface.admin_status.name.lower()} "
            f"oper={interface.oper_status.name.lower()} speed={interface.speed} "
            f"mac={interface.mac_address or '-'}"
        )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Walk the MIB-2 system and interfaces groups of an SNMPv2c agent "
        "and print them as decoded records."
    )
    parser.add_argument("host", help="IP address or hostname of the SNMP agent")
    parser.add_argument(
        "-c",
        "--community",
        default=None,
        help="Community string (default: from config, else 'public')",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="UDP port of the agent (default: from config, else 161)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to the client config file (default: {DEFAULT_CONFIG})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    config: Optional[AppConfig] = None
    try:
        config = AppConfig(args.config or DEFAULT_CONFIG)
    except FileNotFoundError:
        if args.config:
            print(f"Error: Config file not found: {args.config}", file=sys.stderr)
            return 1

    settings = ClientSettings()
    if config is not None:
        AppLogger.configure(config, level="DEBUG" if args.verbose else None)
        settings = ClientSettings.from_config(config)
    elif args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    overrides: dict[str, Any] = {}
    if args.community is not None:
        overrides["community"] = args.community
    if args.port is not None:
        overrides["port"] = args.port
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    client = SnmpClient(args.host, mib.full(), settings)
    try:
        asyncio.run(_fetch(client))
    except SnmpRecordsError as e:
        logger.debug("Fetch failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
