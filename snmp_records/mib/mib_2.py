"""
MIB-2 (RFC 1213 / RFC 2863) ``system`` and ``interfaces`` groups.

Provides the names, the ``System`` and ``Interface`` record shapes and helpers
that walk a device and decode them.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional, Type, TypeVar

from snmp_records.errors import ValueShapeError
from snmp_records.oid_tree import OidTree, add_from_instructions_under
from snmp_records.oid_utils import Oid
from snmp_records.record import FieldMap, Record

if TYPE_CHECKING:
    from snmp_records.client import SnmpClient

logger = logging.getLogger(__name__)

SYSTEM = "internet.mgmt.mib-2.system"
INTERFACES = "internet.mgmt.mib-2.interfaces"
IF_NUMBER = "internet.mgmt.mib-2.interfaces.ifNumber"
IF_ENTRY = "internet.mgmt.mib-2.interfaces.ifTable.ifEntry"

E = TypeVar("E", bound=enum.IntEnum)


def populate(tree: OidTree) -> None:
    """Add the system and interfaces groups under ``internet.mgmt``."""
    add_from_instructions_under(
        tree,
        "mgmt",
        tree.resolve_name("internet.mgmt"),
        [
            ("mib-2", "mgmt", 1),
            ("system", "mib-2", 1),
            ("sysDescr", "system", 1),
            ("sysObjectID", "system", 2),
            ("sysUpTime", "system", 3),
            ("sysContact", "system", 4),
            ("sysName", "system", 5),
            ("sysLocation", "system", 6),
            ("sysServices", "system", 7),
            ("sysORLastChange", "system", 8),
            ("sysORTable", "system", 9),
            ("sysOREntry", "sysORTable", 1),
            ("sysORIndex", "sysOREntry", 1),
            ("sysORID", "sysOREntry", 2),
            ("sysORDescr", "sysOREntry", 3),
            ("sysORUpTime", "sysOREntry", 4),
            ("interfaces", "mib-2", 2),
            ("ifNumber", "interfaces", 1),
            ("ifTable", "interfaces", 2),
            ("ifEntry", "ifTable", 1),
            ("ifIndex", "ifEntry", 1),
            ("ifDescr", "ifEntry", 2),
            ("ifType", "ifEntry", 3),
            ("ifMtu", "ifEntry", 4),
            ("ifSpeed", "ifEntry", 5),
            ("ifPhysAddress", "ifEntry", 6),
            ("ifAdminStatus", "ifEntry", 7),
            ("ifOperStatus", "ifEntry", 8),
            ("ifLastChange", "ifEntry", 9),
            ("ifInOctets", "ifEntry", 10),
            ("ifInUcastPkts", "ifEntry", 11),
            ("ifInNUcastPkts", "ifEntry", 12),
            ("ifInDiscards", "ifEntry", 13),
            ("ifInErrors", "ifEntry", 14),
            ("ifInUnknownProtos", "ifEntry", 15),
            ("ifOutOctets", "ifEntry", 16),
            ("ifOutUcastPkts", "ifEntry", 17),
            ("ifOutNUcastPkts", "ifEntry", 18),
            ("ifOutDiscards", "ifEntry", 19),
            ("ifOutErrors", "ifEntry", 20),
            ("ifOutQLen", "ifEntry", 21),
            ("ifSpecific", "ifEntry", 22),
        ],
    )


@dataclass(frozen=True)
class System(Record):
    """The scalars of the ``system`` group."""

    descr: str
    object_id: Oid
    up_time: int
    contact: str
    name: str
    location: str
    services: int

    @classmethod
    def from_fields(cls, fields: FieldMap) -> "System":
        return cls(
            descr=fields.string("Descr"),
            object_id=fields.oid("ObjectID"),
            up_time=fields.unsigned("UpTime"),
            contact=fields.string("Contact"),
            name=fields.string("Name"),
            location=fields.string("Location"),
            services=fields.integer("Services"),
        )


class IfAdminStatus(enum.IntEnum):
    UP = 1
    DOWN = 2
    TESTING = 3


class IfOperStatus(enum.IntEnum):
    UP = 1
    DOWN = 2
    TESTING = 3
    UNKNOWN = 4
    DORMANT = 5
    NOT_PRESENT = 6
    LOWER_LAYER_DOWN = 7


def _status(enum_cls: Type[E], fields: FieldMap, name: str) -> E:
    value = fields.integer(name)
    try:
        return enum_cls(value)
    except ValueError as e:
        raise ValueShapeError(
            f"{fields.where} field {name!r}: {value} is not a valid {enum_cls.__name__}"
        ) from e


@dataclass(frozen=True)
class Interface(Record):
    """One row of ``ifTable``.

    Deprecated columns (``ifInNUcastPkts``, ``ifSpecific``...) are not
    decoded, so agents that omit them still produce complete rows.
    """

    index: int
    descr: str
    type: int
    mtu: int
    speed: int
    phys_address: bytes
    admin_status: IfAdminStatus
    oper_status: IfOperStatus
    last_change: int
    in_octets: int
    in_errors: int
    out_octets: int
    out_errors: int

    @classmethod
    def from_fields(cls, fields: FieldMap) -> "Interface":
        return cls(
            index=fields.integer("Index"),
            descr=fields.string("Descr"),
            type=fields.integer("Type"),
            mtu=fields.integer("Mtu"),
            speed=fields.unsigned("Speed"),
            phys_address=fields.octets("PhysAddress"),
            admin_status=_status(IfAdminStatus, fields, "AdminStatus"),
            oper_status=_status(IfOperStatus, fields, "OperStatus"),
            last_change=fields.unsigned("LastChange"),
            in_octets=fields.unsigned("InOctets"),
            in_errors=fields.unsigned("InErrors"),
            out_octets=fields.unsigned("OutOctets"),
            out_errors=fields.unsigned("OutErrors"),
        )

    @property
    def mac_address(self) -> Optional[str]:
        if not self.phys_address:
            return None
        return ":".join(f"{b:02x}" for b in self.phys_address)


async def fetch_system(client: "SnmpClient") -> System:
    """Walk the system group of ``client``'s device and decode it."""
    root = client.tree.resolve_name(SYSTEM)
    walked = await client.walk(root)
    return walked.extract_object(System, root, "sys")


async def fetch_interfaces(client: "SnmpClient") -> Dict[int, Interface]:
    """Walk the interfaces group of ``client``'s device and decode ifTable."""
    tree = client.tree
    walked = await client.walk(tree.resolve_name(INTERFACES))
    logger.debug(f"Walked {len(walked)} interface values from {client.host}")
    return walked.extract_table(
        Interface,
        tree.resolve_name(IF_NUMBER),
        tree.resolve_name(IF_ENTRY),
        "if",
    )
