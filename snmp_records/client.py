# pyright: reportAttributeAccessIssue=false, reportCallIssue=false
"""SNMPv2c transport client built on the PySNMP 7.x asyncio HLAPI.

The client only moves varbinds: GET and SET return the raw ``Value`` and a
walk returns ``WalkedValues`` bound to the client's own snapshot of the
``OidTree``. Timeouts and retries are left to PySNMP; failures surface as
``TransportError`` without any retrying here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from pysnmp.hlapi.v3arch.asyncio import (
    CommunityData,
    ContextData,
    ObjectIdentity,
    ObjectType,
    SnmpEngine,
    UdpTransportTarget,
    bulk_walk_cmd,
    get_cmd,
    set_cmd,
)
from pysnmp.proto.rfc1905 import EndOfMibView, NoSuchInstance, NoSuchObject

from snmp_records.app_config import AppConfig
from snmp_records.errors import TransportError
from snmp_records.oid_tree import OidTree
from snmp_records.oid_utils import Oid
from snmp_records.value import Value
from snmp_records.walk import WalkedValues

logger = logging.getLogger(__name__)

_MISSING_MARKERS = (NoSuchObject, NoSuchInstance, EndOfMibView)


@dataclass(frozen=True)
class ClientSettings:
    """Connection settings for an SNMPv2c agent."""

    community: str = "public"
    port: int = 161
    timeout: float = 5.0
    retries: int = 0
    max_repetitions: int = 63

    @classmethod
    def from_config(cls, config: AppConfig) -> "ClientSettings":
        """Build settings from the ``snmp`` section of the configuration."""
        return cls(
            community=str(config.get("snmp.community", cls.community)),
            port=int(config.get("snmp.port", cls.port)),
            timeout=float(config.get("snmp.timeout", cls.timeout)),
            retries=int(config.get("snmp.retries", cls.retries)),
            max_repetitions=int(config.get("snmp.max_repetitions", cls.max_repetitions)),
        )


def _raise_on_error(operation: str, error_indication: Any, error_status: Any, error_index: Any) -> None:
    """Raise if an SNMP operation failed."""
    if error_indication:
        raise TransportError(f"SNMP {operation} error: {error_indication}")
    if error_status:
        idx = int(error_index) if error_index else 0
        raise TransportError(
            f"SNMP {operation} error: {error_status.prettyPrint()} at varbind index {idx}"
        )


def _varbind_oid(name: Any) -> Oid:
    """Return the numeric OID of a varbind name (ObjectIdentity or ObjectName)."""
    if hasattr(name, "getOid"):
        name = name.getOid()
    return Oid(int(x) for x in name)


class SnmpClient:
    """SNMPv2c client for one agent.

    The engine is created lazily and reused for every operation. The client
    keeps a snapshot of ``tree`` taken at construction, so names added to the
    caller's tree afterwards are not seen by its walks. Populate the tree first.

    Example:
        tree = mib.full()
        client = SnmpClient("192.168.1.1", tree, ClientSettings(community="public"))
        walked = await client.walk(tree.resolve_name("internet.mgmt.mib-2.system"))
    """

    def __init__(self, host: str, tree: OidTree, settings: Optional[ClientSettings] = None) -> None:
        self.host = host
        self.settings = settings or ClientSettings()
        self._tree = tree.copy()
        self._engine: Optional[SnmpEngine] = None

    @property
    def tree(self) -> OidTree:
        return self._tree

    def _ensure_engine(self) -> SnmpEngine:
        """Lazily create engine on first use."""
        if self._engine is None:
            self._engine = SnmpEngine()
        return self._engine

    def _auth(self) -> CommunityData:
        return CommunityData(self.settings.community, mpModel=1)

    async def _target(self) -> UdpTransportTarget:
        return await UdpTransportTarget.create(
            (self.host, self.settings.port),
            timeout=self.settings.timeout,
            retries=self.settings.retries,
        )

    async def get(self, oid: Sequence[int]) -> Value:
        """
        GET a single instance.

        Raises:
            TransportError: On any SNMP error, or if the agent has no such
                object or instance
        """
        oid = Oid(oid)
        logger.debug(f"GET {oid} from {self.host}")
        error_indication, error_status, error_index, var_binds = await get_cmd(
            self._ensure_engine(),
            self._auth(),
            await self._target(),
            ContextData(),
            ObjectType(ObjectIdentity(str(oid))),
            lookupMib=False,
        )
        _raise_on_error("GET", error_indication, error_status, error_index)
        return self._single_value("GET", oid, var_binds)

    async def set(self, oid: Sequence[int], value: Value) -> Value:
        """
        SET a single instance and return the value the agent echoed back.

        Raises:
            TransportError: On any SNMP error
        """
        oid = Oid(oid)
        logger.debug(f"SET {oid} = {value!r} on {self.host}")
        error_indication, error_status, error_index, var_binds = await set_cmd(
            self._ensure_engine(),
            self._auth(),
            await self._target(),
            ContextData(),
            ObjectType(ObjectIdentity(str(oid)), value.to_pysnmp()),
            lookupMib=False,
        )
        _raise_on_error("SET", error_indication, error_status, error_index)
        return self._single_value("SET", oid, var_binds)

    def _single_value(self, operation: str, oid: Oid, var_binds: Sequence[Any]) -> Value:
        if len(var_binds) != 1:
            raise TransportError(f"SNMP {operation} {oid}: expected 1 varbind, got {len(var_binds)}")
        raw = var_binds[0][1]
        if isinstance(raw, _MISSING_MARKERS):
            raise TransportError(f"SNMP {operation} {oid}: {raw.prettyPrint()}")
        try:
            return Value.from_pysnmp(raw)
        except (TypeError, ValueError) as e:
            raise TransportError(f"SNMP {operation} {oid}: {e}") from e

    async def walk_raw(self, root: Sequence[int]) -> List[Tuple[Oid, Value]]:
        """
        Bulk-walk the subtree at ``root``.

        Returns:
            ``(oid, value)`` pairs in the order the agent sent them; only OIDs
            under ``root`` are kept

        Raises:
            TransportError: On any SNMP error
        """
        root = Oid(root)
        out: List[Tuple[Oid, Value]] = []
        iterator = bulk_walk_cmd(
            self._ensure_engine(),
            self._auth(),
            await self._target(),
            ContextData(),
            0,
            self.settings.max_repetitions,
            ObjectType(ObjectIdentity(str(root))),
            lexicographicMode=False,
            lookupMib=False,
        )
        async for error_indication, error_status, error_index, var_binds in iterator:
            _raise_on_error("WALK", error_indication, error_status, error_index)
            for var_bind in var_binds:
                oid = _varbind_oid(var_bind[0])
                raw = var_bind[1]
                if isinstance(raw, _MISSING_MARKERS) or not root.is_prefix_of(oid):
                    continue
                try:
                    out.append((oid, Value.from_pysnmp(raw)))
                except (TypeError, ValueError) as e:
                    raise TransportError(f"SNMP WALK {oid}: {e}") from e

        logger.debug(f"WALK {root} on {self.host} returned {len(out)} values")
        return out

    async def walk(self, root: Sequence[int]) -> WalkedValues:
        """Bulk-walk the subtree at ``root`` into sorted ``WalkedValues``."""
        return WalkedValues(self._tree, await self.walk_raw(root))
