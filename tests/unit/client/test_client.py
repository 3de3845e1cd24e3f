"""Tests for SnmpClient with the PySNMP HLAPI mocked out."""

import asyncio
from typing import Any, AsyncIterator, Dict, List, Tuple

import pytest
from pysnmp.proto import rfc1902
from pysnmp.proto.rfc1905 import endOfMibView, noSuchInstance
from pytest_mock import MockerFixture

import snmp_records.client as client_mod
from snmp_records.client import ClientSettings, SnmpClient
from snmp_records.errors import TransportError
from snmp_records.oid_tree import OidTree
from snmp_records.oid_utils import Oid
from snmp_records.value import Value
from snmp_records.walk import WalkedValues

SYS_NAME = Oid("1.3.6.1.2.1.1.5.0")


def varbind(oid: str, value: Any) -> Tuple[Any, Any]:
    return rfc1902.ObjectName(oid), value


@pytest.fixture
def client(full_tree: OidTree, mocker: MockerFixture) -> SnmpClient:
    mocker.patch.object(client_mod, "SnmpEngine")
    mocker.patch.object(client_mod.UdpTransportTarget, "create", new_callable=mocker.AsyncMock)
    return SnmpClient("192.0.2.1", full_tree, ClientSettings(community="private", port=1161))


def test_settings_defaults() -> None:
    settings = ClientSettings()
    assert settings.community == "public"
    assert settings.port == 161
    assert settings.retries == 0
    assert settings.max_repetitions == 63


def test_settings_from_config() -> None:
    class Cfg:
        """Test helper class for Cfg."""

        def __init__(self, values: Dict[str, Any]) -> None:
            self.values = values

        def get(self, key: str, default: Any = None) -> Any:
            return self.values.get(key, default)

    settings = ClientSettings.from_config(
        Cfg({"snmp.community": "secret", "snmp.port": "1161", "snmp.timeout": 2})  # type: ignore[arg-type]
    )
    assert settings == ClientSettings(community="secret", port=1161, timeout=2.0)


def test_tree_is_a_snapshot(client: SnmpClient, full_tree: OidTree) -> None:
    mgmt = full_tree.resolve_name("internet.mgmt")
    full_tree.add_under(mgmt, [99], "local")
    assert full_tree.contains(mgmt + (99,))
    assert not client.tree.contains(mgmt + (99,))
    assert client.tree.resolve_name("internet.mgmt.mib-2.system") == Oid("1.3.6.1.2.1.1")


def test_engine_is_created_once(client: SnmpClient) -> None:
    assert client._ensure_engine() is client._ensure_engine()
    client_mod.SnmpEngine.assert_called_once_with()  # type: ignore[attr-defined]


def test_get(client: SnmpClient, mocker: MockerFixture) -> None:
    get_cmd = mocker.patch.object(
        client_mod,
        "get_cmd",
        new_callable=mocker.AsyncMock,
        return_value=(None, 0, 0, [varbind(str(SYS_NAME), rfc1902.OctetString(b"switch-1"))]),
    )
    value = asyncio.run(client.get(SYS_NAME))
    assert value == Value.octet_string("switch-1")
    assert get_cmd.await_args.kwargs == {"lookupMib": False}
    client_mod.UdpTransportTarget.create.assert_awaited_with(  # type: ignore[attr-defined]
        ("192.0.2.1", 1161), timeout=5.0, retries=0
    )


def test_get_error_indication(client: SnmpClient, mocker: MockerFixture) -> None:
    mocker.patch.object(
        client_mod,
        "get_cmd",
        new_callable=mocker.AsyncMock,
        return_value=("requestTimedOut", 0, 0, []),
    )
    with pytest.raises(TransportError, match="SNMP GET error: requestTimedOut"):
        asyncio.run(client.get(SYS_NAME))


def test_get_error_status(client: SnmpClient, mocker: MockerFixture) -> None:
    status = mocker.Mock(**{"prettyPrint.return_value": "genErr"})
    mocker.patch.object(
        client_mod,
        "get_cmd",
        new_callable=mocker.AsyncMock,
        return_value=(None, status, 1, []),
    )
    with pytest.raises(TransportError, match="genErr at varbind index 1"):
        asyncio.run(client.get(SYS_NAME))


def test_get_no_such_instance(client: SnmpClient, mocker: MockerFixture) -> None:
    mocker.patch.object(
        client_mod,
        "get_cmd",
        new_callable=mocker.AsyncMock,
        return_value=(None, 0, 0, [varbind(str(SYS_NAME), noSuchInstance)]),
    )
    with pytest.raises(TransportError, match=str(SYS_NAME)):
        asyncio.run(client.get(SYS_NAME))


def test_set_sends_typed_value(client: SnmpClient, mocker: MockerFixture) -> None:
    set_cmd = mocker.patch.object(
        client_mod,
        "set_cmd",
        new_callable=mocker.AsyncMock,
        return_value=(None, 0, 0, [varbind(str(SYS_NAME), rfc1902.OctetString(b"core-1"))]),
    )
    echoed = asyncio.run(client.set(SYS_NAME, Value.octet_string("core-1")))
    assert echoed == Value.octet_string("core-1")

    object_type = set_cmd.await_args.args[4]
    assert isinstance(object_type[1], rfc1902.OctetString)


def test_walk(client: SnmpClient, mocker: MockerFixture) -> None:
    calls: List[Tuple[Any, ...]] = []
    batches = [
        (
            None,
            0,
            0,
            [
                varbind("1.3.6.1.2.1.1.5.0", rfc1902.OctetString(b"switch-1")),
                varbind("1.3.6.1.2.1.1.1.0", rfc1902.OctetString(b"Test Switch")),
            ],
        ),
        (
            None,
            0,
            0,
            [
                varbind("1.3.6.1.2.1.1.3.0", rfc1902.TimeTicks(42)),
                varbind("1.3.6.1.2.1.2.1.0", rfc1902.Integer32(3)),
                varbind("1.3.6.1.2.1.1.9.0", endOfMibView),
            ],
        ),
    ]

    async def fake_bulk_walk_cmd(*args: Any, **kwargs: Any) -> AsyncIterator[Any]:
        calls.append(args)
        assert kwargs == {"lexicographicMode": False, "lookupMib": False}
        for batch in batches:
            yield batch

    mocker.patch.object(client_mod, "bulk_walk_cmd", fake_bulk_walk_cmd)

    walked = asyncio.run(client.walk(Oid("1.3.6.1.2.1.1")))
    assert isinstance(walked, WalkedValues)
    assert list(walked) == [
        Oid("1.3.6.1.2.1.1.1.0"),
        Oid("1.3.6.1.2.1.1.3.0"),
        Oid("1.3.6.1.2.1.1.5.0"),
    ]
    assert walked.get(Oid("1.3.6.1.2.1.1.3.0")) == Value.timeticks(42)
    assert walked.tree is client.tree
    # non-repeaters, max-repetitions
    assert calls[0][4:6] == (0, 63)


def test_walk_error(client: SnmpClient, mocker: MockerFixture) -> None:
    async def fake_bulk_walk_cmd(*args: Any, **kwargs: Any) -> AsyncIterator[Any]:
        yield ("No SNMP response received before timeout", 0, 0, [])

    mocker.patch.object(client_mod, "bulk_walk_cmd", fake_bulk_walk_cmd)
    with pytest.raises(TransportError, match="SNMP WALK error"):
        asyncio.run(client.walk_raw(Oid("1.3.6.1.2.1.1")))
