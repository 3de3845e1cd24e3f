"""Cisco small business switch definitions (CISCOSB-rlInterfaces swIfTable)."""

from __future__ import annotations

from snmp_records.oid_tree import OidTree, add_from_instructions_under

SW_IF_COLUMNS = [
    "swIfIndex",
    "swIfPhysAddressType",
    "swIfDuplexAdminMode",
    "swIfDuplexOperMode",
    "swIfBackPressureMode",
    "swIfTaggedMode",
    "swIfTransceiverType",
    "swIfLockAdminStatus",
    "swIfLockOperStatus",
    "swIfType",
    "swIfDefaultTag",
    "swIfDefaultPriority",
    "swIfAdminStatus",
    "swIfFlowControlMode",
    "swIfSpeedAdminMode",
    "swIfSpeedDuplexAutoNegotiation",
    "swIfOperFlowControlMode",
    "swIfOperSpeedDuplexAutoNegotiation",
    "swIfOperBackPressureMode",
    "swIfAdminLockAction",
    "swIfOperLockAction",
    "swIfAdminLockTrapEnable",
    "swIfOperLockTrapEnable",
    "swIfOperSuspendedStatus",
    "swIfLockOperTrapCount",
    "swIfLockAdminTrapFrequency",
    "swIfReActivate",
    "swIfAdminMdix",
    "swIfOperMdix",
    "swIfHostMode",
    "swIfSingleHostViolationAdminAction",
    "swIfSingleHostViolationOperAction",
    "swIfSingleHostViolationAdminTrapEnable",
    "swIfSingleHostViolationOperTrapEnable",
    "swIfSingleHostViolationOperTrapCount",
    "swIfSingleHostViolationAdminTrapFrequency",
    "swIfLockLimitationMode",
    "swIfLockMaxMacAddresses",
    "swIfLockMacAddressesCount",
    "swIfAdminSpeedDuplexAutoNegotiationLocalCapabilities",
    "swIfOperSpeedDuplexAutoNegotiationLocalCapabilities",
    "swIfSpeedDuplexNegotiationRemoteCapabilities",
    "swIfAdminComboMode",
    "swIfOperComboMode",
    "swIfAutoNegotiationMasterSlavePreference",
    "swIfPortCapabilities",
    "swIfPortStateDuration",
    "swIfApNegotiationLane",
    "swIfPortFecMode",
    "swIfPortNumOfLanes",
]


def populate(tree: OidTree) -> None:
    """Add the swIfTable definitions under ``internet.private.enterprises``."""
    add_from_instructions_under(
        tree,
        "enterprises",
        tree.resolve_name("internet.private.enterprises"),
        [
            ("cisco", "enterprises", 9),
            ("otherEnterprises", "cisco", 6),
            ("ciscoSB", "otherEnterprises", 1),
            ("switch001", "ciscoSB", 101),
            ("swInterfaces", "switch001", 43),
            ("swIfTable", "swInterfaces", 1),
            ("swIfEntry", "swIfTable", 1),
        ]
        # Columns are numbered consecutively from 1.
        + [(name, "swIfEntry", column) for column, name in enumerate(SW_IF_COLUMNS, start=1)],
    )
