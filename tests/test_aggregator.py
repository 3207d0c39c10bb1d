"""Tests for folding announcements into device records."""

from __future__ import annotations

import pytest

from atvscan.const import DeviceModel, OperatingSystem, PairingRequirement, Protocol
from atvscan.core import DeviceAggregator
from atvscan.models import RawAnnouncement

DEVICE_ID = "AA:BB:CC:DD:EE:FF"


def airplay(attributes=(f"deviceid={DEVICE_ID}", "model=AppleTV6,2", "sf=0x4")):
    return RawAnnouncement(
        name="Living Room._airplay._tcp.local.",
        service_type="_airplay._tcp.local.",
        port=7000,
        addresses=("fe80::1", "192.168.1.10"),
        attributes=tuple(attributes),
    )


def mrp(attributes=("UniqueIdentifier=mrp-uuid", f"deviceid={DEVICE_ID}")):
    return RawAnnouncement(
        name="Living Room._mediaremotetv._tcp.local.",
        service_type="_mediaremotetv._tcp.local.",
        port=49152,
        addresses=("192.168.1.10",),
        attributes=tuple(attributes),
    )


def test_ingest_creates_device():
    aggregator = DeviceAggregator()
    device = aggregator.ingest(airplay())

    assert device is not None
    assert device.name == "Living Room"
    assert device.address == "192.168.1.10"
    assert device.identifier == DEVICE_ID
    assert device.device_info.model == DeviceModel.GEN4K
    assert device.device_info.mac == DEVICE_ID

    service = device.get_service(Protocol.AIRPLAY)
    assert service is not None
    assert service.port == 7000
    assert service.enabled is True
    assert service.pairing == PairingRequirement.OPTIONAL
    assert device.properties["_airplay._tcp"]["sf"] == "0x4"


def test_ingest_same_announcement_twice_is_idempotent():
    aggregator = DeviceAggregator()
    aggregator.ingest(airplay())
    single = aggregator.devices()[DEVICE_ID].get_service(Protocol.AIRPLAY)
    assert single is not None
    expected = dict(single.properties)

    aggregator.ingest(airplay())

    devices = aggregator.devices()
    assert len(devices) == 1
    device = devices[DEVICE_ID]
    assert len(device.services) == 1
    assert device.services[0].properties == expected


def test_device_id_beats_address_for_identity():
    aggregator = DeviceAggregator()
    aggregator.ingest(airplay())
    assert list(aggregator.devices()) == [DEVICE_ID]


def test_identity_falls_back_to_ipv4_then_name():
    aggregator = DeviceAggregator()
    aggregator.ingest(airplay(attributes=("model=AppleTV6,2",)))
    aggregator.ingest(
        RawAnnouncement(
            name="Bedroom._dacp._tcp.local.",
            service_type="_dacp._tcp.local.",
            port=3689,
            attributes=("HSGID=dmap-id",),
        )
    )
    assert sorted(aggregator.devices()) == [
        "192.168.1.10",
        "Bedroom._dacp._tcp.local.",
    ]


def test_ipv6_used_when_no_ipv4():
    announcement = RawAnnouncement(
        name="Office._raop._tcp.local.",
        service_type="_raop._tcp.local.",
        port=7000,
        addresses=("fe80::2",),
    )
    aggregator = DeviceAggregator()
    device = aggregator.ingest(announcement)
    assert device is not None
    assert device.address == "fe80::2"
    assert "fe80::2" in aggregator.devices()


@pytest.mark.parametrize("first_mrp", [True, False])
def test_cross_protocol_announcements_merge(first_mrp):
    aggregator = DeviceAggregator()
    ordered = [mrp(), airplay()] if first_mrp else [airplay(), mrp()]
    for announcement in ordered:
        aggregator.ingest(announcement)

    devices = aggregator.devices()
    assert len(devices) == 1
    device = devices[DEVICE_ID]
    assert {service.protocol for service in device.services} == {
        Protocol.MRP,
        Protocol.AIRPLAY,
    }
    assert sorted(device.all_identifiers) == sorted([DEVICE_ID, "mrp-uuid"])
    assert set(device.properties) == {"_mediaremotetv._tcp", "_airplay._tcp"}


def test_device_identifier_is_never_reassigned():
    aggregator = DeviceAggregator()
    aggregator.ingest(mrp())
    device = aggregator.ingest(airplay())
    assert device is not None
    assert device.identifier == "mrp-uuid"


def test_sparse_announcement_does_not_erase_metadata():
    aggregator = DeviceAggregator()
    aggregator.ingest(airplay(attributes=(f"deviceid={DEVICE_ID}", "osvers=17.2")))
    device = aggregator.ingest(airplay(attributes=(f"deviceid={DEVICE_ID}",)))

    assert device is not None
    assert device.device_info.version == "17.2"
    assert device.device_info.operating_system == OperatingSystem.TVOS


def test_merge_keeps_existing_properties_and_identifier():
    aggregator = DeviceAggregator()
    aggregator.ingest(mrp(attributes=("UniqueIdentifier=mrp-uuid", "Name=first")))
    device = aggregator.ingest(mrp(attributes=("Name=second", "extra=1")))

    assert device is not None
    service = device.get_service(Protocol.MRP)
    assert service is not None
    assert service.identifier == "mrp-uuid"
    assert service.properties == {
        "UniqueIdentifier": "mrp-uuid",
        "Name": "second",
        "extra": "1",
    }
    # The raw snapshot is replaced, not merged.
    assert device.properties["_mediaremotetv._tcp"] == {"Name": "second", "extra": "1"}


def test_empty_name_is_filled_by_later_announcement():
    aggregator = DeviceAggregator()
    aggregator.ingest(
        RawAnnouncement(
            name="._companion-link._tcp.local.",
            service_type="_companion-link._tcp.local.",
            port=49153,
            addresses=("192.168.1.10",),
            attributes=("rpHA=companion-id",),
        )
    )
    device = aggregator.ingest(airplay(attributes=("model=AppleTV6,2",)))
    assert device is not None
    assert device.name == "Living Room"


def test_identifier_falls_back_to_generic_device_id():
    aggregator = DeviceAggregator()
    device = aggregator.ingest(
        mrp(attributes=("DeviceID=11:22:33:44:55:66", "Name=Den"))
    )
    assert device is not None
    assert device.identifier == "11:22:33:44:55:66"


def test_unknown_service_is_ignored():
    aggregator = DeviceAggregator()
    result = aggregator.ingest(
        RawAnnouncement(
            name="Printer._ipp._tcp.local.",
            service_type="_ipp._tcp.local.",
            port=631,
            addresses=("192.168.1.50",),
        )
    )
    assert result is None
    assert len(aggregator) == 0


def test_unknown_model_replaces_known_one():
    aggregator = DeviceAggregator()
    aggregator.ingest(airplay())
    device = aggregator.ingest(
        airplay(attributes=(f"deviceid={DEVICE_ID}", "model=Foo"))
    )

    assert device is not None
    assert device.device_info.raw_model == "Foo"
    assert device.device_info.model == DeviceModel.UNKNOWN


def test_lower_case_device_id_is_identifier_and_mac():
    aggregator = DeviceAggregator()
    device = aggregator.ingest(airplay(attributes=("deviceid=aa:bb:cc:dd:ee:ff",)))

    assert device is not None
    assert device.identifier == "aa:bb:cc:dd:ee:ff"
    assert device.device_info.mac == device.identifier
