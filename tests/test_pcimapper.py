import pytest

from hwprobe.pcimapper import PCIDevice, PCIMapper, PCIVendor

SAMPLE = "\n".join(
    [
        "# a comment line",
        "\tffff  Orphan Device",
        "",
        "1234  Example Vendor",
        "\tabcd  Example Device",
        "\t\t1234 0001  Example Subsystem",
        "\t\t1234 0002  Second Subsystem",
        "\tbeef  Another Device",
        "\tdead  three  parts",
        "5678  Other Vendor",
        "bad line",
        "1234  Duplicate Vendor",
        "\tabcd  Replaced Device",
        "",
    ]
)


@pytest.fixture
def mapper():
    return PCIMapper(SAMPLE)


def test_vendor_lookup(mapper):
    vendor = mapper["1234"]
    assert vendor.vendor_id == "1234"
    assert vendor.vendor_name == "Example Vendor"


def test_vendor_lookup_with_hex_prefix(mapper):
    assert mapper["0x5678"].vendor_name == "Other Vendor"
    assert mapper.vendor_from_id("0x1234") is mapper["1234"]


def test_unknown_vendor_is_invalid(mapper):
    vendor = mapper["9999"]
    assert (vendor.vendor_id, vendor.vendor_name) == ("0000", "invalid")
    assert vendor["abcd"].device_name == "invalid"


def test_device_lookup(mapper):
    device = mapper["1234"]["0xabcd"]
    assert device.device_name == "Example Device"
    assert mapper["1234"]["beef"].device_name == "Another Device"


def test_unknown_device_is_invalid(mapper):
    device = mapper["1234"]["0x0001"]
    assert (device.device_id, device.device_name) == ("0000", "invalid")


def test_subsystems_attached_to_last_device(mapper):
    device = mapper["1234"]["abcd"]
    assert device.subsystems == {
        "1234 0001": "Example Subsystem",
        "1234 0002": "Second Subsystem",
    }
    assert mapper["1234"]["beef"].subsystems == {}


def test_malformed_lines_are_skipped(mapper):
    assert "dead" not in mapper["1234"].devices
    assert set(mapper.vendors) == {"1234", "5678"}


def test_device_before_any_vendor_is_ignored(mapper):
    assert all("ffff" not in v.devices for v in mapper.vendors.values())


def test_duplicate_entries_keep_first(mapper):
    assert mapper["1234"].vendor_name == "Example Vendor"
    assert mapper["1234"]["abcd"].device_name == "Example Device"


def test_empty_database():
    mapper = PCIMapper("")
    assert mapper.vendors == {}
    assert mapper["1234"].vendor_name == "invalid"


def test_from_file_matches_text(tmp_path):
    path = tmp_path / "pci.ids"
    path.write_text(SAMPLE)
    from_file = PCIMapper.from_file(path)
    assert from_file.vendors == PCIMapper(SAMPLE).vendors


def test_from_file_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        PCIMapper.from_file(tmp_path / "missing.ids")


def test_vendor_getitem_on_constructed_vendor():
    vendor = PCIVendor("1af4", "Virtual Vendor")
    vendor.devices["1000"] = PCIDevice("1000", "Virtual Net")
    assert vendor["0x1000"].device_name == "Virtual Net"
    assert vendor["2000"].device_id == "0000"