import pytest

from hwprobe.disk import (
    BLOCK_SIZE,
    UNKNOWN,
    disk_model,
    disk_serial_number,
    disk_size_bytes,
    disk_vendor,
    get_all_disks,
    is_partition,
)


def _make_block(base, name, size=None, **device_files):
    directory = base / name
    directory.mkdir(parents=True)
    if size is not None:
        (directory / "size").write_text(size)
    if device_files:
        device = directory / "device"
        device.mkdir()
        for file_name, content in device_files.items():
            (device / file_name).write_text(content)
    return directory


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/sys/class/block/sda", False),
        ("/sys/class/block/sda1", True),
        ("/sys/class/block/sdb12", True),
        ("/sys/class/block/nvme0n1", False),
        ("/sys/class/block/nvme0n1p2", True),
        ("/sys/class/block/loop0", False),
    ],
)
def test_is_partition(path, expected):
    assert is_partition(path) is expected


def test_model_and_serial_are_stripped(tmp_path):
    disk = _make_block(tmp_path, "sda", model="  Fast Drive  \n", serial="SN-TEST-0001\n")
    assert disk_model(disk) == "Fast Drive"
    assert disk_serial_number(disk) == "SN-TEST-0001"


def test_missing_device_files_give_unknown(tmp_path):
    disk = _make_block(tmp_path, "sda")
    assert disk_model(disk) == UNKNOWN
    assert disk_serial_number(disk) == UNKNOWN
    assert disk_vendor(str(disk)) == UNKNOWN


def test_vendor_of_scsi_disk(tmp_path):
    disk = _make_block(tmp_path, "sda", vendor="ATA     \n")
    assert disk_vendor(str(disk)) == "ATA"


def test_vendor_of_flash_disk_comes_from_controller(tmp_path):
    block = tmp_path / "block"
    disk = _make_block(block, "nvme0n1")
    controller_device = tmp_path / "nvme" / "nvme0" / "device"
    controller_device.mkdir(parents=True)
    (controller_device / "vendor").write_text("0x144d\n")
    assert disk_vendor(str(disk)) == "0x144d"


def test_size_in_sectors(tmp_path):
    disk = _make_block(tmp_path, "sda", size="100\n")
    assert disk_size_bytes(disk) == 100 * BLOCK_SIZE


def test_size_missing(tmp_path):
    disk = _make_block(tmp_path, "sda")
    assert disk_size_bytes(disk) == -1


def test_get_all_disks_filters_partitions_and_anonymous(tmp_path):
    _make_block(tmp_path, "sda", size="100\n", model="Fast Drive\n", serial="SN-TEST-0002\n")
    _make_block(tmp_path, "sda1", size="50\n", model="Fast Drive\n")
    _make_block(tmp_path, "loop0", size="8\n")
    disks = get_all_disks(tmp_path)
    assert len(disks) == 1
    disk = disks[0]
    assert disk.model == "Fast Drive"
    assert disk.serial_number == "SN-TEST-0002"
    assert disk.vendor == UNKNOWN
    assert disk.size_bytes == 100 * BLOCK_SIZE
    assert disk.id == -1


def test_get_all_disks_missing_directory(tmp_path):
    assert get_all_disks(tmp_path / "missing") == []