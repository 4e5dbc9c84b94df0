"""Block devices described by the sysfs block class."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from hwprobe.fsutils import directory_entries, exists, read_int
from hwprobe.stringutils import strip

DEFAULT_BASE_PATH = "/sys/class/block/"
UNKNOWN = "<unknown>"
# The kernel counts sizes in 512 byte sectors whatever the real block size.
BLOCK_SIZE = 512

_PARTITION = re.compile(r"(sd[a-z]|nvme\d+n\d+)p?\d+$")


@dataclass
class Disk:
    """One disk drive."""

    vendor: str = ""
    model: str = ""
    serial_number: str = ""
    size_bytes: int = -1
    id: int = -1


def is_partition(path: str) -> bool:
    """True if ``path`` names a partition rather than a whole disk."""
    return _PARTITION.search(path) is not None


def _first_line(path: str) -> str | None:
    try:
        with open(path, encoding="utf-8", errors="replace") as stream:
            return strip(stream.readline())
    except OSError:
        return None


def disk_vendor(path: str | os.PathLike[str]) -> str:
    """Vendor of the disk at ``path``.

    NVMe vendors live under the ``nvme`` class next to ``block``, so such
    paths are redirected there.
    """
    path = os.fspath(path)
    vendor_path = path
    nvme_pos = path.find("nvme")
    if nvme_pos != -1:
        controller = path[nvme_pos : nvme_pos + 5]
        prefix = path[: nvme_pos - 6] if nvme_pos >= 6 else path
        vendor_path = prefix + "nvme/" + controller
    value = _first_line(vendor_path + "/device/vendor")
    return UNKNOWN if value is None else value


def disk_model(path: str | os.PathLike[str]) -> str:
    """Model of the disk at ``path``."""
    value = _first_line(os.path.join(path, "device", "model"))
    return UNKNOWN if value is None else value


def disk_serial_number(path: str | os.PathLike[str]) -> str:
    """Serial number of the disk at ``path``."""
    value = _first_line(os.path.join(path, "device", "serial"))
    return UNKNOWN if value is None else value


def disk_size_bytes(path: str | os.PathLike[str]) -> int:
    """Size of the disk at ``path`` in bytes, or -1 if unknown."""
    sectors = read_int(os.path.join(path, "size"))
    if sectors == -1:
        return -1
    return sectors * BLOCK_SIZE


def get_all_disks(base_path: str | os.PathLike[str] = DEFAULT_BASE_PATH) -> list[Disk]:
    """Return every whole disk that reports a vendor, model or serial number."""
    disks: list[Disk] = []
    for entry in sorted(directory_entries(base_path)):
        path = os.path.join(base_path, entry)
        if not exists(path) or is_partition(path):
            continue
        disk = Disk(
            vendor=disk_vendor(path),
            model=disk_model(path),
            serial_number=disk_serial_number(path),
        )
        if disk.vendor == UNKNOWN and disk.model == UNKNOWN and disk.serial_number == UNKNOWN:
            continue
        disk.size_bytes = disk_size_bytes(path)
        disks.append(disk)
    return disks