"""Main board identification from the DMI sysfs tree."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass

DMI_CANDIDATES = ("/sys/devices/virtual/dmi/", "/sys/class/dmi/")
UNKNOWN = "<unknown>"


@dataclass(frozen=True)
class MainBoard:
    """Vendor, name, version and serial number of the main board."""

    vendor: str = UNKNOWN
    name: str = UNKNOWN
    version: str = UNKNOWN
    serial_number: str = UNKNOWN


def _first_line(path: str) -> str:
    try:
        with open(path, encoding="utf-8", errors="replace") as stream:
            return stream.readline().removesuffix("\n")
    except OSError:
        return ""


def dmi_value(name: str, candidates: Iterable[str | os.PathLike[str]] = DMI_CANDIDATES) -> str:
    """Return the first non-empty DMI entry ``name`` among ``candidates``."""
    for base in candidates:
        value = _first_line(os.path.join(base, "id", name))
        if value:
            return value
    return UNKNOWN


def read_mainboard(candidates: Iterable[str | os.PathLike[str]] = DMI_CANDIDATES) -> MainBoard:
    """Read the main board description."""
    bases = list(candidates)
    return MainBoard(
        vendor=dmi_value("board_vendor", bases),
        name=dmi_value("board_name", bases),
        version=dmi_value("board_version", bases),
        serial_number=dmi_value("board_serial", bases),
    )