"""Lookup of PCI vendor and device names from a ``pci.ids`` database."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from hwprobe.stringutils import strip


def _without_hex_prefix(identifier: str) -> str:
    return identifier.removeprefix("0x")


@dataclass
class PCIDevice:
    """A PCI device entry with its subsystem names."""

    device_id: str
    device_name: str
    subsystems: dict[str, str] = field(default_factory=dict)


@dataclass
class PCIVendor:
    """A PCI vendor entry with its devices."""

    vendor_id: str
    vendor_name: str
    devices: dict[str, PCIDevice] = field(default_factory=dict)
    _invalid_device: PCIDevice = field(
        default_factory=lambda: PCIDevice("0000", "invalid"),
        init=False,
        repr=False,
        compare=False,
    )

    def __getitem__(self, device_id: str) -> PCIDevice:
        """Return the device with ``device_id`` (``0x`` prefix allowed), or an invalid entry."""
        return self.devices.get(_without_hex_prefix(device_id), self._invalid_device)


class PCIMapper:
    """Parsed PCI id database."""

    def __init__(self, text: str) -> None:
        self.vendors: dict[str, PCIVendor] = {}
        self._invalid_vendor = PCIVendor("0000", "invalid")
        vendor: PCIVendor | None = None
        device: PCIDevice | None = None
        for line in text.split("\n"):
            if not line or line.startswith("#"):
                continue
            parts = strip(line).split("  ")
            if len(parts) != 2:
                continue
            key, name = parts
            if line.startswith("\t\t"):
                if device is not None:
                    device.subsystems.setdefault(key, name)
            elif line.startswith("\t"):
                if vendor is not None:
                    device = vendor.devices.setdefault(key, PCIDevice(key, name))
            else:
                vendor = self.vendors.setdefault(key, PCIVendor(key, name))

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> PCIMapper:
        """Build a mapper from a ``pci.ids`` file."""
        with open(path, encoding="utf-8", errors="replace") as stream:
            return cls(stream.read())

    def vendor_from_id(self, vendor_id: str) -> PCIVendor:
        """Return the vendor with ``vendor_id`` (``0x`` prefix allowed), or an invalid entry."""
        return self.vendors.get(_without_hex_prefix(vendor_id), self._invalid_vendor)

    def __getitem__(self, vendor_id: str) -> PCIVendor:
        return self.vendor_from_id(vendor_id)