"""System memory size and usage from ``/proc/meminfo``."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from hwprobe.stringutils import strip

DEFAULT_MEMINFO_PATH = "/proc/meminfo"
UNKNOWN = "<unknown>"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class MemoryModule:
    """One memory module (DIMM)."""

    id: int = 0
    vendor: str = UNKNOWN
    name: str = UNKNOWN
    model: str = UNKNOWN
    serial_number: str = UNKNOWN
    total_bytes: int = -1
    frequency_hz: int = -1


@dataclass
class MemInfo:
    """Total, free and available memory in bytes; -1 where unknown."""

    total: int = -1
    free: int = -1
    available: int = -1

    @property
    def complete(self) -> bool:
        """True once all three values are known."""
        return -1 not in (self.total, self.free, self.available)


def _sysconf(name: str) -> int:
    try:
        return os.sysconf(name)
    except (AttributeError, ValueError, OSError):
        return -1


def _fill_from_sysconf(info: MemInfo) -> None:
    pages = _sysconf("SC_PHYS_PAGES")
    available_pages = _sysconf("SC_AVPHYS_PAGES")
    page_size = _sysconf("SC_PAGESIZE")
    if pages > 0 and page_size > 0:
        info.total = pages * page_size
    if available_pages > 0 and page_size > 0:
        info.available = available_pages * page_size


def _kib_value(line: str) -> int | None:
    """Bytes given by a ``Key: <n> kB`` line, or None if it has no unit part."""
    parts = line.split(":")
    if len(parts) != 2:
        return None
    value = strip(parts[1])
    space = value.find(" ")
    if space == -1:
        return None
    match = _LEADING_INT.match(value[:space])
    if match is None:
        raise ValueError(f"not an integer: {value[:space]!r}")
    return int(match.group(1)) * 1024


def parse_meminfo(path: str | os.PathLike[str] = DEFAULT_MEMINFO_PATH) -> MemInfo:
    """Read total, free and available memory from a ``/proc/meminfo`` style file.

    Values missing from the file are filled in from ``sysconf`` where possible.
    """
    info = MemInfo()
    try:
        stream = open(path, encoding="utf-8", errors="replace")
    except OSError:
        _fill_from_sysconf(info)
        return info
    with stream:
        for raw in stream:
            if info.complete:
                return info
            line = raw.removesuffix("\n")
            if line.startswith("MemTotal"):
                value = _kib_value(line)
                if value is not None:
                    info.total = value
            elif line.startswith("MemFree"):
                value = _kib_value(line)
                if value is not None:
                    info.free = value
            elif line.startswith("MemAvailable"):
                value = _kib_value(line)
                if value is not None:
                    info.available = value
    if not info.complete and (info.total == -1 or info.available == -1):
        _fill_from_sysconf(info)
    return info


class Memory:
    """Installed memory and its current usage."""

    def __init__(self, meminfo_path: str | os.PathLike[str] = DEFAULT_MEMINFO_PATH) -> None:
        self.meminfo_path = os.fspath(meminfo_path)
        self.modules: list[MemoryModule] = [
            MemoryModule(id=0, total_bytes=parse_meminfo(self.meminfo_path).total, frequency_hz=-1)
        ]

    def __repr__(self) -> str:
        return f"Memory(meminfo_path={self.meminfo_path!r})"

    def total_bytes(self) -> int:
        """Sum of the sizes of all modules."""
        return sum(module.total_bytes for module in self.modules)

    def free_bytes(self) -> int:
        """Currently free memory in bytes, or -1 if unknown."""
        return parse_meminfo(self.meminfo_path).free

    def available_bytes(self) -> int:
        """Currently available memory in bytes, or -1 if unknown."""
        return parse_meminfo(self.meminfo_path).available