"""File system helpers for reading kernel-provided hardware data."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_JIFFY_FIELDS = 10


@dataclass(frozen=True)
class Jiffies:
    """CPU time counters: all jiffies and the working (user, nice, system) part."""

    total: int = -1
    working: int = -1


def exists(path: str | os.PathLike[str]) -> bool:
    """Return True if ``path`` can be stat'ed."""
    try:
        os.stat(path)
    except (OSError, ValueError):
        return False
    return True


def directory_entries(path: str | os.PathLike[str]) -> list[str]:
    """Return the names in directory ``path``, or an empty list if unreadable."""
    try:
        return [name for name in os.listdir(path) if name not in (".", "..")]
    except OSError:
        return []


def read_int(path: str | os.PathLike[str]) -> int:
    """Read the integer at the start of the first line of ``path``.

    Returns -1 if the file cannot be read or does not start with a number.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as stream:
            line = stream.readline()
    except OSError:
        return -1
    match = _LEADING_INT.match(line)
    if match is None:
        return -1
    return int(match.group(1))


def read_jiffies(index: int, stat_path: str | os.PathLike[str] = "/proc/stat") -> Jiffies:
    """Read the jiffy counters from line ``index`` of a ``/proc/stat`` style file.

    Line 0 is the aggregate ``cpu`` line, line ``n + 1`` the ``cpuN`` line.
    Returns empty counters if the file cannot be opened and raises
    ValueError if the line does not hold ten counters.
    """
    try:
        with open(stat_path, encoding="utf-8", errors="replace") as stream:
            lines = stream.read().split("\n")
    except OSError:
        return Jiffies()
    line = lines[index] if 0 <= index < len(lines) else ""
    fields = line.split()
    if len(fields) < _JIFFY_FIELDS + 1:
        raise ValueError(f"malformed stat line {index}: {line!r}")
    counters = [int(value) for value in fields[1 : _JIFFY_FIELDS + 1]]
    return Jiffies(total=sum(counters), working=sum(counters[:3]))