"""Batteries described by the power supply sysfs tree."""

from __future__ import annotations

import math
import os
import re

from hwprobe.fsutils import exists

DEFAULT_BASE_PATH = "/sys/class/power_supply/"
UNKNOWN = "<unknown>"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class Battery:
    """One battery, read lazily from ``<base_path>/BAT<id>``."""

    def __init__(self, battery_id: int = 0, base_path: str | os.PathLike[str] = DEFAULT_BASE_PATH) -> None:
        self.id = battery_id
        self.base_path = os.fspath(base_path)
        self._vendor = ""
        self._model = ""
        self._serial_number = ""
        self._technology = ""
        self._energy_full = 0

    def __repr__(self) -> str:
        return f"Battery(battery_id={self.id!r}, base_path={self.base_path!r})"

    def _read_line(self, name: str) -> str | None:
        """First line of the attribute file ``name``, or None if unavailable."""
        if self.id < 0:
            return None
        path = os.path.join(self.base_path, f"BAT{self.id}", name)
        try:
            with open(path, encoding="utf-8", errors="replace") as stream:
                return stream.readline().removesuffix("\n")
        except OSError:
            return None

    def _read_text(self, name: str) -> str:
        value = self._read_line(name)
        return UNKNOWN if value is None else value

    def _read_number(self, name: str) -> int:
        value = self._read_line(name)
        if value is None:
            return 0
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0

    def vendor(self) -> str:
        """Manufacturer of the battery."""
        if not self._vendor:
            self._vendor = self._read_text("manufacturer")
        return self._vendor

    def model(self) -> str:
        """Model name of the battery."""
        if not self._model:
            self._model = self._read_text("model_name")
        return self._model

    def serial_number(self) -> str:
        """Serial number of the battery."""
        if not self._serial_number:
            self._serial_number = self._read_text("serial_number")
        return self._serial_number

    def technology(self) -> str:
        """Cell technology of the battery."""
        if not self._technology:
            self._technology = self._read_text("technology")
        return self._technology

    def energy_full(self) -> int:
        """Energy when fully charged, or 0 if unknown."""
        if self._energy_full == 0:
            self._energy_full = self._read_number("energy_full")
        return self._energy_full

    def energy_now(self) -> int:
        """Energy currently stored, or 0 if unknown."""
        return self._read_number("energy_now")

    def charging(self) -> bool:
        """True if the battery reports that it is charging."""
        return self._read_line("status") == "Charging"

    def discharging(self) -> bool:
        """True if the battery is not charging."""
        return not self.charging()

    def capacity(self) -> float:
        """Current energy as a share of full energy.

        With no known full energy the result is NaN, or infinity when some
        energy is stored.
        """
        now = self.energy_now()
        full = self.energy_full()
        if full == 0:
            return math.nan if now == 0 else math.copysign(math.inf, now)
        return now / full


def get_all_batteries(base_path: str | os.PathLike[str] = DEFAULT_BASE_PATH) -> list[Battery]:
    """Return the batteries BAT0, BAT1, ... up to the first one that is missing."""
    batteries: list[Battery] = []
    battery_id = 0
    while exists(os.path.join(base_path, f"BAT{battery_id}")):
        batteries.append(Battery(battery_id, base_path))
        battery_id += 1
    return batteries