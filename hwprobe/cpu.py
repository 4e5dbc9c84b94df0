"""CPU sockets described by ``/proc/cpuinfo`` and the cpufreq sysfs tree."""

from __future__ import annotations

import math
import os
import re
import time
from dataclasses import dataclass, field

from hwprobe.fsutils import Jiffies, read_int, read_jiffies
from hwprobe.stringutils import split, split_terminated, strip

DEFAULT_CPU_ROOT = "/sys/devices/system/cpu"
DEFAULT_CPUINFO_PATH = "/proc/cpuinfo"
DEFAULT_STAT_PATH = "/proc/stat"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _to_int(text: str) -> int:
    """Parse the integer at the start of ``text``; trailing text is ignored."""
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"not an integer: {text!r}")
    return int(match.group(1))


def _freq_path(cpu_root: str | os.PathLike[str], core_id: int, name: str) -> str:
    return os.path.join(cpu_root, f"cpu{core_id}", "cpufreq", name)


def _freq_mhz(core_id: int, cpu_root: str | os.PathLike[str], name: str) -> int:
    hz = read_int(_freq_path(cpu_root, core_id, name))
    if hz > -1:
        return hz // 1000
    return -1


def max_clock_speed_mhz(core_id: int, cpu_root: str | os.PathLike[str] = DEFAULT_CPU_ROOT) -> int:
    """Maximum scaling frequency of ``core_id`` in MHz, or -1 if unknown."""
    return _freq_mhz(core_id, cpu_root, "scaling_max_freq")


def regular_clock_speed_mhz(core_id: int, cpu_root: str | os.PathLike[str] = DEFAULT_CPU_ROOT) -> int:
    """Base frequency of ``core_id`` in MHz, or -1 if unknown."""
    return _freq_mhz(core_id, cpu_root, "base_frequency")


def min_clock_speed_mhz(core_id: int, cpu_root: str | os.PathLike[str] = DEFAULT_CPU_ROOT) -> int:
    """Minimum scaling frequency of ``core_id`` in MHz, or -1 if unknown."""
    return _freq_mhz(core_id, cpu_root, "scaling_min_freq")


@dataclass
class CPU:
    """One CPU socket."""

    id: int = -1
    model_name: str = ""
    vendor: str = ""
    num_physical_cores: int = -1
    num_logical_cores: int = -1
    max_clock_speed_mhz: int = -1
    regular_clock_speed_mhz: int = -1
    l1_cache_size_bytes: int = -1
    l2_cache_size_bytes: int = -1
    l3_cache_size_bytes: int = -1
    flags: list[str] = field(default_factory=list)
    cpu_root: str = field(default=DEFAULT_CPU_ROOT, repr=False, compare=False)
    stat_path: str = field(default=DEFAULT_STAT_PATH, repr=False, compare=False)
    warmup_seconds: float = field(default=1.0, repr=False, compare=False)
    _jiffies_initialized: bool = field(default=False, init=False, repr=False, compare=False)
    _last_total: Jiffies = field(default_factory=Jiffies, init=False, repr=False, compare=False)
    _last_threads: list[Jiffies] | None = field(default=None, init=False, repr=False, compare=False)

    def _init_jiffies(self) -> None:
        # The first reading needs a delta, so wait once before sampling.
        if not self._jiffies_initialized:
            time.sleep(self.warmup_seconds)
            self._jiffies_initialized = True

    def current_clock_speed_mhz(self) -> list[int]:
        """Current frequency of every logical core in MHz."""
        speeds = []
        core_id = 0
        while (hz := read_int(_freq_path(self.cpu_root, core_id, "scaling_cur_freq"))) != -1:
            speeds.append(hz // 1000)
            core_id += 1
        return speeds

    def current_utilisation(self) -> float:
        """Share of work time since the previous call, between 0 and 1, or -1.0."""
        self._init_jiffies()
        current = read_jiffies(0, self.stat_path)
        last, self._last_total = self._last_total, current
        return _ratio(current.working - last.working, current.total - last.total, 1.0)

    def thread_utilisation(self, thread_index: int) -> float:
        """Share of work time of one logical core since its previous reading, or -1.0."""
        self._init_jiffies()
        if self._last_threads is None:
            self._last_threads = [Jiffies() for _ in range(max(self.num_logical_cores, 0))]
        if not 0 <= thread_index < len(self._last_threads):
            raise IndexError(f"thread index {thread_index} out of range")
        current = read_jiffies(thread_index + 1, self.stat_path)
        last = self._last_threads[thread_index]
        self._last_threads[thread_index] = current
        return _ratio(current.working - last.working, current.total - last.total, 100.0)

    def threads_utilisation(self) -> list[float]:
        """Utilisation of every logical core."""
        return [self.thread_utilisation(index) for index in range(max(self.num_logical_cores, 0))]


def _ratio(work: int, total: int, upper: float) -> float:
    if total == 0:
        return -1.0
    value = work / total
    if value < 0 or value > upper or math.isnan(value):
        return -1.0
    return value


def parse_cpuinfo(text: str, cpu_root: str | os.PathLike[str] = DEFAULT_CPU_ROOT) -> list[CPU]:
    """Build one CPU per physical socket from ``/proc/cpuinfo`` text."""
    cpus: list[CPU] = []
    physical_id = -1
    for block in split(text, "\n\n"):
        cpu = CPU(cpu_root=os.fspath(cpu_root))
        add = False
        for line in split_terminated(block, "\n"):
            pairs = split(line, ":")
            if len(pairs) < 2:
                continue
            name, value = strip(pairs[0]), strip(pairs[1])
            if name == "vendor_id":
                cpu.vendor = value
            elif name == "model name":
                cpu.model_name = value
            elif name == "cache size":
                cpu.l3_cache_size_bytes = _to_int(split(value, " ")[0]) * 1024
            elif name == "siblings":
                cpu.num_logical_cores = _to_int(value)
            elif name == "cpu cores":
                cpu.num_physical_cores = _to_int(value)
            elif name == "flags":
                cpu.flags = split(value, " ")
            elif name == "physical id":
                socket_id = _to_int(value)
                if socket_id == physical_id:
                    continue
                cpu.id = socket_id
                add = True
        if add:
            cpu.max_clock_speed_mhz = max_clock_speed_mhz(cpu.id, cpu_root)
            cpu.regular_clock_speed_mhz = regular_clock_speed_mhz(cpu.id, cpu_root)
            physical_id += 1
            cpus.append(cpu)
    return cpus


def get_all_cpus(
    cpuinfo_path: str | os.PathLike[str] = DEFAULT_CPUINFO_PATH,
    cpu_root: str | os.PathLike[str] = DEFAULT_CPU_ROOT,
) -> list[CPU]:
    """Return all CPU sockets, or an empty list if ``cpuinfo_path`` cannot be read."""
    try:
        with open(cpuinfo_path, encoding="utf-8", errors="replace") as stream:
            text = stream.read()
    except OSError:
        return []
    return parse_cpuinfo(text, cpu_root)