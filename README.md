# hwprobe

hwprobe is a library that collects hardware and system information on Linux.
It reads only from `/proc`, `/sys`, `/etc/os-release` and a PCI ID database
file. It needs no privileges and uses only the standard library.

## Installation

```
pip install hwprobe
```

## Usage

```python
from hwprobe.cpu import get_all_cpus
from hwprobe.osinfo import detect_os
from hwprobe.ram import Memory
from hwprobe.mainboard import read_mainboard
from hwprobe.battery import get_all_batteries
from hwprobe.disk import get_all_disks
from hwprobe.pcimapper import PCIMapper

for cpu in get_all_cpus():
    print(cpu.id, cpu.vendor, cpu.model_name, cpu.num_logical_cores)
    print(cpu.current_clock_speed_mhz())

os_info = detect_os()
print(os_info.name, os_info.version, os_info.kernel, os_info.is_64bit)

memory = Memory()
print(memory.total_bytes(), memory.free_bytes(), memory.available_bytes())

board = read_mainboard()
print(board.vendor, board.name, board.version, board.serial_number)

for battery in get_all_batteries():
    print(battery.model(), battery.capacity(), battery.charging())

for disk in get_all_disks():
    print(disk.vendor, disk.model, disk.serial_number, disk.size_bytes)

mapper = PCIMapper.from_file("/usr/share/hwdata/pci.ids")
print(mapper["8086"].vendor_name)
```

Text fields that cannot be found are reported as `"<unknown>"` and numeric
fields as `-1`. For batteries, a missing energy value reads as `0`.

Every function that reads the system takes its paths as parameters, with the
usual Linux locations as defaults. You can point it at a copy of `/sys` or
`/proc`, for example in tests.

## Modules

- `hwprobe.cpu`: `get_all_cpus()` returns one `CPU` per physical socket, built by `parse_cpuinfo()`.
  - The clock speeds come from the cpufreq tree. See `max_clock_speed_mhz()`, `regular_clock_speed_mhz()` and `min_clock_speed_mhz()`.
  - `CPU.current_utilisation()`, `CPU.thread_utilisation()` and `CPU.threads_utilisation()` work from `/proc/stat`. The first call waits `warmup_seconds` (one second by default) so that it has a delta to measure.
- `hwprobe.osinfo`: `detect_os()` returns an `OperatingSystem`. `parse_os_release()` extracts the pretty name and the version.
- `hwprobe.mainboard`: `read_mainboard()` and `dmi_value()` read the DMI entries.
- `hwprobe.battery`: `get_all_batteries()` lists `BAT0`, `BAT1` and so on. `Battery` has `vendor()`, `model()`, `serial_number()`, `technology()`, `energy_full()`, `energy_now()`, `charging()`, `discharging()` and `capacity()`.
- `hwprobe.disk`: `get_all_disks()` lists the whole disks under `/sys/class/block/` and skips partitions. Helpers: `is_partition()`, `disk_vendor()`, `disk_model()`, `disk_serial_number()`, `disk_size_bytes()`.
- `hwprobe.ram`: `Memory` and `parse_meminfo()` read `/proc/meminfo`. If values are missing they fall back to `sysconf`.
- `hwprobe.pcimapper`: `PCIMapper` parses `pci.ids` text. Create one from a string, or load a file with `PCIMapper.from_file()`.
  - Look up a vendor with `mapper["8086"]` or `mapper.vendor_from_id("0x8086")`, and a device with `mapper["8086"]["1234"]`.
  - IDs may carry a `0x` prefix. IDs that are not in the database give an entry named `"invalid"`.
- `hwprobe.fsutils`: `exists`, `directory_entries`, `read_int`, `read_jiffies` and the `Jiffies` counters.
- `hwprobe.stringutils`: the string splitting and stripping helpers that the parsers use.

## What it does not do

- hwprobe has no command-line program. It is a library only.
- It does not enumerate graphics cards. `PCIMapper` can turn vendor and device IDs into names, but nothing in the package walks the DRM devices to find GPUs.
- Memory is reported as a single module that holds the total size. Individual DIMMs are not detected.
- It supports Linux only.

## Running the tests

```
pip install hwprobe[test]
pytest
```