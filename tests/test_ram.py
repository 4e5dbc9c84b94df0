import pytest

from hwprobe.ram import MemInfo, Memory, MemoryModule, parse_meminfo

FULL = (
    "MemTotal:       16384000 kB\n"
    "MemFree:         1000000 kB\n"
    "MemAvailable:    8000000 kB\n"
    "Buffers:          200000 kB\n"
)


@pytest.fixture
def meminfo(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text(FULL)
    return path


def test_parse_full_file(meminfo):
    info = parse_meminfo(meminfo)
    assert info.total == 16384000 * 1024
    assert info.free == 1000000 * 1024
    assert info.available == 8000000 * 1024
    assert info.complete


def test_lines_after_all_values_are_ignored(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text(FULL + "MemTotal:       1 kB\n")
    assert parse_meminfo(path).total == 16384000 * 1024


def test_order_of_lines_does_not_matter(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text("MemAvailable: 30 kB\nMemFree: 20 kB\nMemTotal: 40 kB\n")
    info = parse_meminfo(path)
    assert (info.total, info.free, info.available) == (40 * 1024, 20 * 1024, 30 * 1024)


def test_missing_file_leaves_free_unknown(tmp_path):
    info = parse_meminfo(tmp_path / "absent")
    assert info.free == -1


def test_missing_free_line_stays_unknown(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text("MemTotal: 40 kB\nMemAvailable: 30 kB\n")
    info = parse_meminfo(path)
    assert info.free == -1
    assert info.total == 40 * 1024


def test_non_numeric_value_raises(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text("MemFree: lots kB\n")
    with pytest.raises(ValueError):
        parse_meminfo(path)


def test_meminfo_defaults_unknown():
    info = MemInfo()
    assert (info.total, info.free, info.available) == (-1, -1, -1)
    assert not info.complete


def test_memory_has_single_unknown_module(meminfo):
    memory = Memory(meminfo)
    assert len(memory.modules) == 1
    module = memory.modules[0]
    assert module.vendor == "<unknown>"
    assert module.serial_number == "<unknown>"
    assert module.frequency_hz == -1
    assert module.total_bytes == parse_meminfo(meminfo).total


def test_total_bytes_sums_modules(meminfo):
    memory = Memory(meminfo)
    memory.modules.append(MemoryModule(id=1, total_bytes=2048))
    assert memory.total_bytes() == 16384000 * 1024 + 2048


def test_free_and_available_are_read_each_time(meminfo):
    memory = Memory(meminfo)
    assert memory.free_bytes() == 1000000 * 1024
    meminfo.write_text("MemTotal: 10 kB\nMemFree: 5 kB\nMemAvailable: 7 kB\n")
    assert memory.free_bytes() == 5 * 1024
    assert memory.available_bytes() == 7 * 1024
    assert memory.total_bytes() == 16384000 * 1024