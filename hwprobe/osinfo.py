"""Operating system name, version, kernel, word size and byte order."""

from __future__ import annotations

import os
import platform
import sys
from dataclasses import dataclass

from hwprobe.fsutils import exists

DEFAULT_OS_RELEASE_PATH = "/etc/os-release"
DEFAULT_LOADER_PATH = "/lib64/ld-linux-x86-64.so.2"


@dataclass(frozen=True)
class OperatingSystem:
    """Description of the running operating system."""

    name: str = ""
    version: str = ""
    kernel: str = ""
    is_32bit: bool = False
    is_64bit: bool = False
    is_big_endian: bool = False
    is_little_endian: bool = False


def _unquote_value(line: str) -> str:
    value = line[line.find("=") + 1 :]
    return value[1:-1]


def parse_os_release(text: str) -> tuple[str, str]:
    """Return the pretty name and version from ``os-release`` text.

    A key that is missing gives an empty string.
    """
    name = ""
    version = ""
    for line in text.split("\n"):
        if line.startswith("PRETTY_NAME"):
            line = _unquote_value(line)
            name = line
        if line.startswith("VERSION="):
            line = _unquote_value(line)
            version = line
    return name, version


def _kernel_release() -> str:
    release = platform.uname().release
    return release or "<unknown>"


def detect_os(
    os_release_path: str | os.PathLike[str] = DEFAULT_OS_RELEASE_PATH,
    loader_path: str | os.PathLike[str] = DEFAULT_LOADER_PATH,
) -> OperatingSystem:
    """Describe the running system."""
    try:
        with open(os_release_path, encoding="utf-8", errors="replace") as stream:
            name, version = parse_os_release(stream.read())
    except OSError:
        name, version = "Linux", "<unknown>"
    is_64bit = exists(loader_path)
    return OperatingSystem(
        name=name,
        version=version,
        kernel=_kernel_release(),
        is_32bit=not is_64bit,
        is_64bit=is_64bit,
        is_big_endian=sys.byteorder == "big",
        is_little_endian=sys.byteorder == "little",
    )