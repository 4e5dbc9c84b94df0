"""Hardware and system information read from Linux procfs and sysfs: CPU, OS, memory, disks, batteries, mainboard and PCI IDs."""

__version__ = "0.1.0"