"""
PE Symbolic Names
==================

Constant tables mapping COFF machine types and optional-header subsystem
codes to display names.  Unmapped codes are valid data, so both lookups are
total and fall back to ``"Unknown"``.

References:
    - Microsoft. (2024). PE Format -- Machine Types, Windows Subsystem.
      https://learn.microsoft.com/en-us/windows/win32/debug/pe-format
"""

from __future__ import annotations

UNKNOWN: str = "Unknown"

# Machine types
IMAGE_FILE_MACHINE_I386: int = 0x014C
IMAGE_FILE_MACHINE_ARM: int = 0x01C0
IMAGE_FILE_MACHINE_ARMNT: int = 0x01C4
IMAGE_FILE_MACHINE_POWERPC: int = 0x01F0
IMAGE_FILE_MACHINE_IA64: int = 0x0200
IMAGE_FILE_MACHINE_AMD64: int = 0x8664
IMAGE_FILE_MACHINE_ARM64: int = 0xAA64

_MACHINE_NAMES: dict[int, str] = {
    IMAGE_FILE_MACHINE_I386: "x86",
    IMAGE_FILE_MACHINE_AMD64: "x64",
    IMAGE_FILE_MACHINE_ARM: "ARM",
    IMAGE_FILE_MACHINE_ARMNT: "ARM Thumb-2",
    IMAGE_FILE_MACHINE_ARM64: "ARM64",
    IMAGE_FILE_MACHINE_IA64: "Intel Itanium",
    IMAGE_FILE_MACHINE_POWERPC: "PowerPC",
}

# Subsystem values
IMAGE_SUBSYSTEM_NATIVE: int = 1
IMAGE_SUBSYSTEM_WINDOWS_GUI: int = 2
IMAGE_SUBSYSTEM_WINDOWS_CUI: int = 3
IMAGE_SUBSYSTEM_OS2_CUI: int = 5
IMAGE_SUBSYSTEM_POSIX_CUI: int = 7
IMAGE_SUBSYSTEM_WINDOWS_CE_GUI: int = 9
IMAGE_SUBSYSTEM_EFI_APPLICATION: int = 10
IMAGE_SUBSYSTEM_EFI_BOOT_SERVICE_DRIVER: int = 11
IMAGE_SUBSYSTEM_EFI_RUNTIME_DRIVER: int = 12
IMAGE_SUBSYSTEM_EFI_ROM: int = 13
IMAGE_SUBSYSTEM_XBOX: int = 14
IMAGE_SUBSYSTEM_WINDOWS_BOOT_APPLICATION: int = 16

_SUBSYSTEM_NAMES: dict[int, str] = {
    IMAGE_SUBSYSTEM_NATIVE: "Native",
    IMAGE_SUBSYSTEM_WINDOWS_GUI: "Windows GUI",
    IMAGE_SUBSYSTEM_WINDOWS_CUI: "Windows CUI",
    IMAGE_SUBSYSTEM_OS2_CUI: "OS/2 CUI",
    IMAGE_SUBSYSTEM_POSIX_CUI: "POSIX CUI",
    IMAGE_SUBSYSTEM_WINDOWS_CE_GUI: "Windows CE GUI",
    IMAGE_SUBSYSTEM_EFI_APPLICATION: "EFI Application",
    IMAGE_SUBSYSTEM_EFI_BOOT_SERVICE_DRIVER: "EFI Boot Service",
    IMAGE_SUBSYSTEM_EFI_RUNTIME_DRIVER: "EFI Runtime Service",
    IMAGE_SUBSYSTEM_EFI_ROM: "EFI ROM",
    IMAGE_SUBSYSTEM_XBOX: "Xbox",
    IMAGE_SUBSYSTEM_WINDOWS_BOOT_APPLICATION: "Windows Boot Application",
}


def machine_name(machine: int) -> str:
    """Return the display name for a COFF machine type."""
    return _MACHINE_NAMES.get(machine, UNKNOWN)


def subsystem_name(subsystem: int) -> str:
    """Return the display name for an optional-header subsystem code."""
    return _SUBSYSTEM_NAMES.get(subsystem, UNKNOWN)
