import pytest
from pescope.parsers.lookup import UNKNOWN, machine_name, subsystem_name


@pytest.mark.parametrize(
    "machine, name",
    [
        (0x014C, "x86"),
        (0x8664, "x64"),
        (0x01C0, "ARM"),
        (0x01C4, "ARM Thumb-2"),
        (0xAA64, "ARM64"),
        (0x0200, "Intel Itanium"),
        (0x01F0, "PowerPC"),
    ],
)
def test_machine_names(machine: int, name: str):
    assert machine_name(machine) == name


@pytest.mark.parametrize(
    "subsystem, name",
    [
        (1, "Native"),
        (2, "Windows GUI"),
        (3, "Windows CUI"),
        (5, "OS/2 CUI"),
        (7, "POSIX CUI"),
        (9, "Windows CE GUI"),
        (10, "EFI Application"),
        (11, "EFI Boot Service"),
        (12, "EFI Runtime Service"),
        (13, "EFI ROM"),
        (14, "Xbox"),
        (16, "Windows Boot Application"),
    ],
)
def test_subsystem_names(subsystem: int, name: str):
    assert subsystem_name(subsystem) == name


@pytest.mark.parametrize("machine", [0x0000, 0x0166, 0x5064, 0xFFFF])
def test_unmapped_machine(machine: int):
    assert machine_name(machine) == UNKNOWN == "Unknown"


@pytest.mark.parametrize("subsystem", [0, 4, 6, 8, 15, 17, 0xFFFF])
def test_unmapped_subsystem(subsystem: int):
    assert subsystem_name(subsystem) == "Unknown"
