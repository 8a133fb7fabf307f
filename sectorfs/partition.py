"""MBR partition tables and the partitions found in them."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from sectorfs.block import SECTOR_SIZE, Block, BlockRegistry, BlockType

_ENTRY = struct.Struct("<B3sB3sII")
_TABLE_OFFSET = 446
_SIGNATURE = 0xAA55
_EXTENDED_TYPES = frozenset({0x05, 0x0F, 0x85, 0xC5})
_ROLE_TYPES = {
    0x20: BlockType.KERNEL,
    0x21: BlockType.FILESYS,
    0x22: BlockType.SCRATCH,
    0x23: BlockType.SWAP,
}

_TYPE_NAMES = {
    0x00: "Empty", 0x01: "FAT12", 0x02: "XENIX root", 0x03: "XENIX usr",
    0x04: "FAT16 <32M", 0x05: "Extended", 0x06: "FAT16", 0x07: "HPFS/NTFS",
    0x08: "AIX", 0x09: "AIX bootable", 0x0A: "OS/2 Boot Manager",
    0x0B: "W95 FAT32", 0x0C: "W95 FAT32 (LBA)", 0x0E: "W95 FAT16 (LBA)",
    0x0F: "W95 Ext'd (LBA)", 0x10: "OPUS", 0x11: "Hidden FAT12",
    0x12: "Compaq diagnostics", 0x14: "Hidden FAT16 <32M", 0x16: "Hidden FAT16",
    0x17: "Hidden HPFS/NTFS", 0x18: "AST SmartSleep", 0x1B: "Hidden W95 FAT32",
    0x1C: "Hidden W95 FAT32 (LBA)", 0x1E: "Hidden W95 FAT16 (LBA)",
    0x20: "Pintos OS kernel", 0x21: "Pintos file system",
    0x22: "Pintos scratch", 0x23: "Pintos swap", 0x24: "NEC DOS",
    0x39: "Plan 9", 0x3C: "PartitionMagic recovery", 0x40: "Venix 80286",
    0x41: "PPC PReP Boot", 0x42: "SFS", 0x4D: "QNX4.x", 0x4E: "QNX4.x 2nd part",
    0x4F: "QNX4.x 3rd part", 0x50: "OnTrack DM", 0x51: "OnTrack DM6 Aux1",
    0x52: "CP/M", 0x53: "OnTrack DM6 Aux3", 0x54: "OnTrackDM6",
    0x55: "EZ-Drive", 0x56: "Golden Bow", 0x5C: "Priam Edisk",
    0x61: "SpeedStor", 0x63: "GNU HURD or SysV", 0x64: "Novell Netware 286",
    0x65: "Novell Netware 386", 0x70: "DiskSecure Multi-Boot", 0x75: "PC/IX",
    0x80: "Old Minix", 0x81: "Minix / old Linux", 0x82: "Linux swap / Solaris",
    0x83: "Linux", 0x84: "OS/2 hidden C: drive", 0x85: "Linux extended",
    0x86: "NTFS volume set", 0x87: "NTFS volume set", 0x88: "Linux plaintext",
    0x8E: "Linux LVM", 0x93: "Amoeba", 0x94: "Amoeba BBT", 0x9F: "BSD/OS",
    0xA0: "IBM Thinkpad hibernation", 0xA5: "FreeBSD", 0xA6: "OpenBSD",
    0xA7: "NeXTSTEP", 0xA8: "Darwin UFS", 0xA9: "NetBSD", 0xAB: "Darwin boot",
    0xB7: "BSDI fs", 0xB8: "BSDI swap", 0xBB: "Boot Wizard hidden",
    0xBE: "Solaris boot", 0xBF: "Solaris", 0xC1: "DRDOS/sec (FAT-12)",
    0xC4: "DRDOS/sec (FAT-16 < 32M)", 0xC6: "DRDOS/sec (FAT-16)",
    0xC7: "Syrinx", 0xDA: "Non-FS data", 0xDB: "CP/M / CTOS / ...",
    0xDE: "Dell Utility", 0xDF: "BootIt", 0xE1: "DOS access", 0xE3: "DOS R/O",
    0xE4: "SpeedStor", 0xEB: "BeOS fs", 0xEE: "EFI GPT",
    0xEF: "EFI (FAT-12/16/32)", 0xF0: "Linux/PA-RISC boot", 0xF1: "SpeedStor",
    0xF4: "SpeedStor", 0xF2: "DOS secondary", 0xFD: "Linux raid autodetect",
    0xFE: "LANstep", 0xFF: "BBT",
}


def partition_type_name(type: int) -> str:
    """Return a human-readable name for a partition type byte."""
    return _TYPE_NAMES.get(type, "Unknown")


@dataclass(frozen=True)
class PartitionEntry:
    """One of the four entries of a partition table sector."""

    bootable: int
    start_chs: bytes
    type: int
    end_chs: bytes
    offset: int
    size: int

    @property
    def is_empty(self) -> bool:
        return self.size == 0 or self.type == 0

    @property
    def is_extended(self) -> bool:
        return self.type in _EXTENDED_TYPES


def parse_partition_table(data: bytes) -> list[PartitionEntry]:
    """Parse a partition table sector into its four entries.

    Raises ValueError if the sector has the wrong size or signature.
    """
    if len(data) != SECTOR_SIZE:
        raise ValueError(f"partition table must be {SECTOR_SIZE} bytes")
    (signature,) = struct.unpack_from("<H", data, SECTOR_SIZE - 2)
    if signature != _SIGNATURE:
        raise ValueError("invalid partition table signature")
    return [
        PartitionEntry(*_ENTRY.unpack_from(data, _TABLE_OFFSET + i * _ENTRY.size))
        for i in range(4)
    ]


@dataclass
class Partition:
    """A driver for a run of sectors on an underlying block device."""

    block: Block
    start: int

    def read(self, sector: int) -> bytes:
        return self.block.read(self.start + sector)

    def write(self, sector: int, data: bytes) -> None:
        self.block.write(self.start + sector, data)


def scan_partitions(registry: BlockRegistry, block: Block) -> list[Block]:
    """Scan BLOCK's partition tables, registering each partition found.

    Returns the registered partition devices in the order found.
    Problems are reported through the registry's messages.
    """
    found: list[Block] = []
    part_nr = 0
    report = registry.messages.append

    def add(part_type: int, start: int, size: int) -> None:
        name = f"{block.name}{part_nr}"
        if start >= block.size:
            report(f"{name}: Partition starts past end of device (sector {start})")
        elif start + size > block.size:
            report(
                f"{name}: Partition end ({start + size}) "
                f"past end of device ({block.size})"
            )
        else:
            extra = f"{partition_type_name(part_type)} ({part_type:02x})"
            kind = _ROLE_TYPES.get(part_type, BlockType.FOREIGN)
            found.append(
                registry.register(name, kind, size, Partition(block, start), extra)
            )

    def read_table(sector: int, primary_extended: int) -> None:
        nonlocal part_nr
        if sector >= block.size:
            report(
                f"{block.name}: Partition table at sector {sector} "
                "past end of device."
            )
            return
        try:
            entries = parse_partition_table(block.read(sector))
        except ValueError:
            if primary_extended == 0:
                report(f"{block.name}: Invalid partition table signature")
            else:
                report(
                    f"{block.name}: Invalid extended partition table "
                    f"in sector {sector}"
                )
            return
        for entry in entries:
            if entry.is_empty:
                continue
            if entry.is_extended:
                report(f"{block.name}: Extended partition in sector {sector}")
                # In the MBR the offset is absolute; deeper tables are
                # relative to the extended partition the MBR points to.
                if sector == 0:
                    read_table(entry.offset, entry.offset)
                else:
                    read_table(entry.offset + primary_extended, primary_extended)
            else:
                part_nr += 1
                add(entry.type, entry.offset + sector, entry.size)

    read_table(0, 0)
    if part_nr == 0:
        report(f"{block.name}: Device contains no partitions")
    return found