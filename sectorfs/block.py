"""Block devices: fixed-size sectors, drivers, and a registry of devices."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, Optional, Protocol

SECTOR_SIZE = 512
NAME_MAX = 15


class BlockType(enum.IntEnum):
    """Kind of block device; the first four are roles a device can play."""

    KERNEL = 0
    FILESYS = 1
    SCRATCH = 2
    SWAP = 3
    RAW = 4
    FOREIGN = 5


ROLE_COUNT = 4

_TYPE_NAMES = {
    BlockType.KERNEL: "kernel",
    BlockType.FILESYS: "filesys",
    BlockType.SCRATCH: "scratch",
    BlockType.SWAP: "swap",
    BlockType.RAW: "raw",
    BlockType.FOREIGN: "foreign",
}


class BlockError(Exception):
    """Raised on an invalid access to a block device."""


def block_type_name(type: BlockType) -> str:
    """Return a human-readable name for a block device type."""
    try:
        return _TYPE_NAMES[BlockType(type)]
    except ValueError:
        raise ValueError(f"unknown block type {type!r}") from None


class Driver(Protocol):
    def read(self, sector: int) -> bytes: ...

    def write(self, sector: int, data: bytes) -> None: ...


def _check_sector_data(data: bytes) -> bytes:
    data = bytes(data)
    if len(data) != SECTOR_SIZE:
        raise ValueError(f"sector data must be {SECTOR_SIZE} bytes, got {len(data)}")
    return data


class MemoryDisk:
    """A driver that keeps its sectors in memory."""

    def __init__(self, sector_count: int, data: bytes = b"") -> None:
        if sector_count < 0:
            raise ValueError("sector count must not be negative")
        total = sector_count * SECTOR_SIZE
        if len(data) > total:
            raise ValueError("initial data larger than the disk")
        self.sector_count = sector_count
        self._storage = bytearray(total)
        self._storage[: len(data)] = data

    def _span(self, sector: int) -> slice:
        if not 0 <= sector < self.sector_count:
            raise BlockError(f"sector {sector} outside disk of {self.sector_count} sectors")
        start = sector * SECTOR_SIZE
        return slice(start, start + SECTOR_SIZE)

    def read(self, sector: int) -> bytes:
        return bytes(self._storage[self._span(sector)])

    def write(self, sector: int, data: bytes) -> None:
        self._storage[self._span(sector)] = _check_sector_data(data)


@dataclass(eq=False)
class Block:
    """A registered block device."""

    name: str
    type: BlockType
    size: int
    driver: Driver
    read_count: int = 0
    write_count: int = 0

    def _check_sector(self, sector: int) -> None:
        if not 0 <= sector < self.size:
            raise BlockError(
                f"Access past end of device {self.name} "
                f"(sector={sector}, size={self.size})"
            )

    def read(self, sector: int) -> bytes:
        """Read one sector."""
        self._check_sector(sector)
        data = _check_sector_data(self.driver.read(sector))
        self.read_count += 1
        return data

    def write(self, sector: int, data: bytes) -> None:
        """Write one sector; foreign devices cannot be written."""
        self._check_sector(sector)
        if self.type == BlockType.FOREIGN:
            raise BlockError(f"device {self.name} is foreign and cannot be written")
        self.driver.write(sector, _check_sector_data(data))
        self.write_count += 1


def _human_size(size: int) -> str:
    units = ["bytes", "kB", "MB", "GB", "TB"]
    unit = units[0]
    for unit in units:
        if size < 1024 or unit == units[-1]:
            break
        size //= 1024
    return f"{size} {unit}"


@dataclass
class BlockRegistry:
    """All block devices in probe order, plus the device assigned to each role."""

    blocks: list[Block] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)
    _roles: dict[BlockType, Block] = field(default_factory=dict, repr=False)

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def register(
        self,
        name: str,
        type: BlockType,
        size: int,
        driver: Driver,
        extra_info: Optional[str] = None,
    ) -> Block:
        """Register a new device and return it."""
        block = Block(name[:NAME_MAX], BlockType(type), size, driver)
        self.blocks.append(block)
        message = f"{block.name}: {size:,} sectors ({_human_size(size * SECTOR_SIZE)})"
        if extra_info is not None:
            message += f", {extra_info}"
        self.messages.append(message)
        return block

    def get_by_name(self, name: str) -> Optional[Block]:
        """Return the device called NAME, or None."""
        return next((b for b in self.blocks if b.name == name), None)

    @staticmethod
    def _check_role(role: BlockType) -> BlockType:
        role = BlockType(role)
        if role >= ROLE_COUNT:
            raise ValueError(f"{block_type_name(role)} is not a role")
        return role

    def get_role(self, role: BlockType) -> Optional[Block]:
        """Return the device that fills ROLE, or None."""
        return self._roles.get(self._check_role(role))

    def set_role(self, role: BlockType, block: Optional[Block]) -> None:
        """Assign BLOCK to ROLE; None clears the role."""
        role = self._check_role(role)
        if block is None:
            self._roles.pop(role, None)
        else:
            self._roles[role] = block

    def stats(self) -> list[str]:
        """One line of read and write counts per device in a role."""
        return [
            f"{b.name} ({block_type_name(b.type)}): "
            f"{b.read_count} reads, {b.write_count} writes"
            for role in sorted(self._roles)
            for b in [self._roles[role]]
        ]