"""Inodes: contiguous on-disk files described by a one-sector header."""

from __future__ import annotations

import struct

from sectorfs.block import SECTOR_SIZE, Block
from sectorfs.freemap import FreeMap

INODE_MAGIC = 0x494E4F44

_DISK_INODE = struct.Struct("<IiI")


def bytes_to_sectors(size: int) -> int:
    """Number of sectors needed to hold SIZE bytes."""
    return -(-size // SECTOR_SIZE)


class InodeError(Exception):
    """Raised when an inode is used in a way its state does not allow."""


class Inode:
    """An open inode, shared by everyone who opened the same sector."""

    def __init__(self, table: "InodeTable", sector: int, start: int, length: int) -> None:
        self._table = table
        self.sector = sector
        self.start = start
        self.length = length
        self.open_count = 1
        self.removed = False
        self.deny_write_count = 0

    @property
    def inumber(self) -> int:
        """The inode's number: the sector that holds its header."""
        return self.sector

    def reopen(self) -> "Inode":
        """Count one more opener and return this inode."""
        self.open_count += 1
        return self

    def close(self) -> None:
        """Drop one opener; the last one frees a removed inode's sectors."""
        if self.open_count <= 0:
            raise InodeError(f"inode {self.sector} is not open")
        self.open_count -= 1
        if self.open_count == 0:
            self._table._open.pop(self.sector, None)
            if self.removed:
                free_map = self._table.free_map
                free_map.release(self.sector, 1)
                free_map.release(self.start, bytes_to_sectors(self.length))

    def remove(self) -> None:
        """Mark the inode for deletion when its last opener closes it."""
        self.removed = True

    def _chunks(self, size: int, offset: int):
        if offset < 0:
            raise ValueError("offset must not be negative")
        while size > 0:
            sector_ofs = offset % SECTOR_SIZE
            chunk = min(size, self.length - offset, SECTOR_SIZE - sector_ofs)
            if chunk <= 0:
                return
            yield self.start + offset // SECTOR_SIZE, sector_ofs, chunk
            size -= chunk
            offset += chunk

    def read_at(self, size: int, offset: int) -> bytes:
        """Read up to SIZE bytes at OFFSET; shorter at end of file."""
        device = self._table.device
        out = bytearray()
        for sector, sector_ofs, chunk in self._chunks(size, offset):
            data = device.read(sector)
            out += data[sector_ofs : sector_ofs + chunk]
        return bytes(out)

    def write_at(self, data: bytes, offset: int) -> int:
        """Write DATA at OFFSET and return the bytes written.

        Files do not grow, so writing stops at end of file.  Nothing is
        written while writes are denied.
        """
        if self.deny_write_count:
            return 0
        device = self._table.device
        written = 0
        for sector, sector_ofs, chunk in self._chunks(len(data), offset):
            piece = data[written : written + chunk]
            if sector_ofs == 0 and chunk == SECTOR_SIZE:
                device.write(sector, piece)
            else:
                if sector_ofs > 0 or chunk < SECTOR_SIZE - sector_ofs:
                    buffer = bytearray(device.read(sector))
                else:
                    buffer = bytearray(SECTOR_SIZE)
                buffer[sector_ofs : sector_ofs + chunk] = piece
                device.write(sector, bytes(buffer))
            written += chunk
        return written

    def deny_write(self) -> None:
        """Disable writes; at most once per opener."""
        if self.deny_write_count >= self.open_count:
            raise InodeError("writes denied more often than the inode is open")
        self.deny_write_count += 1

    def allow_write(self) -> None:
        """Re-enable writes denied by one opener."""
        if not 0 < self.deny_write_count <= self.open_count:
            raise InodeError("writes were not denied")
        self.deny_write_count -= 1


class InodeTable:
    """Creates inodes on a device and keeps each open inode unique."""

    def __init__(self, device: Block, free_map: FreeMap) -> None:
        self.device = device
        self.free_map = free_map
        self._open: dict[int, Inode] = {}

    def create(self, sector: int, length: int) -> None:
        """Write a new inode of LENGTH zero bytes with its header in SECTOR."""
        if length < 0:
            raise ValueError("length must not be negative")
        sectors = bytes_to_sectors(length)
        start = self.free_map.allocate(sectors)
        header = _DISK_INODE.pack(start, length, INODE_MAGIC)
        self.device.write(sector, header.ljust(SECTOR_SIZE, b"\0"))
        zeros = bytes(SECTOR_SIZE)
        for data_sector in range(start, start + sectors):
            self.device.write(data_sector, zeros)

    def open(self, sector: int) -> Inode:
        """Open the inode in SECTOR, sharing it if already open."""
        inode = self._open.get(sector)
        if inode is not None:
            return inode.reopen()
        start, length, _magic = _DISK_INODE.unpack_from(self.device.read(sector))
        inode = Inode(self, sector, start, length)
        self._open[sector] = inode
        return inode