"""Directories: fixed-size tables that map names to inode sectors."""

from __future__ import annotations

import struct
from typing import Iterator, NamedTuple, Optional

from sectorfs.freemap import ROOT_DIR_SECTOR
from sectorfs.inode import Inode, InodeTable

NAME_MAX = 14

_ENTRY = struct.Struct(f"<I{NAME_MAX + 1}s?")
ENTRY_SIZE = _ENTRY.size


class _Entry(NamedTuple):
    offset: int
    inode_sector: int
    raw_name: bytes
    in_use: bool

    @property
    def name_bytes(self) -> bytes:
        return self.raw_name.split(b"\0", 1)[0]

    @property
    def name(self) -> str:
        return self.name_bytes.decode("utf-8", errors="replace")


def _parse(raw: bytes, offset: int) -> _Entry:
    inode_sector, raw_name, in_use = _ENTRY.unpack(raw)
    return _Entry(offset, inode_sector, raw_name, in_use)


def create_directory(table: InodeTable, sector: int, entry_count: int) -> None:
    """Create a directory with room for ENTRY_COUNT entries, its inode in SECTOR."""
    table.create(sector, entry_count * ENTRY_SIZE)


class Directory:
    """An open directory over an inode, of which it owns one opener."""

    def __init__(self, table: InodeTable, inode: Inode) -> None:
        self.table = table
        self.inode = inode
        self.position = 0
        self._closed = False

    @classmethod
    def open_root(cls, table: InodeTable) -> "Directory":
        """Open the root directory."""
        return cls(table, table.open(ROOT_DIR_SECTOR))

    def __enter__(self) -> "Directory":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __iter__(self) -> Iterator[str]:
        """Yield the names not yet returned by readdir."""
        return iter(self.readdir, None)

    def reopen(self) -> "Directory":
        """Open a new directory on the same inode, reading from the start."""
        return Directory(self.table, self.inode.reopen())

    def close(self) -> None:
        """Close the directory."""
        if not self._closed:
            self.inode.close()
            self._closed = True

    def _entries(self) -> Iterator[_Entry]:
        offset = 0
        while True:
            raw = self.inode.read_at(ENTRY_SIZE, offset)
            if len(raw) != ENTRY_SIZE:
                return
            yield _parse(raw, offset)
            offset += ENTRY_SIZE

    def _find(self, encoded: bytes) -> Optional[_Entry]:
        return next(
            (e for e in self._entries() if e.in_use and e.name_bytes == encoded),
            None,
        )

    def lookup(self, name: str) -> Optional[Inode]:
        """Open and return the inode of the entry NAME, or None if absent."""
        entry = self._find(name.encode("utf-8"))
        if entry is None:
            return None
        return self.table.open(entry.inode_sector)

    def add(self, name: str, inode_sector: int) -> None:
        """Add an entry NAME for the inode in INODE_SECTOR.

        Raises ValueError for an empty or too long name, FileExistsError
        if NAME is present, and OSError if the directory has no room.
        """
        encoded = name.encode("utf-8")
        if not encoded or len(encoded) > NAME_MAX or b"\0" in encoded:
            raise ValueError(f"invalid file name {name!r}")
        if self._find(encoded) is not None:
            raise FileExistsError(name)
        end = (self.inode.length // ENTRY_SIZE) * ENTRY_SIZE
        offset = next((e.offset for e in self._entries() if not e.in_use), end)
        data = _ENTRY.pack(inode_sector, encoded, True)
        if self.inode.write_at(data, offset) != ENTRY_SIZE:
            raise OSError(f"no room in directory for {name!r}")

    def remove(self, name: str) -> None:
        """Remove the entry NAME and mark its inode for deletion.

        Raises FileNotFoundError if there is no such entry.
        """
        entry = self._find(name.encode("utf-8"))
        if entry is None:
            raise FileNotFoundError(name)
        inode = self.table.open(entry.inode_sector)
        try:
            data = _ENTRY.pack(entry.inode_sector, entry.raw_name, False)
            if self.inode.write_at(data, entry.offset) != ENTRY_SIZE:
                raise OSError(f"could not erase directory entry {name!r}")
            inode.remove()
        finally:
            inode.close()

    def readdir(self) -> Optional[str]:
        """Return the next name in the directory, or None at the end."""
        while True:
            raw = self.inode.read_at(ENTRY_SIZE, self.position)
            if len(raw) != ENTRY_SIZE:
                return None
            entry = _parse(raw, self.position)
            self.position += ENTRY_SIZE
            if entry.in_use:
                return entry.name