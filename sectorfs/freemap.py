"""Free-sector map of a file system: one flag per device sector."""

from __future__ import annotations

from typing import Optional, Protocol

FREE_MAP_SECTOR = 0
ROOT_DIR_SECTOR = 1

_WORD_BYTES = 4
_WORD_BITS = _WORD_BYTES * 8


class NoSpaceError(Exception):
    """Raised when sectors cannot be allocated."""


class FreeMapFile(Protocol):
    def read_at(self, size: int, offset: int) -> bytes: ...

    def write_at(self, data: bytes, offset: int) -> int: ...

    def close(self) -> None: ...


class FreeMap:
    """Tracks which sectors of a device are in use.

    The sectors holding the free map's inode and the root directory's
    inode are marked in use from the start.  Once a backing file is
    attached or loaded, every change is written through to it.
    """

    def __init__(self, sector_count: int) -> None:
        if sector_count <= ROOT_DIR_SECTOR:
            raise ValueError("device too small for a free map")
        self.sector_count = sector_count
        self._used = bytearray(sector_count)
        self._used[FREE_MAP_SECTOR] = 1
        self._used[ROOT_DIR_SECTOR] = 1
        self.file: Optional[FreeMapFile] = None

    def file_size(self) -> int:
        """Size in bytes of the free map as stored in its file."""
        words = -(-self.sector_count // _WORD_BITS)
        return words * _WORD_BYTES

    def is_free(self, sector: int) -> bool:
        """Return True if SECTOR is not in use."""
        if not 0 <= sector < self.sector_count:
            raise ValueError(f"sector {sector} outside free map")
        return not self._used[sector]

    def _set(self, start: int, count: int, used: bool) -> None:
        self._used[start : start + count] = (b"\1" if used else b"\0") * count

    def _to_bytes(self) -> bytes:
        value = 0
        for sector in (i for i, flag in enumerate(self._used) if flag):
            value |= 1 << sector
        return value.to_bytes(self.file_size(), "little")

    def _from_bytes(self, data: bytes) -> None:
        value = int.from_bytes(data, "little")
        self._used = bytearray((value >> i) & 1 for i in range(self.sector_count))

    def _write(self) -> bool:
        if self.file is None:
            return True
        return self.file.write_at(self._to_bytes(), 0) == self.file_size()

    def allocate(self, count: int) -> int:
        """Allocate COUNT consecutive sectors and return the first."""
        if count < 0:
            raise ValueError("count must not be negative")
        start = self._used.find(bytes(count))
        if start < 0:
            raise NoSpaceError(f"no run of {count} free sectors")
        self._set(start, count, True)
        if not self._write():
            self._set(start, count, False)
            raise NoSpaceError("free map could not be written")
        return start

    def release(self, sector: int, count: int) -> None:
        """Make COUNT sectors starting at SECTOR available again."""
        if sector < 0 or count < 0 or sector + count > self.sector_count:
            raise ValueError("release outside free map")
        if not all(self._used[sector : sector + count]):
            raise ValueError(f"sectors {sector}..{sector + count - 1} not all in use")
        self._set(sector, count, False)
        self._write()

    def attach(self, file: FreeMapFile) -> None:
        """Use FILE as backing store and write the current map to it."""
        self.file = file
        if not self._write():
            self.file = None
            raise OSError("can't write free map")

    def load(self, file: FreeMapFile) -> None:
        """Read the map from FILE and use it as backing store."""
        data = file.read_at(self.file_size(), 0)
        if len(data) != self.file_size():
            raise OSError("can't read free map")
        self._from_bytes(data)
        self.file = file

    def save(self) -> None:
        """Write the map to its backing file."""
        if self.file is None:
            raise ValueError("free map has no backing file")
        if not self._write():
            raise OSError("can't write free map")

    def close(self) -> None:
        """Close the backing file, if any."""
        if self.file is not None:
            self.file.close()
            self.file = None