"""Open files: an inode plus a current position."""

from __future__ import annotations

from sectorfs.inode import Inode


class File:
    """An open file over an inode, of which it owns one opener."""

    def __init__(self, inode: Inode) -> None:
        self.inode = inode
        self._position = 0
        self._denying_write = False
        self._closed = False

    def __enter__(self) -> "File":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def reopen(self) -> "File":
        """Open a new file on the same inode, starting at position 0."""
        return File(self.inode.reopen())

    def close(self) -> None:
        """Close the file, re-enabling writes it denied."""
        if self._closed:
            return
        self.allow_write()
        self.inode.close()
        self._closed = True

    def read(self, size: int) -> bytes:
        """Read up to SIZE bytes at the current position and advance."""
        data = self.inode.read_at(size, self._position)
        self._position += len(data)
        return data

    def read_at(self, size: int, offset: int) -> bytes:
        """Read up to SIZE bytes at OFFSET without moving."""
        return self.inode.read_at(size, offset)

    def write(self, data: bytes) -> int:
        """Write DATA at the current position, advance, and return the count."""
        written = self.inode.write_at(data, self._position)
        self._position += written
        return written

    def write_at(self, data: bytes, offset: int) -> int:
        """Write DATA at OFFSET without moving; return the count."""
        return self.inode.write_at(data, offset)

    def deny_write(self) -> None:
        """Deny writes to the inode until allowed again or closed."""
        if not self._denying_write:
            self._denying_write = True
            self.inode.deny_write()

    def allow_write(self) -> None:
        """Withdraw this file's denial of writes."""
        if self._denying_write:
            self._denying_write = False
            self.inode.allow_write()

    def length(self) -> int:
        """Size of the file in bytes."""
        return self.inode.length

    def seek(self, position: int) -> None:
        """Set the current position."""
        if position < 0:
            raise ValueError("position must not be negative")
        self._position = position

    def tell(self) -> int:
        """Return the current position."""
        return self._position