"""A flat file system: a free map and one root directory on a block device."""

from __future__ import annotations

from typing import Optional

from sectorfs.block import Block, BlockError, BlockRegistry, BlockType
from sectorfs.directory import Directory, create_directory
from sectorfs.file import File
from sectorfs.freemap import FREE_MAP_SECTOR, ROOT_DIR_SECTOR, FreeMap, NoSpaceError
from sectorfs.inode import InodeTable

ROOT_DIR_ENTRIES = 16


class FileSystemError(Exception):
    """Raised when the file system cannot be set up."""


class FileSystem:
    """Files by name in the root directory of a device."""

    def __init__(self, device: Block, format: bool = False) -> None:
        self.device = device
        try:
            self.free_map = FreeMap(device.size)
        except ValueError as exc:
            raise FileSystemError(str(exc)) from exc
        self.inodes = InodeTable(device, self.free_map)
        if format:
            self._format()
        self._open_free_map()

    @classmethod
    def from_registry(
        cls, registry: BlockRegistry, format: bool = False
    ) -> "FileSystem":
        """Open the file system on the device that fills the file system role."""
        device: Optional[Block] = registry.get_role(BlockType.FILESYS)
        if device is None:
            raise FileSystemError(
                "No file system device found, can't initialize file system."
            )
        return cls(device, format)

    def __enter__(self) -> "FileSystem":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _format(self) -> None:
        try:
            self.inodes.create(FREE_MAP_SECTOR, self.free_map.file_size())
        except NoSpaceError as exc:
            raise FileSystemError("free map creation failed") from exc
        try:
            self.free_map.attach(File(self.inodes.open(FREE_MAP_SECTOR)))
        except OSError as exc:
            raise FileSystemError("can't write free map") from exc
        try:
            create_directory(self.inodes, ROOT_DIR_SECTOR, ROOT_DIR_ENTRIES)
        except NoSpaceError as exc:
            raise FileSystemError("root directory creation failed") from exc
        self.free_map.close()

    def _open_free_map(self) -> None:
        try:
            file = File(self.inodes.open(FREE_MAP_SECTOR))
        except BlockError as exc:
            raise FileSystemError("can't open free map") from exc
        try:
            self.free_map.load(file)
        except (OSError, BlockError) as exc:
            file.close()
            raise FileSystemError("can't read free map") from exc

    def _root(self) -> Directory:
        return Directory.open_root(self.inodes)

    def create(self, name: str, initial_size: int) -> None:
        """Create a file NAME of INITIAL_SIZE zero bytes.

        Raises FileExistsError, ValueError for a bad name or size,
        NoSpaceError when the device is full and OSError when the root
        directory is full.
        """
        sector = self.free_map.allocate(1)
        try:
            self.inodes.create(sector, initial_size)
        except Exception:
            self.free_map.release(sector, 1)
            raise
        try:
            with self._root() as root:
                root.add(name, sector)
        except Exception:
            inode = self.inodes.open(sector)
            inode.remove()
            inode.close()
            raise

    def open(self, name: str) -> File:
        """Open the file NAME; raises FileNotFoundError if it does not exist."""
        with self._root() as root:
            inode = root.lookup(name)
        if inode is None:
            raise FileNotFoundError(name)
        return File(inode)

    def remove(self, name: str) -> None:
        """Delete the file NAME; raises FileNotFoundError if it does not exist."""
        with self._root() as root:
            root.remove(name)

    def listdir(self) -> list[str]:
        """Names of the files in the root directory."""
        with self._root() as root:
            return list(root)

    def close(self) -> None:
        """Shut the file system down."""
        self.free_map.close()