"""Small file utilities that work on a FileSystem and write to a byte stream."""

from __future__ import annotations

from typing import BinaryIO, Iterable, Iterator

from sectorfs.file import File
from sectorfs.filesys import FileSystem
from sectorfs.freemap import NoSpaceError

CHUNK_SIZE = 1024


def _b(text: str) -> bytes:
    return text.encode("utf-8")


def _chunks(file: File) -> Iterator[bytes]:
    return iter(lambda: file.read(CHUNK_SIZE), b"")


def cat(fs: FileSystem, names: Iterable[str], out: BinaryIO) -> int:
    """Write the contents of each named file to OUT; return the exit status."""
    success = True
    for name in names:
        try:
            file = fs.open(name)
        except FileNotFoundError:
            out.write(b"%s: open failed\n" % _b(name))
            success = False
            continue
        with file:
            for chunk in _chunks(file):
                out.write(chunk)
    return 0 if success else 1


def cmp(fs: FileSystem, first: str, second: str, out: BinaryIO) -> int:
    """Compare two files byte by byte; return the exit status."""
    try:
        a = fs.open(first)
    except FileNotFoundError:
        out.write(b"%s: open failed\n" % _b(first))
        return 1
    try:
        b = fs.open(second)
    except FileNotFoundError:
        a.close()
        out.write(b"%s: open failed\n" % _b(second))
        return 1
    with a, b:
        while True:
            pos = a.tell()
            data_a = a.read(CHUNK_SIZE)
            data_b = b.read(CHUNK_SIZE)
            common = min(len(data_a), len(data_b))
            if common == 0:
                break
            mismatch = next(
                ((i, x, y) for i, (x, y) in enumerate(zip(data_a, data_b)) if x != y),
                None,
            )
            if mismatch is not None:
                i, x, y = mismatch
                out.write(
                    b"Byte %d is %02x ('%c') in %s but %02x ('%c') in %s\n"
                    % (pos + i, x, x, _b(first), y, y, _b(second))
                )
                return 1
            if common < len(data_b):
                out.write(b"%s is shorter than %s\n" % (_b(first), _b(second)))
            elif common < len(data_a):
                out.write(b"%s is shorter than %s\n" % (_b(second), _b(first)))
    out.write(b"%s and %s are identical\n" % (_b(first), _b(second)))
    return 0


def cp(fs: FileSystem, source: str, target: str, out: BinaryIO) -> int:
    """Copy SOURCE to a new file TARGET; return the exit status."""
    try:
        src = fs.open(source)
    except FileNotFoundError:
        out.write(b"%s: open failed\n" % _b(source))
        return 1
    with src:
        try:
            fs.create(target, src.length())
        except (OSError, ValueError, NoSpaceError):
            out.write(b"%s: create failed\n" % _b(target))
            return 1
        try:
            dst = fs.open(target)
        except FileNotFoundError:
            out.write(b"%s: open failed\n" % _b(target))
            return 1
        with dst:
            for chunk in _chunks(src):
                if dst.write(chunk) != len(chunk):
                    out.write(b"%s: write failed\n" % _b(target))
                    return 1
    return 0


def rm(fs: FileSystem, names: Iterable[str], out: BinaryIO) -> int:
    """Remove each named file; return the exit status."""
    success = True
    for name in names:
        try:
            fs.remove(name)
        except FileNotFoundError:
            out.write(b"%s: remove failed\n" % _b(name))
            success = False
    return 0 if success else 1


def echo(args: Iterable[str], out: BinaryIO) -> int:
    """Write each argument followed by a space, then a newline."""
    for arg in args:
        out.write(_b(arg) + b" ")
    out.write(b"\n")
    return 0


def lineup(fs: FileSystem, name: str) -> int:
    """Convert a file to upper case in place.

    Returns 2 if the file cannot be opened, 0 otherwise; raises OSError
    if a write falls short.
    """
    try:
        file = fs.open(name)
    except FileNotFoundError:
        return 2
    with file:
        while data := file.read(CHUNK_SIZE):
            file.seek(file.tell() - len(data))
            if file.write(data.upper()) != len(data):
                raise OSError("write failed")
    return 0


def ls(fs: FileSystem, out: BinaryIO) -> int:
    """List the files of the root directory."""
    out.write(b".:\n")
    for name in fs.listdir():
        out.write(_b(name) + b"\n")
    return 0