import pytest

from sectorfs.block import BlockRegistry, BlockType, MemoryDisk
from sectorfs.file import File
from sectorfs.freemap import FreeMap
from sectorfs.inode import InodeTable

SECTORS = 32


@pytest.fixture
def table():
    device = BlockRegistry().register("fs", BlockType.FILESYS, SECTORS, MemoryDisk(SECTORS))
    return InodeTable(device, FreeMap(SECTORS))


def open_file(table, length):
    sector = table.free_map.allocate(1)
    table.create(sector, length)
    return File(table.open(sector))


def test_write_then_read_back(table):
    f = open_file(table, 50)
    assert f.write(b"hello world") == 11
    assert f.tell() == 11
    f.seek(0)
    assert f.read(11) == b"hello world"
    assert f.tell() == 11


def test_read_stops_at_end(table):
    f = open_file(table, 8)
    data = f.read(100)
    assert len(data) == f.length()
    assert f.tell() == f.length()
    assert f.read(10) == b""


def test_positioned_io_does_not_move(table):
    f = open_file(table, 20)
    assert f.write_at(b"abc", 5) == 3
    assert f.read_at(3, 5) == b"abc"
    assert f.tell() == 0


def test_write_past_end_is_short(table):
    f = open_file(table, 4)
    f.seek(2)
    assert f.write(b"xyz") == 2
    assert f.tell() == 4


def test_seek_negative_raises(table):
    f = open_file(table, 4)
    with pytest.raises(ValueError):
        f.seek(-1)


def test_length_matches_inode(table):
    f = open_file(table, 777)
    assert f.length() == f.inode.length == 777


def test_deny_write_affects_other_openers(table):
    f = open_file(table, 10)
    other = f.reopen()
    f.deny_write()
    assert other.write(b"x") == 0
    f.close()
    assert other.write(b"x") == 1
    assert other.read_at(1, 0) == b"x"


def test_deny_write_counts_once(table):
    f = open_file(table, 10)
    f.deny_write()
    f.deny_write()
    assert f.inode.deny_write_count == 1
    f.allow_write()
    assert f.inode.deny_write_count == 0


def test_reopen_shares_inode_with_own_position(table):
    f = open_file(table, 10)
    f.write(b"abcd")
    g = f.reopen()
    assert g.inode is f.inode
    assert g.tell() == 0
    assert g.read(4) == b"abcd"
    assert f.inode.open_count == 2


def test_context_manager_closes(table):
    f = open_file(table, 10)
    inode = f.inode
    g = f.reopen()
    with g:
        assert inode.open_count == 2
    assert inode.open_count == 1
    g.close()
    assert inode.open_count == 1