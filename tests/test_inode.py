import struct

import pytest

from sectorfs.block import SECTOR_SIZE, BlockRegistry, BlockType, MemoryDisk
from sectorfs.freemap import FreeMap, NoSpaceError
from sectorfs.inode import INODE_MAGIC, InodeError, InodeTable, bytes_to_sectors

SECTORS = 64


@pytest.fixture
def env():
    device = BlockRegistry().register("fs", BlockType.FILESYS, SECTORS, MemoryDisk(SECTORS))
    free_map = FreeMap(SECTORS)
    return device, free_map, InodeTable(device, free_map)


def make(env, length):
    _device, free_map, table = env
    sector = free_map.allocate(1)
    table.create(sector, length)
    return sector


def test_header_holds_length_and_magic(env):
    device = env[0]
    sector = make(env, 100)
    raw = device.read(sector)
    assert raw[8:12] == INODE_MAGIC.to_bytes(4, "little")
    assert struct.unpack_from("<i", raw, 4)[0] == 100


def test_open_shares_one_inode(env):
    table = env[2]
    sector = make(env, 10)
    a = table.open(sector)
    b = table.open(sector)
    assert a is b
    assert a.open_count == 2
    assert a.inumber == sector


def test_new_inode_reads_zeros(env):
    inode = env[2].open(make(env, 100))
    assert inode.read_at(100, 0) == bytes(100)
    assert inode.length == 100


def test_round_trip_across_sectors(env):
    inode = env[2].open(make(env, 1500))
    data = bytes(range(256)) * 4
    assert inode.write_at(data, 300) == len(data)
    assert inode.read_at(len(data), 300) == data


def test_write_stops_at_end_of_file(env):
    inode = env[2].open(make(env, 10))
    assert inode.write_at(b"x" * 20, 5) == 5
    assert inode.read_at(100, 0) == bytes(5) + b"x" * 5


def test_read_past_end_is_empty(env):
    inode = env[2].open(make(env, 10))
    assert inode.read_at(5, 10) == b""
    assert inode.read_at(5, 200) == b""


def test_partial_write_preserves_neighbours(env):
    inode = env[2].open(make(env, SECTOR_SIZE))
    inode.write_at(b"a" * SECTOR_SIZE, 0)
    inode.write_at(b"bb", 10)
    content = inode.read_at(SECTOR_SIZE, 0)
    assert content[:10] == b"a" * 10
    assert content[10:12] == b"bb"
    assert content[12:] == b"a" * (SECTOR_SIZE - 12)


def test_negative_offset_raises(env):
    inode = env[2].open(make(env, 10))
    with pytest.raises(ValueError):
        inode.read_at(1, -1)


def test_deny_write_blocks_writes(env):
    inode = env[2].open(make(env, 10))
    inode.deny_write()
    assert inode.write_at(b"abc", 0) == 0
    inode.allow_write()
    assert inode.write_at(b"abc", 0) == 3
    assert inode.read_at(3, 0) == b"abc"


def test_deny_write_limited_by_openers(env):
    inode = env[2].open(make(env, 10))
    inode.deny_write()
    with pytest.raises(InodeError):
        inode.deny_write()


def test_allow_write_without_deny_raises(env):
    inode = env[2].open(make(env, 10))
    with pytest.raises(InodeError):
        inode.allow_write()


def test_removed_inode_frees_sectors_on_last_close(env):
    _device, free_map, table = env
    sector = make(env, 3 * SECTOR_SIZE)
    inode = table.open(sector)
    table.open(sector)
    start = inode.start
    inode.remove()
    inode.close()
    assert not free_map.is_free(sector)
    inode.close()
    assert free_map.is_free(sector)
    assert all(free_map.is_free(s) for s in range(start, start + 3))


def test_closed_inode_keeps_data(env):
    _device, free_map, table = env
    sector = make(env, 20)
    inode = table.open(sector)
    inode.write_at(b"hello", 0)
    inode.close()
    assert not free_map.is_free(sector)
    again = table.open(sector)
    assert again is not inode
    assert again.read_at(5, 0) == b"hello"


def test_close_twice_raises(env):
    inode = env[2].open(make(env, 1))
    inode.close()
    with pytest.raises(InodeError):
        inode.close()


def test_create_negative_length_raises(env):
    with pytest.raises(ValueError):
        env[2].create(5, -1)


def test_create_too_large_raises(env):
    with pytest.raises(NoSpaceError):
        make(env, SECTORS * SECTOR_SIZE)


def test_create_allocates_data_sectors(env):
    free_map = env[1]
    sector = make(env, 2 * SECTOR_SIZE + 1)
    inode = env[2].open(sector)
    count = bytes_to_sectors(inode.length)
    assert count * SECTOR_SIZE >= inode.length
    assert not any(free_map.is_free(s) for s in range(inode.start, inode.start + count))