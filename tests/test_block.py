import pytest

from sectorfs.block import (
    SECTOR_SIZE,
    Block,
    BlockError,
    BlockRegistry,
    BlockType,
    MemoryDisk,
    block_type_name,
)


def sector(fill: int) -> bytes:
    return bytes([fill]) * SECTOR_SIZE


def test_type_names():
    assert block_type_name(BlockType.KERNEL) == "kernel"
    assert block_type_name(BlockType.FILESYS) == "filesys"
    assert block_type_name(BlockType.FOREIGN) == "foreign"


def test_memory_disk_round_trip():
    disk = MemoryDisk(4)
    disk.write(2, sector(7))
    assert disk.read(2) == sector(7)
    assert disk.read(1) == sector(0)


def test_memory_disk_wrong_length():
    with pytest.raises(ValueError):
        MemoryDisk(2).write(0, b"abc")


def test_block_counts_and_round_trip():
    block = Block("hda", BlockType.RAW, 4, MemoryDisk(4))
    block.write(3, sector(9))
    block.write(0, sector(1))
    assert block.read(3) == sector(9)
    assert (block.read_count, block.write_count) == (1, 2)


def test_access_past_end():
    block = Block("hda", BlockType.RAW, 4, MemoryDisk(8))
    with pytest.raises(BlockError):
        block.read(4)
    with pytest.raises(BlockError):
        block.write(-1, sector(0))
    assert block.read_count == 0


def test_foreign_not_writable():
    block = Block("hdb", BlockType.FOREIGN, 2, MemoryDisk(2))
    with pytest.raises(BlockError):
        block.write(0, sector(1))
    assert block.read(0) == sector(0)


def test_registry_lookup_and_order():
    reg = BlockRegistry()
    a = reg.register("hda", BlockType.RAW, 2, MemoryDisk(2))
    b = reg.register("hdb", BlockType.RAW, 2, MemoryDisk(2), "extra")
    assert list(reg) == [a, b]
    assert reg.get_by_name("hdb") is b
    assert reg.get_by_name("hdz") is None
    assert reg.messages[1].startswith("hdb: 2 sectors")
    assert reg.messages[1].endswith(", extra")


def test_register_truncates_name():
    reg = BlockRegistry()
    block = reg.register("x" * 30, BlockType.RAW, 1, MemoryDisk(1))
    assert len(block.name) == 15


def test_roles():
    reg = BlockRegistry()
    block = reg.register("hda1", BlockType.FILESYS, 2, MemoryDisk(2))
    assert reg.get_role(BlockType.FILESYS) is None
    reg.set_role(BlockType.FILESYS, block)
    assert reg.get_role(BlockType.FILESYS) is block
    with pytest.raises(ValueError):
        reg.set_role(BlockType.RAW, block)
    with pytest.raises(ValueError):
        reg.get_role(BlockType.FOREIGN)


def test_stats():
    reg = BlockRegistry()
    block = reg.register("hda1", BlockType.FILESYS, 2, MemoryDisk(2))
    reg.register("hdb", BlockType.RAW, 2, MemoryDisk(2))
    reg.set_role(BlockType.FILESYS, block)
    block.read(0)
    block.write(1, sector(2))
    block.write(1, sector(3))
    assert reg.stats() == ["hda1 (filesys): 1 reads, 2 writes"]