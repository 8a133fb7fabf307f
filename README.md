# sectorfs

A small, self-contained file system that lives on 512-byte sectors, together
with the pieces around it: a block device layer, an MBR partition table
scanner, a free-sector map, inodes with contiguous data, one flat root
directory, and a handful of file utilities. It also carries simple models of
classic PC devices: keyboard scancode decoding, a bounded byte queue, CMOS
real-time clock arithmetic, 8254 timer programming and an 80x25 text screen.

Everything runs in memory and uses only the standard library.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## What is inside

- `sectorfs.block`: `Block` devices of a given `BlockType`, kept in a
  `BlockRegistry`. The registry assigns roles (kernel, file system, scratch,
  swap), keeps a list of `messages`, and `stats()` gives read and write counts
  for each device in a role. `MemoryDisk` is a sector store kept in memory.
  Reading or writing past the end of a device, or writing to a `FOREIGN`
  device, raises `BlockError`.
- `sectorfs.partition`: `parse_partition_table` decodes a partition table
  sector into four `PartitionEntry` values and raises `ValueError` on a bad
  size or signature. `scan_partitions` walks the primary and extended tables
  of a block and registers each `Partition` as its own block device. Types
  0x20 to 0x23 get the kernel, file system, scratch and swap types; any other
  type is registered as foreign. `partition_type_name` names a type byte.
- `sectorfs.freemap`: `FreeMap`, one flag per sector. `allocate` returns the
  first sector of a free run or raises `NoSpaceError`. Once a backing file is
  attached or loaded, every change is written through to it.
- `sectorfs.inode`: `InodeTable` creates and opens `Inode`s. An inode opened
  twice is shared. A removed inode gives back its sectors when its last
  opener closes it. Files do not grow: writes stop at the end of the inode,
  and nothing is written while writes are denied.
- `sectorfs.file`: `File`, an open inode with a position, `read`/`write`,
  `seek`/`tell`, `length` and write denial. It can be used as a context
  manager.
- `sectorfs.directory`: `Directory`, a table of fixed-size entries. Names
  are at most 14 bytes. `add` raises `ValueError` for a bad name,
  `FileExistsError` for a name already present and `OSError` when the table
  is full. `remove` raises `FileNotFoundError`.
- `sectorfs.filesys`: `FileSystem` ties it all together. It formats a device
  on request, with a 16-entry root directory, and offers `create`, `open`,
  `remove` and `listdir`. `FileSystem.from_registry` opens the device that
  fills the file system role. Setup failures raise `FileSystemError`.
- `sectorfs.commands`: `cat`, `cmp`, `cp`, `rm`, `echo`, `lineup` and `ls`
  work on a `FileSystem` and write their output to a binary stream. Each
  returns an exit status.
- `sectorfs.kbd`: `Keyboard` turns scancodes into characters. It handles
  Shift, Ctrl, Alt and Caps Lock, puts the characters into an
  `InterruptQueue`, and raises `RebootRequested` on Ctrl+Alt+Del.
- `sectorfs.intq`: `InterruptQueue`, a thread-safe byte queue. `put` and
  `get` wait, or raise `TimeoutError` when a timeout is given and runs out.
- `sectorfs.rtc`: `bcd_to_bin`, `epoch_seconds` and
  `epoch_seconds_from_bcd`.
- `sectorfs.pit`: `pit_count` works out the counter value for a frequency.
  `configure_channel` lists the port writes, as `(port, byte)` pairs, that
  program a timer channel.
- `sectorfs.vga`: `TextScreen` has character cells, a cursor, control
  characters and scrolling. Its bell calls an optional `beep` callback.
- `sectorfs.insult`: a random sentence generator driven by a built-in
  grammar (`expand`, `generate`, `main`).
- `sectorfs.lineedit`: `read_line` is a line editor with backspace and
  Ctrl+U. `run_shell` is a command loop that runs commands through callbacks
  you supply.
- `sectorfs.numeric`: `bubble_sort`, `sort_demo` and `matmult_demo`.

## A few examples

```python
from sectorfs.block import BlockRegistry, BlockType, MemoryDisk
from sectorfs.filesys import FileSystem

registry = BlockRegistry()
disk = registry.register("hda", BlockType.FILESYS, 256, MemoryDisk(256))
with FileSystem(disk, format=True) as fs:
    fs.create("hello", 5)
    with fs.open("hello") as f:
        f.write(b"hi!!!")
    fs.listdir()            # ['hello']
```

```python
from sectorfs.partition import partition_type_name
from sectorfs.rtc import bcd_to_bin
from sectorfs.pit import pit_count
from sectorfs.numeric import bubble_sort

partition_type_name(0x83)   # 'Linux'
bcd_to_bin(0x59)            # 59
pit_count(100)              # 11932
bubble_sort([3, 1, 2])      # [1, 2, 3]
```

## The insult generator

The package installs one command:

```
sectorfs-insult -n 2 -s 1234
```

Options:

- `-h` shows help (recognized only as the first argument)
- `-s <integer>` sets the random seed (default 4951)
- `-n <integer>` chooses the number of sentences (default 4)
- `-f <file>` writes the output to a file instead of the console

The same seed always gives the same sentences.

## What it does not do

- Storage lives only in memory. `MemoryDisk` can be given initial bytes, but
  nothing is read from or saved to a disk image file.
- There are no subdirectories; all files are in the single root directory.
  Files keep the size they were created with.
- The file utilities in `sectorfs.commands` and the shell loop in
  `sectorfs.lineedit` are functions to call from Python. They are not
  installed as commands, and the shell starts no programs itself.
- The device modules model behaviour only. They do not touch real hardware,
  I/O ports or interrupts.