"""An in-memory sector-based file system with block devices, partitions and device models."""

__version__ = "0.1.0"