"""Small compute workloads: bubble sort and matrix multiplication."""

from __future__ import annotations

from typing import Iterable, TypeVar

T = TypeVar("T")

SORT_SIZE = 128
DIM = 128


def bubble_sort(values: Iterable[T]) -> list[T]:
    """Return the values sorted ascending by bubble sort."""
    items = list(values)
    for limit in range(len(items) - 1, 0, -1):
        for j in range(limit):
            if items[j] > items[j + 1]:
                items[j], items[j + 1] = items[j + 1], items[j]
    return items


def sort_demo(size: int = SORT_SIZE) -> int:
    """Sort SIZE integers given in descending order; return the smallest."""
    if size < 1:
        raise ValueError("size must be at least 1")
    return bubble_sort(range(size - 1, -1, -1))[0]


def _matmul(a: list[list[int]], b: list[list[int]]) -> list[list[int]]:
    columns = list(zip(*b))
    return [[sum(x * y for x, y in zip(row, col)) for col in columns] for row in a]


def matmult_demo(dim: int = DIM) -> int:
    """Multiply A (rows of i) by B (columns of j); return the last element."""
    if dim < 1:
        raise ValueError("dim must be at least 1")
    a = [[i] * dim for i in range(dim)]
    b = [list(range(dim)) for _ in range(dim)]
    return _matmul(a, b)[-1][-1]