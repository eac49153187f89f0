"""Partition record sequences into fixed-size chunks."""

from typing import Iterator, Sequence, TypeVar

from bulkbatch.errors import MalformedInputError

T = TypeVar("T")


def _check_size(size: int) -> None:
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise MalformedInputError(f"Chunk size must be a positive integer, got {size!r}")


def iter_chunks(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive slices of at most ``size`` items, in input order."""
    _check_size(size)
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


def chunk(items: Sequence[T], size: int) -> list[list[T]]:
    """Split ``items`` into ceil(len(items) / size) ordered chunks.

    Every chunk but the last holds exactly ``size`` items. Empty input
    gives an empty list.
    """
    return list(iter_chunks(items, size))
