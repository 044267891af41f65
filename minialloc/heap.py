"""A first-fit allocator that manages a fixed-size simulated heap.

Every chunk starts with an 8-byte header holding its size (header included),
whether it is free, and the size of the chunk before it. Pointers handed out
are integer offsets of payloads within the heap.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, replace
from typing import Iterator, List, Optional

HEADER_SIZE = 8
ALIGNMENT = 8
DEFAULT_SIZE = 4096
MAX_SIZE = 32760  # chunk sizes are stored as signed 16-bit values

_HEADER = struct.Struct("<h?xh")


class InappropriatePointerError(ValueError):
    """Raised when freeing a pointer that is not a live allocation."""


@dataclass(frozen=True)
class Chunk:
    """One chunk of the heap as described by its header."""

    offset: int
    size: int
    is_free: bool
    prev_size: int

    @property
    def payload(self) -> int:
        """Offset of the first usable byte of the chunk."""
        return self.offset + HEADER_SIZE

    @property
    def capacity(self) -> int:
        """Number of usable bytes in the chunk."""
        return self.size - HEADER_SIZE

    @property
    def end(self) -> int:
        """Offset just past the chunk."""
        return self.offset + self.size


def _align(size: int) -> int:
    return (size + ALIGNMENT - 1) // ALIGNMENT * ALIGNMENT


class Heap:
    """A fixed-size heap served by first-fit allocation with coalescing."""

    def __init__(self, size: int = DEFAULT_SIZE) -> None:
        if size % ALIGNMENT or not 2 * HEADER_SIZE <= size <= MAX_SIZE:
            raise ValueError(
                f"heap size must be a multiple of {ALIGNMENT} "
                f"between {2 * HEADER_SIZE} and {MAX_SIZE}, got {size}"
            )
        self.size = size
        self._data = bytearray(size)
        self._store(Chunk(0, size, True, 0))

    def _read(self, offset: int) -> Chunk:
        size, is_free, prev_size = _HEADER.unpack_from(self._data, offset)
        return Chunk(offset, size, is_free, prev_size)

    def _store(self, chunk: Chunk) -> None:
        _HEADER.pack_into(self._data, chunk.offset, chunk.size, chunk.is_free, chunk.prev_size)

    def _set_prev_size(self, offset: int, prev_size: int) -> None:
        if offset != self.size:
            self._store(replace(self._read(offset), prev_size=prev_size))

    def _find(self, ptr: object) -> Optional[Chunk]:
        return next((chunk for chunk in self.chunks() if chunk.payload == ptr), None)

    def chunks(self) -> Iterator[Chunk]:
        """Yield every chunk from the start of the heap to its end."""
        offset = 0
        while offset != self.size:
            chunk = self._read(offset)
            yield chunk
            offset = chunk.end

    def malloc(self, size: int, file: str = "<unknown>", line: int = 0) -> int:
        """Reserve at least ``size`` bytes and return the payload offset.

        Raises MemoryError when no free chunk is large enough.
        """
        if size < 0:
            raise ValueError(f"cannot allocate a negative size: {size}")
        chunk = next(
            (c for c in self.chunks() if c.is_free and c.capacity >= size), None
        )
        if chunk is None:
            raise MemoryError(f"malloc: Unable to allocate {size} bytes ({file}:{line})")

        aligned = _align(size)
        if aligned >= chunk.size - 2 * HEADER_SIZE:
            self._store(replace(chunk, is_free=False))
            return chunk.payload

        used = HEADER_SIZE + aligned
        rest = Chunk(chunk.offset + used, chunk.size - used, True, used)
        self._store(rest)
        self._store(replace(chunk, size=used, is_free=False))
        self._set_prev_size(rest.end, rest.size)
        return chunk.payload

    def free(self, ptr: Optional[int], file: str = "<unknown>", line: int = 0) -> None:
        """Release the allocation at ``ptr`` and merge it with free neighbours."""
        target = self._find(ptr)
        if target is None or target.is_free:
            raise InappropriatePointerError(f"free: Inappropriate pointer ({file}:{line})")

        if target.offset != 0:
            prev = self._read(target.offset - target.prev_size)
            if prev.is_free:
                target = replace(prev, size=prev.size + target.size)

        if target.end != self.size:
            following = self._read(target.end)
            if following.is_free:
                target = replace(target, size=target.size + following.size)

        target = replace(target, is_free=True)
        self._store(target)
        self._set_prev_size(target.end, target.size)

    def buffer(self, ptr: int, length: int) -> memoryview:
        """Return a writable view of ``length`` bytes of a live allocation."""
        chunk = self._find(ptr)
        if chunk is None or chunk.is_free:
            raise InappropriatePointerError(f"no live allocation at offset {ptr}")
        if not 0 <= length <= chunk.capacity:
            raise IndexError(
                f"length {length} outside the {chunk.capacity} usable bytes at offset {ptr}"
            )
        return memoryview(self._data)[ptr : ptr + length]

    def leaks(self) -> List[Chunk]:
        """Return the chunks that are still allocated."""
        return [chunk for chunk in self.chunks() if not chunk.is_free]

    def leak_report(self) -> Optional[str]:
        """Describe leaked memory, or return None when nothing is allocated."""
        leaked = self.leaks()
        total = sum(chunk.size for chunk in leaked)
        if total == 0:
            return None
        return f"mymalloc: {total} bytes leaked in {len(leaked)} objects."