"""A fixed-size block pool carved out of one buffer."""

from __future__ import annotations


class MemoryPool:
    """Hands out ``capacity`` blocks of ``block_size`` bytes from a single buffer."""

    def __init__(self, block_size: int, capacity: int) -> None:
        if block_size <= 0:
            raise ValueError("block_size must be positive")
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.block_size = block_size
        self.capacity = capacity
        self._storage = bytearray(block_size * capacity)
        view = memoryview(self._storage)
        self._free = [
            view[start:start + block_size]
            for start in range(0, block_size * capacity, block_size)
        ]
        self._in_use: dict[int, memoryview] = {}

    def alloc(self) -> memoryview:
        """Take the most recently freed block from the pool."""
        if not self._free:
            raise MemoryError("memory pool exhausted")
        block = self._free.pop()
        self._in_use[id(block)] = block
        return block

    def free(self, block: memoryview) -> None:
        """Return ``block`` to the pool."""
        if self._in_use.get(id(block)) is not block:
            raise ValueError("block is not allocated from this pool")
        del self._in_use[id(block)]
        self._free.append(block)

    def available(self) -> int:
        """Number of free blocks."""
        return len(self._free)