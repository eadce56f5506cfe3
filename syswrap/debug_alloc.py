"""Allocation bookkeeping that reports bad frees and leaks."""

from __future__ import annotations

import logging
from dataclasses import dataclass

log = logging.getLogger(__name__)


class AllocationError(Exception):
    """Raised for rejected allocations and invalid frees."""


@dataclass(frozen=True, eq=False)
class Allocation:
    """A live allocation: the buffer and the size requested."""

    block: bytearray
    size: int

    @property
    def address(self) -> int:
        return id(self.block)


class AllocationTracker:
    """Allocates buffers and keeps a record of each until it is freed."""

    def __init__(self) -> None:
        self._records: list[Allocation] = []  # newest first

    def allocate(self, size: int) -> bytearray:
        """Allocate ``size`` bytes and record the allocation."""
        if size == 0:
            raise AllocationError("debug_malloc: Zero size allocation request ignored.")
        if size < 0:
            raise AllocationError(f"debug_malloc: Invalid allocation size {size}.")
        try:
            block = bytearray(size)
        except MemoryError:
            raise AllocationError("debug_malloc: Allocation failed. Out of memory.") from None
        self._records.insert(0, Allocation(block, size))
        log.info("Allocated %d bytes at %#x", size, id(block))
        return block

    def free(self, block: bytearray | None) -> int:
        """Forget ``block`` and return its size."""
        if block is None:
            raise AllocationError("debug_free: Attempt to free a NULL pointer ignored.")
        record = next((r for r in self._records if r.block is block), None)
        if record is None:
            raise AllocationError(
                "debug_free: Attempt to free untracked or already freed memory "
                f"at {id(block):#x}"
            )
        self._records.remove(record)
        log.info("Freed %d bytes at %#x", record.size, record.address)
        return record.size

    def leaks(self) -> list[Allocation]:
        """Allocations not yet freed, newest first."""
        return list(self._records)

    def report_leaks(self) -> str:
        """Human-readable leak report."""
        if not self._records:
            return "No memory leaks detected."
        lines = ["Memory leaks detected:"]
        lines.extend(f"  Leak: {r.size} bytes at {r.address:#x}" for r in self._records)
        return "\n".join(lines)