"""Heap size accounting with a checksum that is validated on every change."""

from __future__ import annotations

import contextlib
import os
import threading
from pathlib import Path

DEFAULT_LOG = "heap_corruption_log.txt"

_SIZE_MASK = (1 << 64) - 1
_CHECKSUM_MASK = 0xFFFFFFFF


class HeapCorruptionError(RuntimeError):
    """Raised when the stored checksum does not match the heap size."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Heap corruption detected! Expected checksum: {expected}, but got: {actual}"
        )
        self.expected = expected
        self.actual = actual


class HeapGuard:
    """Tracks the heap size through allocation events and checks its checksum."""

    def __init__(self, log_path: str | os.PathLike[str] = DEFAULT_LOG) -> None:
        self.log_path = Path(log_path)
        self.heap_size = 0
        self.checksum = 0
        self._lock = threading.Lock()

    def calculate_checksum(self) -> int:
        """Checksum derived from the current heap size."""
        return (0 ^ self.heap_size) & _CHECKSUM_MASK

    def validate(self) -> None:
        """Raise HeapCorruptionError and log it if the checksum is stale."""
        expected = self.calculate_checksum()
        if expected != self.checksum:
            error = HeapCorruptionError(expected, self.checksum)
            with contextlib.suppress(OSError), self.log_path.open("a") as fh:
                fh.write(f"{error}\n")
            raise error

    def _adjust(self, delta: int) -> None:
        with self._lock:
            self.heap_size = (self.heap_size + delta) & _SIZE_MASK
            self.checksum = self.calculate_checksum()
        self.validate()

    def on_alloc(self, size: int) -> None:
        """Record a successful allocation of ``size`` bytes."""
        self._adjust(size)

    def on_calloc(self, count: int, size: int) -> None:
        """Record a successful allocation of ``count`` elements of ``size`` bytes."""
        self._adjust(count * size)

    def on_free(self, size: int) -> None:
        """Record the release of a block of ``size`` usable bytes."""
        self._adjust(-size)

    def on_realloc(self, old_size: int, new_size: int) -> None:
        """Record a block resized from ``old_size`` to ``new_size`` bytes."""
        self._adjust(new_size - old_size)