"""Anonymous memory mappings with bookkeeping of what is still mapped."""

from __future__ import annotations

import errno
import logging
import mmap
from dataclasses import dataclass

log = logging.getLogger(__name__)

_MAP_ERRORS = {
    errno.EINVAL: "Invalid argument (check addr, length, offset, or flags)",
    errno.EACCES: "Permission denied (check file permissions or protections)",
    errno.ENOMEM: "Out of memory (check system resources)",
    errno.EBADF: "Invalid file descriptor",
    errno.ENODEV: "Mapping not supported for this file",
    errno.ENXIO: "No such device or address (check offset and file size)",
    errno.EOVERFLOW: "Offset or length exceeds file size or addressable range",
}


class MappingError(OSError):
    """Raised when mapping or unmapping memory fails."""


@dataclass(eq=False)
class MappedChunk:
    """One mapping made through a MappingTracker."""

    buffer: mmap.mmap
    size: int
    in_use: bool = True

    @property
    def address(self) -> int:
        return id(self.buffer)


class MappingTracker:
    """Creates private anonymous mappings and records them."""

    def __init__(self) -> None:
        self._chunks: list[MappedChunk] = []  # newest first

    def map(self, length: int) -> MappedChunk:
        """Map ``length`` readable and writable bytes."""
        if length <= 0:
            raise MappingError(errno.EINVAL, f"mmap failed: {_MAP_ERRORS[errno.EINVAL]}")
        try:
            buffer = mmap.mmap(-1, length, flags=mmap.MAP_PRIVATE)
        except OSError as exc:
            reason = _MAP_ERRORS.get(exc.errno, exc.strerror)
            raise MappingError(exc.errno, f"mmap failed: {reason}") from exc
        chunk = MappedChunk(buffer, length)
        self._chunks.insert(0, chunk)
        log.info("Memory mapped at %#x (size: %d bytes)", chunk.address, length)
        return chunk

    def unmap(self, chunk: MappedChunk | int | None) -> None:
        """Unmap a chunk given either itself or its address."""
        if chunk is None:
            raise MappingError(errno.EINVAL, "safe_munmap: NULL address provided.")
        tracked = next(
            (c for c in self._chunks if c is chunk or c.address == chunk), None
        )
        if tracked is None:
            address = chunk.address if isinstance(chunk, MappedChunk) else chunk
            raise MappingError(
                errno.EINVAL,
                f"safe_munmap: Address {address:#x} not found in allocation list.",
            )
        if not tracked.in_use:
            raise MappingError(
                errno.EINVAL,
                f"safe_munmap: Address {tracked.address:#x} is already unmapped.",
            )
        try:
            tracked.buffer.close()
        except BufferError as exc:
            raise MappingError(errno.EBUSY, f"munmap failed: {exc}") from exc
        tracked.in_use = False
        log.info("Memory unmapped at %#x (size: %d bytes)", tracked.address, tracked.size)

    def total_in_use(self) -> int:
        """Bytes currently mapped."""
        return sum(c.size for c in self._chunks if c.in_use)

    def log_usage(self) -> str:
        """One line per live chunk followed by the total."""
        lines = [
            f"Chunk address: {c.address}, Size allocated: {c.size}"
            for c in self._chunks
            if c.in_use
        ]
        lines.append(f"Total memory allocated: {self.total_in_use()} bytes")
        return "\n".join(lines)