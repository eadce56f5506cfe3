"""Open files through a tracker so every descriptor can be closed together."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

log = logging.getLogger(__name__)


class UntrackedDescriptorError(LookupError):
    """Raised when closing a descriptor that the tracker never opened."""

    def __init__(self, fd: int) -> None:
        super().__init__(f"File descriptor not found in the file manager : {fd}.")
        self.fd = fd


class FileTracker:
    """Keeps a record of every descriptor opened through it."""

    def __init__(self) -> None:
        self._fds: list[int] = []

    def open(self, path: str | os.PathLike[str], flags: int, mode: int = 0o644) -> int:
        """Open ``path`` with ``os.open`` and remember the descriptor."""
        fd = os.open(path, flags, mode)
        self._fds.append(fd)
        return fd

    def close(self, fd: int) -> None:
        """Stop tracking ``fd`` and close it."""
        try:
            self._fds.remove(fd)
        except ValueError:
            raise UntrackedDescriptorError(fd) from None
        os.close(fd)

    def close_all(self) -> None:
        """Close every tracked descriptor and forget them all."""
        fds, self._fds = self._fds, []
        for fd in fds:
            try:
                os.close(fd)
            except OSError as exc:
                log.warning("close failed for descriptor %d: %s", fd, exc)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._fds))

    def __len__(self) -> int:
        return len(self._fds)

    def __contains__(self, fd: object) -> bool:
        return fd in self._fds

    def __enter__(self) -> FileTracker:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close_all()