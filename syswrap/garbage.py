"""A mark-and-sweep collector over explicitly allocated buffers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class _Entry:
    data: bytearray
    reachable: bool = False


class GarbageCollector:
    """Hands out buffers and frees those not marked reachable before a collection."""

    def __init__(self) -> None:
        self._entries: list[_Entry] = []  # newest first

    def alloc(self, size: int) -> bytearray:
        """Allocate a zeroed buffer of ``size`` bytes and track it."""
        data = bytearray(size)
        self._entries.insert(0, _Entry(data))
        return data

    def mark(self, block: bytearray) -> bool:
        """Mark ``block`` reachable; return False if it is not tracked."""
        entry = next((e for e in self._entries if e.data is block), None)
        if entry is None:
            return False
        entry.reachable = True
        return True

    def collect(self) -> int:
        """Free every unmarked buffer, clear marks on survivors, return the count freed."""
        survivors = []
        for entry in self._entries:
            if entry.reachable:
                entry.reachable = False
                survivors.append(entry)
        freed = len(self._entries) - len(survivors)
        self._entries = survivors
        return freed

    def cleanup(self) -> None:
        """Free every tracked buffer."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, block: object) -> bool:
        return any(e.data is block for e in self._entries)