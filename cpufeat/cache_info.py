"""Description of processor caches and TLBs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator


class CacheType(IntEnum):
    """Kind of a cache level."""

    NULL = 0
    DATA = 1
    INSTRUCTION = 2
    UNIFIED = 3
    TLB = 4
    DTLB = 5
    STLB = 6
    PREFETCH = 7

    @property
    def label(self) -> str:
        """Lower-case name used in reports."""
        return self.name.lower()


@dataclass(frozen=True)
class CacheLevelInfo:
    """One cache level.

    ``cache_size`` and ``line_size`` are in bytes; ``ways`` is 0 when
    undefined and 0xFF when fully associative; ``partitioning`` is the
    number of lines per sector.
    """

    level: int
    cache_type: CacheType
    cache_size: int
    ways: int
    line_size: int
    tlb_entries: int
    partitioning: int


class CacheInfo:
    """An ordered, bounded collection of cache levels."""

    MAX_LEVELS = 10

    def __init__(self, levels: Iterable[CacheLevelInfo] = ()) -> None:
        self._levels: list[CacheLevelInfo] = []
        for level in levels:
            self.add(level)

    def add(self, level: CacheLevelInfo) -> None:
        """Append a level; raises OverflowError past MAX_LEVELS."""
        if len(self._levels) >= self.MAX_LEVELS:
            raise OverflowError(f"at most {self.MAX_LEVELS} cache levels are supported")
        self._levels.append(level)

    def __len__(self) -> int:
        return len(self._levels)

    def __iter__(self) -> Iterator[CacheLevelInfo]:
        return iter(self._levels)

    def __getitem__(self, index: int) -> CacheLevelInfo:
        return self._levels[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CacheInfo):
            return NotImplemented
        return self._levels == other._levels

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"CacheInfo({self._levels!r})"