"""Colored byte ranges, stored as sorted range starts with a color each."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable, Iterator
from typing import Any

# Exclusive end of the last range, matching the largest machine offset.
END_OF_RANGES = 2**64 - 1


class HighlightList:
    """Partition of the offset space into ranges, each with an optional color.

    Every range runs from its start up to the start of the next one; the
    first always starts at offset 0. A color of None means not highlighted.
    """

    def __init__(self, ranges: Iterable[tuple[int, int, Any]] | None = None) -> None:
        self._ranges: list[tuple[int, Any]] = [(0, None)]
        for start, end, color in ranges or ():
            self.add(start, end, color)

    def __iter__(self) -> Iterator[tuple[int, Any]]:
        return iter(list(self._ranges))

    def find_idx(self, offset: int) -> int | None:
        """Index of the range that contains `offset`."""
        idx = bisect_right(self._ranges, offset, key=lambda r: r[0]) - 1
        return idx if idx >= 0 else None

    def add(self, start_offset: int, end_offset: int, color: Any) -> None:
        """Color the inclusive range [start_offset, end_offset]."""
        if end_offset < start_offset:
            return
        idx1 = self.find_idx(start_offset)
        if idx1 is None:
            return

        to_remove = 0
        idx2 = self.find_idx(end_offset + 1)
        if idx2 is not None:
            following = self._ranges[idx2][1]
            if color is not None or following is not None:
                self._ranges.insert(idx2 + 1, (end_offset + 1, following))
            to_remove = idx2 - idx1

        first_start, first_color = self._ranges[idx1]
        if first_start == start_offset:
            self._ranges[idx1] = (first_start, color)
            kept = 1
        elif color is None and first_color is None:
            kept = 1
        else:
            self._ranges.insert(idx1 + 1, (start_offset, color))
            kept = 0

        first_removed = idx1 + 2 - kept
        del self._ranges[first_removed : first_removed + to_remove]

    def remove(self, offset: int) -> None:
        """Clear the color of the range containing `offset`, merging neighbours."""
        idx = self.find_idx(offset)
        if idx is None:
            return

        if idx + 1 < len(self._ranges) and self._ranges[idx + 1][1] is None:
            del self._ranges[idx + 1]

        start = self._ranges[idx][0]
        if idx == 0:
            self._ranges[idx] = (start, None)
        elif self._ranges[idx - 1][1] is None:
            del self._ranges[idx]
        else:
            self._ranges[idx] = (start, None)

    def color(self, offset: int) -> Any:
        idx = self.find_idx(offset)
        return self._ranges[idx][1] if idx is not None else None

    def range(self, offset: int) -> tuple[int, int] | None:
        """Inclusive bounds of the highlighted range at `offset`, or None."""
        idx = self.find_idx(offset)
        if idx is None:
            return None
        start, color = self._ranges[idx]
        if color is None:
            return None
        if idx + 1 < len(self._ranges):
            end = self._ranges[idx + 1][0]
        else:
            end = END_OF_RANGES
        return start, end - 1

    def clear(self) -> None:
        self._ranges = [(0, None)]