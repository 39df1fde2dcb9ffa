"""Named offsets shown in the location bar, with a movable current entry."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass
class Location:
    """A named position in a buffer, optionally covering `size` bytes."""

    name: str
    offset: int
    size: int = 0


class LocationList:
    """An ordered list of locations with a cursor on the current one."""

    def __init__(self, locations: Iterable[Location] | None = None) -> None:
        self._locations: list[Location] = list(locations or ())
        self._current_index = 0

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, int]]) -> LocationList:
        """Build a list from (name, offset) pairs; every location has size 0."""
        return cls(Location(name, offset) for name, offset in pairs)

    @property
    def current_index(self) -> int:
        return self._current_index

    def set_current_index(self, index: int) -> None:
        """Move the current entry, clamped to the last location."""
        self._current_index = min(index, max(len(self._locations) - 1, 0))

    def next(self) -> Location | None:
        """Advance to the next location if there is one and return the current."""
        if self.get(self._current_index + 1) is not None:
            self._current_index += 1
        return self.current()

    def previous(self) -> Location | None:
        """Step back one location (stopping at the first) and return it."""
        self._current_index = max(self._current_index - 1, 0)
        return self.get(self._current_index)

    def current(self) -> Location | None:
        return self.get(self._current_index)

    def get(self, index: int) -> Location | None:
        """Return the location at `index`, or None when there is none."""
        if 0 <= index < len(self._locations):
            return self._locations[index]
        return None

    def find_idx(self, offset: int) -> int | None:
        """Index of the first location whose span contains `offset`."""
        for i, loc in enumerate(self._locations):
            if loc.offset <= offset <= loc.offset + max(loc.size - 1, 0):
                return i
        return None

    def remove_current_location(self) -> None:
        self.remove_location(self._current_index)

    def remove_location(self, idx: int) -> None:
        """Remove the location at `idx`; out-of-range indexes are ignored."""
        if 0 <= idx < len(self._locations):
            del self._locations[idx]
            self._current_index = min(
                self._current_index, max(len(self._locations) - 1, 0)
            )

    def append(self, location: Location) -> None:
        self._locations.append(location)

    def extend(self, locations: Iterable[Location]) -> None:
        self._locations.extend(locations)

    def copy(self) -> LocationList:
        """Return an independent copy, including the current index."""
        clone = LocationList(
            Location(loc.name, loc.offset, loc.size) for loc in self._locations
        )
        clone._current_index = self._current_index
        return clone

    def __len__(self) -> int:
        return len(self._locations)

    def __iter__(self) -> Iterator[Location]:
        return iter(self._locations)

    def __getitem__(self, index: int) -> Location:
        return self._locations[index]