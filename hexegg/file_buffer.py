"""In-memory file contents with patch tracking, selection and bookmarks."""

from __future__ import annotations

from collections.abc import Iterator

from hexegg.highlight_list import HighlightList
from hexegg.location_list import LocationList

BOOKMARK_COUNT = 10


class FileBuffer:
    """Editable bytes of one file, remembering the original value of every change."""

    def __init__(self, data: bytes = b"", filename: str = "undefined_filename") -> None:
        self.filename = filename
        self.position = 0
        self.truncate_on_save = True
        self.highlight_list = HighlightList()
        self._data = bytearray(data)
        self._patches: dict[int, int] = {}
        self._selection: tuple[int, int] | None = None
        self._bookmarks: list[int | None] = [None] * BOOKMARK_COUNT
        self._location_list = LocationList()
        self._filtered_location_list: LocationList | None = None
        self._size_changed = False

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, index: int | slice) -> int | bytes:
        if isinstance(index, slice):
            return bytes(self._data[index])
        return self._data[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def get(self, offset: int) -> int | None:
        """Byte at `offset`, or None past the end."""
        if 0 <= offset < len(self._data):
            return self._data[offset]
        return None

    def set(self, offset: int, value: int) -> None:
        """Change one byte, or append it when `offset` is one past the end."""
        if 0 <= offset < len(self._data):
            original = self._data[offset]
            if original != value:
                self._patches.setdefault(offset, original)
                self._data[offset] = value
        elif offset == len(self._data):
            self._data.append(value)
            self._patches.setdefault(offset, 0)
            self._size_changed = True

    def remove_block(self) -> None:
        """Delete the selected bytes and shift the patches after them."""
        if self._selection is None:
            return
        start, end = self._selection
        if start >= len(self._data):
            return
        end = min(end, len(self._data) - 1)
        del self._data[start : end + 1]

        if any(o >= start for o in self._patches):
            removed = end - start + 1
            self._patches = {
                o - (removed if o >= end else 0): b
                for o, b in self._patches.items()
                if o < start or o > end
            }
        self._size_changed = True

    def insert_block(self, position: int, data: bytes) -> None:
        """Insert bytes at `position`; new bytes are patches of original 0."""
        if not data or position > len(self._data):
            return
        count = len(data)
        self._data[position:position] = data

        if any(o >= position for o in self._patches):
            self._patches = {
                o + (count if o >= position else 0): b
                for o, b in self._patches.items()
            }
        for offset in range(position, position + count):
            self._patches.setdefault(offset, 0)
        self._size_changed = True

    def is_patched(self, offset: int) -> bool:
        return offset in self._patches

    def is_modified(self) -> bool:
        return self._size_changed or bool(self._patches)

    def reset_modified(self) -> None:
        self._size_changed = False

    @property
    def selection(self) -> tuple[int, int] | None:
        return self._selection

    @selection.setter
    def selection(self, value: tuple[int, int] | None) -> None:
        """Store the selection ordered and clamped to the buffer."""
        if value is None:
            self._selection = None
            return
        last = max(len(self._data) - 1, 0)
        start, end = min(value[0], last), min(value[1], last)
        self._selection = (min(start, end), max(start, end))

    def is_selected(self, offset: int) -> bool:
        if self._selection is None:
            return False
        start, end = self._selection
        return start <= offset <= end

    def set_bookmark(self, idx: int, offset: int | None) -> None:
        """Set or clear bookmark `idx`; indexes outside 0-9 are ignored."""
        if 0 <= idx < BOOKMARK_COUNT:
            self._bookmarks[idx] = offset

    def bookmark(self, idx: int) -> int | None:
        if 0 <= idx < BOOKMARK_COUNT:
            return self._bookmarks[idx]
        return None

    def unpatch_offset(self, offset: int) -> None:
        """Restore the original byte at `offset` if it was changed."""
        original = self._patches.pop(offset, None)
        if original is not None and 0 <= offset < len(self._data):
            self._data[offset] = original

    def clear_patches(self) -> None:
        self._patches.clear()

    def patches(self) -> list[tuple[int, int]]:
        """All (offset, original byte) pairs, sorted by offset."""
        return sorted(self._patches.items())

    @property
    def location_list(self) -> LocationList:
        """The filtered location list when one is set, otherwise the full one."""
        if self._filtered_location_list is not None:
            return self._filtered_location_list
        return self._location_list

    def set_location_list(self, location_list: LocationList) -> None:
        self._filtered_location_list = None
        self._location_list = location_list

    def set_filtered_location_list(self, location_list: LocationList | None) -> None:
        self._filtered_location_list = location_list