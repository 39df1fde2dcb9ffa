"""Searching and analysis over file buffers: patterns, strings, diffs and statistics."""

from __future__ import annotations

import math
import re
from collections import Counter
from collections.abc import Iterable, Sequence
from typing import Any

from hexegg.file_buffer import BOOKMARK_COUNT, FileBuffer
from hexegg.location_list import Location, LocationList
from hexegg.magic import checks_for
from hexegg.signatures import get_signature

_ENTROPY_START = 9999.0


class OperationError(Exception):
    """Raised when a search or buffer operation finds nothing or cannot run."""


def _is_printable(byte: int) -> bool:
    return 0x20 <= byte <= 0x7E


def _offset_name(offset: int) -> str:
    return f"{offset:08X}"


def _compile(regex: str) -> re.Pattern[str]:
    try:
        return re.compile(regex)
    except re.error as exc:
        raise OperationError(str(exc)) from exc


def _describe_pattern(pattern: bytes) -> str:
    text = "".join(
        chr(b) if 0x21 <= b <= 0x7E else f"\\x{b:02X}" for b in pattern
    )
    return f"Pattern {text} not found!"


def _non_empty(locations: LocationList, message: str = "Not found!") -> LocationList:
    if len(locations) == 0:
        raise OperationError(message)
    return locations


def find_patch(fb: FileBuffer, start_offset: int) -> int:
    """Offset of the first patch after `start_offset`."""
    patches = fb.patches()
    if not patches:
        raise OperationError("Patch list is empty.")
    for offset, _ in patches:
        if offset > start_offset:
            return offset
    raise OperationError("Can't find next patch.")


def find_all_patches(fb: FileBuffer) -> LocationList:
    """A location for every patched offset, in offset order."""
    patches = fb.patches()
    if not patches:
        raise OperationError("Patch list is empty.")
    return LocationList.from_pairs((_offset_name(o), o) for o, _ in patches)


def _occurrences(data: bytes, pattern: bytes) -> Iterable[int]:
    """All (possibly overlapping) offsets of `pattern` in `data`."""
    if not pattern:
        return
    pos = data.find(pattern)
    while pos != -1:
        yield pos
        pos = data.find(pattern, pos + 1)


def find(data: Any, start_offset: int, pattern: bytes) -> int:
    """First offset of `pattern` at or after `start_offset`."""
    haystack = bytes(data)
    pattern = bytes(pattern)
    pos = haystack.find(pattern, start_offset) if pattern else -1
    if pos == -1 or start_offset > len(haystack):
        raise OperationError(_describe_pattern(pattern))
    return pos


def find_all(data: Any, pattern: bytes) -> LocationList:
    """Locations of every occurrence of `pattern`, each as long as the pattern."""
    pattern = bytes(pattern)
    offsets = list(_occurrences(bytes(data), pattern))
    if not offsets:
        raise OperationError(_describe_pattern(pattern))
    return LocationList(Location(_offset_name(o), o, len(pattern)) for o in offsets)


def find_string_at_position(data: Any, position: int) -> tuple[int, int] | None:
    """Inclusive bounds of the printable ASCII run containing `position`."""
    buf = bytes(data)
    if not 0 <= position < len(buf) or not _is_printable(buf[position]):
        return None
    start = end = position
    while end + 1 < len(buf) and _is_printable(buf[end + 1]):
        end += 1
    while start > 0 and _is_printable(buf[start - 1]):
        start -= 1
    return start, end


def _breaks_wide_run(last_was_ascii: bool, byte: int) -> bool:
    if last_was_ascii:
        return byte != 0
    return not _is_printable(byte)


def find_unicode_string_at_position(data: Any, position: int) -> tuple[int, int] | None:
    """Inclusive bounds of the two-byte-per-char ASCII string at `position`."""
    buf = bytes(data)
    if not 0 <= position < len(buf):
        return None
    byte = buf[position]
    if not (_is_printable(byte) or byte == 0):
        return None

    start = end = position
    last_was_ascii = byte != 0
    while end + 1 < len(buf) and not _breaks_wide_run(last_was_ascii, buf[end + 1]):
        last_was_ascii = not last_was_ascii
        end += 1

    last_was_ascii = byte != 0
    while start > 0 and not _breaks_wide_run(last_was_ascii, buf[start - 1]):
        last_was_ascii = not last_was_ascii
        start -= 1

    # The string starts with a character and ends with its zero byte.
    if buf[start] == 0 and start < end:
        start += 1
    if _is_printable(buf[end]) and start < end:
        end -= 1
    return (start, end) if start < end else None


def _ascii_runs(buf: bytes, min_size: int) -> Iterable[tuple[int, int]]:
    """(start, end) of every printable run of at least `min_size` bytes."""
    start = None
    for index, byte in enumerate(buf):
        if _is_printable(byte):
            if start is None:
                start = index
        elif start is not None:
            if index - start >= min_size:
                yield start, index
            start = None
    if start is not None and len(buf) - start >= min_size:
        yield start, len(buf)


def _wide_runs(buf: bytes, min_size: int) -> Iterable[tuple[int, int, str]]:
    """(start, end, text) of every wide-char run of at least `min_size` chars."""
    min_bytes = 2 * min_size
    start = None
    index = 0
    while index + 1 < len(buf):
        if _is_printable(buf[index]) and buf[index + 1] == 0:
            if start is None:
                start = index
            index += 1
        elif start is not None:
            if index - start >= min_bytes:
                yield start, index, _wide_text(buf[start:index])
            start = None
        index += 1
    if start is not None and len(buf) - start >= min_bytes:
        yield start, index, _wide_text(buf[start:index])


def _wide_text(chunk: bytes) -> str:
    return "".join(chr(b) for b in chunk if b != 0)


def find_string(data: Any, start_offset: int, min_size: int, regex: str) -> int:
    """Offset of the first ASCII string from `start_offset` matching `regex`."""
    pattern = _compile(regex)
    buf = bytes(data)[start_offset:]
    for start, end in _ascii_runs(buf, min_size):
        if pattern.search(buf[start:end].decode("ascii")):
            return start + start_offset
    raise OperationError("Not found!")


def find_unicode_string(data: Any, start_offset: int, min_size: int, regex: str) -> int:
    """Offset of the first wide-char string from `start_offset` matching `regex`."""
    pattern = _compile(regex)
    buf = bytes(data)[start_offset:]
    for start, _, text in _wide_runs(buf, min_size):
        if not regex or pattern.search(text):
            return start + start_offset
    raise OperationError("Not found!")


def find_all_strings(data: Any, min_size: int, regex: str) -> LocationList:
    """Every ASCII string of at least `min_size` chars matching `regex`."""
    pattern = _compile(regex)
    buf = bytes(data)
    found = LocationList()
    for start, end in _ascii_runs(buf, min_size):
        text = buf[start:end].decode("ascii")
        if pattern.search(text):
            found.append(Location(text, start, len(text)))
    return _non_empty(found)


def find_all_unicode_strings(data: Any, min_size: int, regex: str) -> LocationList:
    """Every wide-char string of at least `min_size` chars matching `regex`."""
    pattern = _compile(regex)
    found = LocationList()
    for start, end, text in _wide_runs(bytes(data), min_size):
        if not regex or pattern.search(text):
            found.append(Location(text, start, end - start))
    return _non_empty(found)


def _diff_offsets(file_buffers: Sequence[Any], active_fb_index: int, start_offset: int):
    buffers = [bytes(fb) for fb in file_buffers]
    active = buffers[active_fb_index]
    for offset in range(start_offset, len(active)):
        byte = active[offset]
        if any(offset >= len(other) or other[offset] != byte for other in buffers):
            yield offset


def find_diff(file_buffers: Sequence[Any], start_offset: int, active_fb_index: int) -> int | None:
    """First offset from `start_offset` where any buffer differs from the active one."""
    return next(_diff_offsets(file_buffers, active_fb_index, start_offset), None)


def find_all_diffs(file_buffers: Sequence[Any], active_fb_index: int) -> LocationList:
    """A location for every offset where the buffers differ."""
    found = LocationList.from_pairs(
        (_offset_name(o), o) for o in _diff_offsets(file_buffers, active_fb_index, 0)
    )
    return _non_empty(found)


def find_all_signatures(
    file_buffers: Sequence[Any],
    active_fb_index: int,
    signature_names: Iterable[str] | None,
    ignored: bool,
) -> LocationList:
    """Every recognised header, optionally only the named ones (or all but them)."""
    names = None if signature_names is None else set(signature_names)
    buf = bytes(file_buffers[active_fb_index])
    found = LocationList()
    for offset, byte in enumerate(buf):
        if not checks_for(byte):
            continue
        sig = get_signature(buf[offset:])
        if sig is None:
            continue
        if names is None or (sig in names) != ignored:
            found.append(Location(sig, offset, 0))
    return _non_empty(found)


def find_all_bookmarks(file_buffers: Sequence[FileBuffer], active_fb_index: int) -> LocationList:
    """A location for every bookmark set in the active buffer."""
    fb = file_buffers[active_fb_index]
    found = LocationList.from_pairs(
        (f"bm_{idx}", offset)
        for idx in range(BOOKMARK_COUNT)
        if (offset := fb.bookmark(idx)) is not None
    )
    return _non_empty(found, "No bookmarks set.")


def entropy(data: Any) -> float:
    """Shannon entropy of `data` in bits per byte."""
    buf = bytes(data)
    total = len(buf)
    return -sum(
        (count / total) * math.log2(count / total) for count in Counter(buf).values()
    )


def replace_all(fb: FileBuffer, pattern: bytes) -> None:
    """Overwrite every location in the location bar with `pattern` or the selection."""
    pattern = bytes(pattern)
    if not pattern:
        if fb.selection is None:
            raise OperationError("No pattern or block specified!")
        start, end = fb.selection
        pattern = fb[start : end + 1]

    locations = fb.location_list.copy()
    if len(locations) == 0:
        raise OperationError("No locations in location bar!")
    if any(loc.size != len(pattern) for loc in locations):
        raise OperationError(
            "All results must be the same size as specified pattern or block!"
        )

    for loc in locations:
        for i, byte in enumerate(pattern):
            fb.set(loc.offset + i, byte)


def calculate_entropy(data: Any, block_size: int, margin: float) -> LocationList:
    """Entropy of each full block, listing only blocks that change by more than `margin`."""
    if block_size <= 0:
        raise OperationError("'block_size' must be greater than zero.")
    buf = bytes(data)
    previous = _ENTROPY_START
    found = LocationList()
    for index, start in enumerate(range(0, len(buf) - block_size + 1, block_size)):
        value = math.floor(100.0 * entropy(buf[start : start + block_size]) + 0.5) / 100.0
        if abs(previous - value) > margin:
            previous = value
            found.append(Location(f" {value:.2f}", index * block_size, 0))
    return found


def calculate_histogram(data: Any) -> LocationList:
    """Count of every byte value, most frequent first, ties in byte order."""
    counts = Counter(bytes(data))
    ordered = sorted(range(256), key=lambda b: -counts[b])
    return LocationList.from_pairs((f"{b:02X}_{counts[b]}", 0) for b in ordered)