import pytest

from hexegg.file_buffer import FileBuffer
from hexegg.location_list import Location, LocationList
from hexegg.search import (
    OperationError,
    calculate_entropy,
    calculate_histogram,
    entropy,
    find,
    find_all,
    find_all_bookmarks,
    find_all_diffs,
    find_all_patches,
    find_all_signatures,
    find_all_strings,
    find_all_unicode_strings,
    find_diff,
    find_patch,
    find_string,
    find_string_at_position,
    find_unicode_string,
    find_unicode_string_at_position,
    replace_all,
)


def _patched_buffer():
    fb = FileBuffer(bytes(16))
    fb.set(5, 1)
    fb.set(10, 2)
    return fb


def test_find_patch_empty():
    with pytest.raises(OperationError, match="Patch list is empty."):
        find_patch(FileBuffer(b"abc"), 0)


def test_find_patch_next():
    fb = _patched_buffer()
    assert find_patch(fb, 0) == 5
    assert find_patch(fb, 5) == 10
    with pytest.raises(OperationError, match="Can't find next patch."):
        find_patch(fb, 10)


def test_find_all_patches():
    locs = find_all_patches(_patched_buffer())
    assert [loc.offset for loc in locs] == [5, 10]
    for loc in locs:
        assert len(loc.name) == 8
        assert int(loc.name, 16) == loc.offset


def test_find_from_offset():
    data = b"abcabc"
    assert find(data, 0, b"abc") == 0
    assert find(data, 1, b"abc") == 3


def test_find_not_found_message():
    with pytest.raises(OperationError) as exc:
        find(b"xyz", 0, b"ab\x00")
    message = str(exc.value)
    assert message.startswith("Pattern ab")
    assert "\\x00" in message
    assert message.endswith(" not found!")


def test_find_all_overlapping():
    locs = find_all(b"aaaa", b"aa")
    assert [loc.offset for loc in locs] == [0, 1, 2]
    assert all(loc.size == 2 for loc in locs)


def test_find_all_missing():
    with pytest.raises(OperationError):
        find_all(b"abc", b"zz")


def test_find_string_at_position():
    data = b"\x00hello\x01"
    assert find_string_at_position(data, 3) == (1, 5)
    assert find_string_at_position(data, 0) is None
    assert find_string_at_position(b"hi", 0) == (0, 1)


def test_find_unicode_string_at_position():
    data = b"\x01h\x00i\x00\x01"
    assert find_unicode_string_at_position(data, 1) == (1, 4)
    assert find_unicode_string_at_position(data, 0) is None


def test_find_string():
    data = b"\x00ab\x00hello\x00"
    assert find_string(data, 0, 4, "") == 4
    assert find_string(data, 0, 2, "l+o") == 4
    assert find_string(b"\x00\x00world", 0, 4, "") == 2
    with pytest.raises(OperationError, match="Not found!"):
        find_string(data, 0, 6, "")


def test_find_string_bad_regex():
    with pytest.raises(OperationError):
        find_string(b"hello", 0, 1, "(")


def test_find_unicode_string():
    data = b"\x01" + "test".encode("utf-16-le") + b"\x01"
    assert find_unicode_string(data, 0, 4, "") == 1
    assert find_unicode_string(data, 0, 2, "es") == 1
    with pytest.raises(OperationError, match="Not found!"):
        find_unicode_string(data, 0, 2, "zz")


def test_find_all_strings():
    locs = find_all_strings(b"alpha\x00be\x00gamma", 4, "")
    assert [(loc.name, loc.offset, loc.size) for loc in locs] == [
        ("alpha", 0, 5),
        ("gamma", 9, 5),
    ]
    with pytest.raises(OperationError, match="Not found!"):
        find_all_strings(b"alpha", 4, "zz")


def test_find_all_unicode_strings():
    encoded = "test".encode("utf-16-le")
    locs = find_all_unicode_strings(b"\x01" + encoded + b"\x01", 2, "")
    assert len(locs) == 1
    assert locs[0].name == "test"
    assert locs[0].offset == 1
    assert locs[0].size == len(encoded)


def test_find_diff():
    buffers = [FileBuffer(b"abcd"), FileBuffer(b"abXd")]
    assert find_diff(buffers, 0, 0) == 2
    assert find_diff(buffers, 3, 0) is None


def test_find_diff_shorter_buffer():
    buffers = [FileBuffer(b"ab"), FileBuffer(b"abcd")]
    assert find_diff(buffers, 0, 1) == 2


def test_find_all_diffs():
    buffers = [FileBuffer(b"abcd"), FileBuffer(b"abXd")]
    assert [loc.offset for loc in find_all_diffs(buffers, 0)] == [2]
    with pytest.raises(OperationError, match="Not found!"):
        find_all_diffs([FileBuffer(b"ab"), FileBuffer(b"ab")], 0)


def test_find_all_signatures():
    data = b"xxPK\x03\x04" + bytes(20)
    buffers = [FileBuffer(data)]
    locs = find_all_signatures(buffers, 0, None, False)
    assert [(loc.name, loc.offset) for loc in locs] == [("zip", 2)]
    assert len(find_all_signatures(buffers, 0, ["zip"], False)) == 1
    with pytest.raises(OperationError, match="Not found!"):
        find_all_signatures(buffers, 0, ["zip"], True)


def test_find_all_bookmarks():
    fb = FileBuffer(bytes(200))
    with pytest.raises(OperationError, match="No bookmarks set."):
        find_all_bookmarks([fb], 0)
    fb.set_bookmark(3, 100)
    locs = find_all_bookmarks([fb], 0)
    assert [(loc.name, loc.offset) for loc in locs] == [("bm_3", 100)]


def test_entropy_bounds():
    assert entropy(bytes(range(256))) == pytest.approx(8.0)
    assert entropy(b"aaaa") == 0
    assert entropy(b"ab") == pytest.approx(1.0)


def test_replace_all_pattern():
    fb = FileBuffer(b"abcdef")
    fb.set_location_list(LocationList([Location("a", 0, 2), Location("b", 4, 2)]))
    replace_all(fb, b"ZZ")
    assert bytes(fb) == b"ZZcdZZ"
    assert fb.is_patched(0) and fb.is_patched(5)


def test_replace_all_uses_selection():
    fb = FileBuffer(b"abcdef")
    fb.set_location_list(LocationList([Location("x", 3, 2)]))
    fb.selection = (0, 1)
    replace_all(fb, b"")
    assert bytes(fb) == b"abcabf"


def test_replace_all_errors():
    fb = FileBuffer(b"abcdef")
    with pytest.raises(OperationError, match="No pattern or block specified!"):
        replace_all(fb, b"")
    with pytest.raises(OperationError, match="No locations in location bar!"):
        replace_all(fb, b"Z")
    fb.set_location_list(LocationList([Location("a", 0, 2)]))
    with pytest.raises(OperationError, match="same size"):
        replace_all(fb, b"Z")


def test_calculate_entropy_changes():
    data = bytes(1024) + bytes(range(256)) * 4 + b"tail"
    locs = calculate_entropy(data, 1024, 1.1)
    assert [loc.offset for loc in locs] == [0, 1024]
    assert [float(loc.name) for loc in locs] == [0.0, 8.0]
    assert all(loc.name.startswith(" ") for loc in locs)


def test_calculate_entropy_merges_similar_blocks():
    locs = calculate_entropy(bytes(3072), 1024, 1.1)
    assert [loc.offset for loc in locs] == [0]


def test_calculate_histogram():
    data = b"\x05\x05\x07"
    locs = calculate_histogram(data)
    assert len(locs) == 256
    pairs = [loc.name.split("_") for loc in locs]
    counts = [int(count) for _, count in pairs]
    assert sum(counts) == len(data)
    assert counts == sorted(counts, reverse=True)
    assert pairs[0] == ["05", "2"]
    assert pairs[1] == ["07", "1"]
    zero_bytes = [int(b, 16) for b, count in pairs if count == "0"]
    assert zero_bytes == sorted(zero_bytes)
    assert all(loc.offset == 0 for loc in locs)