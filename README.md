# hexegg

The core of a hex viewer and editor, as a Python library. It keeps binary
data in editable buffers that remember every patched byte, and provides the
operations such an editor needs: pattern and string search, diffs between
buffers, entropy and byte histograms, bookmarks, highlights, location lists,
an edit cursor, recognition of common file headers (PNG, ZIP, ELF, PE, PCAP
and more) and loading of a TOML configuration.

The package has no dependencies outside the standard library and needs
Python 3.12 or later.

## File buffers

```python
from hexegg.file_buffer import FileBuffer

fb = FileBuffer(b"hello world", "greeting.bin")
fb.set(0, ord("H"))        # patch a byte; the original value is kept
fb.is_patched(0)           # True
fb.is_modified()           # True
fb.patches()               # [(0, 104)] - offset and original byte
fb.unpatch_offset(0)       # restore the original byte
bytes(fb)                  # b"hello world"
```

Writing one byte past the end with `set` appends it. `insert_block` inserts
bytes (each recorded as a patch of original value 0) and `remove_block`
deletes the current `selection`; both shift the patches that follow.
A buffer also has ten bookmarks (`set_bookmark`, `bookmark`), a
`highlight_list` and a `location_list` holding the results of the last
search. `set_filtered_location_list` puts a filtered view in front of the
full list until `set_location_list` replaces it.

## Location lists, highlights and the cursor

```python
from hexegg.location_list import LocationList
from hexegg.highlight_list import HighlightList
from hexegg.cursor import Cursor, CursorState

locations = LocationList.from_pairs([("start", 0), ("table", 16)])
locations.next().offset    # 16
locations.previous().name  # "start"

highlights = HighlightList()
highlights.add(4, 7, "red")
highlights.range(5)        # (4, 7)
highlights.color(5)        # "red"

cursor = Cursor(5, CursorState.NORMAL)
cursor -= 10
cursor.position            # 0 - never goes below zero
```

## Searching and analysis

`hexegg.search` works on file buffers or any bytes-like data. Operations
that find nothing raise `OperationError`.

```python
from hexegg.search import find, find_all, find_all_strings, OperationError

data = b"\x00abc\x00\x01abc\x00"
find(data, 0, b"abc")                  # 1
for loc in find_all(data, b"abc"):
    print(loc.name, loc.offset, loc.size)

try:
    find(data, 0, b"xyz")
except OperationError as err:
    print(err)                         # Pattern xyz not found!
```

- `find_string`, `find_all_strings`: printable ASCII runs of a minimum
  length matching a regular expression.
- `find_unicode_string`, `find_all_unicode_strings`: the same for
  "ASCII-unicode" runs, two bytes per character.
- `find_string_at_position`, `find_unicode_string_at_position`: the
  bounds of the string around an offset.
- `find_diff`, `find_all_diffs`: offsets where buffers differ.
- `find_patch`, `find_all_patches`, `find_all_bookmarks`.
- `find_all_signatures`: every recognised file header, optionally only
  the named formats or all but them.
- `replace_all`: overwrite every location in a buffer's location list
  with a pattern or the selected block.
- `entropy`, `calculate_entropy`: Shannon entropy of data, and of each
  block where it changes by more than a margin.
- `calculate_histogram`: count of every byte value, most frequent first.

## File signatures

```python
from hexegg.signatures import get_signature, is_signature

get_signature(b"\x7fELF\x02\x01\x01" + bytes(16))   # "elf"
is_signature(b"PK\x03\x04" + bytes(16), "zip")     # True
```

The individual checks live in `hexegg.magic`; `checks_for(first_byte)`
returns the ones that apply to a given leading byte.

## Configuration

`hexegg.config.load_config(path)` reads a TOML file into a `Config`
holding editor options, colour schemes, screen settings, command aliases
and preset history; `Config.from_toml` and `Config.from_dict` do the same
from text or parsed data. Missing fields and bad values raise
`ConfigError`. Colours are written as a name such as `"dark_blue"`, as
`"rgb_(r,g,b)"` or as `"ansi_(n)"`. `Config.color_scheme(name)`,
`Config.screen_settings(name)` and `Config.aliases()` look entries up.

## What this package does not do

There is no interactive terminal screen and no command to run: the
package is a library. It does not parse editor command lines, read or
save files, yank, export or pipe blocks to other programs, or change
settings at run time; the caller does its own file input and output
and passes the data to `FileBuffer`.