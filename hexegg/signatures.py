"""Recognition of known file headers at the start of a byte sequence."""

from __future__ import annotations

from collections.abc import Buffer

from hexegg.magic import checks_for


def get_signature(data: Buffer) -> str | None:
    """Return the name of the file format whose header starts `data`, if any."""
    view = bytes(data)
    if not view:
        return None
    for check in checks_for(view[0]):
        name = check(view)
        if name is not None:
            return name
    return None


def is_signature(data: Buffer, name: str) -> bool:
    """True when `data` starts with the header of the format called `name`."""
    return get_signature(data) == name