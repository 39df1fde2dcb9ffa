"""Edit cursor with a display/edit state and half-byte tracking."""

from __future__ import annotations

from enum import Enum, auto


class CursorState(Enum):
    HIDDEN = auto()
    NORMAL = auto()
    TEXT = auto()
    BYTE = auto()


class Cursor:
    """Cursor position plus whether the next hex digit edits the high nibble."""

    def __init__(self, position: int = 0, state: CursorState = CursorState.HIDDEN) -> None:
        self._position = position
        self._state = state
        self.ho_byte_part = True

    @property
    def position(self) -> int:
        return self._position

    @position.setter
    def position(self, value: int) -> None:
        self._position = value
        self.ho_byte_part = True

    @property
    def state(self) -> CursorState:
        return self._state

    @state.setter
    def state(self, value: CursorState) -> None:
        self._state = value
        self.ho_byte_part = True

    def is_visible(self) -> bool:
        return self._state is not CursorState.HIDDEN

    def is_normal(self) -> bool:
        return self._state is CursorState.NORMAL

    def is_edit(self) -> bool:
        return self._state in (CursorState.BYTE, CursorState.TEXT)

    def is_text(self) -> bool:
        return self._state is CursorState.TEXT

    def is_byte(self) -> bool:
        return self._state is CursorState.BYTE

    def __add__(self, other: int) -> Cursor:
        return Cursor(self._position + other, self._state)

    def __iadd__(self, other: int) -> Cursor:
        self.position = self._position + other
        return self

    def __sub__(self, other: int) -> Cursor:
        return Cursor(max(self._position - other, 0), self._state)

    def __isub__(self, other: int) -> Cursor:
        self.position = max(self._position - other, 0)
        return self