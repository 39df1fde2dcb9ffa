"""Program settings loaded from a TOML configuration file."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any


class ConfigError(ValueError):
    """Raised when the configuration is missing, malformed or has bad values."""


def _parse_enum(enum_cls: type[Enum], value: Any, label: str) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        raise ConfigError(f"Unknown {label} '{value}'") from None


class HighlightStyle(Enum):
    NONE = "None"
    SOLID = "Solid"
    RANDOM_DARK = "RandomDark"
    RANDOM_LIGHT = "RandomLight"
    RANDOM_ANSI = "RandomAnsi"

    @classmethod
    def parse(cls, style: str) -> HighlightStyle:
        return _parse_enum(cls, style, "highlight style")


class ScreenPagingSize(Enum):
    BYTE = "Byte"
    ROW = "Row"
    PAGE = "Page"

    @classmethod
    def parse(cls, style: str) -> ScreenPagingSize:
        return _parse_enum(cls, style, "screen paging size")


class StdinInput(Enum):
    PIPE = "Pipe"
    ALWAYS = "Always"
    NEVER = "Never"


_COLOR_NAMES = frozenset(
    {
        "reset", "black", "dark_grey", "red", "dark_red", "green", "dark_green",
        "yellow", "dark_yellow", "blue", "dark_blue", "magenta", "dark_magenta",
        "cyan", "dark_cyan", "white", "grey",
    }
)


def _color_component(text: str, source: str) -> int:
    try:
        value = int(text.strip())
    except ValueError:
        raise ConfigError(f"Invalid color '{source}'") from None
    if not 0 <= value <= 255:
        raise ConfigError(f"Invalid color '{source}'")
    return value


@dataclass(frozen=True)
class Color:
    """A terminal color: a named one, an RGB triple or an ANSI palette index."""

    name: str | None = None
    rgb: tuple[int, int, int] | None = None
    ansi: int | None = None

    @classmethod
    def parse(cls, value: str) -> Color:
        """Parse 'red', 'rgb_(r,g,b)' or 'ansi_(n)'."""
        if not isinstance(value, str):
            raise ConfigError(f"Invalid color '{value}'")
        text = value.strip()
        if text in _COLOR_NAMES:
            return cls(name=text)
        if text.startswith("ansi_(") and text.endswith(")"):
            return cls(ansi=_color_component(text[6:-1], value))
        if text.startswith("rgb_(") and text.endswith(")"):
            parts = text[5:-1].split(",")
            if len(parts) != 3:
                raise ConfigError(f"Invalid color '{value}'")
            r, g, b = (_color_component(p, value) for p in parts)
            return cls(rgb=(r, g, b))
        raise ConfigError(f"Invalid color '{value}'")


def _value(data: Mapping[str, Any], key: str) -> Any:
    if key not in data:
        raise ConfigError(f"missing field '{key}'")
    return data[key]


def _bool(data: Mapping[str, Any], key: str) -> bool:
    value = _value(data, key)
    if not isinstance(value, bool):
        raise ConfigError(f"field '{key}' must be a boolean")
    return value


def _uint(data: Mapping[str, Any], key: str, maximum: int | None = None) -> int:
    value = _value(data, key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"field '{key}' must be a non-negative integer")
    if maximum is not None and value > maximum:
        raise ConfigError(f"field '{key}' must not exceed {maximum}")
    return value


def _str(data: Mapping[str, Any], key: str) -> str:
    value = _value(data, key)
    if not isinstance(value, str):
        raise ConfigError(f"field '{key}' must be a string")
    return value


def _str_list(data: Mapping[str, Any], key: str) -> list[str]:
    value = _value(data, key)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"field '{key}' must be a list of strings")
    return list(value)


def _table_list(data: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    value = _value(data, key)
    if not isinstance(value, list) or not all(isinstance(v, Mapping) for v in value):
        raise ConfigError(f"field '{key}' must be a list of tables")
    return value


@dataclass
class ScreenSettings:
    name: str
    enabled: bool
    data_area_width: int
    location_bar_width: int
    show_info_bar: bool
    show_offset_bar: bool
    show_location_bar: bool

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ScreenSettings:
        return cls(
            name=_str(data, "name"),
            enabled=_bool(data, "enabled"),
            data_area_width=_uint(data, "data_area_width", 0xFFFF),
            location_bar_width=_uint(data, "location_bar_width", 0xFFFF),
            show_info_bar=_bool(data, "show_info_bar"),
            show_offset_bar=_bool(data, "show_offset_bar"),
            show_location_bar=_bool(data, "show_location_bar"),
        )


@dataclass(frozen=True)
class ColorScheme:
    name: str
    fg_color: Color
    bg_color: Color
    error_fg_color: Color
    error_bg_color: Color
    cursor_fg_color: Color
    cursor_bg_color: Color
    patch_fg_color: Color
    selection_bg_color: Color
    highlight_bg_color: Color
    diff_fg_color: Color
    infobar_fg_color: Color
    infobar_bg_color: Color
    offsetbar_fg_color: Color
    offsetbar_bg_color: Color
    location_list_fg_color: Color
    location_list_bg_color: Color
    location_list_cursor_fg_color: Color
    location_list_cursor_bg_color: Color

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ColorScheme:
        values: dict[str, Any] = {"name": _str(data, "name")}
        for field in fields(cls):
            if field.name != "name":
                values[field.name] = Color.parse(_value(data, field.name))
        return cls(**values)


@dataclass
class Config:
    highlight_diff: bool
    only_printable: bool
    lock_file_buffers: bool
    screen_paging_size: ScreenPagingSize
    mouse_enabled: bool
    mouse_scroll_type: ScreenPagingSize
    mouse_scroll_size: int
    esc_to_quit: bool
    clear_screen_on_exit: bool
    highlight_style: HighlightStyle
    active_color_scheme: str
    yank_to_program: list[str]
    stdin_input: StdinInput
    alias_pairs: list[tuple[str, str]]
    preset_history: list[str]
    default_screen: str
    screens: list[ScreenSettings]
    color_schemes: list[ColorScheme]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Config:
        """Build the configuration from parsed TOML data."""
        if not isinstance(data, Mapping):
            raise ConfigError("configuration must be a table")

        alias_pairs = []
        for pair in _value(data, "aliases"):
            if (
                not isinstance(pair, (list, tuple))
                or len(pair) != 2
                or not all(isinstance(p, str) for p in pair)
            ):
                raise ConfigError("field 'aliases' must hold pairs of strings")
            alias_pairs.append((pair[0], pair[1]))

        return cls(
            highlight_diff=_bool(data, "highlight_diff"),
            only_printable=_bool(data, "only_printable"),
            lock_file_buffers=_bool(data, "lock_file_buffers"),
            screen_paging_size=ScreenPagingSize.parse(_value(data, "screen_paging_size")),
            mouse_enabled=_bool(data, "mouse_enabled"),
            mouse_scroll_type=ScreenPagingSize.parse(_value(data, "mouse_scroll_type")),
            mouse_scroll_size=_uint(data, "mouse_scroll_size"),
            esc_to_quit=_bool(data, "esc_to_quit"),
            clear_screen_on_exit=_bool(data, "clear_screen_on_exit"),
            highlight_style=HighlightStyle.parse(_value(data, "highlight_style")),
            active_color_scheme=_str(data, "active_color_scheme"),
            yank_to_program=_str_list(data, "yank_to_program"),
            stdin_input=_parse_enum(StdinInput, _value(data, "stdin_input"), "stdin input"),
            alias_pairs=alias_pairs,
            preset_history=_str_list(data, "preset_history"),
            default_screen=_str(data, "default_screen"),
            screens=[ScreenSettings.from_dict(s) for s in _table_list(data, "screen_settings")],
            color_schemes=[ColorScheme.from_dict(c) for c in _table_list(data, "color_scheme")],
        )

    @classmethod
    def from_toml(cls, text: str) -> Config:
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(str(exc)) from exc
        return cls.from_dict(data)

    def color_scheme(self, name: str) -> ColorScheme | None:
        return next((cs for cs in self.color_schemes if cs.name == name), None)

    def screen_settings(self, name: str) -> ScreenSettings | None:
        return next((s for s in self.screens if s.name == name), None)

    def aliases(self) -> dict[str, str]:
        """Alias word to the command text it expands to."""
        return dict(self.alias_pairs)


def load_config(path: str | Path) -> Config:
    """Read and parse the configuration file at `path`."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Reading '{path}' error: {exc}") from exc
    try:
        return Config.from_toml(text)
    except ConfigError as exc:
        raise ConfigError(f"Parsing '{path}' error: {exc}") from exc