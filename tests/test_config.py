import pytest

from hexegg.config import (
    Color,
    Config,
    ConfigError,
    HighlightStyle,
    ScreenPagingSize,
    StdinInput,
    load_config,
)

COLOR_FIELDS = [
    "fg_color", "bg_color", "error_fg_color", "error_bg_color", "cursor_fg_color",
    "cursor_bg_color", "patch_fg_color", "selection_bg_color", "highlight_bg_color",
    "diff_fg_color", "infobar_fg_color", "infobar_bg_color", "offsetbar_fg_color",
    "offsetbar_bg_color", "location_list_fg_color", "location_list_bg_color",
    "location_list_cursor_fg_color", "location_list_cursor_bg_color",
]

SCREEN = """
[[screen_settings]]
name = "byte_screen"
enabled = true
data_area_width = 16
location_bar_width = 20
show_info_bar = true
show_offset_bar = false
show_location_bar = true
"""

HEADER = """
highlight_diff = true
only_printable = false
lock_file_buffers = true
screen_paging_size = "Row"
mouse_enabled = true
mouse_scroll_type = "Byte"
mouse_scroll_size = 3
esc_to_quit = false
clear_screen_on_exit = true
highlight_style = "RandomDark"
active_color_scheme = "dark"
yank_to_program = ["xclip", "-i"]
stdin_input = "Pipe"
aliases = [["q", "quit"], ["fs", "findstring 6"]]
preset_history = ["findallsignatures"]
default_screen = "byte_screen"
"""


def _scheme(name: str, color: str) -> str:
    lines = ["[[color_scheme]]", f'name = "{name}"']
    lines += [f'{f} = "{color}"' for f in COLOR_FIELDS]
    return "\n".join(lines) + "\n"


TOML = HEADER + SCREEN + _scheme("dark", "white") + _scheme("light", "rgb_(10,20,30)")


@pytest.fixture
def config():
    return Config.from_toml(TOML)


def test_scalar_fields(config):
    assert config.highlight_diff is True
    assert config.screen_paging_size is ScreenPagingSize.ROW
    assert config.mouse_scroll_type is ScreenPagingSize.BYTE
    assert config.mouse_scroll_size == 3
    assert config.highlight_style is HighlightStyle.RANDOM_DARK
    assert config.stdin_input is StdinInput.PIPE
    assert config.yank_to_program == ["xclip", "-i"]


def test_aliases(config):
    assert config.aliases() == {"q": "quit", "fs": "findstring 6"}


def test_color_scheme_lookup(config):
    light = config.color_scheme("light")
    assert light.name == "light"
    assert light.fg_color == Color(rgb=(10, 20, 30))
    assert config.color_scheme("dark").bg_color == Color(name="white")
    assert config.color_scheme("missing") is None


def test_screen_settings_lookup(config):
    screen = config.screen_settings("byte_screen")
    assert screen.data_area_width == 16
    assert screen.show_offset_bar is False
    assert config.screen_settings("text_screen") is None


def test_missing_field_raises():
    with pytest.raises(ConfigError):
        Config.from_toml(TOML.replace("esc_to_quit = false\n", ""))


def test_unknown_enum_value_raises():
    with pytest.raises(ConfigError):
        Config.from_toml(TOML.replace('"RandomDark"', '"Rainbow"'))


def test_invalid_toml_raises():
    with pytest.raises(ConfigError):
        Config.from_toml("highlight_diff = ")


def test_highlight_style_parse():
    assert HighlightStyle.parse("Solid") is HighlightStyle.SOLID
    with pytest.raises(ConfigError):
        HighlightStyle.parse("solid")


def test_screen_paging_size_parse():
    assert ScreenPagingSize.parse("Page") is ScreenPagingSize.PAGE
    with pytest.raises(ConfigError):
        ScreenPagingSize.parse("Word")


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("dark_grey", Color(name="dark_grey")),
        ("ansi_(200)", Color(ansi=200)),
        ("rgb_(1, 2, 3)", Color(rgb=(1, 2, 3))),
    ],
)
def test_color_parse(text, expected):
    assert Color.parse(text) == expected


@pytest.mark.parametrize("text", ["purple", "rgb_(1,2)", "ansi_(256)", "rgb_(a,b,c)"])
def test_color_parse_rejects(text):
    with pytest.raises(ConfigError):
        Color.parse(text)


def test_load_config_from_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(TOML, encoding="utf-8")
    loaded = load_config(path)
    assert loaded.active_color_scheme == "dark"
    assert loaded.default_screen == "byte_screen"


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.toml")