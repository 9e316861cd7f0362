import pytest
from colorlog.escape_codes import escape_codes, parse_colors

from went.display.colors import (
    PALETTE_SIZE,
    ColorRole,
    Colorizer,
    hashed_entry,
    validate_color,
)


def test_hashed_entry_is_deterministic():
    assert hashed_entry("bob") == "fg_51"
    assert hashed_entry("bob") == hashed_entry("bob")
    assert hashed_entry("") == "fg_0"


def test_hashed_entry_in_palette():
    for name in ("carol", "#went", "x" * 300, "ünïcødé"):
        index = int(hashed_entry(name).removeprefix("fg_"))
        assert 0 <= index < PALETTE_SIZE
        assert hashed_entry(name) in escape_codes


def test_auto_colour_for_unset_role():
    colorizer = Colorizer()
    expected = parse_colors("fg_51") + "bob" + escape_codes["reset"]
    assert colorizer.colorize(ColorRole.OTHERS, "bob") == expected


def test_fixed_role_colour():
    colorizer = Colorizer({ColorRole.CHANNEL: "bold_green"})
    out = colorizer.colorize(ColorRole.CHANNEL, "#went")
    assert out == escape_codes["bold_green"] + "#went" + escape_codes["reset"]


def test_unset_role_plain_without_auto_colour():
    assert Colorizer(auto_color=False).colorize(ColorRole.OTHERS, "bob") == "bob"


def test_disabled_colorizer_is_plain():
    colorizer = Colorizer(enabled=False)
    for role in ColorRole:
        assert colorizer.colorize(role, "text") == "text"


def test_empty_text_stays_empty():
    assert Colorizer().colorize(ColorRole.SELF, "") == ""


def test_validate_color():
    assert validate_color("bold_red") == "bold_red"
    assert validate_color("") == ""
    assert validate_color("bold,fg_12") == "bold,fg_12"
    with pytest.raises(ValueError):
        validate_color("bold,nope")
