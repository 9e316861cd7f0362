"""Terminal colouring for nicks, channels and errors.

Palette entries are colorlog colour names (``bold_cyan``, ``red``,
``fg_202`` ...), so the same vocabulary configures log output and chat output.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

from colorlog.escape_codes import escape_codes, parse_colors

PALETTE_SIZE = 256


class ColorRole(Enum):
    SELF = "self"
    OTHERS = "others"
    CHANNEL = "channel"
    ERROR = "error"


DEFAULT_ROLE_COLORS: dict[ColorRole, str] = {
    ColorRole.SELF: "bold_cyan",
    ColorRole.OTHERS: "",
    ColorRole.CHANNEL: "bold_red",
    ColorRole.ERROR: "red",
}


def hashed_entry(text: str) -> str:
    """Deterministic 256-colour palette entry for ``text``.

    The same label always maps to the same entry within and across runs.
    """
    return f"fg_{sum(ord(c) for c in text) % PALETTE_SIZE}"


def validate_color(name: str) -> str:
    """Return ``name`` if every comma separated part is a known colour."""
    unknown = [part for part in name.split(",") if part and part not in escape_codes]
    if unknown:
        raise ValueError(f"unknown colour name(s): {', '.join(unknown)}")
    return name


class Colorizer:
    """Single ``colorize(role, text)`` entry point backed by a role mapping.

    A role mapped to an empty entry is left plain, unless ``auto_color`` is
    on, in which case each text gets its hashed palette entry.
    """

    def __init__(
        self,
        role_colors: Mapping[ColorRole, str] | None = None,
        *,
        auto_color: bool = True,
        enabled: bool = True,
    ) -> None:
        self.role_colors = dict(DEFAULT_ROLE_COLORS)
        if role_colors:
            self.role_colors.update(role_colors)
        self.auto_color = auto_color
        self.enabled = enabled

    def entry_for(self, role: ColorRole, text: str) -> str:
        entry = self.role_colors.get(role, "")
        if not entry and self.auto_color:
            return hashed_entry(text)
        return entry

    def colorize(self, role: ColorRole, text: str) -> str:
        if not self.enabled or not text:
            return text
        entry = self.entry_for(role, text)
        if not entry:
            return text
        return f"{parse_colors(entry)}{text}{escape_codes['reset']}"

