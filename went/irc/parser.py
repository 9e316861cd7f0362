"""IRC line parsing utilities."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..constants import ACTION_MARKER, CHANNEL_SIGIL, CTCP_DELIMITER, SYSTEM_SOURCE


@dataclass
class Message:
    raw: str
    source: str
    command: str
    trailing: str = ""
    params: list[str] = field(default_factory=list)
    is_action: bool = False

    @property
    def destination(self) -> str:
        """First parameter, which names the channel or nick for chat verbs."""
        return self.params[0] if self.params else ""

    @property
    def is_numeric(self) -> bool:
        return self.command.isascii() and self.command.isdigit()


def parse_message(line: str) -> Message:
    """Parse one server line into a ``Message``.

    Never raises on non-empty input. Missing pieces come back as empty
    strings so the display layer can fall back to a generic rendering.
    """
    raw = line.rstrip("\r\n")
    if not raw:
        raise ValueError("cannot parse an empty line")

    source, rest = _split_source(raw)
    rest = rest.strip(" ")

    colon = rest.find(":")
    if colon < 0:
        verb, _, remainder = rest.partition(" ")
        return Message(
            raw=raw,
            source=source,
            command=verb.strip(" :"),
            trailing=remainder.strip(" :"),
        )

    head = rest[:colon].strip(" :").split()
    trailing = rest[colon + 1 :].strip(" ")
    trailing, is_action = _unwrap_action(trailing)
    return Message(
        raw=raw,
        source=source,
        command=head[0] if head else "",
        trailing=trailing,
        params=head[1:],
        is_action=is_action,
    )


def _split_source(raw: str) -> tuple[str, str]:
    """Return (source, remainder) for a raw line.

    ``:nick!user@host rest`` yields ``nick``; ``:server rest`` yields
    ``server``; lines without a leading colon get the system marker.
    """
    if not raw.startswith(":"):
        return SYSTEM_SOURCE, raw
    token, _, rest = raw[1:].partition(" ")
    nick = token.split("!", 1)[0]
    return nick or SYSTEM_SOURCE, rest


def _unwrap_action(trailing: str) -> tuple[str, bool]:
    # Length gate first: a two character trailing cannot hold an envelope.
    if len(trailing) < 3:
        return trailing, False
    if trailing[0] != CTCP_DELIMITER or trailing[-1] != CTCP_DELIMITER:
        return trailing, False
    marker, _, text = trailing[1:-1].partition(" ")
    if marker != ACTION_MARKER:
        return trailing, False
    return text.strip(" "), True


def is_channel(target: str) -> bool:
    return target.startswith(CHANNEL_SIGIL)


def raw_token(raw: str, index: int) -> str:
    """Return whitespace-delimited token ``index`` of a raw line, or ``""``."""
    tokens = raw.split()
    return tokens[index] if index < len(tokens) else ""


def raw_tail(raw: str, maxsplit: int) -> str:
    """Return what is left of a raw line after ``maxsplit`` space splits.

    Used for server banners whose text starts at a fixed field. Short lines
    yield their last field instead of failing.
    """
    return raw.split(" ", maxsplit)[-1].lstrip(":")


def wrap_action(text: str) -> str:
    return f"{CTCP_DELIMITER}{ACTION_MARKER} {text}{CTCP_DELIMITER}"
