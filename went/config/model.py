from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..constants import DEFAULT_HISTORY_FILE, DEFAULT_NICK, DEFAULT_PORT, DEFAULT_SERVER
from ..display.colors import ColorRole, validate_color

_TEMPLATE_FIELDS: dict[str, tuple[str, ...]] = {
    "message": ("source", "body"),
    "action": ("source", "body"),
    "destination": ("destination",),
    "prompt": ("nick", "window"),
    "notice": ("label", "text"),
}


class DisplayTemplates(BaseModel):
    """Format strings for every line the client prints.

    Attributes:
        message: Plain chat line.
        action: ``/me`` style chat line.
        destination: Tag prepended when a chat line is not for the focused window.
        prompt: Line editor prompt.
        notice: Structural and numeric lines, e.g. ``-JOIN- bob has joined #c``.
        error_marker: Prefix for locally generated error lines.
    """

    model_config = ConfigDict(frozen=True)

    message: str = "< {source}> {body}"
    action: str = "* {source} ~> {body}"
    destination: str = "[{destination}] "
    prompt: str = "[{nick}.{window}] "
    notice: str = "-{label}- {text}"
    error_marker: str = "-!-"

    @model_validator(mode="after")
    def validate_placeholders(self) -> DisplayTemplates:
        """Reject templates that reference unknown placeholders."""
        for name, allowed in _TEMPLATE_FIELDS.items():
            template = getattr(self, name)
            try:
                template.format(**{key: "" for key in allowed})
            except (KeyError, IndexError, ValueError) as e:
                raise ValueError(f"invalid {name} template {template!r}: {e}") from e
        return self


class ClientConfig(BaseModel):
    """Runtime configuration of the client.

    Attributes:
        host: IRC server hostname.
        port: IRC server port.
        nick: Nickname, user name and real name used at registration.
        history_file: Line editor history file.
        self_color: Colour of our own nick.
        nick_color: Colour of other nicks; empty means hashed when auto_color.
        chan_color: Colour of channel names.
        error_color: Colour of error labels.
        auto_color: Give uncoloured roles a stable per-name colour.
        color: Master switch for terminal colour.
        verbose: Always show the destination tag on chat lines.
        debug: Log at DEBUG.
        log_file: Send log records to this file instead of stderr.
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(default=DEFAULT_SERVER, min_length=1)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    nick: str = Field(default=DEFAULT_NICK, min_length=1)
    history_file: str = DEFAULT_HISTORY_FILE
    self_color: str = "bold_cyan"
    nick_color: str = ""
    chan_color: str = "bold_red"
    error_color: str = "red"
    auto_color: bool = True
    color: bool = True
    verbose: bool = False
    debug: bool = False
    log_file: str | None = None
    templates: DisplayTemplates = Field(default_factory=DisplayTemplates)

    @field_validator("nick")
    @classmethod
    def validate_nick(cls, v: str) -> str:
        """Nicknames cannot carry spaces, colons or a leading channel sigil."""
        v = v.strip()
        if not v or any(c in v for c in " :,\r\n") or v.startswith("#"):
            raise ValueError(f"invalid nickname {v!r}")
        return v

    @field_validator("self_color", "nick_color", "chan_color", "error_color")
    @classmethod
    def validate_colors(cls, v: str) -> str:
        return validate_color(v.strip())

    def role_colors(self) -> dict[ColorRole, str]:
        return {
            ColorRole.SELF: self.self_color,
            ColorRole.OTHERS: self.nick_color,
            ColorRole.CHANNEL: self.chan_color,
            ColorRole.ERROR: self.error_color,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClientConfig:
        """Build a config from a mapping, dropping ``None`` values."""
        return cls.model_validate({k: v for k, v in data.items() if v is not None})
