"""Event logger used across the client."""

from __future__ import annotations

import logging
import os

from .event_catalog import EVENT_TEMPLATES

PREFIX_WIDTH = 20
EVENT_WIDTH = 28


def _debug_enabled() -> bool:
    return os.environ.get("DEBUG", "false").lower() in ("true", "1", "yes")


def describe(domain: str, action: str, fields: dict[str, object]) -> tuple[str, bool]:
    """Return the text for an event and whether it had to be derived.

    Events missing from the catalog get ``"<domain>: <action>"``; templates
    whose placeholders are not all supplied are returned unformatted.
    """
    template = EVENT_TEMPLATES.get((domain, action))
    if not template:
        return f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}", True
    try:
        return template.format(**fields), False
    except (KeyError, IndexError, ValueError):
        return template, False


class ClientLogger:
    """Emits catalogued events on a stdlib logger.

    Records read ``[nick.window] text``. With ``DEBUG`` set in the environment
    the event name leads and the remaining fields follow in parentheses.
    Handlers are left to ``LoggerConfigurator`` on the root logger so log
    records never land on the chat output stream.
    """

    def __init__(self, name: str = "went") -> None:
        self.logger = logging.getLogger(name)

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        human: str | None = None,
        *,
        exc_info: bool = False,
        **fields: object,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        if human is None:
            human, derived = describe(domain, action, fields)
            if derived:
                fields["derived"] = True
        nick = fields.pop("nick", None)
        window = fields.pop("window", None)
        prefix = _prefix(nick if isinstance(nick, str) else None,
                         window if isinstance(window, str) else None)
        event = f"{domain}_{action}".lower()
        self.logger.log(level, self._format(event, prefix, human, fields), exc_info=exc_info)

    @staticmethod
    def _format(event: str, prefix: str, text: str, fields: dict[str, object]) -> str:
        if not _debug_enabled():
            return f"{prefix} {text}"
        if len(event) > EVENT_WIDTH:
            event = event[: EVENT_WIDTH - 1] + "~"
        parts = [event.ljust(EVENT_WIDTH), prefix, text]
        if fields:
            parts.append("(" + ", ".join(f"{k}={v!r}" for k, v in fields.items()) + ")")
        return " ".join(p for p in parts if p)


def _prefix(nick: str | None, window: str | None) -> str:
    core = f"{nick or 'system'}.{window}" if window else nick or "system"
    return f"[{core.ljust(PREFIX_WIDTH)[:PREFIX_WIDTH]}]"


logger = ClientLogger()
