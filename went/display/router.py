"""Display routing and formatting of server lines and local echo.

Decides, per message, whether the destination has to be spelled out and
which template renders it. Nothing here raises on odd server input: lines
that do not fit fall back to a generic rendering.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..config.model import DisplayTemplates
from ..constants import CLIENT_TAG
from ..errors.handling import log_error
from ..errors.internal import ParseIrregularity
from ..irc.numerics import Category, classify
from ..irc.parser import Message, raw_tail, raw_token
from ..logs.logger import logger
from .colors import ColorRole, Colorizer

if TYPE_CHECKING:  # pragma: no cover
    from ..irc.commands import LocalEcho
    from ..session import SessionState

CHAT_VERBS = frozenset({"PRIVMSG", "NOTICE"})


class DisplayRouter:
    """Renders parsed messages for the terminal.

    ``render`` returns ``None`` for lines that are suppressed on purpose
    (trace and stats numerics).
    """

    def __init__(
        self,
        session: SessionState,
        colorizer: Colorizer | None = None,
        templates: DisplayTemplates | None = None,
        *,
        always_show_destination: bool = False,
    ) -> None:
        self.session = session
        self.colorizer = colorizer or Colorizer(enabled=False)
        self.templates = templates or DisplayTemplates()
        self.always_show_destination = always_show_destination
        self._verb_handlers: dict[str, Callable[[Message], str]] = {
            "ERROR": self._error,
            "JOIN": self._join,
            "PART": self._part,
            "QUIT": self._quit,
            "NICK": self._nick,
            "KICK": self._kick,
            "TOPIC": self._topic_change,
            "INVITE": self._invite,
            "MODE": self._mode,
            "324": self._mode,
        }
        self._numeric_handlers: dict[Category, Callable[[Message], str | None]] = {
            Category.INFO: self._info,
            Category.ERROR: self._error,
            Category.NAMES: self._names,
            Category.WHO: self._who,
            Category.TOPIC: self._topic_reply,
            Category.IGNORED: self._ignored,
            Category.UNKNOWN: self._generic,
        }

    # Public API -----------------------------------------------------------

    def render(self, message: Message) -> str | None:
        try:
            return self._route(message)
        except ParseIrregularity as e:
            log_error("Irregular server line", e, context={"raw": message.raw})
            return self._diagnostic(message)

    def render_echo(self, echo: LocalEcho) -> str:
        """Render our own outgoing chat line."""
        identity = self.session.identity
        tag = ""
        if self.always_show_destination or not self.session.is_addressed_to_focus(
            echo.destination
        ):
            tag = self._destination_tag(echo.destination)
        template = self.templates.action if echo.is_action else self.templates.message
        source = self.colorizer.colorize(ColorRole.SELF, identity)
        return tag + template.format(source=source, body=echo.text)

    def render_error(self, text: str) -> str:
        marker = self.colorizer.colorize(ColorRole.ERROR, self.templates.error_marker)
        return f"{marker} {text}"

    def render_notice(self, text: str) -> str:
        return f"{CLIENT_TAG} {text}"

    def focus_notice(self, focus: str) -> str:
        channel = self.colorizer.colorize(ColorRole.CHANNEL, focus)
        return self.render_notice(f"Window focus changed to {channel}")

    def prompt(self, identity: str, focus: str) -> str:
        return self.templates.prompt.format(
            nick=self.colorizer.colorize(ColorRole.SELF, identity),
            window=self.colorizer.colorize(ColorRole.CHANNEL, focus),
        )

    # Helpers --------------------------------------------------------------

    def _source(self, message: Message) -> str:
        role = (
            ColorRole.SELF if message.source == self.session.identity else ColorRole.OTHERS
        )
        return self.colorizer.colorize(role, message.source)

    def _destination_tag(self, destination: str) -> str:
        return self.templates.destination.format(
            destination=self.colorizer.colorize(ColorRole.CHANNEL, destination)
        )

    def _notice(self, label: str, *parts: str) -> str:
        text = " ".join(p for p in parts if p)
        return self.templates.notice.format(label=label, text=text)

    def _needs_destination(self, message: Message) -> bool:
        destination = message.destination
        snap = self.session.snapshot()
        return (
            self.always_show_destination
            or destination != snap.focus
            or (destination == snap.identity and message.source != snap.focus)
        )

    # Conversational and structural verbs ----------------------------------

    def _route(self, message: Message) -> str | None:
        verb = message.command
        if verb in CHAT_VERBS:
            return self._chat(message)
        handler = self._verb_handlers.get(verb)
        if handler is not None:
            return handler(message)
        if message.is_numeric:
            return self._numeric_handlers[classify(verb)](message)
        raise ParseIrregularity(f"unknown verb {verb!r}", data={"verb": verb})

    def _chat(self, message: Message) -> str:
        if not message.destination:
            raise ParseIrregularity("chat line without destination")
        tag = ""
        if self._needs_destination(message):
            tag = self._destination_tag(message.destination)
        template = self.templates.action if message.is_action else self.templates.message
        return tag + template.format(source=self._source(message), body=message.trailing)

    def _error(self, message: Message) -> str:
        label = self.colorizer.colorize(ColorRole.ERROR, "ERROR")
        return self._notice(label, self._source(message), message.trailing)

    def _join(self, message: Message) -> str:
        channel = message.trailing or message.destination
        return self._notice(
            "JOIN",
            self._source(message),
            "has joined",
            self.colorizer.colorize(ColorRole.CHANNEL, channel),
        )

    def _part(self, message: Message) -> str:
        if message.destination:
            channel, reason = message.destination, message.trailing
        else:
            channel, reason = message.trailing, ""
        return self._notice(
            "PART",
            self._source(message),
            "has left",
            self.colorizer.colorize(ColorRole.CHANNEL, channel),
            f"({reason})" if reason else "",
        )

    def _quit(self, message: Message) -> str:
        reason = f"({message.trailing})" if message.trailing else ""
        return self._notice("QUIT", self._source(message), "has quit", reason)

    def _nick(self, message: Message) -> str:
        new_nick = message.trailing or message.destination
        return self._notice(
            "NICK", self._source(message), "is now known as", new_nick
        )

    def _kick(self, message: Message) -> str:
        channel = message.destination
        victim = message.params[1] if len(message.params) > 1 else ""
        return self._notice(
            "KICK",
            self._source(message),
            "has kicked",
            victim,
            "from",
            self.colorizer.colorize(ColorRole.CHANNEL, channel),
            f"({message.trailing})" if message.trailing else "",
        )

    def _topic_change(self, message: Message) -> str:
        return self._notice(
            "TOPIC",
            self._source(message),
            "set the topic of",
            self.colorizer.colorize(ColorRole.CHANNEL, message.destination),
            "to",
            message.trailing,
        )

    def _invite(self, message: Message) -> str:
        channel = message.trailing or (message.params[1] if len(message.params) > 1 else "")
        return self._notice(
            "INVITE",
            self._source(message),
            "invites you to",
            self.colorizer.colorize(ColorRole.CHANNEL, channel),
        )

    def _mode(self, message: Message) -> str:
        # 324 replies carry our nick first; the channel follows it.
        params = message.params[1:] if message.command == "324" else message.params
        subject = params[0] if params else ""
        modes = " ".join(params[1:])
        return self._notice("MODE", subject, modes, message.trailing)

    # Numeric replies ------------------------------------------------------

    def _info(self, message: Message) -> str:
        return self._notice("INFO", raw_tail(message.raw, 3))

    def _names(self, message: Message) -> str:
        return self._notice("NAMES", message.trailing)

    def _who(self, message: Message) -> str:
        # Subject is the third raw token, i.e. the first parameter after the code.
        subject = raw_token(message.raw, 2)
        return self._notice("WHO", f"{subject}:", message.trailing)

    def _topic_reply(self, message: Message) -> str:
        # 333 (set by / when) has no trailing; fall back to the raw fields.
        if len(message.params) < 2 or not message.trailing:
            return self._notice("TOPIC", raw_tail(message.raw, 3))
        return self._notice("TOPIC", f"{message.params[-1]}:", message.trailing)

    def _ignored(self, message: Message) -> None:
        logger.log_event(
            "dispatch", "ignored_numeric", level=logging.DEBUG, code=message.command
        )
        return None

    def _generic(self, message: Message) -> str:
        logger.log_event(
            "dispatch", "unknown_numeric", level=logging.DEBUG, code=message.command
        )
        command = " ".join([message.command, *message.params])
        return " ".join(p for p in (self._source(message), command, message.trailing) if p)

    def _diagnostic(self, message: Message) -> str:
        logger.log_event(
            "dispatch", "parse_irregularity", level=logging.DEBUG, raw=message.raw
        )
        return self.render_error(f"Unknown message type: {message.raw}")
