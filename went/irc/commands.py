"""Outbound command building.

Turns a line typed by the user into the protocol line to send. Slash commands
are looked up in ``COMMAND_TABLE``; plain text goes to the focused window.
Failures raise ``UsageError`` or ``NotAllowed`` before any state changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from ..constants import DEFAULT_QUIT_REASON
from ..errors.internal import NotAllowed, UsageError
from ..logs.logger import logger
from .parser import wrap_action

if TYPE_CHECKING:  # pragma: no cover
    from ..session import SessionState


class CommandKind(Enum):
    STANDARD = auto()
    MESSAGE = auto()
    ACTION = auto()
    JOIN = auto()
    PART = auto()
    NICK = auto()
    WINDOW = auto()
    QUIT = auto()


@dataclass(frozen=True, slots=True)
class CommandSpec:
    verbs: tuple[str, ...]
    protocol: str
    min_args: int
    usage: str
    channel_default: bool = False
    kind: CommandKind = CommandKind.STANDARD
    trailing_arg: bool = False  # send the remainder as a ``:``-trailing parameter


COMMAND_TABLE: tuple[CommandSpec, ...] = (
    CommandSpec(
        ("/m", "/msg", "/send", "/s"),
        "PRIVMSG",
        3,
        "/msg <channel/user> <message>",
        kind=CommandKind.MESSAGE,
    ),
    CommandSpec(
        ("/me", "/action"), "PRIVMSG", 2, "/me <message>", kind=CommandKind.ACTION
    ),
    CommandSpec(("/who",), "WHO", 2, "/who <channel>", channel_default=True),
    CommandSpec(("/whois",), "WHOIS", 2, "/whois <user/channel/op>"),
    CommandSpec(("/whowas",), "WHOWAS", 2, "/whowas <user>"),
    CommandSpec(("/j", "/join"), "JOIN", 2, "/join <channel>", kind=CommandKind.JOIN),
    CommandSpec(
        ("/p", "/part"),
        "PART",
        2,
        "/part [<channels>] [<reason>]",
        channel_default=True,
        kind=CommandKind.PART,
        trailing_arg=True,
    ),
    CommandSpec(
        ("/topic",),
        "TOPIC",
        2,
        "/topic [<channel>] [<new topic>]",
        channel_default=True,
        trailing_arg=True,
    ),
    CommandSpec(("/names",), "NAMES", 2, "/names [<channel>]", channel_default=True),
    CommandSpec(("/n", "/nick"), "NICK", 2, "/nick <newnick>", kind=CommandKind.NICK),
    CommandSpec(
        ("/w", "/cur", "/win", "/window"),
        "",
        2,
        "/window <channel/user>",
        kind=CommandKind.WINDOW,
    ),
    CommandSpec(("/q", "/quit"), "QUIT", 1, "/quit [<reason>]", kind=CommandKind.QUIT),
)

COMMANDS: dict[str, CommandSpec] = {
    verb: spec for spec in COMMAND_TABLE for verb in spec.verbs
}


@dataclass(frozen=True, slots=True)
class LocalEcho:
    """Our own chat line, rendered locally since the server does not echo it."""

    destination: str
    text: str
    is_action: bool = False


@dataclass(frozen=True, slots=True)
class BuildResult:
    line: str | None = None
    echo: LocalEcho | None = None
    quit: bool = False


def format_line(command: str, *params: str, trailing: str | None = None) -> str:
    parts = [command, *(p for p in params if p)]
    if trailing is not None:
        parts.append(f":{trailing}")
    return " ".join(parts)


class CommandBuilder:
    """Builds protocol lines from user input against the session state."""

    def __init__(self, session: SessionState) -> None:
        self.session = session
        self._handlers = {
            CommandKind.STANDARD: self._standard,
            CommandKind.MESSAGE: self._message,
            CommandKind.ACTION: self._action,
            CommandKind.JOIN: self._join,
            CommandKind.PART: self._part,
            CommandKind.NICK: self._nick,
            CommandKind.WINDOW: self._window,
            CommandKind.QUIT: self._quit,
        }

    def build(self, raw_line: str) -> BuildResult:
        line = raw_line.rstrip("\r\n")
        if not line.strip():
            return BuildResult()
        if len(line) > 1 and line.startswith("/"):
            return self._build_command(line)
        return self._send_to_focus(line)

    def _send_to_focus(self, text: str) -> BuildResult:
        if self.session.is_console:
            raise NotAllowed("Error: Use /w to set current window")
        focus = self.session.focus
        return BuildResult(
            line=format_line("PRIVMSG", focus, trailing=text),
            echo=LocalEcho(focus, text),
        )

    def _build_command(self, line: str) -> BuildResult:
        args = line.split(maxsplit=2)
        spec = COMMANDS.get(args[0])
        if spec is None:
            logger.log_event(
                "input", "raw_passthrough", level=logging.DEBUG, line=line[1:]
            )
            return BuildResult(line=line[1:])
        return self._handlers[spec.kind](spec, args)

    def _require(self, spec: CommandSpec, args: list[str]) -> list[str]:
        """Apply channel defaulting, then enforce the minimum argument count."""
        if (
            spec.channel_default
            and len(args) < spec.min_args
            and self.session.focus_is_channel
        ):
            args = [*args, self.session.focus]
        if len(args) < spec.min_args:
            logger.log_event(
                "input",
                "usage_error",
                level=logging.DEBUG,
                command=args[0],
                usage=spec.usage,
            )
            raise UsageError(spec.usage)
        return args

    def _standard(self, spec: CommandSpec, args: list[str]) -> BuildResult:
        args = self._require(spec, args)
        return BuildResult(line=self._protocol_line(spec, args))

    @staticmethod
    def _protocol_line(spec: CommandSpec, args: list[str]) -> str:
        params = args[1:]
        if spec.trailing_arg and len(params) > 1:
            return format_line(spec.protocol, *params[:-1], trailing=params[-1])
        return format_line(spec.protocol, *params)

    def _message(self, spec: CommandSpec, args: list[str]) -> BuildResult:
        _, target, text = self._require(spec, args)
        self.session.set_focus(target)
        return BuildResult(
            line=format_line(spec.protocol, target, trailing=text),
            echo=LocalEcho(target, text),
        )

    def _action(self, spec: CommandSpec, args: list[str]) -> BuildResult:
        args = self._require(spec, args)
        if self.session.is_console:
            raise NotAllowed("Error: Use /w to set current window")
        focus = self.session.focus
        text = " ".join(args[1:])
        return BuildResult(
            line=format_line(spec.protocol, focus, trailing=wrap_action(text)),
            echo=LocalEcho(focus, text, is_action=True),
        )

    def _join(self, spec: CommandSpec, args: list[str]) -> BuildResult:
        args = self._require(spec, args)
        result = BuildResult(line=self._protocol_line(spec, args))
        self.session.set_focus(args[1].split(",")[0])
        return result

    def _part(self, spec: CommandSpec, args: list[str]) -> BuildResult:
        args = self._require(spec, args)
        result = BuildResult(line=self._protocol_line(spec, args))
        self.session.set_focus(self.session.identity)
        return result

    def _nick(self, spec: CommandSpec, args: list[str]) -> BuildResult:
        args = self._require(spec, args)
        new_nick = args[1]
        self.session.set_identity(new_nick)
        return BuildResult(line=format_line(spec.protocol, new_nick))

    def _window(self, spec: CommandSpec, args: list[str]) -> BuildResult:
        args = self._require(spec, args)
        self.session.set_focus(args[1])
        return BuildResult()

    def _quit(self, spec: CommandSpec, args: list[str]) -> BuildResult:
        reason = " ".join(args[1:]) or DEFAULT_QUIT_REASON
        logger.log_event("input", "quit", level=logging.DEBUG, reason=reason)
        return BuildResult(line=format_line(spec.protocol, trailing=reason), quit=True)
