"""Centralized client error hierarchy.

These exceptions give semantic categories to everything that can go wrong
while turning keyboard input into protocol lines and server lines into
display output. Local errors are recovered and shown to the user; only
transport faults end the program.

Classes:
  ClientError        – Base for all client errors.
  UsageError         – Malformed or incomplete local command (nothing sent).
  NotAllowed         – Valid command that makes no sense in the current window.
  ParseIrregularity  – Server line that does not fit the expected grammar.
  TransportFault     – Connection errored; fatal.
  TransportClosed    – Connection reached a clean end of stream; fatal.
"""

from __future__ import annotations

from collections.abc import Mapping


class ClientError(Exception):
    """Base class for all client errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class UsageError(ClientError):
    """Raised when a slash command is missing required arguments.

    The message is the command's usage string, prefixed with ``Usage:``.
    """

    def __init__(self, usage: str) -> None:
        super().__init__(f"Usage: {usage}", data={"usage": usage})
        self.usage = usage


class NotAllowed(ClientError):
    """Raised when a command is valid but not in the current window.

    Typical case: plain chat text typed while the console window is focused.
    """


class ParseIrregularity(ClientError):
    """Raised internally for server lines that do not fit the grammar.

    Never escapes the display layer; the line is rendered generically instead.
    """


class TransportFault(ClientError):
    """Raised when the server connection errors out."""


class TransportClosed(TransportFault):
    """Raised when the server closes the connection cleanly."""


__all__ = [
    "ClientError",
    "UsageError",
    "NotAllowed",
    "ParseIrregularity",
    "TransportFault",
    "TransportClosed",
]
