"""Server line dispatch: keepalive replies, parsing and display."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..logs.logger import logger
from .commands import format_line
from .parser import parse_message

if TYPE_CHECKING:  # pragma: no cover
    from ..display.router import DisplayRouter
    from .connection import IRCConnection

OutputSink = Callable[[str], None]


class IRCDispatcher:
    def __init__(
        self, connection: IRCConnection, router: DisplayRouter, sink: OutputSink
    ) -> None:
        self.connection = connection
        self.router = router
        self.sink = sink

    async def run(self) -> None:
        """Handle server lines until the transport closes or fails.

        ``TransportClosed`` / ``TransportFault`` propagate to the caller.
        """
        while True:
            line = await self.connection.read_line()
            await self.handle_line(line)

    async def handle_line(self, raw_line: str) -> None:
        if not raw_line.strip():
            return
        message = parse_message(raw_line)
        if message.command == "PING":
            await self._handle_ping(message.trailing)
            return
        rendered = self.router.render(message)
        if rendered is not None:
            self.sink(rendered)

    async def _handle_ping(self, server: str) -> None:
        await self.connection.send_line(format_line("PONG", trailing=server))
        logger.log_event("dispatch", "ping", level=logging.DEBUG, server=server)
