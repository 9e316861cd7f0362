"""Line-oriented TCP transport to the IRC server."""

from __future__ import annotations

import asyncio
import logging

from ..constants import (
    CONNECT_TIMEOUT_SECONDS,
    LINE_ENCODING,
    READ_LIMIT_BYTES,
    REGISTRATION_MODE,
)
from ..errors.internal import TransportClosed, TransportFault
from ..logs.logger import logger
from .commands import format_line


class IRCConnection:
    """Owns the stream pair and turns it into complete text lines.

    Writes are single ``write`` calls of one full line each, so the input
    flow and the keepalive reply never interleave inside a line.
    """

    def __init__(self, host: str, port: int) -> None:
        self.host = host
        self.port = port
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None

    @property
    def is_open(self) -> bool:
        return self.writer is not None and not self.writer.is_closing()

    async def open(self) -> None:
        logger.log_event(
            "connection", "open", level=logging.DEBUG, host=self.host, port=self.port
        )
        try:
            self.reader, self.writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port, limit=READ_LIMIT_BYTES),
                timeout=CONNECT_TIMEOUT_SECONDS,
            )
        except TimeoutError as e:
            raise TransportFault(
                f"Timed out connecting to {self.host}:{self.port}",
                data={"host": self.host, "port": self.port},
            ) from e
        except OSError as e:
            raise TransportFault(
                f"Could not connect to {self.host}:{self.port}: {e}",
                data={"host": self.host, "port": self.port},
            ) from e
        logger.log_event(
            "connection", "established", host=self.host, port=self.port
        )

    async def register(self, nick: str) -> None:
        """Send the registration sequence: NICK, then USER."""
        await self.send_line(format_line("NICK", nick))
        await self.send_line(
            format_line("USER", nick, REGISTRATION_MODE, "*", trailing=nick)
        )
        logger.log_event("connection", "registered", level=logging.DEBUG, nick=nick)

    async def send_line(self, line: str) -> None:
        if self.writer is None or not self.is_open:
            raise TransportFault("Not connected")
        logger.log_event("connection", "send", level=logging.DEBUG, line=line)
        try:
            self.writer.write(f"{line}\r\n".encode(LINE_ENCODING))
            await self.writer.drain()
        except (ConnectionError, OSError) as e:
            raise TransportFault(f"Write failed: {e}") from e

    async def read_line(self) -> str:
        """Return the next line without its terminator.

        Raises:
            TransportClosed: The server closed the stream.
            TransportFault: The read failed.
        """
        if self.reader is None:
            raise TransportFault("Not connected")
        try:
            data = await self.reader.readline()
        except (asyncio.LimitOverrunError, ValueError) as e:
            raise TransportFault(f"Line too long: {e}") from e
        except (ConnectionError, OSError) as e:
            raise TransportFault(f"Read failed: {e}") from e
        if not data:
            raise TransportClosed("Connection closed by server")
        line = data.decode(LINE_ENCODING, errors="replace").rstrip("\r\n")
        logger.log_event("connection", "recv", level=logging.DEBUG, line=line)
        return line

    async def close(self) -> None:
        writer, self.writer, self.reader = self.writer, None, None
        if writer is None:
            return
        try:
            writer.close()
            await writer.wait_closed()
        except (ConnectionError, OSError) as e:
            logger.log_event(
                "connection", "fault", level=logging.DEBUG, error=str(e)
            )
