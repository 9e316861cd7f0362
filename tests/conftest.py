from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

import pytest

from went.config.model import ClientConfig
from went.display.router import DisplayRouter
from went.errors.internal import TransportClosed, TransportFault
from went.irc.commands import CommandBuilder
from went.irc.connection import IRCConnection
from went.logging_config import error_aggregator
from went.session import SessionState


class FakeConnection(IRCConnection):
    """IRCConnection that records sent lines and replays queued server lines.

    ``None`` in the incoming queue means the server hung up.
    """

    def __init__(
        self,
        incoming: Iterable[str | None] = (),
        *,
        close_on_quit: bool = True,
        open_error: TransportFault | None = None,
    ) -> None:
        super().__init__("irc.test", 6667)
        self.sent: list[str] = []
        self.incoming: asyncio.Queue[str | None] = asyncio.Queue()
        for line in incoming:
            self.incoming.put_nowait(line)
        self.close_on_quit = close_on_quit
        self.open_error = open_error
        self.opened = False
        self.closed = False

    def feed(self, line: str) -> None:
        self.incoming.put_nowait(line)

    def hang_up(self) -> None:
        self.incoming.put_nowait(None)

    async def open(self) -> None:
        if self.open_error is not None:
            raise self.open_error
        self.opened = True

    async def send_line(self, line: str) -> None:  # capture instead of network
        self.sent.append(line)
        if self.close_on_quit and line.startswith("QUIT"):
            self.hang_up()

    async def read_line(self) -> str:
        line = await self.incoming.get()
        if line is None:
            self.incoming.put_nowait(None)
            raise TransportClosed("Connection closed by server")
        return line

    async def close(self) -> None:
        self.closed = True


class FakeEditor:
    """Line editor fed from a list; items that are exceptions get raised."""

    def __init__(
        self, lines: Iterable[str | BaseException] = (), *, block_at_end: bool = False
    ) -> None:
        self.lines = list(lines)
        self.block_at_end = block_at_end
        self.writes: list[str] = []
        self.prompts: list[str] = []
        self.closed = False

    @property
    def prompt(self) -> str:
        return self.prompts[-1] if self.prompts else ""

    async def read_line(self) -> str:
        await asyncio.sleep(0)
        if self.lines:
            item = self.lines.pop(0)
            if isinstance(item, BaseException):
                raise item
            return item
        if self.block_at_end:
            await asyncio.Event().wait()
        raise EOFError

    def set_prompt(self, text: str) -> None:
        self.prompts.append(text)

    def write(self, text: str) -> None:
        self.writes.append(text)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def session():
    """Session for nick 'bob' with the console focused."""
    return SessionState("bob")


@pytest.fixture
def builder(session):
    return CommandBuilder(session)


@pytest.fixture
def router(session):
    """Router with colour disabled so assertions compare plain text."""
    return DisplayRouter(session)


@pytest.fixture
def config():
    return ClientConfig(nick="bob", color=False)


@pytest.fixture
def make_connection():
    return FakeConnection


@pytest.fixture
def make_editor():
    return FakeEditor


@pytest.fixture(autouse=True)
def _reset_error_aggregator():
    error_aggregator.clear()
    yield
    error_aggregator.clear()

