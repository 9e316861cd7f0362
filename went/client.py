"""Client orchestration: the input flow and the server flow.

Both flows run as tasks on one event loop and share the session state, the
connection and the editor. The server flow ending (clean close or fault)
ends the client; the input flow ends on quit, end of input or interrupt.
"""

from __future__ import annotations

import asyncio
import logging

from .config.model import ClientConfig
from .constants import DEFAULT_QUIT_REASON, QUIT_GRACE_SECONDS
from .display.colors import Colorizer
from .display.router import DisplayRouter
from .editor import LineEditor
from .errors.handling import log_error
from .errors.internal import NotAllowed, TransportClosed, TransportFault, UsageError
from .irc.commands import CommandBuilder, format_line
from .irc.connection import IRCConnection
from .irc.dispatcher import IRCDispatcher
from .logs.logger import logger
from .session import SessionState


class ChatClient:
    def __init__(
        self,
        config: ClientConfig,
        editor: LineEditor,
        connection: IRCConnection | None = None,
    ) -> None:
        self.config = config
        self.editor = editor
        self.connection = connection or IRCConnection(config.host, config.port)
        self.session = SessionState(config.nick)
        self.router = DisplayRouter(
            self.session,
            Colorizer(
                config.role_colors(),
                auto_color=config.auto_color,
                enabled=config.color,
            ),
            config.templates,
            always_show_destination=config.verbose,
        )
        self.builder = CommandBuilder(self.session)
        self.dispatcher = IRCDispatcher(self.connection, self.router, self.editor.write)
        self.session.add_focus_listener(self._on_focus_change)
        self._refresh_prompt()

    def _on_focus_change(self, identity: str, focus: str) -> None:
        self.editor.set_prompt(self.router.prompt(identity, focus))
        self.editor.write(self.router.focus_notice(focus))

    def _refresh_prompt(self) -> None:
        snap = self.session.snapshot()
        self.editor.set_prompt(self.router.prompt(snap.identity, snap.focus))

    async def run(self) -> int:
        """Connect, register and run both flows. Returns the exit code."""
        try:
            await self.connection.open()
            await self.connection.register(self.session.identity)
        except TransportFault as e:
            self._exit_notice(e)
            await self.connection.close()
            return 1

        input_task = asyncio.create_task(self.input_loop(), name="went-input")
        server_task = asyncio.create_task(self.dispatcher.run(), name="went-server")
        try:
            done, _ = await asyncio.wait(
                {input_task, server_task}, return_when=asyncio.FIRST_COMPLETED
            )
            if server_task not in done:
                # Let the server's goodbye (ERROR :Closing link) come through.
                await asyncio.wait({server_task}, timeout=QUIT_GRACE_SECONDS)
            return self._exit_code(input_task, server_task)
        finally:
            for task in (input_task, server_task):
                task.cancel()
            await asyncio.gather(input_task, server_task, return_exceptions=True)
            await self.connection.close()

    def _exit_code(self, input_task: asyncio.Task, server_task: asyncio.Task) -> int:
        for task in (server_task, input_task):
            if not task.done() or task.cancelled():
                continue
            error = task.exception()
            if error is None:
                continue
            if isinstance(error, TransportClosed):
                # Expected after our own QUIT.
                if not input_task.done():
                    self._exit_notice(error)
                continue
            if isinstance(error, TransportFault):
                self._exit_notice(error)
                return 1
            raise error
        return 0

    def _exit_notice(self, error: TransportFault) -> None:
        if isinstance(error, TransportClosed):
            logger.log_event("connection", "closed", level=logging.INFO)
        else:
            log_error("Transport failure", error)
        self.editor.write(self.router.render_error(f"Exiting: {error}"))

    async def input_loop(self) -> None:
        while True:
            try:
                line = await self.editor.read_line()
            except (EOFError, KeyboardInterrupt):
                logger.log_event("input", "eof", level=logging.DEBUG)
                await self._send_final_quit()
                return
            if await self.handle_input(line):
                return

    async def handle_input(self, line: str) -> bool:
        """Process one typed line. Returns True when the input flow should stop."""
        try:
            result = self.builder.build(line)
        except (UsageError, NotAllowed) as e:
            log_error("Command rejected", e, context={"line": line})
            self.editor.write(self.router.render_error(str(e)))
            return False
        if result.echo is not None:
            self.editor.write(self.router.render_echo(result.echo))
        if result.line is not None:
            await self.connection.send_line(result.line)
        self._refresh_prompt()
        return result.quit

    async def _send_final_quit(self) -> None:
        try:
            await self.connection.send_line(
                format_line("QUIT", trailing=DEFAULT_QUIT_REASON)
            )
        except TransportFault as e:
            logger.log_event(
                "connection", "fault", level=logging.DEBUG, error=str(e)
            )
