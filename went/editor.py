"""Line editor used by the input flow.

``LineEditor`` is the interface the client needs; ``PromptToolkitEditor``
implements it with prompt_toolkit, which keeps the prompt intact while
server output is printed above it.
"""

from __future__ import annotations

from contextlib import ExitStack
from typing import Protocol

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.history import FileHistory, InMemoryHistory
from prompt_toolkit.input import Input
from prompt_toolkit.output import Output
from prompt_toolkit.patch_stdout import patch_stdout
from prompt_toolkit.shortcuts import print_formatted_text


class LineEditor(Protocol):
    """Interface for the interactive line editor."""

    async def read_line(self) -> str:
        """Return the next line; raise ``EOFError`` or ``KeyboardInterrupt`` to stop."""
        ...

    def set_prompt(self, text: str) -> None:
        """Replace the prompt shown in front of the input line."""
        ...

    def write(self, text: str) -> None:
        """Print one rendered line above the prompt."""
        ...

    def close(self) -> None:
        """Release the terminal."""
        ...


class PromptToolkitEditor:
    def __init__(
        self,
        history_file: str | None = None,
        prompt: str = "",
        *,
        input: Input | None = None,
        output: Output | None = None,
    ) -> None:
        history = FileHistory(history_file) if history_file else InMemoryHistory()
        self._prompt = prompt
        self._session: PromptSession[str] = PromptSession(
            history=history, input=input, output=output
        )
        self._stack = ExitStack()
        self._stack.enter_context(patch_stdout(raw=True))

    async def read_line(self) -> str:
        return await self._session.prompt_async(lambda: ANSI(self._prompt))

    def set_prompt(self, text: str) -> None:
        self._prompt = text
        self._session.app.invalidate()

    def write(self, text: str) -> None:
        print_formatted_text(ANSI(text))

    def close(self) -> None:
        self._stack.close()
