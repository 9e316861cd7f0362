"""Session state shared by the input and server flows.

Holds the current nickname (identity) and the focused window. The console
window is the one named after our own nickname; it follows nickname changes.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from .irc.parser import is_channel
from .logs.logger import logger

FocusListener = Callable[[str, str], None]


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    identity: str
    focus: str


class SessionState:
    """Identity and focus, guarded by a lock.

    All mutation goes through ``set_focus`` and ``set_identity``.
    """

    def __init__(self, identity: str) -> None:
        if not identity:
            raise ValueError("identity must not be empty")
        self._lock = threading.RLock()
        self._identity = identity
        self._focus = identity
        self._listeners: list[FocusListener] = []

    @property
    def identity(self) -> str:
        with self._lock:
            return self._identity

    @property
    def focus(self) -> str:
        with self._lock:
            return self._focus

    @property
    def is_console(self) -> bool:
        with self._lock:
            return self._focus == self._identity

    @property
    def focus_is_channel(self) -> bool:
        return is_channel(self.focus)

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return SessionSnapshot(identity=self._identity, focus=self._focus)

    def add_focus_listener(self, listener: FocusListener) -> None:
        """Register ``listener(identity, focus)``, called after every focus change."""
        self._listeners.append(listener)

    def set_focus(self, target: str) -> None:
        if not target:
            raise ValueError("focus target must not be empty")
        with self._lock:
            old = self._focus
            self._focus = target
            identity = self._identity
        self._focus_changed(identity, old, target)

    def set_identity(self, new_name: str) -> None:
        """Change nickname; the console window follows when it is focused."""
        if not new_name:
            raise ValueError("identity must not be empty")
        with self._lock:
            old = self._identity
            if old == new_name:
                return
            follows = self._focus == old
            self._identity = new_name
            if follows:
                self._focus = new_name
        logger.log_event(
            "session",
            "identity_change",
            level=logging.DEBUG,
            nick=new_name,
            old=old,
            new=new_name,
        )
        if follows:
            self._focus_changed(new_name, old, new_name)

    def _focus_changed(self, identity: str, old: str, new: str) -> None:
        logger.log_event(
            "session",
            "focus_change",
            level=logging.DEBUG,
            nick=identity,
            window=new,
            old=old,
            new=new,
        )
        for listener in self._listeners:
            listener(identity, new)

    def is_addressed_to_focus(self, target: str) -> bool:
        """True when a message sent to ``target`` belongs in the focused window."""
        with self._lock:
            focus, identity = self._focus, self._identity
        return (not is_channel(focus) and target == identity) or focus == target
