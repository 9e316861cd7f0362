r"""
Logging configuration module for the went IRC client.

Chat output goes through the line editor, so diagnostics use the root logger
with a colorlog handler on stderr (WARNING by default, DEBUG with ``--debug``
or ``DEBUG=1``) or a plain file handler when ``--log-file`` is given.

Errors are also counted per category by ``error_aggregator``; a summary is
logged at exit.
"""

from __future__ import annotations

import atexit
import logging
import os
import sys
import threading
import time
from collections import Counter, defaultdict, deque
from typing import Any

import colorlog

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "magenta",
}

HISTORY_LIMIT = 200  # occurrences kept per category


class ErrorAggregator:
    """Counts errors per category and keeps the most recent occurrences."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.totals: Counter[str] = Counter()
        self.recent: defaultdict[str, deque[dict[str, Any]]] = defaultdict(
            lambda: deque(maxlen=HISTORY_LIMIT)
        )

    def record_error(
        self, error_type: str, message: str, context: dict[str, Any] | None = None
    ) -> None:
        with self.lock:
            self.totals[error_type] += 1
            self.recent[error_type].append(
                {"timestamp": time.time(), "message": message, "context": context or {}}
            )

    def get_error_summary(self) -> dict[str, Any]:
        """Return ``{category: {total_count, kept, last_occurrence}}``."""
        with self.lock:
            return {
                error_type: {
                    "total_count": total,
                    "kept": len(self.recent[error_type]),
                    "last_occurrence": self.recent[error_type][-1]
                    if self.recent[error_type]
                    else None,
                }
                for error_type, total in self.totals.items()
            }

    def clear(self) -> None:
        with self.lock:
            self.totals.clear()
            self.recent.clear()

    def log_summary_report(self) -> None:
        summary = self.get_error_summary()
        if not summary:
            logging.debug("No errors recorded in current session")
            return
        logging.info("Error summary for this session")
        for error_type, stats in sorted(summary.items()):
            logging.info(f"  {error_type}: {stats['total_count']} total")
            if stats["last_occurrence"]:
                logging.info(f"    Last: {stats['last_occurrence']['message']}")


error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: Exception | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log ``[CATEGORY] message | Exception: ... | Context: k=v`` and count it.

    Args:
        error_type: Category of the error (transport, usage, parse ...)
        message: Descriptive error message
        exception: The exception that occurred (optional)
        context: Additional context data for debugging
        level: Logging level (default: ERROR)
    """
    parts = [f"[{error_type.upper()}] {message}"]
    if exception:
        parts.append(f"Exception: {type(exception).__name__}: {exception}")
    if context:
        parts.append("Context: " + " | ".join(f"{k}={v}" for k, v in context.items()))
    logging.log(level, " | ".join(parts))
    error_aggregator.record_error(error_type, message, context)


def _debug_from_env() -> bool:
    return os.environ.get("DEBUG", "").lower() in ("true", "1", "yes")


class LoggerConfigurator:
    """Installs the single root handler used by the client.

    ``debug=None`` defers to the ``DEBUG`` environment variable.
    """

    def __init__(self, debug: bool | None = None, log_file: str | None = None):
        self.debug = _debug_from_env() if debug is None else debug
        self.log_file = log_file

    @property
    def level(self) -> int:
        return logging.DEBUG if self.debug else logging.WARNING

    def build_formatter(self) -> colorlog.ColoredFormatter:
        return colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s",
            datefmt="%H:%M:%S",
            log_colors=LOG_COLORS,
            secondary_log_colors={"message": {"ERROR": "red", "CRITICAL": "magenta"}},
            reset=True,
        )

    def build_handler(self) -> logging.Handler:
        if self.log_file:
            handler: logging.Handler = logging.FileHandler(self.log_file, encoding="utf-8")
            handler.setFormatter(
                logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
            return handler
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(self.build_formatter())
        return handler

    def configure(self) -> None:
        """Configure the root logger and register the exit summary."""
        root = logging.getLogger()
        for existing in list(root.handlers):
            root.removeHandler(existing)
        root.addHandler(self.build_handler())
        root.setLevel(self.level)

        # asyncio and prompt_toolkit are chatty at DEBUG
        for noisy in ("asyncio", "prompt_toolkit"):
            logging.getLogger(noisy).setLevel(logging.WARNING)

        atexit.register(self._log_final_error_summary)

    @staticmethod
    def _log_final_error_summary() -> None:
        try:
            error_aggregator.log_summary_report()
        except Exception as e:  # noqa: BLE001
            logging.error(f"Failed to log final error summary: {e}")
