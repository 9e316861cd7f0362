#!/usr/bin/env python3
"""
Main entry point for the went IRC client
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Sequence

from . import __version__
from .client import ChatClient
from .config import ClientConfig, parse_args
from .editor import PromptToolkitEditor
from .errors.handling import log_error
from .logging_config import LoggerConfigurator
from .logs.logger import logger


async def main(config: ClientConfig) -> int:
    """Run one client session against the configured server.

    Returns:
        The process exit code: 0 on a normal quit, 1 on a transport fault.
    """
    logger.log_event(
        "app",
        "start",
        version=__version__,
        nick=config.nick,
        host=config.host,
        port=config.port,
    )
    editor = PromptToolkitEditor(config.history_file)
    code = 1
    try:
        client = ChatClient(config, editor)
        code = await client.run()
        return code
    finally:
        editor.close()
        logger.log_event("app", "shutdown", code=code)


def run(argv: Sequence[str] | None = None) -> None:
    """Synchronous entry point for the application.

    Parses flags, configures logging and runs the client.

    Raises:
        SystemExit: Always, with the client's exit code.
    """
    config = parse_args(argv)
    LoggerConfigurator(debug=config.debug or None, log_file=config.log_file).configure()
    try:
        code = asyncio.run(main(config))
    except KeyboardInterrupt:
        code = 0
    except Exception as e:
        log_error("Top-level error", e)
        print(f"Exiting: {e}", file=sys.stderr)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    run()
