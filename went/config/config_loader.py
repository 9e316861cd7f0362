"""Command-line configuration loading."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from pydantic import ValidationError

from .. import __version__
from ..constants import DEFAULT_HISTORY_FILE, DEFAULT_NICK, DEFAULT_PORT, DEFAULT_SERVER
from ..logs.logger import logger
from .model import ClientConfig


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``went`` command.

    Defaults come from ``WENT_*`` environment variables (see ``constants``).
    Colour and template options left unset fall back to ``ClientConfig``.
    """
    parser = argparse.ArgumentParser(
        prog="went", description="A small line-oriented IRC client."
    )
    parser.add_argument("-s", "--server", dest="host", default=DEFAULT_SERVER,
                        help="Hostname of the irc server.")
    parser.add_argument("-p", "--port", type=int, default=DEFAULT_PORT,
                        help="Port of the irc server.")
    parser.add_argument("-n", "--nick", default=DEFAULT_NICK,
                        help="Your nick/user/full name.")
    parser.add_argument("--histfile", dest="history_file", default=DEFAULT_HISTORY_FILE,
                        help="Path to persistent history file.")
    parser.add_argument("--self-color", help="Color of own nick.")
    parser.add_argument("--nick-color", help="Color of others' nicks.")
    parser.add_argument("--chan-color", help="Color of channel strings.")
    parser.add_argument("--error-color", help="Color of error strings.")
    parser.add_argument("--auto-color", action=argparse.BooleanOptionalAction,
                        default=None, help="Enable hashed per-name colors.")
    parser.add_argument("--no-color", dest="color", action="store_false",
                        default=None, help="Disable terminal colors entirely.")
    parser.add_argument("-v", "--verbose", action="store_true", default=None,
                        help="Always show the destination of chat lines.")
    parser.add_argument("--message-template", help="Template for chat lines.")
    parser.add_argument("--action-template", help="Template for action lines.")
    parser.add_argument("--prompt-template", help="Template for the prompt.")
    parser.add_argument("--error-marker", help="Prefix for local error lines.")
    parser.add_argument("--debug", action="store_true", default=None,
                        help="Log at DEBUG level.")
    parser.add_argument("--log-file", help="Write logs to this file.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


_TEMPLATE_OPTIONS = {
    "message_template": "message",
    "action_template": "action",
    "prompt_template": "prompt",
    "error_marker": "error_marker",
}


def parse_args(argv: Sequence[str] | None = None) -> ClientConfig:
    """Parse command-line flags into a validated ``ClientConfig``.

    Invalid values exit through argparse with status 2.
    """
    parser = build_parser()
    namespace = parser.parse_args(argv)
    data = vars(namespace)
    templates = {
        field: data.pop(option)
        for option, field in _TEMPLATE_OPTIONS.items()
        if data.get(option) is not None
    }
    for option in _TEMPLATE_OPTIONS:
        data.pop(option, None)
    if templates:
        data["templates"] = templates
    try:
        return ClientConfig.from_dict(data)
    except ValidationError as e:
        logger.log_event("app", "config_invalid", level=logging.ERROR, error=str(e))
        parser.error(_first_error(e))
        raise  # pragma: no cover - parser.error exits


def _first_error(error: ValidationError) -> str:
    details = error.errors()
    if not details:
        return str(error)
    first = details[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', 'invalid value')}"
