"""
Configuration constants for the went IRC client

This module contains the protocol literals and tunables used throughout the
client. Numeric and string tunables can be overridden by setting an
environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    """Retrieve a non-empty string value from an environment variable."""
    value = os.getenv(name)
    if value:
        return value
    return default


# Connection defaults
DEFAULT_SERVER = _get_env_str("WENT_SERVER", "irc.foonetic.net")
DEFAULT_PORT = _get_env_int("WENT_PORT", 6667)
DEFAULT_NICK = _get_env_str("WENT_NICK", "lhk-go")
DEFAULT_HISTORY_FILE = _get_env_str("WENT_HISTFILE", ".went_history")
CONNECT_TIMEOUT_SECONDS = _get_env_int(
    "WENT_CONNECT_TIMEOUT_SECONDS", 30
)  # Only bounds the initial TCP connect; reads never time out
READ_LIMIT_BYTES = _get_env_int(
    "WENT_READ_LIMIT_BYTES", 64 * 1024
)  # asyncio.StreamReader line limit
QUIT_GRACE_SECONDS = _get_env_int(
    "WENT_QUIT_GRACE_SECONDS", 2
)  # Keep reading this long after QUIT so the server goodbye is shown
LINE_ENCODING = "utf-8"

# Protocol literals
CHANNEL_SIGIL = "#"
ACTION_MARKER = "ACTION"
CTCP_DELIMITER = "\x01"
SYSTEM_SOURCE = "-!-"  # Shown as the origin of lines that carry no source
DEFAULT_QUIT_REASON = _get_env_str("WENT_QUIT_REASON", "Leaving...")
REGISTRATION_MODE = "8"  # USER <nick> 8 * :<realname>

# Local display
CLIENT_TAG = "-WENT-"
