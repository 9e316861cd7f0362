"""IRC protocol package.

Contains line parsing, numeric reply classification, outbound command
building, the transport connection and the server line dispatcher.
"""

from .numerics import Category, classify  # noqa: F401
from .parser import Message, parse_message  # noqa: F401

__all__ = ["Category", "Message", "classify", "parse_message"]
