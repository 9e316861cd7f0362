"""Configuration package exports."""

from .config_loader import build_parser, parse_args  # noqa: F401
from .model import ClientConfig, DisplayTemplates  # noqa: F401

__all__ = ["ClientConfig", "DisplayTemplates", "build_parser", "parse_args"]
