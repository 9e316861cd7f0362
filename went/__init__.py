"""went: a small line-oriented IRC client."""

__version__ = "0.3.0"
