from __future__ import annotations

import logging

from ..logging_config import log_structured_error
from .internal import (
    ClientError,
    NotAllowed,
    ParseIrregularity,
    TransportFault,
    UsageError,
)


def error_category(error: BaseException) -> str:
    """Map an exception to the category name used by structured logging."""
    if isinstance(error, TransportFault | OSError | ConnectionError):
        return "transport"
    if isinstance(error, UsageError):
        return "usage"
    if isinstance(error, NotAllowed):
        return "not_allowed"
    if isinstance(error, ParseIrregularity):
        return "parse"
    if isinstance(error, ClientError):
        return "internal"
    return "unknown"


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    Local errors (usage, not allowed, parse) are logged at DEBUG since they
    are already shown to the user in the chat output; everything else is
    logged at ERROR.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    error_type = error_category(error)
    level = (
        logging.DEBUG
        if error_type in ("usage", "not_allowed", "parse")
        else logging.ERROR
    )
    log_structured_error(
        error_type=error_type,
        message=f"{message}: {str(error)}",
        exception=error,
        context=context,
        level=level,
    )
