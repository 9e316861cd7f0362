"""Error hierarchy and logging helpers."""

from .handling import error_category, log_error  # noqa: F401
from .internal import (  # noqa: F401
    ClientError,
    NotAllowed,
    ParseIrregularity,
    TransportClosed,
    TransportFault,
    UsageError,
)

__all__ = [
    "ClientError",
    "UsageError",
    "NotAllowed",
    "ParseIrregularity",
    "TransportFault",
    "TransportClosed",
    "error_category",
    "log_error",
]
