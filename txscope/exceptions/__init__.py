"""
Exceptions raised by txscope.
"""

from .handler import (
    TransactionClosedError,
    TransactionError,
    UnsupportedHandleError,
    discarded_rollback_handler,
)

__all__ = [
    "TransactionError",
    "TransactionClosedError",
    "UnsupportedHandleError",
    "discarded_rollback_handler",
]
