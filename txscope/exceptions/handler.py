from typing import Any
from txscope.logging.logger import get_logger

logger = get_logger("exception_handler")

class TransactionError(Exception):
    """Base class for runtime transaction errors raised by txscope."""
    def __init__(self, message: str, detail: Any = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class TransactionClosedError(TransactionError):
    """The transaction was already committed or rolled back."""
    def __init__(self, operation: str):
        super().__init__(f"Cannot {operation}: transaction has already been finalized", detail=operation)
        self.operation = operation


class UnsupportedHandleError(TypeError):
    """A handle of a kind that cannot be turned into a transactor (caller defect, not a runtime failure)."""
    def __init__(self, handle: Any):
        self.handle = handle
        super().__init__(f"unsupported transactor type: {type(handle).__module__}.{type(handle).__qualname__}")


def discarded_rollback_handler(rollback_exc: BaseException, original: BaseException, kind: Any = None) -> None:
    """Report a rollback failure that is dropped so the original error can propagate."""
    logger.opt(exception=rollback_exc).warning(
        f"Rollback failed and was discarded | Scope: {kind} | "
        f"Original: {type(original).__name__}: {original}"
    )
