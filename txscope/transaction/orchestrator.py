"""
Run a unit of work in a transaction, joining the enclosing one when there is one.
"""

from typing import Callable, TypeVar
from txscope.database.base import Openable
from txscope.exceptions import discarded_rollback_handler
from txscope.logging.logger import get_logger
from .wrappers import Transactor, wrap_begun

logger = get_logger("transaction")

T = TypeVar("T")


def begin_scope(handle: Openable) -> Transactor:
    """Begin on handle and wrap the result as the outermost or a nested scope."""
    tx = handle.begin()
    transactor = wrap_begun(handle, tx)
    logger.debug(f"Scope opened | Kind: {transactor.kind.value}")
    return transactor


def rollback_quietly(transactor: Transactor, original: BaseException) -> None:
    """Roll back while original propagates; a rollback failure is reported, never raised."""
    try:
        transactor.rollback()
    except Exception as rollback_exc:
        discarded_rollback_handler(rollback_exc, original, transactor.kind.value)
    else:
        logger.debug(f"Scope rolled back | Kind: {transactor.kind.value} | Cause: {type(original).__name__}")


def run(handle: Openable, action: Callable[[Transactor], T]) -> T:
    """
    Run action in a transaction and return its result.

    handle is a Pool or a transactor handed to an enclosing action. Called
    with a pool, a new transaction is begun and committed when action returns.
    Called with a transactor, the enclosing transaction is reused: returning
    does not commit it, raising still rolls it back.

    If action raises, the transaction is rolled back and the same exception
    propagates; a failing rollback does not replace it. Exceptions from begin
    and from the final commit propagate as they are.
    """
    transactor = begin_scope(handle)

    try:
        result = action(transactor)
    except BaseException as exc:
        # Covers KeyboardInterrupt/SystemExit too; the exception is re-raised untouched
        rollback_quietly(transactor, exc)
        raise

    transactor.commit()
    logger.debug(f"Scope finished | Kind: {transactor.kind.value}")
    return result
