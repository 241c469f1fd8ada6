from typing import Awaitable, Callable, TypeVar
from txscope.database.base import AsyncOpenable
from txscope.exceptions import discarded_rollback_handler
from txscope.logging.logger import get_logger
from .async_wrappers import AsyncTransactor, wrap_begun_async

logger = get_logger("transaction")

T = TypeVar("T")


async def abegin_scope(handle: AsyncOpenable) -> AsyncTransactor:
    tx = await handle.begin()
    transactor = wrap_begun_async(handle, tx)
    logger.debug(f"Scope opened | Kind: {transactor.kind.value}")
    return transactor


async def arollback_quietly(transactor: AsyncTransactor, original: BaseException) -> None:
    try:
        await transactor.rollback()
    except Exception as rollback_exc:
        discarded_rollback_handler(rollback_exc, original, transactor.kind.value)
    else:
        logger.debug(f"Scope rolled back | Kind: {transactor.kind.value} | Cause: {type(original).__name__}")


async def arun(handle: AsyncOpenable, action: Callable[[AsyncTransactor], Awaitable[T]]) -> T:
    """Asyncio counterpart of run(); action is a coroutine function taking the transactor."""
    transactor = await abegin_scope(handle)

    try:
        result = await action(transactor)
    except BaseException as exc:
        # CancelledError included
        await arollback_quietly(transactor, exc)
        raise

    await transactor.commit()
    logger.debug(f"Scope finished | Kind: {transactor.kind.value}")
    return result
