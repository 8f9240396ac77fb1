"""Bounded blind retry for async operations.

retry_async() re-runs an attempt-producing coroutine function until it
succeeds or the retry budget is spent. There is no backoff and nothing is
carried from one attempt to the next.
"""

from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

from structify.errors import RetryableGenerationError, RetryBudgetExhaustedError

T = TypeVar("T")


async def retry_async(
    attempt: Callable[[], Awaitable[T]],
    retries: int,
    *,
    retry_on: Tuple[Type[BaseException], ...] = (RetryableGenerationError,),
    on_failure: Optional[Callable[[int, BaseException, int], None]] = None,
) -> T:
    """Await attempt() up to 1 + retries times.

    Flow:
        1. value = await attempt()
        2. On success return value
        3. On an exception in retry_on: call
           on_failure(attempt_number, error, retries_left)
        4. If retries remain, goto 1; else raise RetryBudgetExhaustedError

    Exceptions outside retry_on propagate immediately.

    Args:
        attempt: Zero-argument coroutine function running one full attempt.
        retries: Additional attempts allowed after the first (>= 0).
        retry_on: Exception types that count as a failed attempt.
        on_failure: Observer called for every failed attempt before the
            retry decision is taken. retries_left is 0 on the final attempt.

    Raises:
        RetryBudgetExhaustedError: wrapping the last failure.
    """
    if retries < 0:
        raise ValueError(f"retries must be >= 0, got {retries}")

    attempt_num = 0
    while True:
        attempt_num += 1
        try:
            return await attempt()
        except retry_on as e:
            retries_left = max(retries - (attempt_num - 1), 0)
            if on_failure is not None:
                on_failure(attempt_num, e, retries_left)

            if retries_left == 0:
                raise RetryBudgetExhaustedError(attempts=attempt_num, last_error=e) from e
