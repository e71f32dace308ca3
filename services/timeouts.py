"""
Caller-side timeouts for calls into external collaborators.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def call_with_timeout(func: Callable[[], T], timeout: float, description: str) -> T:
    """
    Run func on a worker thread and wait at most `timeout` seconds.

    Raises:
        TimeoutError: The call did not finish in time (it keeps running in
            the background and its result is discarded)
        Exception: Whatever func raised
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="timeout")
    future = executor.submit(func)
    try:
        return future.result(timeout=timeout)
    except FutureTimeout:
        logger.warning(f"{description} timed out after {timeout}s")
        raise TimeoutError(f"{description} timed out after {timeout}s")
    finally:
        executor.shutdown(wait=False)
