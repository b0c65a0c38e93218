"""
Offloading helpers for blocking work called from async request handlers.
"""
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, Optional, TypeVar
import asyncio
import logging

from ..config import settings
from ..auth.exceptions import ServiceUnavailableException
from ..auth.repository import RepositoryUnavailableError

# Set up logging
logger = logging.getLogger(__name__)

T = TypeVar("T")

# Password hashing runs here, never on the request threadpool
_hashing_executor: Optional[ThreadPoolExecutor] = None


def get_hashing_executor() -> ThreadPoolExecutor:
    """
    Get the process-wide, bounded pool used for password hashing.

    Returns:
        ThreadPoolExecutor: Shared executor
    """
    global _hashing_executor
    if _hashing_executor is None:
        _hashing_executor = ThreadPoolExecutor(
            max_workers=settings.password_hash_workers,
            thread_name_prefix="password-hash",
        )
    return _hashing_executor


def shutdown_hashing_executor() -> None:
    """Stop the hashing pool, waiting for running jobs."""
    global _hashing_executor
    if _hashing_executor is not None:
        _hashing_executor.shutdown(wait=True)
        _hashing_executor = None


async def run_hashing(func: Callable[..., T], *args: Any) -> T:
    """
    Run a password hashing call on the bounded hashing pool.

    Args:
        func: Hasher method
        args: Positional arguments for ``func``

    Returns:
        The result of ``func``
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(get_hashing_executor(), partial(func, *args))


async def run_repository(func: Callable[..., T], *args: Any, timeout: Optional[float] = None) -> T:
    """
    Run a blocking repository call with an upper bound on its duration.

    Args:
        func: Repository method
        args: Positional arguments for ``func``
        timeout: Seconds to wait; defaults to settings.repository_timeout_seconds

    Returns:
        The result of ``func``

    Raises:
        ServiceUnavailableException: On timeout or when the store is unreachable
    """
    timeout = settings.repository_timeout_seconds if timeout is None else timeout
    loop = asyncio.get_running_loop()
    try:
        return await asyncio.wait_for(loop.run_in_executor(None, partial(func, *args)), timeout)
    except asyncio.TimeoutError:
        logger.error(f"Repository call {getattr(func, '__name__', func)} timed out after {timeout}s")
        raise ServiceUnavailableException()
    except RepositoryUnavailableError as e:
        logger.error(f"Repository unavailable: {str(e)}")
        raise ServiceUnavailableException()
