import functools
import logging
import asyncio

logger = logging.getLogger(__name__)


def retry_on_exception(retries=3, delay=2, exceptions=(Exception,)):
    """Retry an async call on the given exceptions, waiting `delay * attempt` between tries."""
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            for attempt in range(1, retries + 1):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    if attempt == retries:
                        raise
                    logger.warning(f"Attempt {attempt}/{retries} of {func.__name__} failed: {e}")
                    await asyncio.sleep(delay * attempt)
        return wrapper
    return decorator
