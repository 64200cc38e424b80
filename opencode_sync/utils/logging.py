from loguru import logger
import time
from functools import wraps

from opencode_sync.utils.rich_console import debug_enabled

# library traces stay silent unless debugging; sinks belong to the host application
logger.disable("opencode_sync")
if debug_enabled():
    logger.enable("opencode_sync")


def timeit(func):
    """
    Decorator that logs the execution time of the decorated function.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed = time.perf_counter() - start
            logger.debug(f"{func.__qualname__} executed in {elapsed:.6f}s")
    return wrapper
