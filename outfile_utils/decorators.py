"""
Timing decorator for pipeline steps.
"""
import time
import logging
from functools import wraps
from typing import Optional, Type

def log_and_time(step_name: Optional[str] = None, error_cls: Type[BaseException] = Exception):
    """
    Logs start/end/duration and logs exceptions with stack traces.
    Failures are rethrown as error_cls; errors that already are
    error_cls instances propagate unchanged.
    """
    def outer(func):
        @wraps(func)
        def inner(*args, **kwargs):
            logger = logging.getLogger(func.__module__)
            name = step_name or func.__name__
            t0 = time.perf_counter()
            logger.info(f"{name} start")
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.exception(f"{name} failed after {time.perf_counter() - t0:.3f}s: {e}")
                if isinstance(e, error_cls):
                    raise
                raise error_cls(str(e)) from e
            logger.info(f"{name} done in {time.perf_counter() - t0:.3f}s")
            return result
        return inner
    return outer
