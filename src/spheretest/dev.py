"""
Development helpers: CPU time reporting and a timing decorator for demos and
benchmarks.
"""
from __future__ import annotations

import functools
import logging
import os
import time
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def get_cpu_time() -> float:
    """Returns the user time consumed by this process, in seconds."""
    return os.times().user


def timer(func: F) -> F:
    """
    Log the wall-clock and user CPU time spent in the decorated function.
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        cpu_start = get_cpu_time()
        wall_start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            logger.info(
                f"{func.__qualname__} finished in {time.perf_counter() - wall_start:.3f} s "
                f"(cpu {get_cpu_time() - cpu_start:.3f} s)"
            )
    return wrapper  # type: ignore[return-value]
