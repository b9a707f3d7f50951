"""
Phase timing for the branch and bound search.

The search only talks to the small interface shared by ``Clock`` and
``NullClock``: ``phase(name)`` returns a context manager and ``durations``
maps phase names to accumulated seconds.
"""
import time
import logging
from collections import defaultdict
from contextlib import contextmanager, nullcontext
from functools import wraps
from typing import Dict

logger = logging.getLogger(__name__)

DEG_LB = "deg_lb"
CLQ_LB = "clq_lb"
MAX_DEG = "max_deg"
SAVE_RESTORE = "save_restore"

PHASES = (DEG_LB, CLQ_LB, MAX_DEG, SAVE_RESTORE)


class Clock:
    """Accumulates wall time per named phase."""

    def __init__(self):
        self.durations: Dict[str, float] = defaultdict(float)
        self.counts: Dict[str, int] = defaultdict(int)

    @contextmanager
    def phase(self, name: str):
        start = time.perf_counter()
        try:
            yield
        finally:
            self.durations[name] += time.perf_counter() - start
            self.counts[name] += 1

    def get_subroutine_duration(self, name: str) -> float:
        return self.durations.get(name, 0.0)

    def snapshot(self) -> Dict[str, float]:
        """Durations of the standard phases, zero-filled."""
        return {name: self.durations.get(name, 0.0) for name in PHASES}

    def reset(self):
        self.durations.clear()
        self.counts.clear()


class NullClock:
    """Clock that records nothing."""

    _context = nullcontext()

    def __init__(self):
        self.durations: Dict[str, float] = {}

    def phase(self, name: str):
        return self._context

    def get_subroutine_duration(self, name: str) -> float:
        return 0.0

    def snapshot(self) -> Dict[str, float]:
        return {}

    def reset(self):
        pass


def timed_step(name):
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            result = func(*args, **kwargs)
            elapsed = time.perf_counter() - start
            logger.info(f"[{name}] took {elapsed:.4f} seconds")
            return result
        return wrapper
    return decorator
