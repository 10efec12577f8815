"""
Frontier Pool - Fan-out/fan-in of one frontier over a concurrent.futures executor.

map() returns only after every item of the frontier has been processed,
which is the barrier between two BFS levels.
"""

import concurrent.futures
import logging
import os
from typing import Callable, Iterable, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

EXECUTOR_KINDS = ("serial", "thread", "process")


class FrontierPool:
    """
    Context manager owning the executor for one tiling run.

    Expansion is pure Python, so "thread" workers share the GIL and overlap
    little CPU work; "process" is the kind that expands branches in parallel.

    Attributes:
        kind: "serial", "thread" or "process"
        workers: Worker count (defaults to os.cpu_count())

    Example:
        with FrontierPool(workers=4, kind="thread") as pool:
            results = pool.map(expand_one, frontier)
    """

    def __init__(self, workers: Optional[int] = None, kind: str = "thread"):
        if kind not in EXECUTOR_KINDS:
            available = ", ".join(EXECUTOR_KINDS)
            raise ValueError(f"Unknown executor: {kind}. Available: {available}")
        if workers is not None and workers < 1:
            raise ValueError(f"Worker count must be positive, got {workers}")

        self.kind = kind
        self.workers = workers or os.cpu_count() or 1
        self._executor: Optional[concurrent.futures.Executor] = None

    def __enter__(self) -> "FrontierPool":
        if self.kind == "thread" and self.workers > 1:
            self._executor = concurrent.futures.ThreadPoolExecutor(max_workers=self.workers)
        elif self.kind == "process" and self.workers > 1:
            self._executor = concurrent.futures.ProcessPoolExecutor(max_workers=self.workers)
        logger.debug(f"FrontierPool started: kind={self.kind}, workers={self.workers}")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def map(self, fn: Callable[[T], R], items: Iterable[T]) -> List[R]:
        """
        Apply fn to every item and wait for all results.

        Args:
            fn: Function to apply (must be picklable for the process executor)
            items: Frontier items

        Returns:
            Results in the order of items
        """
        items = list(items)
        if self._executor is None or len(items) < 2:
            return [fn(item) for item in items]

        chunksize = 1
        if self.kind == "process":
            chunksize = max(1, len(items) // (self.workers * 4))
        return list(self._executor.map(fn, items, chunksize=chunksize))
