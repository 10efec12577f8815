"""
Base Strategy Module - Abstract base class for tiling strategies.
"""

import time
from abc import ABC, abstractmethod

from .context import TilingContext
from .pool import FrontierPool
from .result import TilingMetrics, TilingResult


class TilingStrategy(ABC):
    """
    Abstract base class for all tiling strategies.

    Subclasses must implement the run() method and define
    name and description class attributes.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description for the CLI
    """
    name: str = "base"
    description: str = "Base strategy"

    @abstractmethod
    def run(self, context: TilingContext) -> TilingResult:
        """
        Compute the strategy's result for the context's board and tiles.

        Args:
            context: Tiling context with board, tileset and worker settings

        Returns:
            TilingResult with count, graph or path filled in, and metrics
        """
        pass

    def _open_pool(self, context: TilingContext) -> FrontierPool:
        """Executor for frontier expansion, configured from the context."""
        return FrontierPool(workers=context.workers, kind=context.executor)

    def _new_metrics(self) -> TilingMetrics:
        return TilingMetrics(strategy_name=self.name)

    def _finish(self, result: TilingResult, start_time: float) -> TilingResult:
        """Stamp elapsed time onto the result's metrics."""
        result.metrics.computation_time_ms = (time.perf_counter() - start_time) * 1000
        return result
