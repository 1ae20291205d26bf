"""Merges per-region spot price batches into one sorted result set"""

from typing import Iterable

from smoggytexas.models.spot_price import PricePoint
from smoggytexas.services.dispatch_engine import ResultSink


def sort_by_price(points: Iterable[PricePoint]) -> list[PricePoint]:
    """Order price points from most to least expensive.

    Equal prices keep no particular order.
    """
    return sorted(points, key=lambda point: point.price, reverse=True)


class Aggregator:
    """Collects every batch from a ResultSink, then sorts once it is closed"""

    def __init__(self):
        self._points: list[PricePoint] = []

    async def collect(self, sink: ResultSink) -> list[PricePoint]:
        """
        Read batches until the dispatch engine closes the sink

        Args:
            sink: Sink shared with the dispatch engine

        Returns:
            All price points, highest price first
        """
        async for batch in sink:
            self._points.extend(batch)
        return self.finalize(sink)

    def finalize(self, sink: ResultSink) -> list[PricePoint]:
        """
        Produce the sorted result set

        Raises:
            RuntimeError: If the sink has not been closed and fully read
        """
        if not sink.drained:
            raise RuntimeError("Cannot finalize results before dispatch has completed")
        return sort_by_price(self._points)
