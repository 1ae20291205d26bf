"""Bounded-concurrency fan-out of spot price queries across regions"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Mapping, Sequence

from smoggytexas.exceptions import ConfigurationError, QueryTimeoutError, RegionQueryError
from smoggytexas.models.spot_price import PricePoint, PriceQuery, RegionOutcome, RegionState

logger = logging.getLogger("smoggytexas")

# Callable that runs one query and must finish by the given loop.time() deadline
QueryFunc = Callable[[PriceQuery, float], Awaitable[list[PricePoint]]]

_CLOSED = object()


class ResultSink:
    """Queue of per-region result batches shared by the dispatch workers.

    Workers publish whole batches; the sink is closed exactly once, after
    which nothing more is admitted. Readers iterate until the close marker.
    """

    def __init__(self):
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False
        self._drained = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def drained(self) -> bool:
        """True once a reader has consumed everything up to the close marker"""
        return self._drained

    def publish(self, batch: Sequence[PricePoint]) -> None:
        if self._closed:
            raise RuntimeError("Result sink is closed; no further batches are accepted")
        self._queue.put_nowait(list(batch))

    def close(self) -> None:
        if self._closed:
            raise RuntimeError("Result sink is already closed")
        self._closed = True
        self._queue.put_nowait(_CLOSED)

    def __aiter__(self):
        return self._batches()

    async def _batches(self):
        if self._drained:
            return
        while True:
            item = await self._queue.get()
            if item is _CLOSED:
                self._drained = True
                return
            yield item


@dataclass
class DispatchReport:
    """Per-region outcomes of one dispatch run"""
    outcomes: dict[str, RegionOutcome] = field(default_factory=dict)
    elapsed: float = 0.0

    def _count(self, state: RegionState) -> int:
        return sum(1 for outcome in self.outcomes.values() if outcome.state == state)

    @property
    def succeeded(self) -> int:
        return self._count(RegionState.SUCCEEDED)

    @property
    def failed(self) -> int:
        return self._count(RegionState.FAILED)

    @property
    def timed_out(self) -> int:
        return self._count(RegionState.TIMED_OUT)

    @property
    def point_count(self) -> int:
        return sum(outcome.point_count for outcome in self.outcomes.values())

    def summary(self) -> str:
        """Get a human-readable summary of the run."""
        return (
            f"Regions: {self.succeeded}/{len(self.outcomes)} ok, "
            f"{self.failed} failed, {self.timed_out} timed out; "
            f"{self.point_count} prices in {self.elapsed:.1f}s"
        )


class DispatchEngine:
    """Runs one spot price query per region under a concurrency cap"""

    def __init__(
        self,
        query_func: QueryFunc,
        max_concurrent: int = 10,
        timeout: float = 5.0,
        descriptions: Mapping[str, str] | None = None
    ):
        """
        Initialize dispatch engine

        Args:
            query_func: Coroutine function running a single region query
            max_concurrent: Maximum number of regions queried at once (default 10)
            timeout: Per-region deadline in seconds, counted from when the
                region acquires a slot (default 5)
            descriptions: Region code to description lookup used in log messages
        """
        if max_concurrent < 1:
            raise ConfigurationError(f"max_concurrent must be at least 1, got {max_concurrent}")
        if timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {timeout}")
        self.query_func = query_func
        self.max_concurrent = max_concurrent
        self.timeout = timeout
        self.descriptions = descriptions or {}

    def _label(self, region: str) -> str:
        description = self.descriptions.get(region)
        return f"{region} ({description})" if description and description != region else region

    async def dispatch(self, queries: Sequence[PriceQuery], sink: ResultSink) -> DispatchReport:
        """
        Query every region and publish each successful batch to the sink

        Failures and timeouts are logged and recorded in the report; they never
        stop other regions. The sink is closed once every region has finished.

        Args:
            queries: One query per region (region codes must be unique)
            sink: Destination for successful result batches

        Returns:
            DispatchReport with one outcome per region
        """
        regions = [query.region for query in queries]
        if len(set(regions)) != len(regions):
            sink.close()
            raise ValueError("Each region may only be queried once per run")

        report = DispatchReport(outcomes={region: RegionOutcome(region) for region in regions})
        semaphore = asyncio.Semaphore(self.max_concurrent)
        started = time.monotonic()
        logger.debug(f"Dispatching {len(queries)} regions, max_concurrent={self.max_concurrent}, timeout={self.timeout}s")

        async def run_region(query: PriceQuery) -> None:
            outcome = report.outcomes[query.region]
            outcome.advance(RegionState.QUEUED)
            async with semaphore:
                outcome.advance(RegionState.RUNNING)
                loop = asyncio.get_running_loop()
                task_start = loop.time()
                deadline = task_start + self.timeout
                logger.debug(f"Querying {self._label(query.region)}")
                try:
                    points = await asyncio.wait_for(
                        self.query_func(query, deadline),
                        timeout=self.timeout
                    )
                except (asyncio.TimeoutError, QueryTimeoutError) as e:
                    outcome.error = str(e) or f"no response within {self.timeout}s"
                    outcome.advance(RegionState.TIMED_OUT)
                    logger.warning(f"Region {self._label(query.region)} timed out after {self.timeout}s")
                except RegionQueryError as e:
                    outcome.error = e.reason
                    outcome.advance(RegionState.FAILED)
                    logger.warning(f"Region {self._label(query.region)} failed: {e.reason}")
                except Exception as e:
                    outcome.error = str(e)
                    outcome.advance(RegionState.FAILED)
                    logger.warning(f"Region {self._label(query.region)} failed with unexpected error: {e}")
                    logger.debug("Unexpected region failure", exc_info=True)
                else:
                    sink.publish(points)
                    outcome.point_count = len(points)
                    outcome.advance(RegionState.SUCCEEDED)
                    logger.debug(f"Region {query.region} returned {len(points)} prices")
                finally:
                    outcome.elapsed = loop.time() - task_start

        try:
            await asyncio.gather(*(run_region(query) for query in queries))
        finally:
            sink.close()
            report.elapsed = time.monotonic() - started

        logger.debug(report.summary())
        return report
