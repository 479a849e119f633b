"""
Bounded-concurrency fan-out/fan-in over a list of work items.

- one asyncio task per item, created in list order
- a semaphore caps how many fetches are in flight at once
- results are gathered by a collector (lock-guarded total or a queue)
- the total is only computed after every task has finished
"""

import asyncio
import logging
from typing import Awaitable, Callable, Sequence
from .http_counter import fetch_count
from .metrics import AggregateReport, FetchResult, failed_result
from .report import print_count, total_line
from .settings import ConfigError, CountConfig, WorkItem, validate_pool_config

logger = logging.getLogger(__name__)

FetchFn = Callable[[str, str, float], Awaitable[FetchResult]]
ResultHook = Callable[[FetchResult], None]


class LockedTotal:
    """Running total mutated only while holding an asyncio.Lock."""

    def __init__(self):
        self._lock = asyncio.Lock()
        self._results: list[FetchResult] = []
        self._total = 0

    async def add(self, r: FetchResult) -> None:
        async with self._lock:
            self._total += r.count
            self._results.append(r)

    async def report(self) -> AggregateReport:
        async with self._lock:
            return AggregateReport(results=list(self._results), total=self._total)


class QueueCollector:
    """
    Workers hand results off through an unbounded queue; the coordinator
    drains it once the barrier has passed. Unbounded means `add` never waits.
    """

    def __init__(self):
        self._queue: asyncio.Queue[FetchResult] = asyncio.Queue()

    async def add(self, r: FetchResult) -> None:
        self._queue.put_nowait(r)

    async def report(self) -> AggregateReport:
        report = AggregateReport()
        while not self._queue.empty():
            r = self._queue.get_nowait()
            report.results.append(r)
            report.total += r.count
        return report


COLLECTORS = {
    "lock": LockedTotal,
    "queue": QueueCollector,
}


def validate_pool_args(target: str, pool_size: int, timeout_s: float, strategy: str) -> None:
    """
    Raise ConfigError unless pool_size is an int >= 1, timeout_s >= 1,
    target is non-empty and strategy names a known collector.
    """
    cfg = validate_pool_config(target, pool_size, timeout_s, strategy)
    if cfg.strategy not in COLLECTORS:
        raise ConfigError(f"unknown collect strategy {strategy!r}, expected one of {sorted(COLLECTORS)}")


async def run_pool(
    target: str,
    items: Sequence[WorkItem | str],
    pool_size: int,
    timeout_s: float,
    *,
    fetch: FetchFn | None = None,
    strategy: str = "lock",
    on_result: ResultHook | None = print_count,
) -> AggregateReport:
    """
    Count `target` on every item's URL with at most `pool_size` fetches in flight.

    `fetch` defaults to `http_counter.fetch_count`.
    Raises ConfigError before doing any work if the arguments are unusable.
    Individual fetch failures never escape: they are folded into a zero-count
    FetchResult so the batch always completes. `on_result` is called once per
    item as it completes, in completion order; if it raises, the error is
    logged and the item still counts.
    """
    validate_pool_args(target, pool_size, timeout_s, strategy)
    fetch = fetch or fetch_count

    urls = [i.url if isinstance(i, WorkItem) else i for i in items]
    slots = asyncio.Semaphore(pool_size)
    collector = COLLECTORS[strategy]()

    async def worker(url: str) -> None:
        async with slots:
            try:
                r = await fetch(target, url, timeout_s)
            except Exception as e:
                # custom fetch functions may raise; the default never does
                logger.warning("fetch raised for %s: %s", url, type(e).__name__)
                r = failed_result(url, type(e).__name__)
        await collector.add(r)
        if on_result is not None:
            try:
                on_result(r)
            except Exception as e:
                # the result is already collected; a broken hook only loses its line
                logger.warning("on_result hook raised for %s: %s", url, type(e).__name__)

    logger.debug("dispatching %d items, pool_size=%d, strategy=%s", len(urls), pool_size, strategy)
    await asyncio.gather(*(asyncio.create_task(worker(u)) for u in urls))

    return await collector.report()


def run(config: CountConfig) -> AggregateReport:
    """
    Synchronous entry point: run the pool for `config` and print the total.
    """
    report = asyncio.run(
        run_pool(
            config.target_word,
            config.work_items(),
            config.pool_size,
            config.request_timeout_s,
            strategy=config.collect_strategy,
        )
    )
    print(total_line(report), flush=True)
    return report
