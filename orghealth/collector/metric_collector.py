"""Concurrent collection of raw metrics from caller-supplied sources."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from orghealth.consts import COLLECTOR_DEFAULT_CONCURRENCY, COLLECTOR_DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

MetricSource = Callable[[], Awaitable[Any]]


class MetricCollectionError(RuntimeError):
    """Raised when one or more metric sources fail or time out."""

    def __init__(self, failures: dict[str, str]):
        self.failures = failures
        names = ", ".join(sorted(failures))
        super().__init__(f"{len(failures)} metric source(s) failed: {names}")


class MetricCollector:
    """Runs metric sources concurrently and gathers their results.

    Each source is a zero-argument coroutine function returning the raw
    payload for one bundle key (e.g. ``"licenses"``). Sources run under an
    asyncio.Semaphore and each one is bounded by ``timeout_seconds``.

    Collection is all-or-nothing: every source is allowed to settle, then a
    MetricCollectionError listing every failure is raised if any failed. The
    successful results are never returned on their own, so a bundle is never
    built from a partial collection.
    """

    def __init__(
        self,
        sources: Mapping[str, MetricSource],
        timeout_seconds: float = COLLECTOR_DEFAULT_TIMEOUT,
        concurrency: int = COLLECTOR_DEFAULT_CONCURRENCY,
    ):
        """Initialize the collector.

        Args:
            sources: Mapping of bundle key to coroutine function.
            timeout_seconds: Time budget for each source.
            concurrency: Maximum number of sources running at once.

        Raises:
            ValueError: If timeout or concurrency is not positive.
        """
        if timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {timeout_seconds}")
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")

        self.sources = dict(sources)
        self.timeout_seconds = timeout_seconds
        self.concurrency = concurrency

    async def collect(self) -> dict[str, Any]:
        """Collect every source.

        Returns:
            Dict of source name to raw payload, ready for normalize_bundle.

        Raises:
            MetricCollectionError: If any source raised or timed out.
        """
        start_time = time.time()
        semaphore = asyncio.Semaphore(self.concurrency)
        results: dict[str, Any] = {}
        failures: dict[str, str] = {}

        async def collect_one(name: str, source: MetricSource) -> None:
            """Collect a single source."""
            async with semaphore:
                logger.debug(f"Collecting {name}...")
                try:
                    results[name] = await asyncio.wait_for(source(), timeout=self.timeout_seconds)
                except TimeoutError:
                    failures[name] = f"Timed out after {self.timeout_seconds}s"
                    logger.warning(f"✗ {name}: timed out after {self.timeout_seconds}s")
                except Exception as e:
                    failures[name] = str(e) or type(e).__name__
                    logger.warning(f"✗ {name}: {e}")

        await asyncio.gather(*[collect_one(name, source) for name, source in self.sources.items()])

        duration = time.time() - start_time
        if failures:
            logger.warning(
                f"Metric collection failed: {len(failures)}/{len(self.sources)} sources "
                f"in {duration:.2f}s"
            )
            raise MetricCollectionError(failures)

        logger.info(f"Collected {len(results)} metric sources in {duration:.2f}s")
        # Keep the caller's source order
        return {name: results[name] for name in self.sources}


async def main() -> None:
    """Demonstrate collecting from in-memory sources."""

    async def licenses() -> dict[str, Any]:
        await asyncio.sleep(0.1)
        return {"totalLicenses": 100, "unusedLicenses": 12}

    async def storage() -> dict[str, Any]:
        await asyncio.sleep(0.2)
        return {"dataStorage": {"percentage": 64}}

    async def slow_risks() -> list[dict[str, str]]:
        await asyncio.sleep(5)
        return []

    print("Metric Collector Demo")
    print("=" * 50)

    collector = MetricCollector({"licenses": licenses, "storage": storage})
    print(f"\nCollected: {await collector.collect()}")

    collector = MetricCollector(
        {"licenses": licenses, "risks": slow_risks},
        timeout_seconds=0.5,
    )
    try:
        await collector.collect()
    except MetricCollectionError as e:
        print(f"\nFailed: {e}")
        for name, message in e.failures.items():
            print(f"  {name}: {message}")


if __name__ == "__main__":
    asyncio.run(main())
