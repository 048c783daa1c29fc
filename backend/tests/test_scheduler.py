"""Tests for the periodic ingestion scheduler."""

import asyncio

import pytest

from newsfeed.pipeline.exceptions import NewsFetchError
from newsfeed.schemas.pipeline import IngestionResult
from newsfeed.scrapers.scheduler import IngestionScheduler


class FakePipeline:
    def __init__(self, error: Exception = None):
        self.error = error
        self.limits = []

    async def run(self, limit: int = 50) -> IngestionResult:
        self.limits.append(limit)
        if self.error:
            raise self.error
        return IngestionResult(stored=1, skipped=0)


class TestIngestionScheduler:
    """Tests for IngestionScheduler."""

    async def test_cycle_errors_are_swallowed(self) -> None:
        scheduler = IngestionScheduler(lambda: FakePipeline(NewsFetchError("provider down")))

        await scheduler.run_cycle(limit=5)
        await scheduler.run_cycle(limit=5)

        assert scheduler.cycles == 2

    async def test_start_runs_cycles_until_stopped(self) -> None:
        pipeline = FakePipeline()
        scheduler = IngestionScheduler(lambda: pipeline)

        await scheduler.start(interval=1, limit=7)
        await asyncio.sleep(0.05)
        await scheduler.stop()

        assert pipeline.limits == [7]
        assert not scheduler.is_running
        assert scheduler.task is None

    async def test_keeps_running_after_a_failed_cycle(self) -> None:
        pipeline = FakePipeline(RuntimeError("unexpected"))
        scheduler = IngestionScheduler(lambda: pipeline)

        await scheduler.start(interval=1, limit=3)
        await asyncio.sleep(0.05)

        assert scheduler.is_running
        assert scheduler.task is not None and not scheduler.task.done()
        await scheduler.stop()

    async def test_rejects_non_positive_interval(self) -> None:
        scheduler = IngestionScheduler(lambda: FakePipeline())

        with pytest.raises(ValueError):
            await scheduler.start(interval=0)
