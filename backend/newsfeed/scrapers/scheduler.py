import asyncio
import logging
from typing import Callable, Optional

from newsfeed.pipeline.exceptions import NewsFetchError
from newsfeed.pipeline.ingestion import IngestionPipeline

logger = logging.getLogger(__name__)


class IngestionScheduler:
    """Periodic ingestion runner"""

    def __init__(self, pipeline_factory: Callable[[], IngestionPipeline]):
        self.pipeline_factory = pipeline_factory
        self.is_running = False
        self.task: Optional[asyncio.Task] = None
        self.current_interval: Optional[int] = None
        self.current_limit: Optional[int] = None
        self.cycles = 0

    async def run_cycle(self, limit: int) -> None:
        """Run the ingestion pipeline once; failures are logged, not raised"""
        try:
            result = await self.pipeline_factory().run(limit=limit)
            logger.info(f"Ingestion cycle stored {result.stored} articles, skipped {result.skipped}")
        except NewsFetchError as e:
            logger.error(f"Ingestion cycle could not fetch news: {str(e)}")
        except Exception as e:
            logger.error(f"Error during ingestion cycle: {str(e)}")
        finally:
            self.cycles += 1

    async def _run_schedule(self, interval: int, limit: int):
        """
        Execute scheduled ingestion

        Args:
            interval: Seconds between the start of two cycles
            limit: Fetch limit of each cycle
        """
        while self.is_running:
            await self.run_cycle(limit)
            logger.info(f"Completed ingestion cycle, waiting {interval} seconds before next run")
            await asyncio.sleep(interval)

    async def start(self, interval: int, limit: int = 50):
        """
        Start the scheduler

        Args:
            interval: Seconds between cycles, must be positive
            limit: Fetch limit of each cycle
        """
        if interval <= 0:
            raise ValueError("interval must be a positive number of seconds")
        if self.is_running:
            logger.warning("Scheduler is already running")
            return

        self.is_running = True
        self.current_interval = interval
        self.current_limit = limit
        self.task = asyncio.create_task(self._run_schedule(interval, limit))
        logger.info(f"Ingestion scheduler started, frequency: {interval} seconds, limit: {limit}")

    async def stop(self):
        """Stop the scheduler"""
        if not self.is_running:
            logger.warning("Scheduler is not running")
            return

        self.is_running = False
        self.current_interval = None
        self.current_limit = None
        if self.task:
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass
            self.task = None
        logger.info("Ingestion scheduler stopped")
