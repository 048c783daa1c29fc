from typing import Any, Dict, List, Optional
import asyncio
import logging

from tenacity import AsyncRetrying, retry_if_result, stop_after_attempt, wait_fixed

from newsfeed.core.job_config import JobConfig
from .exceptions import QueueStateError
from .models import Job, JobOutcome, JobResult


class JobQueueService:
    """In-process job queue with a worker pool and a bounded retry budget"""

    def __init__(
        self,
        max_workers: int = 3,
        max_attempts: int = 3,
        attempt_timeout: float = 60,
        retry_delay: float = 0,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_workers = max_workers
        self.max_attempts = max_attempts
        self.attempt_timeout = attempt_timeout
        self.retry_delay = retry_delay

        self.task_queue: asyncio.Queue = asyncio.Queue()
        self.worker_tasks: List[asyncio.Task] = []
        self.service_status: str = "stopped"
        self.metrics: Dict[str, Any] = {
            'jobs_succeeded': 0,
            'jobs_soft_failed': 0,
            'jobs_failed': 0,
            'attempts': 0,
            'last_error': None,
        }
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: Optional[JobConfig] = None) -> "JobQueueService":
        config = config or JobConfig()
        return cls(
            max_workers=config.MAX_WORKERS,
            max_attempts=config.MAX_ATTEMPTS,
            attempt_timeout=config.ATTEMPT_TIMEOUT,
            retry_delay=config.RETRY_DELAY,
        )

    @property
    def is_running(self) -> bool:
        return self.service_status == "running"

    async def enqueue(self, job: Job) -> None:
        """Queue a job for execution"""
        await self.task_queue.put(job)
        self.logger.debug(f"Job queued: {job.name}")

    async def start(self) -> None:
        """Start the worker pool"""
        if self.is_running:
            self.logger.warning("Job queue is already running")
            return

        self.service_status = "running"
        for _ in range(self.max_workers):
            worker = asyncio.create_task(self._worker_loop())
            self.worker_tasks.append(worker)
        self.logger.info(f"Job queue started with {self.max_workers} workers")

    async def stop(self) -> None:
        """Stop the worker pool; jobs still queued stay queued"""
        self.service_status = "stopped"
        for worker in self.worker_tasks:
            if not worker.done():
                worker.cancel()
        await asyncio.gather(*self.worker_tasks, return_exceptions=True)
        self.worker_tasks.clear()
        self.logger.info("Job queue stopped")

    async def join(self) -> None:
        """Wait until every queued job, retries included, has finished"""
        if not self.is_running and not self.task_queue.empty():
            raise QueueStateError("Job queue is not running")
        await self.task_queue.join()

    async def drain(self) -> None:
        """Start workers if needed, run everything queued, then stop"""
        started_here = not self.is_running
        if started_here:
            await self.start()
        try:
            await self.task_queue.join()
        finally:
            if started_here:
                await self.stop()

    async def run_job(self, job: Job) -> JobResult:
        """
        Execute a job until it stops asking for a retry or the budget is spent

        Attempts are sequential. An attempt that times out or raises is
        reported to ``job.on_failure`` and counted as retryable.

        Returns:
            JobResult: Result of the last attempt
        """
        attempts = 0

        async def attempt() -> JobResult:
            nonlocal attempts
            attempts += 1
            self.metrics['attempts'] += 1
            return await self._run_attempt(job, attempts)

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.retry_delay),
            retry=retry_if_result(lambda result: result.retryable),
            retry_error_callback=lambda retry_state: retry_state.outcome.result(),
        )
        result: JobResult = await retrying(attempt)
        result.attempts = attempts

        if result.outcome == JobOutcome.SUCCESS:
            self.metrics['jobs_succeeded'] += 1
        elif result.outcome == JobOutcome.SOFT_FAILURE:
            self.metrics['jobs_soft_failed'] += 1
        else:
            self.metrics['jobs_failed'] += 1
            self.metrics['last_error'] = result.detail
            self.logger.error(
                f"Job {job.name} abandoned after {attempts} attempt(s): "
                f"{result.outcome.value} {result.detail or ''}".rstrip()
            )
        return result

    async def _run_attempt(self, job: Job, attempt: int) -> JobResult:
        try:
            result = await asyncio.wait_for(job.run(), timeout=self.attempt_timeout)
            if result.retryable:
                self.logger.warning(
                    f"Job {job.name} attempt {attempt}/{self.max_attempts} failed: {result.detail}"
                )
            return result
        except asyncio.TimeoutError as e:
            error: BaseException = e
            detail = f"timed out after {self.attempt_timeout}s"
        except Exception as e:
            error = e
            detail = str(e)

        self.logger.error(f"Job {job.name} attempt {attempt}/{self.max_attempts} failed: {detail}")
        try:
            await job.on_failure(error)
        except Exception as callback_error:
            self.logger.error(f"Failure callback of job {job.name} raised: {str(callback_error)}")
        return JobResult.retryable_failure(detail)

    async def _worker_loop(self) -> None:
        """Worker loop"""
        while self.is_running:
            try:
                job = await self.task_queue.get()
            except asyncio.CancelledError:
                break

            try:
                await self.run_job(job)
            except Exception as e:
                self.logger.error(f"Worker error on job {job.name}: {str(e)}")
            finally:
                self.task_queue.task_done()

    def get_metrics(self) -> Dict[str, Any]:
        return {
            "status": self.service_status,
            "queued": self.task_queue.qsize(),
            "workers": len(self.worker_tasks),
            **self.metrics,
        }
