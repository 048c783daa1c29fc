from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class JobOutcome(str, Enum):
    SUCCESS = "success"
    SOFT_FAILURE = "soft_failure"              # Done, with a degraded result
    RETRYABLE_FAILURE = "retryable_failure"    # Another attempt may succeed
    PERMANENT_FAILURE = "permanent_failure"    # Retrying cannot help


class JobResult(BaseModel):
    """Result of one job attempt, inspected by the queue to decide on retries"""
    outcome: JobOutcome
    detail: Optional[str] = None
    attempts: int = 1

    @property
    def retryable(self) -> bool:
        return self.outcome == JobOutcome.RETRYABLE_FAILURE

    @classmethod
    def success(cls, detail: Optional[str] = None) -> "JobResult":
        return cls(outcome=JobOutcome.SUCCESS, detail=detail)

    @classmethod
    def soft_failure(cls, detail: Optional[str] = None) -> "JobResult":
        return cls(outcome=JobOutcome.SOFT_FAILURE, detail=detail)

    @classmethod
    def retryable_failure(cls, detail: Optional[str] = None) -> "JobResult":
        return cls(outcome=JobOutcome.RETRYABLE_FAILURE, detail=detail)

    @classmethod
    def permanent_failure(cls, detail: Optional[str] = None) -> "JobResult":
        return cls(outcome=JobOutcome.PERMANENT_FAILURE, detail=detail)


class Job(ABC):
    """Unit of work executed by the job queue"""

    name: str = "job"

    @abstractmethod
    async def run(self) -> JobResult:
        """Run one attempt"""
        raise NotImplementedError

    async def on_failure(self, error: BaseException) -> None:
        """Callback after an attempt timed out or raised"""
        pass
