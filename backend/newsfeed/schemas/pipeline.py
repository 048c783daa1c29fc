"""
Pipeline related schemas
"""

from typing import Optional

from pydantic import BaseModel


class IngestionResult(BaseModel):
    """Aggregate counts of one ingestion run"""
    stored: int = 0
    skipped: int = 0


class IngestionResponse(IngestionResult):
    message: str


class EnqueueResponse(BaseModel):
    article_id: int
    queued: bool = True


class QueueMetricsResponse(BaseModel):
    """Job queue state"""
    status: str
    queued: int
    workers: int
    jobs_succeeded: int
    jobs_soft_failed: int
    jobs_failed: int
    attempts: int
    last_error: Optional[str] = None
