"""
News pipeline routes
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from newsfeed.api.deps import JobQueueDep, SessionDep, SessionFactoryDep, SettingsDep
from newsfeed.ai.services.summary_generator import build_summary_generator
from newsfeed.models import Article
from newsfeed.pipeline.exceptions import NewsFetchError
from newsfeed.pipeline.ingestion import IngestionPipeline
from newsfeed.pipeline.summarization import SummarizationJob
from newsfeed.schemas.pipeline import EnqueueResponse, IngestionResponse, QueueMetricsResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/fetch", response_model=IngestionResponse)
async def fetch_news(
    settings: SettingsDep,
    session_factory: SessionFactoryDep,
    job_queue: JobQueueDep,
    limit: Optional[int] = Query(None, ge=1, le=500),
) -> IngestionResponse:
    """
    Run one ingestion batch; summaries are generated by the job queue

    Args:
        limit: Target number of articles, defaults to DEFAULT_FETCH_LIMIT

    Returns:
        IngestionResponse: Stored and skipped counts
    """
    pipeline = IngestionPipeline.from_settings(settings, session_factory, job_queue)
    try:
        result = await pipeline.run(limit=limit or settings.DEFAULT_FETCH_LIMIT)
    except NewsFetchError as e:
        raise HTTPException(status_code=502, detail=f"Error fetching news: {str(e)}")

    return IngestionResponse(
        message=f"Stored {result.stored} articles, skipped {result.skipped}",
        stored=result.stored,
        skipped=result.skipped,
    )


@router.post("/articles/{article_id}/summarize", response_model=EnqueueResponse)
async def summarize_article(
    article_id: int,
    db: SessionDep,
    settings: SettingsDep,
    session_factory: SessionFactoryDep,
    job_queue: JobQueueDep,
) -> EnqueueResponse:
    """Queue a new summarization of an existing article"""
    if await db.get(Article, article_id) is None:
        raise HTTPException(status_code=404, detail=f"Article {article_id} not found")

    await job_queue.enqueue(
        SummarizationJob(article_id, session_factory, build_summary_generator(settings))
    )
    logger.info(f"Summarization of article {article_id} queued manually")
    return EnqueueResponse(article_id=article_id, queued=True)


@router.get("/queue", response_model=QueueMetricsResponse)
async def get_queue_metrics(job_queue: JobQueueDep) -> QueueMetricsResponse:
    return QueueMetricsResponse(**job_queue.get_metrics())
