"""
Article related routes
"""

import logging

from fastapi import APIRouter, HTTPException

from newsfeed.api.deps import CurrentUser, SessionDep
from newsfeed.models import Article
from newsfeed.pipeline.exceptions import ArticleNotFoundError
from newsfeed.schemas.article import (
    ArticleDetailResponse,
    ArticleResponse,
    MarkReadRequest,
    ReadResponse,
    SaveResponse,
)
from newsfeed.services.feed_service import FeedService
from newsfeed.services.reading_service import ReadingService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/{article_id}", response_model=ArticleDetailResponse)
async def get_article(article_id: int, user: CurrentUser, db: SessionDep) -> ArticleDetailResponse:
    """
    Get one article with the reader's state

    Args:
        article_id: Article id

    Returns:
        ArticleDetailResponse: Article, content, read/saved flags and related articles
    """
    article = await db.get(Article, article_id)
    if article is None:
        raise HTTPException(status_code=404, detail=f"Article {article_id} not found")

    reading = ReadingService(db)
    related = await FeedService(db).related(article)

    return ArticleDetailResponse(
        article=ArticleResponse.model_validate(article),
        content=article.content,
        is_read=await reading.is_read(user.id, article_id),
        is_saved=await reading.is_saved(user.id, article_id),
        related=[ArticleResponse.model_validate(item) for item in related],
    )


@router.post("/{article_id}/read", response_model=ReadResponse)
async def mark_article_read(
    article_id: int,
    user: CurrentUser,
    db: SessionDep,
    body: MarkReadRequest = MarkReadRequest(),
) -> ReadResponse:
    try:
        await ReadingService(db).mark_as_read(user.id, article_id, time_spent=body.time_spent)
    except ArticleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ReadResponse(success=True)


@router.post("/{article_id}/save", response_model=SaveResponse)
async def toggle_article_save(article_id: int, user: CurrentUser, db: SessionDep) -> SaveResponse:
    """Save the article, or unsave it when it is already saved"""
    try:
        saved = await ReadingService(db).toggle_save(user.id, article_id)
    except ArticleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SaveResponse(saved=saved)
