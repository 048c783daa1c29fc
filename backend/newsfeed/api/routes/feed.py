"""
Feed routes
"""

from typing import List, Optional
import logging

from fastapi import APIRouter, HTTPException, Query

from newsfeed.api.deps import CurrentUser, SessionDep, SettingsDep
from newsfeed.models import Category
from newsfeed.pipeline.exceptions import PreferencesRequiredError
from newsfeed.schemas.article import ArticlePageResponse, ArticleResponse
from newsfeed.services.feed_service import FeedService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=ArticlePageResponse)
async def get_personalized_feed(
    user: CurrentUser,
    db: SessionDep,
    settings: SettingsDep,
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1, le=100),
) -> ArticlePageResponse:
    """
    Unread processed articles from the reader's categories

    Args:
        page: 1-based page number
        per_page: Page size, defaults to FEED_PAGE_SIZE

    Returns:
        ArticlePageResponse: Newest first
    """
    try:
        result = await FeedService(db).personalized_feed(
            user.id, page=page, per_page=per_page or settings.FEED_PAGE_SIZE
        )
    except PreferencesRequiredError:
        raise HTTPException(
            status_code=400,
            detail="Select at least one category in your preferences first",
        )
    return ArticlePageResponse.from_page(result)


@router.get("/category/{category_id}", response_model=ArticlePageResponse)
async def get_category_feed(
    category_id: int,
    db: SessionDep,
    settings: SettingsDep,
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1, le=100),
) -> ArticlePageResponse:
    """Processed articles of one category"""
    if await db.get(Category, category_id) is None:
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")

    result = await FeedService(db).category_feed(
        category_id, page=page, per_page=per_page or settings.FEED_PAGE_SIZE
    )
    return ArticlePageResponse.from_page(result)


@router.get("/saved", response_model=ArticlePageResponse)
async def get_saved_feed(
    user: CurrentUser,
    db: SessionDep,
    settings: SettingsDep,
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1, le=100),
) -> ArticlePageResponse:
    result = await FeedService(db).saved_feed(
        user.id, page=page, per_page=per_page or settings.FEED_PAGE_SIZE
    )
    return ArticlePageResponse.from_page(result)


@router.get("/trending", response_model=List[ArticleResponse])
async def get_trending(db: SessionDep, settings: SettingsDep) -> List[ArticleResponse]:
    """Most read recent articles"""
    articles = await FeedService(db).trending(
        limit=settings.TRENDING_LIMIT, days=settings.TRENDING_DAYS
    )
    return [ArticleResponse.model_validate(article) for article in articles]
