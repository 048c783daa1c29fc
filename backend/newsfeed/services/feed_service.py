"""
Feed queries over processed articles
"""

from datetime import timedelta
from typing import List
import logging

from sqlalchemy import Select, desc, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from newsfeed.models import Article, ArticleStatus, ReadingHistory, SavedArticle, UserPreference
from newsfeed.pipeline.exceptions import PreferencesRequiredError
from newsfeed.schemas.article import Page
from newsfeed.utils.datetime import utcnow

logger = logging.getLogger(__name__)


class FeedService:
    """Read-only article listings for a reader"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _paginate(self, statement: Select, page: int, per_page: int) -> Page[Article]:
        if page < 1 or per_page < 1:
            raise ValueError("page and per_page must be positive")

        count_statement = select(func.count()).select_from(statement.order_by(None).subquery())
        total = (await self.db.execute(count_statement)).scalar_one()

        result = await self.db.execute(statement.offset((page - 1) * per_page).limit(per_page))
        return Page(items=list(result.scalars().all()), total=total, page=page, per_page=per_page)

    async def personalized_feed(self, user_id: int, page: int = 1, per_page: int = 20) -> Page[Article]:
        """
        Unread processed articles from the reader's preferred categories

        Args:
            user_id: Reader id
            page: 1-based page number
            per_page: Page size

        Returns:
            Page[Article]: Newest published first

        Raises:
            PreferencesRequiredError: The reader has no preferred categories
        """
        preferred = (
            await self.db.execute(
                select(UserPreference.category_id).where(UserPreference.user_id == user_id)
            )
        ).scalars().all()
        if not preferred:
            raise PreferencesRequiredError(f"User {user_id} has no category preferences")

        read_ids = select(ReadingHistory.article_id).where(ReadingHistory.user_id == user_id)
        statement = (
            select(Article)
            .where(Article.category_id.in_(preferred))
            .where(Article.status == ArticleStatus.PROCESSED)
            .where(Article.id.not_in(read_ids))
            .order_by(desc(Article.published_at), desc(Article.id))
        )
        return await self._paginate(statement, page, per_page)

    async def category_feed(self, category_id: int, page: int = 1, per_page: int = 20) -> Page[Article]:
        """Processed articles of one category, newest first"""
        statement = (
            select(Article)
            .where(Article.category_id == category_id)
            .where(Article.status == ArticleStatus.PROCESSED)
            .order_by(desc(Article.published_at), desc(Article.id))
        )
        return await self._paginate(statement, page, per_page)

    async def saved_feed(self, user_id: int, page: int = 1, per_page: int = 20) -> Page[Article]:
        """Articles the reader saved, whatever their status"""
        statement = (
            select(Article)
            .join(SavedArticle, SavedArticle.article_id == Article.id)
            .where(SavedArticle.user_id == user_id)
            .order_by(desc(Article.published_at), desc(Article.id))
        )
        return await self._paginate(statement, page, per_page)

    async def trending(self, limit: int = 10, days: int = 3) -> List[Article]:
        """
        Most read processed articles published within the last ``days``

        Articles nobody read are still listed, after the read ones.
        """
        since = utcnow() - timedelta(days=days)
        read_count = func.count(ReadingHistory.id)
        statement = (
            select(Article)
            .outerjoin(ReadingHistory, ReadingHistory.article_id == Article.id)
            .where(Article.status == ArticleStatus.PROCESSED)
            .where(Article.published_at >= since)
            .group_by(Article.id)
            .order_by(desc(read_count), desc(Article.published_at))
            .limit(limit)
        )
        result = await self.db.execute(statement)
        return list(result.scalars().all())

    async def related(self, article: Article, limit: int = 5) -> List[Article]:
        """Other processed articles of the same category"""
        statement = (
            select(Article)
            .where(Article.category_id == article.category_id)
            .where(Article.id != article.id)
            .where(Article.status == ArticleStatus.PROCESSED)
            .order_by(desc(Article.published_at), desc(Article.id))
            .limit(limit)
        )
        result = await self.db.execute(statement)
        return list(result.scalars().all())
