"""
Reader interactions: reading history and saved articles
"""

from typing import Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from newsfeed.models import Article, ReadingHistory, SavedArticle
from newsfeed.pipeline.exceptions import ArticleNotFoundError
from newsfeed.utils.datetime import utcnow

logger = logging.getLogger(__name__)


class ReadingService:
    """Per-reader article state"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _require_article(self, article_id: int) -> Article:
        article = await self.db.get(Article, article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)
        return article

    async def _get_history(self, user_id: int, article_id: int) -> Optional[ReadingHistory]:
        result = await self.db.execute(
            select(ReadingHistory)
            .where(ReadingHistory.user_id == user_id)
            .where(ReadingHistory.article_id == article_id)
        )
        return result.scalars().first()

    async def _get_saved(self, user_id: int, article_id: int) -> Optional[SavedArticle]:
        result = await self.db.execute(
            select(SavedArticle)
            .where(SavedArticle.user_id == user_id)
            .where(SavedArticle.article_id == article_id)
        )
        return result.scalars().first()

    async def mark_as_read(self, user_id: int, article_id: int, time_spent: int = 0) -> ReadingHistory:
        """
        Record that the reader opened an article

        A repeated read refreshes the existing row instead of adding one.

        Args:
            user_id: Reader id
            article_id: Article id
            time_spent: Seconds spent on the article

        Returns:
            ReadingHistory: The stored history row

        Raises:
            ArticleNotFoundError: Unknown article
        """
        await self._require_article(article_id)

        history = await self._get_history(user_id, article_id)
        if history is None:
            history = ReadingHistory(user_id=user_id, article_id=article_id, time_spent=time_spent)
        else:
            history.read_at = utcnow()
            history.time_spent = time_spent
        self.db.add(history)

        try:
            await self.db.commit()
        except IntegrityError:
            # A concurrent first read won; update that row instead
            await self.db.rollback()
            history = await self._get_history(user_id, article_id)
            history.read_at = utcnow()
            history.time_spent = time_spent
            await self.db.commit()

        return history

    async def toggle_save(self, user_id: int, article_id: int) -> bool:
        """
        Save the article, or unsave it if already saved

        Returns:
            bool: True if the article is saved after the call
        """
        await self._require_article(article_id)

        saved = await self._get_saved(user_id, article_id)
        if saved is not None:
            await self.db.delete(saved)
            await self.db.commit()
            logger.info(f"User {user_id} unsaved article {article_id}")
            return False

        self.db.add(SavedArticle(user_id=user_id, article_id=article_id))
        await self.db.commit()
        logger.info(f"User {user_id} saved article {article_id}")
        return True

    async def is_read(self, user_id: int, article_id: int) -> bool:
        return await self._get_history(user_id, article_id) is not None

    async def is_saved(self, user_id: int, article_id: int) -> bool:
        return await self._get_saved(user_id, article_id) is not None
