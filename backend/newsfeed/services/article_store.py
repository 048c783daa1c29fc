"""
Persistence interface used by the ingestion and summarization pipeline
"""

from typing import List, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from newsfeed.models import Article, Category, Source
from newsfeed.pipeline.exceptions import DuplicateArticleError

logger = logging.getLogger(__name__)


class ArticleStore:
    """Article, source and category access bound to one session"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_active_categories(self) -> List[Category]:
        """Active categories in seed order"""
        result = await self.db.execute(
            select(Category).where(Category.is_active == True).order_by(Category.id)  # noqa: E712
        )
        return list(result.scalars().all())

    async def get_all_categories(self) -> List[Category]:
        """Whole reference set in seed order"""
        result = await self.db.execute(select(Category).order_by(Category.id))
        return list(result.scalars().all())

    async def url_exists(self, url: str) -> bool:
        """
        Check whether an article with this url is stored

        Args:
            url: Canonical article url

        Returns:
            bool: True if the url is already known
        """
        result = await self.db.execute(select(Article.id).where(Article.url == url))
        return result.first() is not None

    async def find_or_create_source(self, name: str) -> Source:
        """
        Idempotent upsert of a publisher by exact name

        The first writer wins; a concurrent insert that hits the unique
        constraint falls back to reading the existing row.

        Args:
            name: Publisher name, matched case-sensitively

        Returns:
            Source: Existing or newly created source
        """
        result = await self.db.execute(select(Source).where(Source.name == name))
        source = result.scalars().first()
        if source:
            return source

        source = Source(name=name, is_active=True)
        self.db.add(source)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            result = await self.db.execute(select(Source).where(Source.name == name))
            source = result.scalars().one()
            logger.debug(f"Source {name} was created concurrently, reusing id {source.id}")
            return source
        except Exception:
            await self.db.rollback()
            raise

        await self.db.refresh(source)
        logger.info(f"Created source: {name}")
        return source

    async def create_article(self, article: Article) -> Article:
        """
        Insert a new article

        Raises:
            DuplicateArticleError: The url unique constraint rejected the row
        """
        self.db.add(article)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if await self.url_exists(article.url):
                raise DuplicateArticleError(article.url) from e
            raise
        except Exception:
            await self.db.rollback()
            raise

        await self.db.refresh(article)
        return article

    async def get_article(self, article_id: int) -> Optional[Article]:
        return await self.db.get(Article, article_id)

    async def save_article(self, article: Article) -> Article:
        """Persist changes made to a loaded article"""
        self.db.add(article)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return article
