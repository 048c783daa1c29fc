"""
News ingestion pipeline: fetch, dedupe, classify, persist, enqueue
"""

from typing import Optional
import logging

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from newsfeed.ai.services.summary_generator import BaseSummaryGenerator, build_summary_generator
from newsfeed.core.config import Settings
from newsfeed.models import Article, ArticleStatus
from newsfeed.schemas.news import CategoryRef, FetchResult, RawArticle
from newsfeed.schemas.pipeline import IngestionResult
from newsfeed.scrapers import BaseNewsSource, build_news_source
from newsfeed.services.article_store import ArticleStore
from newsfeed.services.queue import JobQueueService
from .classifier import CategoryClassifier
from .exceptions import DuplicateArticleError, NewsFetchError
from .summarization import SummarizationJob

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Fetch a batch of articles and store the new ones for summarization"""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        news_source: BaseNewsSource,
        summary_generator: BaseSummaryGenerator,
        job_queue: JobQueueService,
    ):
        self.session_factory = session_factory
        self.news_source = news_source
        self.summary_generator = summary_generator
        self.job_queue = job_queue

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        session_factory: async_sessionmaker[AsyncSession],
        job_queue: JobQueueService,
    ) -> "IngestionPipeline":
        """Build a pipeline with the mock or live services the settings select"""
        return cls(
            session_factory=session_factory,
            news_source=build_news_source(settings),
            summary_generator=build_summary_generator(settings),
            job_queue=job_queue,
        )

    async def run(self, limit: int = 50) -> IngestionResult:
        """
        Fetch up to ``limit`` articles and store the ones not seen before

        Args:
            limit: Target number of articles to fetch

        Returns:
            IngestionResult: Stored and skipped counts

        Raises:
            NewsFetchError: The news source failed for the whole batch
        """
        if limit < 1:
            raise ValueError("limit must be a positive integer")

        result = IngestionResult()

        async with self.session_factory() as db:
            store = ArticleStore(db)

            categories = await store.get_active_categories()
            if not categories:
                logger.warning("No active categories found for news fetching")
                return result

            fetch_result = await self._fetch(
                [CategoryRef(id=category.id, slug=category.slug) for category in categories],
                limit,
            )
            classifier = CategoryClassifier(await store.get_all_categories())

            for article_data in fetch_result.articles:
                try:
                    article = await self._store_article(store, classifier, article_data)
                except DuplicateArticleError as e:
                    logger.info(f"Article stored concurrently, skipping: {e.url}")
                    result.skipped += 1
                    continue
                except (ValidationError, ValueError, TypeError, AttributeError) as e:
                    logger.error(f"Malformed article record {self._record_url(article_data)}: {str(e)}")
                    continue
                except Exception as e:
                    logger.error(f"Error storing article {self._record_url(article_data)}: {str(e)}")
                    # Leave the session usable for the remaining records
                    await store.db.rollback()
                    continue

                if article is None:
                    result.skipped += 1
                    continue

                await self.job_queue.enqueue(
                    SummarizationJob(article.id, self.session_factory, self.summary_generator)
                )
                result.stored += 1

        logger.info(f"News fetch completed: stored={result.stored}, skipped={result.skipped}")
        return result

    async def _fetch(self, categories: list[CategoryRef], limit: int) -> FetchResult:
        try:
            fetch_result = await self.news_source.fetch_news(categories, limit)
        except Exception as e:
            logger.error(f"Failed to fetch news: {str(e)}")
            raise NewsFetchError(f"News source raised: {str(e)}") from e

        if fetch_result.status != "ok":
            payload = fetch_result.model_dump()
            logger.error(f"Failed to fetch news: {payload}")
            raise NewsFetchError(fetch_result.error or "News source returned an error", payload)

        return fetch_result

    async def _store_article(
        self,
        store: ArticleStore,
        classifier: CategoryClassifier,
        article_data: dict,
    ) -> Optional[Article]:
        """
        Persist one provider record as a pending article

        Returns:
            Optional[Article]: The new article, None if its url is already known
        """
        raw = RawArticle.model_validate(article_data)

        if await store.url_exists(raw.url):
            return None

        source = await store.find_or_create_source(raw.source.name) if raw.source.name else None
        category_id = classifier.classify(f"{raw.title} {raw.description or ''}")

        article = Article(
            category_id=category_id,
            source_id=source.id if source else None,
            title=raw.title,
            description=raw.description or "",
            content=raw.content or "",
            url=raw.url,
            image_url=raw.url_to_image,
            author=raw.author or "Unknown",
            published_at=raw.published_at,
            status=ArticleStatus.PENDING,
        )
        return await store.create_article(article)

    @staticmethod
    def _record_url(article_data) -> str:
        if isinstance(article_data, dict):
            return str(article_data.get("url", "unknown"))
        return "unknown"
