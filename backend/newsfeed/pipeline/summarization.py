"""
Per-article summarization job
"""

from typing import Optional
import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from newsfeed.ai.services.summary_generator import BaseSummaryGenerator
from newsfeed.models import Article, ArticleStatus
from newsfeed.services.article_store import ArticleStore
from newsfeed.services.queue import Job, JobResult
from newsfeed.utils.datetime import utcnow

logger = logging.getLogger(__name__)

NO_CONTENT_FALLBACK = "No summary available."
EMPTY_SUMMARY_FALLBACK = "Summary generation failed."


class SummarizationJob(Job):
    """Generate and store the summary of one article"""

    def __init__(
        self,
        article_id: int,
        session_factory: async_sessionmaker[AsyncSession],
        summary_generator: BaseSummaryGenerator,
    ):
        self.article_id = article_id
        self.session_factory = session_factory
        self.summary_generator = summary_generator
        self.name = f"summarize-article-{article_id}"

    async def run(self) -> JobResult:
        """
        Summarize the article and move it to a terminal status

        Returns:
            JobResult: success (processed), soft_failure (partial),
                       retryable_failure (failed) or permanent_failure (missing article)
        """
        async with self.session_factory() as db:
            store = ArticleStore(db)
            article = await store.get_article(self.article_id)
            if article is None:
                logger.error(f"Article {self.article_id} not found, nothing to summarize")
                return JobResult.permanent_failure(f"Article {self.article_id} not found")

            text = article.content or article.description

            try:
                if not text:
                    logger.warning(f"No content available for article {article.id}")
                    self._complete(
                        article,
                        article.description or NO_CONTENT_FALLBACK,
                        ArticleStatus.PROCESSED,
                    )
                    await store.save_article(article)
                    return JobResult.success("no content, description used")

                summary = await self.summary_generator.generate_summary(article.title, text)

                if summary:
                    status = ArticleStatus.PROCESSED
                else:
                    summary = article.description or EMPTY_SUMMARY_FALLBACK
                    status = ArticleStatus.PARTIAL

                self._complete(article, summary, status)
                await store.save_article(article)

            except Exception as e:
                logger.error(f"Error generating summary for article {self.article_id}: {str(e)}")
                await self._mark_failed(store, article)
                return JobResult.retryable_failure(str(e))

        logger.info(f"Summary generated for article {self.article_id} ({status.value})")
        if status == ArticleStatus.PARTIAL:
            return JobResult.soft_failure("empty summary, description used")
        return JobResult.success()

    async def on_failure(self, error: BaseException) -> None:
        """Mark the article failed after a timed out or crashed attempt"""
        async with self.session_factory() as db:
            store = ArticleStore(db)
            article = await store.get_article(self.article_id)
            if article is not None:
                await self._mark_failed(store, article)

    @staticmethod
    def _complete(article: Article, summary: str, status: ArticleStatus) -> None:
        article.summary = summary
        article.status = status
        article.processed_at = article.processed_at or utcnow()

    async def _mark_failed(self, store: ArticleStore, article: Article) -> Optional[Article]:
        try:
            # Drop unsaved changes and reload attributes expired by a rollback
            await store.db.refresh(article)
            article.status = ArticleStatus.FAILED
            article.processed_at = article.processed_at or utcnow()
            return await store.save_article(article)
        except Exception as e:
            logger.error(f"Could not mark article {self.article_id} as failed: {str(e)}")
            return None
