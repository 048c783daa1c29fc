"""Tests for the per-article summarization job."""

import asyncio

from newsfeed.models import Article, ArticleStatus
from newsfeed.pipeline.summarization import (
    EMPTY_SUMMARY_FALLBACK,
    NO_CONTENT_FALLBACK,
    SummarizationJob,
)
from newsfeed.services.queue import JobOutcome, JobQueueService

from conftest import StubSummaryGenerator


async def _reload(session_factory, article_id: int) -> Article:
    async with session_factory() as session:
        return await session.get(Article, article_id)


class HangingSummaryGenerator(StubSummaryGenerator):
    async def generate_summary(self, title: str, content: str) -> str:
        self.calls += 1
        await asyncio.sleep(10)
        return "never"


class TestSummarizationJob:
    """Tests for SummarizationJob.run outcomes."""

    async def test_successful_summary_marks_processed(self, session_factory, add_article) -> None:
        article = await add_article(status=ArticleStatus.PENDING, content="Body", description="Desc")
        generator = StubSummaryGenerator(summary="Generated summary.")

        result = await SummarizationJob(article.id, session_factory, generator).run()

        stored = await _reload(session_factory, article.id)
        assert result.outcome == JobOutcome.SUCCESS
        assert stored.status == ArticleStatus.PROCESSED
        assert stored.summary == "Generated summary."
        assert stored.processed_at is not None

    async def test_no_content_uses_description_without_calling_generator(
        self, session_factory, add_article
    ) -> None:
        article = await add_article(status=ArticleStatus.PENDING, content="", description="")
        generator = StubSummaryGenerator()

        result = await SummarizationJob(article.id, session_factory, generator).run()

        stored = await _reload(session_factory, article.id)
        assert result.outcome == JobOutcome.SUCCESS
        assert generator.calls == 0
        assert stored.status == ArticleStatus.PROCESSED
        assert stored.summary == NO_CONTENT_FALLBACK

    async def test_description_is_summarized_when_content_missing(self, session_factory, add_article) -> None:
        article = await add_article(status=ArticleStatus.PENDING, content=None, description="Only desc")
        generator = StubSummaryGenerator(summary="From description.")

        await SummarizationJob(article.id, session_factory, generator).run()

        stored = await _reload(session_factory, article.id)
        assert generator.calls == 1
        assert stored.summary == "From description."

    async def test_empty_summary_marks_partial(self, session_factory, add_article) -> None:
        article = await add_article(status=ArticleStatus.PENDING, content="Body", description="Desc")
        generator = StubSummaryGenerator(summary="")

        result = await SummarizationJob(article.id, session_factory, generator).run()

        stored = await _reload(session_factory, article.id)
        assert result.outcome == JobOutcome.SOFT_FAILURE
        assert stored.status == ArticleStatus.PARTIAL
        assert stored.summary == "Desc"

    async def test_empty_summary_without_description_uses_fallback(
        self, session_factory, add_article
    ) -> None:
        article = await add_article(status=ArticleStatus.PENDING, content="Body", description="")

        await SummarizationJob(article.id, session_factory, StubSummaryGenerator(summary="")).run()

        stored = await _reload(session_factory, article.id)
        assert stored.status == ArticleStatus.PARTIAL
        assert stored.summary == EMPTY_SUMMARY_FALLBACK

    async def test_generator_error_marks_failed_and_asks_for_retry(
        self, session_factory, add_article
    ) -> None:
        article = await add_article(status=ArticleStatus.PENDING, content="Body")
        generator = StubSummaryGenerator(error=RuntimeError("model unavailable"))

        result = await SummarizationJob(article.id, session_factory, generator).run()

        stored = await _reload(session_factory, article.id)
        assert result.outcome == JobOutcome.RETRYABLE_FAILURE
        assert stored.status == ArticleStatus.FAILED
        assert stored.summary is None
        assert stored.processed_at is not None

    async def test_missing_article_is_permanent_failure(self, session_factory, categories) -> None:
        result = await SummarizationJob(9999, session_factory, StubSummaryGenerator()).run()

        assert result.outcome == JobOutcome.PERMANENT_FAILURE


class TestSummarizationRetries:
    """Tests for summarization jobs run through the queue."""

    async def test_hard_failure_is_attempted_exactly_max_attempts(
        self, session_factory, add_article
    ) -> None:
        article = await add_article(status=ArticleStatus.PENDING, content="Body")
        generator = StubSummaryGenerator(error=RuntimeError("always down"))
        queue = JobQueueService(max_attempts=3)

        result = await queue.run_job(SummarizationJob(article.id, session_factory, generator))

        stored = await _reload(session_factory, article.id)
        assert generator.calls == 3
        assert result.attempts == 3
        assert stored.status == ArticleStatus.FAILED

    async def test_retry_after_failure_can_succeed(self, session_factory, add_article) -> None:
        article = await add_article(status=ArticleStatus.PENDING, content="Body")

        class FlakyGenerator(StubSummaryGenerator):
            async def generate_summary(self, title: str, content: str) -> str:
                self.calls += 1
                if self.calls == 1:
                    raise RuntimeError("first call fails")
                return "Recovered summary."

        generator = FlakyGenerator()
        result = await JobQueueService(max_attempts=3).run_job(
            SummarizationJob(article.id, session_factory, generator)
        )

        stored = await _reload(session_factory, article.id)
        assert result.outcome == JobOutcome.SUCCESS
        assert stored.status == ArticleStatus.PROCESSED
        assert stored.summary == "Recovered summary."

    async def test_timed_out_attempt_marks_failed(self, session_factory, add_article) -> None:
        article = await add_article(status=ArticleStatus.PENDING, content="Body")
        queue = JobQueueService(max_attempts=1, attempt_timeout=0.5)

        result = await queue.run_job(
            SummarizationJob(article.id, session_factory, HangingSummaryGenerator())
        )

        stored = await _reload(session_factory, article.id)
        assert result.outcome == JobOutcome.RETRYABLE_FAILURE
        assert stored.status == ArticleStatus.FAILED
