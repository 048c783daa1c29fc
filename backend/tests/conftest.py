"""Shared fixtures: a throwaway SQLite database per test and stub services."""

from typing import Dict, List, Optional

import pytest

from newsfeed.ai.services.summary_generator import BaseSummaryGenerator
from newsfeed.db.seed import seed_categories, seed_demo_user
from newsfeed.db.session import build_engine, build_session_factory, init_db
from newsfeed.models import Article, ArticleStatus, Category, User
from newsfeed.schemas.news import CategoryRef, FetchResult
from newsfeed.scrapers import BaseNewsSource
from newsfeed.services.queue import JobQueueService


class StubNewsSource(BaseNewsSource):
    """Returns a fixed list of records, or an error result"""

    def __init__(self, articles: Optional[List[Dict]] = None, error: Optional[str] = None):
        self.articles = articles or []
        self.error = error
        self.calls = 0

    async def fetch_news(self, categories: List[CategoryRef], limit: int) -> FetchResult:
        self.calls += 1
        if self.error:
            return FetchResult(status="error", error=self.error)
        return FetchResult(status="ok", total_results=len(self.articles), articles=self.articles[:limit])


class StubSummaryGenerator(BaseSummaryGenerator):
    """Returns a fixed summary, or raises the given error on every call"""

    def __init__(self, summary: str = "A short summary.", error: Optional[Exception] = None):
        self.summary = summary
        self.error = error
        self.calls = 0

    async def generate_summary(self, title: str, content: str) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.summary


def make_record(url: str, title: str = "Generic headline", **overrides) -> Dict:
    """NewsAPI shaped article record"""
    record = {
        "source": {"id": None, "name": "Example Wire"},
        "author": "Jane Doe",
        "title": title,
        "description": "Short description",
        "url": url,
        "urlToImage": None,
        "publishedAt": "2024-05-01T12:00:00Z",
        "content": "Full article content.",
    }
    record.update(overrides)
    return record


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def categories(session_factory) -> List[Category]:
    async with session_factory() as session:
        return await seed_categories(session)


@pytest.fixture
async def user(session_factory, categories) -> User:
    async with session_factory() as session:
        return await seed_demo_user(session)


@pytest.fixture
def job_queue():
    return JobQueueService(max_workers=2, max_attempts=3, attempt_timeout=5, retry_delay=0)


@pytest.fixture
def add_article(session_factory, categories):
    """Insert an article directly, bypassing the pipeline"""
    counter = {"n": 0}

    async def _add(
        category_slug: str = "technology",
        status: ArticleStatus = ArticleStatus.PROCESSED,
        **fields,
    ) -> Article:
        counter["n"] += 1
        category = next(c for c in categories if c.slug == category_slug)
        fields.setdefault("title", f"Article {counter['n']}")
        fields.setdefault("url", f"https://example.com/fixture-{counter['n']}")
        fields.setdefault("summary", "Summary" if status == ArticleStatus.PROCESSED else None)
        article = Article(category_id=category.id, status=status, **fields)
        async with session_factory() as session:
            session.add(article)
            await session.commit()
            await session.refresh(article)
        return article

    return _add
