"""Tests for schema creation, seeding and settings."""

import pytest
from sqlalchemy import text
from sqlmodel import func, select

from newsfeed.core.config import Settings
from newsfeed.db.seed import CATEGORY_SEED, seed_categories, seed_demo_user
from newsfeed.db.session import init_db
from newsfeed.models import Article, ArticleStatus, Category, User


class TestSeed:
    """Tests for reference data seeding."""

    async def test_seeding_is_idempotent(self, session_factory) -> None:
        async with session_factory() as session:
            await seed_categories(session)
            categories = await seed_categories(session)
            await seed_demo_user(session)
            await seed_demo_user(session)

            category_count = (await session.execute(select(func.count()).select_from(Category))).scalar_one()
            user_count = (await session.execute(select(func.count()).select_from(User))).scalar_one()

        assert category_count == len(CATEGORY_SEED) == 6
        assert [c.slug for c in categories] == [data["slug"] for data in CATEGORY_SEED]
        assert user_count == 1

    async def test_init_db_rejects_unknown_table(self, engine) -> None:
        with pytest.raises(ValueError):
            await init_db("nope", bind=engine)


class TestSettings:
    """Tests for derived settings."""

    def test_sqlite_uri_by_default(self) -> None:
        settings = Settings(POSTGRES_SERVER=None, SQLITE_PATH="feed.db")

        assert settings.SQLALCHEMY_DATABASE_URI == "sqlite+aiosqlite:///feed.db"

    def test_postgres_uri_when_server_set(self) -> None:
        settings = Settings(
            POSTGRES_SERVER="db",
            POSTGRES_USER="app",
            POSTGRES_PASSWORD="secret",
            POSTGRES_DB="news",
        )

        assert settings.SQLALCHEMY_DATABASE_URI == "postgresql+psycopg://app:secret@db:5432/news"


class TestArticleStatusColumn:
    """Tests for the persisted form of the article status."""

    async def test_status_is_stored_as_lowercase_value(self, session_factory, categories) -> None:
        async with session_factory() as session:
            session.add(Article(category_id=categories[0].id, title="A", url="https://news.test/status"))
            await session.commit()

            raw = (await session.execute(text("SELECT status FROM articles"))).scalar_one()
            article = (await session.execute(select(Article))).scalars().one()

        assert raw == "pending"
        assert article.status == ArticleStatus.PENDING
