import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from newsfeed.core.config import settings
from newsfeed.models import (
    Article,
    Category,
    ReadingHistory,
    SavedArticle,
    Source,
    User,
    UserPreference,
)

# Configure logging
logger = logging.getLogger(__name__)

# Define table mappings
TABLE_MAPPINGS = {
    'categories': Category.__table__,
    'sources': Source.__table__,
    'articles': Article.__table__,
    'users': User.__table__,
    'user_preferences': UserPreference.__table__,
    'reading_history': ReadingHistory.__table__,
    'saved_articles': SavedArticle.__table__,
}


def build_engine(database_uri: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for the given database URI"""
    return create_async_engine(database_uri, echo=echo, pool_pre_ping=True)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the given engine"""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Create async engine
engine = build_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    echo=settings.ENVIRONMENT == "local" and settings.DEBUG_SQL,  # Only echo locally with DEBUG_SQL=True
)

# Create async session factory
async_session = build_session_factory(engine)


# Initialize database
async def init_db(table_name: str | None = None, bind: AsyncEngine | None = None) -> None:
    """
    Create tables if they don't exist

    Args:
        table_name: If specified, only create the specified table
        bind: Engine to use, defaults to the application engine

    Note: This will NOT update existing table structures
    """
    bind = bind or engine
    async with bind.begin() as conn:
        if table_name:
            if table_name.lower() not in TABLE_MAPPINGS:
                raise ValueError(f"Invalid table name. Must be one of: {', '.join(TABLE_MAPPINGS.keys())}")

            table = TABLE_MAPPINGS[table_name.lower()]
            await conn.run_sync(SQLModel.metadata.create_all, tables=[table])
            logger.info(f"Created table: {table_name}")
        else:
            await conn.run_sync(SQLModel.metadata.create_all)
            logger.info("Created all database tables")


# Cleanup database connections
async def close_db() -> None:
    """
    Clean up database connections
    """
    logger.info("Closing database connections")
    await engine.dispose()
