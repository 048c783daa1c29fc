from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel

from newsfeed.utils.datetime import utcnow


class User(SQLModel, table=True):
    """Reader account; authentication lives outside this service"""
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True, max_length=255)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class UserPreference(SQLModel, table=True):
    """(user, category) pair; the rows of a user define their feed filter"""
    __tablename__ = "user_preferences"
    __table_args__ = (UniqueConstraint("user_id", "category_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    category_id: int = Field(foreign_key="categories.id")


class ReadingHistory(SQLModel, table=True):
    """One row per article a user has opened, upserted on re-read"""
    __tablename__ = "reading_history"
    __table_args__ = (UniqueConstraint("user_id", "article_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    article_id: int = Field(foreign_key="articles.id", index=True)
    read_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    time_spent: Optional[int] = None  # seconds


class SavedArticle(SQLModel, table=True):
    """Bookmark; the existence of the row means saved"""
    __tablename__ = "saved_articles"
    __table_args__ = (UniqueConstraint("user_id", "article_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    article_id: int = Field(foreign_key="articles.id", index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
