from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlalchemy import DateTime, Enum as SAEnum
from sqlmodel import Field, Relationship, SQLModel

from newsfeed.utils.datetime import utcnow


class ArticleStatus(str, Enum):
    PENDING = "pending"        # Waiting for a summary
    PROCESSED = "processed"    # Summary generated
    PARTIAL = "partial"        # Summary source returned nothing, description used instead
    FAILED = "failed"          # Summary generation raised


class Category(SQLModel, table=True):
    """Topical classification, seeded once and read-only at runtime"""
    __tablename__ = "categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    slug: str = Field(unique=True, index=True, max_length=100)
    description: str = ""
    icon: str = ""
    is_active: bool = Field(default=True, index=True)

    articles: List["Article"] = Relationship(back_populates="category")


class Source(SQLModel, table=True):
    """Originating publication, created on first sighting during ingestion"""
    __tablename__ = "sources"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=255)
    is_active: bool = Field(default=True)

    articles: List["Article"] = Relationship(back_populates="source")


class Article(SQLModel, table=True):
    """Ingested news item and its summarization lifecycle"""
    __tablename__ = "articles"

    id: Optional[int] = Field(default=None, primary_key=True)
    category_id: int = Field(foreign_key="categories.id", index=True)
    source_id: Optional[int] = Field(default=None, foreign_key="sources.id")

    # Content
    title: str = Field(max_length=500)
    description: str = ""
    content: Optional[str] = None
    summary: Optional[str] = None

    # The url is the dedupe key; uniqueness is enforced by the database
    url: str = Field(unique=True, max_length=1000)
    image_url: Optional[str] = Field(default=None, max_length=1000)
    author: str = "Unknown"
    published_at: datetime = Field(
        default_factory=utcnow, sa_type=DateTime(timezone=True), index=True
    )

    # Lifecycle
    status: ArticleStatus = Field(
        default=ArticleStatus.PENDING,
        index=True,
        # Persist the lowercase values, not the member names
        sa_type=SAEnum(
            ArticleStatus,
            name="article_status",
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [status.value for status in statuses],
        ),
    )
    processed_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": utcnow},
    )

    category: Optional[Category] = Relationship(
        back_populates="articles", sa_relationship_kwargs={"lazy": "selectin"}
    )
    source: Optional[Source] = Relationship(
        back_populates="articles", sa_relationship_kwargs={"lazy": "selectin"}
    )
