"""
Provider-facing news schemas
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from newsfeed.utils.datetime import parse_datetime


class CategoryRef(BaseModel):
    """Category descriptor handed to a news source"""
    id: int
    slug: str


class RawArticleSource(BaseModel):
    """Publisher block of a provider record"""
    id: Optional[str] = None
    name: Optional[str] = None


class RawArticle(BaseModel):
    """Article record as returned by a news provider (NewsAPI field names)"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str
    url: str
    description: Optional[str] = None
    content: Optional[str] = None
    url_to_image: Optional[str] = Field(default=None, alias="urlToImage")
    author: Optional[str] = None
    published_at: Optional[datetime] = Field(default=None, alias="publishedAt", validate_default=True)
    source: RawArticleSource = Field(default_factory=RawArticleSource)

    @field_validator("published_at", mode="before")
    @classmethod
    def _parse_published_at(cls, value):
        # Missing timestamps are stamped with the ingestion time
        return parse_datetime(value)


class FetchResult(BaseModel):
    """Outcome of one news source call"""
    status: Literal["ok", "error"] = "ok"
    total_results: int = 0
    articles: List[dict] = []
    error: Optional[str] = None
