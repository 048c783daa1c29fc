"""
Article related schemas
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from newsfeed.models.article import ArticleStatus

T = TypeVar("T")


class CategoryResponse(BaseModel):
    """Category reference data"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    description: str = ""
    icon: str = ""
    is_active: bool = True


class SourceResponse(BaseModel):
    """Publisher"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class ArticleResponse(BaseModel):
    """Article as shown in feeds"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str = ""
    summary: Optional[str] = None
    url: str
    image_url: Optional[str] = None
    author: str
    published_at: datetime
    status: ArticleStatus
    category: Optional[CategoryResponse] = None
    source: Optional[SourceResponse] = None


class ArticleDetailResponse(BaseModel):
    """Single article with the reader's state and related articles"""
    article: ArticleResponse
    content: Optional[str] = None
    is_read: bool
    is_saved: bool
    related: List[ArticleResponse]


@dataclass
class Page(Generic[T]):
    """One page of a paginated query"""
    items: List[T]
    total: int
    page: int
    per_page: int

    @property
    def pages(self) -> int:
        return (self.total + self.per_page - 1) // self.per_page if self.per_page else 0


class ArticlePageResponse(BaseModel):
    """Paginated article listing"""
    items: List[ArticleResponse]
    total: int
    page: int
    per_page: int
    pages: int

    @classmethod
    def from_page(cls, page: Page) -> "ArticlePageResponse":
        return cls(
            items=[ArticleResponse.model_validate(article) for article in page.items],
            total=page.total,
            page=page.page,
            per_page=page.per_page,
            pages=page.pages,
        )


class MarkReadRequest(BaseModel):
    """Body of the mark-as-read call"""
    time_spent: int = Field(default=0, ge=0, description="Seconds spent on the article")


class ReadResponse(BaseModel):
    success: bool = True


class SaveResponse(BaseModel):
    saved: bool
