from sqlmodel import SQLModel

from .article import (
    Article,
    ArticleStatus,
    Category,
    Source,
)

from .user import (
    ReadingHistory,
    SavedArticle,
    User,
    UserPreference,
)

__all__ = [
    'SQLModel',

    # Article models
    'Article',
    'ArticleStatus',
    'Category',
    'Source',

    # Reader models
    'ReadingHistory',
    'SavedArticle',
    'User',
    'UserPreference',
]
