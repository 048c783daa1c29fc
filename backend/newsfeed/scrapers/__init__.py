from newsfeed.core.config import Settings
from .base import BaseNewsSource
from .mock import MockNewsSource
from .newsapi import NewsAPISource


def build_news_source(settings: Settings) -> BaseNewsSource:
    """Resolve the news source variant selected by the settings"""
    if settings.USE_MOCK_SERVICES:
        return MockNewsSource()
    return NewsAPISource(
        api_key=settings.NEWSAPI_KEY,
        base_url=settings.NEWSAPI_BASE_URL,
        language=settings.NEWSAPI_LANGUAGE,
        timeout=settings.HTTP_TIMEOUT,
    )


__all__ = [
    'BaseNewsSource',
    'MockNewsSource',
    'NewsAPISource',
    'build_news_source',
]
