from newsfeed.ai.providers import OpenAIClient
from newsfeed.core.config import Settings
from .article import SingleArticleSummaryGenerator
from .base import BaseSummaryGenerator
from .mock import MockSummaryGenerator


def build_summary_generator(settings: Settings) -> BaseSummaryGenerator:
    """Resolve the summary generator variant selected by the settings"""
    if settings.USE_MOCK_SERVICES:
        return MockSummaryGenerator()
    client = OpenAIClient(
        api_key=settings.OPENAI_API_KEY,
        base_url=settings.OPENAI_BASE_URL,
        model=settings.OPENAI_MODEL,
        timeout=settings.HTTP_TIMEOUT,
    )
    return SingleArticleSummaryGenerator(
        ai_client=client,
        temperature=settings.OPENAI_TEMPERATURE,
        max_tokens=settings.OPENAI_MAX_TOKENS,
    )


__all__ = [
    'BaseSummaryGenerator',
    'MockSummaryGenerator',
    'SingleArticleSummaryGenerator',
    'build_summary_generator',
]
