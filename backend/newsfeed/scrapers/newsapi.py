from typing import Dict, List, Optional
import logging

import httpx

from newsfeed.schemas.news import CategoryRef, FetchResult
from .base import BaseNewsSource

logger = logging.getLogger(__name__)


class NewsAPISource(BaseNewsSource):
    """
    Live news source backed by the NewsAPI top-headlines endpoint

    Each category is requested separately; a failing category is logged and
    contributes no articles.
    """
    ENDPOINT = "/top-headlines"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://newsapi.org/v2",
        language: str = "en",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.language = language
        self.timeout = timeout
        self.transport = transport

    async def fetch_news(self, categories: List[CategoryRef], limit: int) -> FetchResult:
        """
        Fetch top headlines for every category and merge them

        Returns:
            FetchResult: Always ok; truncated to limit
        """
        all_articles: List[Dict] = []
        page_size = self.per_category(limit, categories)

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            for category in categories:
                all_articles.extend(
                    await self.fetch_category(client, category, page_size)
                )

        logger.info(f"Fetched {len(all_articles)} articles from NewsAPI for {len(categories)} categories")
        return FetchResult(
            status="ok",
            total_results=len(all_articles),
            articles=all_articles[:limit],
        )

    async def fetch_category(
        self,
        client: httpx.AsyncClient,
        category: CategoryRef,
        page_size: int,
    ) -> List[Dict]:
        url = f"{self.base_url}{self.ENDPOINT}"
        params = {
            "apiKey": self.api_key,
            "category": category.slug,
            "language": self.language,
            "pageSize": page_size,
        }

        try:
            response = await client.get(url, params=params)
            if response.is_success:
                payload = response.json()
                articles = payload.get("articles") if isinstance(payload, dict) else None
                if isinstance(articles, list):
                    return [article for article in articles if isinstance(article, dict)]
                if articles is None and isinstance(payload, dict):
                    return []

                logger.error(
                    f"NewsAPI returned an unexpected body for category {category.slug}: {response.text}"
                )
                return []

            logger.error(
                f"NewsAPI error for category {category.slug}: "
                f"status={response.status_code}, body={response.text}"
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"NewsAPI exception for category {category.slug}: {str(e)}")

        return []
