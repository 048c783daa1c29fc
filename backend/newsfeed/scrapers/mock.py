from datetime import timedelta
from pathlib import Path
from typing import Dict, List, Optional
import json
import logging
import random
import uuid

from newsfeed.schemas.news import CategoryRef, FetchResult
from newsfeed.utils.datetime import utcnow
from .base import BaseNewsSource

logger = logging.getLogger(__name__)

MOCK_DATA_FILE = Path(__file__).parent / "mock_data" / "article_templates.json"
FALLBACK_SLUG = "technology"


def load_mock_data(path: Path = MOCK_DATA_FILE) -> Dict:
    """
    Load article templates and images from JSON file
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Error loading mock data from {path}: {str(e)}")
        return {"templates": {}, "images": {}}


class MockNewsSource(BaseNewsSource):
    """
    Offline news source that synthesizes articles from fixed templates

    Pass a seeded ``random.Random`` to get the same articles, urls included,
    on every run.
    """

    def __init__(self, rng: Optional[random.Random] = None, data: Optional[Dict] = None):
        self.rng = rng or random.Random()
        data = data if data is not None else load_mock_data()
        self.templates: Dict[str, List[Dict]] = data.get("templates", {})
        self.images: Dict[str, str] = data.get("images", {})

    async def fetch_news(self, categories: List[CategoryRef], limit: int) -> FetchResult:
        articles = self.generate_mock_articles(categories, limit)
        return FetchResult(status="ok", total_results=len(articles), articles=articles)

    def generate_mock_articles(self, categories: List[CategoryRef], limit: int) -> List[Dict]:
        articles = []
        count = self.per_category(limit, categories)

        for category in categories:
            category_templates = self.templates.get(category.slug) or self.templates.get(FALLBACK_SLUG, [])
            if not category_templates:
                logger.warning(f"No mock templates for category {category.slug}")
                continue

            for _ in range(count):
                template = self.rng.choice(category_templates)
                published_at = utcnow() - timedelta(hours=self.rng.randint(1, 48))

                articles.append({
                    "source": {"id": None, "name": template["source"]},
                    "author": template["author"],
                    "title": template["title"],
                    "description": template["description"],
                    "url": f"https://example.com/article-{self._unique_token()}",
                    "urlToImage": self.get_image(category.slug),
                    "publishedAt": published_at.isoformat(),
                    "content": template["content"],
                })

        return articles[:limit]

    def get_image(self, slug: str) -> Optional[str]:
        return self.images.get(slug) or self.images.get(FALLBACK_SLUG)

    def _unique_token(self) -> str:
        return uuid.UUID(int=self.rng.getrandbits(128), version=4).hex
