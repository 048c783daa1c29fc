"""
Keyword based category classifier
"""

from typing import Dict, List, Optional, Sequence
import logging

from newsfeed.models import Category

logger = logging.getLogger(__name__)

# Declaration order is the tie-break: the first category with a hit wins
CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    "technology": ["tech", "software", "ai", "computer", "digital", "app", "startup"],
    "business": ["business", "economy", "finance", "market", "stock", "investment"],
    "sports": ["sport", "game", "player", "team", "championship", "athlete"],
    "health": ["health", "medical", "doctor", "disease", "treatment", "fitness"],
    "science": ["science", "research", "study", "scientist", "discovery"],
    "entertainment": ["movie", "film", "music", "celebrity", "entertainment", "actor"],
}

DEFAULT_CATEGORY_SLUG = "technology"


class CategoryClassifier:
    """
    Map free text to a category by plain substring lookup.

    This is an approximate heuristic: there is no tokenisation and no score,
    so short keywords match inside longer words ("ai" in "said").
    """

    def __init__(
        self,
        categories: Sequence[Category],
        keywords: Optional[Dict[str, List[str]]] = None,
        default_slug: str = DEFAULT_CATEGORY_SLUG,
    ):
        if not categories:
            raise ValueError("Classifier needs at least one category")
        self.categories = list(categories)
        self.by_slug = {category.slug: category for category in self.categories}
        # Ids are read once; a session rollback expires the ORM instances
        self.ids_by_slug = {slug: category.id for slug, category in self.by_slug.items()}
        self.first_slug = self.categories[0].slug
        self.keywords = keywords if keywords is not None else CATEGORY_KEYWORDS
        self.default_slug = default_slug

    def match_slug(self, text: str) -> Optional[str]:
        """
        First known category slug with a keyword hit

        Slugs missing from the reference set are passed over.
        """
        text = text.lower()
        for slug, terms in self.keywords.items():
            if slug not in self.ids_by_slug:
                continue
            if any(term in text for term in terms):
                return slug
        return None

    def classify_category(self, text: str) -> Category:
        slug = self.match_slug(text)
        if slug is not None:
            return self.by_slug[slug]

        default = self.by_slug.get(self.default_slug)
        if default is not None:
            return default

        logger.debug(f"Default category {self.default_slug} missing, using {self.first_slug}")
        return self.categories[0]

    def classify(self, text: str) -> int:
        """
        Classify text into a category id

        Args:
            text: Usually title and description joined by a space

        Returns:
            int: Id of the matched, default or first category
        """
        slug = self.match_slug(text)
        if slug is None:
            slug = self.default_slug if self.default_slug in self.ids_by_slug else self.first_slug
        return self.ids_by_slug[slug]
