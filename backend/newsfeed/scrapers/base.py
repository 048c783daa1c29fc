from abc import ABC, abstractmethod
from typing import List
import math

from newsfeed.schemas.news import CategoryRef, FetchResult


class BaseNewsSource(ABC):
    """
    Base news source class that defines the interface for all providers
    """

    @abstractmethod
    async def fetch_news(self, categories: List[CategoryRef], limit: int) -> FetchResult:
        """
        Fetch raw article listings for the given categories

        Args:
            categories: Category descriptors to fetch for
            limit: Target number of articles

        Returns:
            FetchResult: Tagged ok/error result with raw provider records
        """
        pass

    @staticmethod
    def per_category(limit: int, categories: List[CategoryRef]) -> int:
        """Share of the limit each category gets, rounded up"""
        return math.ceil(limit / len(categories)) if categories else 0
