"""
Base class for summary generators
"""

from abc import ABC, abstractmethod


class BaseSummaryGenerator(ABC):
    """Base class for all summary generators"""

    @abstractmethod
    async def generate_summary(self, title: str, content: str) -> str:
        """
        Generate a short summary of an article

        Args:
            title: Article title
            content: Article body, or its description when the body is empty

        Returns:
            str: Generated summary; an empty string means no summary was produced
        """
        pass
