"""
Single article summary generator backed by a chat-completion API
"""

from typing import Optional
import logging

from newsfeed.ai.providers import OpenAIClient
from .base import BaseSummaryGenerator
from .prompts.article import build_summary_prompt

logger = logging.getLogger(__name__)


class SingleArticleSummaryGenerator(BaseSummaryGenerator):
    """Generator for single article summaries"""

    def __init__(
        self,
        ai_client: OpenAIClient,
        temperature: float = 0.7,
        max_tokens: int = 150,
    ):
        self.ai_client = ai_client
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def generate_summary(self, title: str, content: str) -> str:
        """
        Generate summary for a single article

        Never raises: any failure is logged and reported as an empty summary.
        """
        try:
            messages = [
                {
                    "role": "user",
                    "content": build_summary_prompt(title, content)
                }
            ]

            response = await self.ai_client.get_completion(
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens
            )
            summary: Optional[str] = response["choices"][0]["message"]["content"]
            return (summary or "").strip()

        except Exception as e:
            logger.error(f"Error generating article summary: {str(e)}")
            return ""
