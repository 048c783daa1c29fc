from typing import Any, Dict, Optional
import logging

import httpx

logger = logging.getLogger(__name__)


class OpenAIClient:
    """OpenAI chat-completions client"""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-3.5-turbo",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_endpoint = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.transport = transport
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    async def get_completion(
        self,
        messages: list,
        temperature: float = 0.7,
        max_tokens: Optional[int] = 150,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Get AI completion result

        Args:
            messages: List of conversation messages
            temperature: Temperature parameter
            max_tokens: Maximum number of tokens
            **kwargs: Additional parameters

        Returns:
            Dict[str, Any]: API response result

        Raises:
            httpx.HTTPError: Transport failure or non-success status
        """
        api_url = f"{self.api_endpoint}/chat/completions"
        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            **kwargs
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(api_url, headers=self.headers, json=payload)
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                f"OpenAI API error: status={e.response.status_code}, body={e.response.text}"
            )
            raise
        except httpx.HTTPError as e:
            logger.error(f"OpenAI API call failed: {str(e)}")
            raise
