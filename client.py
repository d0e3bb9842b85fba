"""
PPQ Assistant API Client
Sends a single-message chat completion request and returns the reply text.
"""

from typing import Dict, List, Optional

import httpx

from config import Config
from errors import TransportError


class AIClient:
    """Handles communication with the chat completion API"""

    def __init__(self, config: Config, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = config.api_token
        self.endpoint = config.api_url
        self.transport = transport

    def build_payload(self, prompt: str, model: str) -> Dict:
        messages: List[Dict] = [{"role": "user", "content": prompt}]
        return {"model": model, "messages": messages}

    async def send_message(self, prompt: str, model: str) -> str:
        """
        Send the prompt and wait for the full response.

        Args:
            prompt: User message
            model: Model identifier

        Returns:
            Content of the first choice's message

        Raises:
            TransportError: On network errors, HTTP error statuses or an unexpected body
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = self.build_payload(prompt, model)

        try:
            async with httpx.AsyncClient(timeout=None, transport=self.transport) as client:
                response = await client.post(
                    self.endpoint,
                    headers=headers,
                    json=payload
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"API returned HTTP {e.response.status_code}: {e.response.text.strip()}",
                hint="Check api_token and api_url in your config.",
            )
        except httpx.HTTPError as e:
            raise TransportError(f"API request failed: {e}")
        except ValueError as e:
            raise TransportError(f"API response is not valid JSON: {e}")

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise TransportError("Invalid API response: missing choices[0].message.content")
        if not isinstance(content, str):
            raise TransportError("Invalid API response: message content is not text")
        return content
