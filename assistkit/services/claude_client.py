"""Claude API client wrapper."""

from __future__ import annotations

import logging

import anthropic

from assistkit.config import get_settings

logger = logging.getLogger(__name__)

_client: ClaudeClient | None = None


class ClaudeClient:
    """Wrapper around the Anthropic SDK for assistkit operations."""

    def __init__(
        self,
        api_key: str,
        model: str,
        vision_model: str | None = None,
    ):
        self.client = anthropic.AsyncAnthropic(api_key=api_key)
        self.model = model
        self.vision_model = vision_model or model

    async def ask(self, prompt: str, temperature: float = 0.2, max_tokens: int = 1024) -> str:
        """Send a single-turn prompt and return the text of the response."""
        try:
            message = await self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[{"role": "user", "content": prompt}],
            )
            return _response_text(message)
        except Exception as e:
            logger.error(f"Claude API error: {e}")
            raise

    async def read_image(
        self,
        image_base64: str,
        instruction: str,
        media_type: str = "image/png",
        temperature: float = 0.1,
        max_tokens: int = 4096,
    ) -> str:
        """Send an image plus an instruction to the vision model."""
        try:
            message = await self.client.messages.create(
                model=self.vision_model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image",
                                "source": {
                                    "type": "base64",
                                    "media_type": media_type,
                                    "data": image_base64,
                                },
                            },
                            {"type": "text", "text": instruction},
                        ],
                    }
                ],
            )
            return _response_text(message)
        except Exception as e:
            logger.error(f"Claude API error during image reading: {e}")
            raise


def _response_text(message) -> str:
    text = ""
    for block in message.content:
        if block.type == "text":
            text += block.text
    return text.strip()


def get_claude_client() -> ClaudeClient | None:
    """Get or create the global Claude client.

    Returns None if no API key is configured.
    """
    global _client
    if _client is not None:
        return _client

    settings = get_settings()
    api_key = settings.anthropic_api_key.strip()
    if not api_key:
        logger.warning("No Anthropic API key found. AI features will be unavailable.")
        return None

    _client = ClaudeClient(
        api_key=api_key,
        model=settings.claude_model,
        vision_model=settings.vision_model,
    )
    return _client


def reset_claude_client() -> None:
    global _client
    _client = None
