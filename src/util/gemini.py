"""
Gemini API utilities for the itinerary map generator.

Centralized module for all Google GenAI (Gemini) interactions.
"""

import asyncio
import base64
from typing import Optional, Any
from google import genai
from pydantic import BaseModel

from config import get_gemini_api_key
from exceptions import ConfigurationError


class GeneratedImage(BaseModel):
    """Inline image payload returned by an image model."""

    data: bytes
    mime_type: str = "image/png"

    def to_data_url(self) -> str:
        """Return the payload as an embeddable data: URL."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class GeminiAPI:
    """Wrapper holding a configured genai client."""

    def __init__(self, api_key: Optional[str] = None):
        """
        Initialize Gemini API client.

        Args:
            api_key: API key (if None, loads from environment)
        """
        self._configured = False
        self.client = None

        if api_key:
            self._configure_with_key(api_key)
        else:
            self._configure_from_env()

    def _configure_from_env(self):
        """Read the API key from the environment (.env is loaded by config)."""
        try:
            api_key = get_gemini_api_key()
        except KeyError as e:
            raise ConfigurationError(
                "Gemini API key not found. Set GEMINI_API_KEY in .env file or pass api_key parameter."
            ) from e

        self._configure_with_key(api_key)

    def _configure_with_key(self, api_key: str):
        """Configure Gemini with provided API key."""
        self.client = genai.Client(api_key=api_key)
        self._configured = True

    def get_client(self) -> genai.Client:
        """
        Return the configured genai client.

        Raises:
            RuntimeError: If the wrapper was never configured
        """
        if not self._configured:
            raise RuntimeError("Gemini API not configured.")

        return self.client


def extract_inline_image(response: Any) -> Optional[GeneratedImage]:
    """
    Pull the first inline image part out of a generate_content response.

    Args:
        response: Response from client.models.generate_content

    Returns:
        GeneratedImage, or None if the response carries no image data
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    for part in parts:
        inline_data = getattr(part, "inline_data", None)
        if inline_data is not None and inline_data.data:
            return GeneratedImage(
                data=inline_data.data,
                mime_type=inline_data.mime_type or "image/png"
            )
    return None


async def generate_content_async(
    client: genai.Client,
    model: str,
    contents: Any,
    config: Optional[Any] = None
) -> Any:
    """
    Async wrapper for generate_content using asyncio.to_thread.

    The pipeline awaits several generation calls concurrently; running the
    synchronous SDK call in a worker thread keeps the event loop free.

    Args:
        client: genai.Client instance
        model: Model name (e.g., "gemini-2.5-flash")
        contents: Content to send to the model
        config: Optional generation config

    Returns:
        Response object with .text attribute

    Example:
        client = genai.Client(api_key=os.getenv("GEMINI_API_KEY"))
        response = await generate_content_async(
            client=client,
            model="gemini-2.5-flash",
            contents="Hello",
            config={'temperature': 0.7}
        )
    """
    return await asyncio.to_thread(
        client.models.generate_content,
        model=model,
        contents=contents,
        config=config
    )
