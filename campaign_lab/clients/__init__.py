"""API clients for external services."""

from .llm import LLMClient, LLMResponse
from .gemini import GeminiClient, ImageResponse

__all__ = ["LLMClient", "LLMResponse", "GeminiClient", "ImageResponse"]
