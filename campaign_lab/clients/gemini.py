"""Gemini image generation client."""

import asyncio
import logging
from dataclasses import dataclass
from io import BytesIO

from google import genai
from google.genai import types
from PIL import Image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageResponse:
    image_bytes: bytes
    mime_type: str
    input_tokens: int
    output_tokens: int


class GeminiClient:
    """Client for generating ad images via Gemini image models."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash-image",
        pro_model: str = "gemini-3-pro-image-preview",
        max_retries: int = 5,
    ):
        self.client = genai.Client(api_key=api_key)
        self.model = model
        self.pro_model = pro_model
        self.max_retries = max_retries

    async def _call_with_retry(self, func, retry_codes=(503, 429)):
        """Retry API calls on transient errors with exponential backoff."""
        for attempt in range(self.max_retries):
            try:
                return await func()
            except Exception as e:
                error_str = str(e)
                is_retryable = any(str(code) in error_str for code in retry_codes)

                if not is_retryable or attempt == self.max_retries - 1:
                    raise

                wait_time = 2 ** attempt  # 1s, 2s, 4s
                logger.warning(
                    "Gemini API error (attempt %d/%d), retrying in %ds: %s",
                    attempt + 1, self.max_retries, wait_time, e,
                )
                await asyncio.sleep(wait_time)

    async def generate_image(
        self,
        prompt: str,
        aspect_ratio: str = "1:1",
        tier: str = "standard",
    ) -> ImageResponse:
        """
        Generate a single image from a text prompt.

        Args:
            prompt: Full image generation prompt
            aspect_ratio: Output aspect ratio (e.g. "1:1", "9:16", "4:5")
            tier: "standard" or "pro" image model

        Returns:
            ImageResponse with PNG bytes and token usage
        """
        model = self.pro_model if tier == "pro" else self.model

        response = await self._call_with_retry(
            lambda: self.client.aio.models.generate_content(
                model=model,
                contents=[prompt],
                config=types.GenerateContentConfig(
                    response_modalities=["IMAGE", "TEXT"],
                    image_config=types.ImageConfig(aspect_ratio=aspect_ratio),
                ),
            )
        )

        usage = response.usage_metadata
        input_tokens = (usage.prompt_token_count or 0) if usage else 0
        output_tokens = (usage.candidates_token_count or 0) if usage else 0

        # Extract generated image from response
        if response.candidates:
            for part in response.candidates[0].content.parts:
                if part.inline_data and part.inline_data.mime_type.startswith("image/"):
                    return ImageResponse(
                        image_bytes=self._to_png(part.inline_data.data),
                        mime_type="image/png",
                        input_tokens=input_tokens,
                        output_tokens=output_tokens,
                    )

        raise RuntimeError("No image generated by Gemini")

    def _to_png(self, image_data: bytes) -> bytes:
        """Normalize whatever Gemini returned to PNG."""
        img = Image.open(BytesIO(image_data))
        if img.format == "PNG":
            return image_data

        output = BytesIO()
        img.save(output, format="PNG")
        return output.getvalue()
