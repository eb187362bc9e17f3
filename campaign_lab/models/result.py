"""Generation call result."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class GenResult(Generic[T]):
    """Typed result of one generation call plus its token usage."""
    data: T
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass(frozen=True)
class ImageResult:
    image_url: str | None
    final_prompt: str


@dataclass(frozen=True)
class CarouselResult:
    image_urls: list[str]
    prompts: list[str]
