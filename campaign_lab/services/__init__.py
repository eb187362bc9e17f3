"""Business logic services."""

from .generation import GenerationError, GenerationService

__all__ = ["GenerationError", "GenerationService"]
