"""Event handlers for the presentation boundary."""

from .session import create_session, handle

__all__ = ["create_session", "handle"]
