"""Adapters implementing the core ports."""

from .database import CoachingSessionRepository, SessionStoreError
from .llm import LLMAdapter, LLMAPIError
from .memory_store import InMemoryCoachingSessionStore
from .riot_api import RateLimitError, RiotAPIAdapter, RiotAPIError

__all__ = [
    "CoachingSessionRepository",
    "InMemoryCoachingSessionStore",
    "LLMAPIError",
    "LLMAdapter",
    "RateLimitError",
    "RiotAPIAdapter",
    "RiotAPIError",
    "SessionStoreError",
]
