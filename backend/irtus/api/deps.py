"""
Shared FastAPI dependencies: single source of truth for DI.

All routers should import their dependencies from HERE so tests can swap
them through ``app.dependency_overrides``.
"""

import httpx
from fastapi import Depends, Request

from irtus.core.config import Settings, settings
from irtus.core.exceptions import GenerationError
from irtus.core.retry import RetryPolicy
from irtus.db.session_store import get_session_store

__all__ = ["get_settings", "get_http_client", "get_retry_policy", "get_session_store"]


def get_settings() -> Settings:
    return settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Return the outbound client opened in the app lifespan."""
    return request.app.state.http_client


def get_retry_policy(settings: Settings = Depends(get_settings)) -> RetryPolicy:
    """Retry every generation failure kind on the configured backoff schedule."""
    return RetryPolicy.from_settings(settings, retry_on=(GenerationError,))

