"""
Irtus backend - test configuration and fixtures
"""
import os
from typing import AsyncGenerator

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

# Set testing environment before the app reads its settings
os.environ["MODE"] = "testing"
os.environ["GEMINI_API_KEY"] = "test-api-key"
os.environ["LOG_LEVEL"] = "WARNING"

from irtus.api.deps import get_http_client, get_retry_policy, get_session_store
from irtus.core.exceptions import GenerationError
from irtus.core.retry import RetryPolicy, exponential_backoff
from irtus.db.session_store import SessionStore
from irtus.main import app
from irtus.schemas.venture import VentureInput
from mocks.mock_gemini import FakeGemini, RecordingSleep


@pytest.fixture
def ecowatt() -> VentureInput:
    return VentureInput(
        company_name="EcoWatt",
        problem="no reliable power",
        solution="solar micro-grids",
        target_market="off-grid households",
        revenue_model="subscription",
    )


@pytest.fixture
def fake_gemini() -> FakeGemini:
    return FakeGemini()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def retry_policy(recording_sleep: RecordingSleep) -> RetryPolicy:
    return RetryPolicy(
        max_retries=5,
        backoff=exponential_backoff(1.0),
        sleep=recording_sleep,
        retry_on=(GenerationError,),
    )


@pytest.fixture
async def http_client(fake_gemini: FakeGemini) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Outbound client wired to the fake Gemini endpoint"""
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_gemini.handler)) as client:
        yield client


@pytest.fixture
def session_store() -> SessionStore:
    return SessionStore()


@pytest.fixture
async def client(
    http_client: httpx.AsyncClient,
    retry_policy: RetryPolicy,
    session_store: SessionStore,
) -> AsyncGenerator[AsyncClient, None]:
    """API client with outbound HTTP, retry timing and session storage overridden"""
    app.dependency_overrides[get_http_client] = lambda: http_client
    app.dependency_overrides[get_retry_policy] = lambda: retry_policy
    app.dependency_overrides[get_session_store] = lambda: session_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
