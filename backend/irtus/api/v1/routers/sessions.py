import uuid

import httpx
from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import HTMLResponse

from irtus.api.deps import get_http_client, get_retry_policy, get_session_store, get_settings
from irtus.controllers import session_controller
from irtus.core.config import Settings
from irtus.core.retry import RetryPolicy
from irtus.db.session_store import SessionStore
from irtus.schemas.session import GenerationSession
from irtus.schemas.venture import VentureUpdate

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("/", response_model=GenerationSession, status_code=status.HTTP_201_CREATED)
async def create_session(store: SessionStore = Depends(get_session_store)):
    """Open an empty pitch deck form session."""
    return session_controller.create_session(store)


@router.get("/{session_id}", response_model=GenerationSession)
async def get_session(
    session_id: uuid.UUID,
    store: SessionStore = Depends(get_session_store),
):
    return session_controller.get_session(store, session_id)


@router.patch("/{session_id}/venture", response_model=GenerationSession)
async def update_venture(
    session_id: uuid.UUID,
    payload: VentureUpdate,
    store: SessionStore = Depends(get_session_store),
):
    """Update one or more venture fields."""
    return session_controller.update_venture(store, session_id, payload)


@router.post("/{session_id}/generate", response_model=GenerationSession)
async def generate_deck(
    session_id: uuid.UUID,
    store: SessionStore = Depends(get_session_store),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    retry_policy: RetryPolicy = Depends(get_retry_policy),
):
    """Generate the deck for the session's venture (retries included)."""
    return await session_controller.generate_session_deck(store, session_id, client, settings, retry_policy)


@router.post("/{session_id}/reset", response_model=GenerationSession)
async def reset_session(
    session_id: uuid.UUID,
    store: SessionStore = Depends(get_session_store),
):
    """Start over: clear the form, deck and error."""
    return session_controller.reset_session(store, session_id)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: uuid.UUID,
    store: SessionStore = Depends(get_session_store),
):
    session_controller.delete_session(store, session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{session_id}/deck.html", response_class=HTMLResponse)
async def get_deck_html(
    session_id: uuid.UUID,
    store: SessionStore = Depends(get_session_store),
):
    """Render the generated deck as a standalone HTML page."""
    return HTMLResponse(content=session_controller.render_session_deck(store, session_id))
