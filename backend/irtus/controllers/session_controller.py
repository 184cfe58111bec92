"""
Session controller for the pitch deck form.

A ``GenerationSession`` is the only mutable state of the generator: the
venture fields being edited, whether a generation is in flight, and the
resulting deck or user-facing error.  Every operation takes the session store
explicitly; nothing here reads ambient state.
"""

import logging
import uuid

import httpx
from fastapi import HTTPException, status

from irtus.controllers.generation_controller import ensure_venture_ready
from irtus.core.config import Settings
from irtus.core.deck_generator import generate_deck
from irtus.core.deck_template import render_pitch_deck
from irtus.core.exceptions import (
    GENERIC_GENERATION_ERROR,
    GenerationError,
    SessionNotFoundError,
)
from irtus.core.retry import RetryPolicy
from irtus.db.session_store import SessionStore
from irtus.schemas.session import GenerationSession, SessionStatus
from irtus.schemas.venture import VentureInput, VentureUpdate

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# 1.  Lookup helpers
# ---------------------------------------------------------------------------

def get_session(store: SessionStore, session_id: uuid.UUID) -> GenerationSession:
    """Return the session or raise 404."""
    try:
        return store.get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


def _ensure_idle(session: GenerationSession) -> None:
    if session.is_loading:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A generation is already in progress for this session",
        )


def _ensure_draft(session: GenerationSession, action: str) -> None:
    """A shown deck is held until reset; editing or regenerating needs a reset first."""
    _ensure_idle(session)
    if session.status == SessionStatus.ready:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Deck already generated; reset the session to {action}",
        )


# ---------------------------------------------------------------------------
# 2.  Lifecycle
# ---------------------------------------------------------------------------

def create_session(store: SessionStore) -> GenerationSession:
    return store.create()


def update_venture(
    store: SessionStore,
    session_id: uuid.UUID,
    payload: VentureUpdate,
) -> GenerationSession:
    """Apply only the supplied venture fields.

    Editing is allowed while the form is a draft; once a deck is shown the
    session must be reset first.
    """
    session = get_session(store, session_id)
    _ensure_draft(session, "edit")

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    session.venture = session.venture.model_copy(update=changes)
    session.touch()
    return session


def reset_session(store: SessionStore, session_id: uuid.UUID) -> GenerationSession:
    """Clear venture, deck and error; the session returns to an empty draft."""
    session = get_session(store, session_id)
    _ensure_idle(session)

    session.venture = VentureInput()
    session.deck = None
    session.error = None
    session.status = SessionStatus.draft
    session.touch()
    return session


def delete_session(store: SessionStore, session_id: uuid.UUID) -> None:
    session = get_session(store, session_id)
    _ensure_idle(session)
    store.delete(session.id)


# ---------------------------------------------------------------------------
# 3.  Generation
# ---------------------------------------------------------------------------

async def generate_session_deck(
    store: SessionStore,
    session_id: uuid.UUID,
    client: httpx.AsyncClient,
    settings: Settings,
    retry_policy: RetryPolicy,
) -> GenerationSession:
    """Run one generation for the session's venture.

    On success the session holds the deck in ``ready``.  On failure it returns
    to ``draft`` with the generic error message; the failure kind is only
    logged.
    """
    session = get_session(store, session_id)
    _ensure_draft(session, "regenerate")
    ensure_venture_ready(session.venture)

    session.status = SessionStatus.generating
    session.error = None
    session.touch()

    try:
        deck = await generate_deck(
            session.venture,
            client=client,
            settings=settings,
            retry_policy=retry_policy,
        )
    except GenerationError as e:
        logger.error("Session %s generation failed [%s]: %s", session.id, e.code, e.message)
        session.deck = None
        session.error = GENERIC_GENERATION_ERROR
        session.status = SessionStatus.draft
        session.touch()
        return session
    else:
        session.deck = deck
        session.status = SessionStatus.ready
        session.touch()
        return session
    finally:
        # cancellation or an unexpected error must not leave the session busy
        if session.status == SessionStatus.generating:
            session.status = SessionStatus.draft
            session.touch()


def render_session_deck(store: SessionStore, session_id: uuid.UUID) -> str:
    session = get_session(store, session_id)
    if session.deck is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No deck generated for this session")
    return render_pitch_deck(session.deck, session.venture.company_name)
