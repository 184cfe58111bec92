"""Stateless deck generation, no session required."""

import httpx
from fastapi import APIRouter, Depends

from irtus.api.deps import get_http_client, get_retry_policy, get_settings
from irtus.controllers import generation_controller
from irtus.core.config import Settings
from irtus.core.retry import RetryPolicy
from irtus.schemas.deck_content import GeneratedDeck
from irtus.schemas.venture import VentureInput

router = APIRouter(prefix="/generation", tags=["generation"])


@router.post("/deck", response_model=GeneratedDeck)
async def generate_deck(
    payload: VentureInput,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    retry_policy: RetryPolicy = Depends(get_retry_policy),
):
    """Generate a pitch deck straight from venture details."""
    return await generation_controller.generate_deck_for_venture(payload, client, settings, retry_policy)
