import logging

import httpx
from fastapi import HTTPException, status

from irtus.core.config import Settings
from irtus.core.deck_generator import generate_deck
from irtus.core.exceptions import GENERIC_GENERATION_ERROR, GenerationError
from irtus.core.retry import RetryPolicy
from irtus.schemas.deck_content import GeneratedDeck
from irtus.schemas.venture import VentureInput

logger = logging.getLogger(__name__)


def ensure_venture_ready(venture: VentureInput) -> None:
    """Reject a venture whose company name or problem is blank (422)."""
    missing = venture.missing_fields
    if missing:
        raise HTTPException(
            status_code=422,
            detail=f"Missing required venture details: {', '.join(missing)}",
        )


async def generate_deck_for_venture(
    venture: VentureInput,
    client: httpx.AsyncClient,
    settings: Settings,
    retry_policy: RetryPolicy,
) -> GeneratedDeck:
    """Gate, generate and translate any generation failure into the generic message."""
    ensure_venture_ready(venture)

    try:
        return await generate_deck(
            venture,
            client=client,
            settings=settings,
            retry_policy=retry_policy,
        )
    except GenerationError as e:
        logger.error("Deck generation failed for '%s' [%s]: %s", venture.company_name, e.code, e.message)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=GENERIC_GENERATION_ERROR)
