"""
Pitch deck generation against the Gemini ``generateContent`` endpoint.

Pieces
------
- **build_prompt**               – Embeds the venture fields in the user prompt
- **build_payload**              – Prompt + response schema + system instruction
- **request_deck**               – Exactly one HTTP attempt, typed failures
- **parse_generation_response**  – Candidate text → validated ``GeneratedDeck``
- **generate_deck**              – ``request_deck`` wrapped in a ``RetryPolicy``
"""

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from irtus.core.config import Settings, settings as default_settings
from irtus.core.exceptions import (
    EmptyResponseError,
    GenerationError,
    ParseError,
    SchemaError,
    TransportError,
)
from irtus.core.retry import RetryPolicy
from irtus.schemas.deck_content import GeneratedDeck
from irtus.schemas.venture import VentureInput

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# 1.  Prompt and payload
# ---------------------------------------------------------------------------

SYSTEM_INSTRUCTION = (
    "You are the Irtus Business AI Advisory Engine. Your goal is to take raw "
    "startup ideas and transform them into institutional-grade pitch deck "
    "narratives based on the Eye-R-Tus methodology (Clarity, Structure, "
    "Growth). Focus on the African venture landscape, emphasizing "
    "scalability, market validation, and structural scaffolding. Provide "
    "sharp, professional, and data-driven language suitable for global "
    "investors."
)

DECK_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "slides": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING"},
                    "subtitle": {"type": "STRING"},
                    "bulletPoints": {"type": "ARRAY", "items": {"type": "STRING"}},
                    "strategicInsight": {"type": "STRING"},
                },
            },
        },
        "advisorySummary": {"type": "STRING"},
    },
}


def build_prompt(venture: VentureInput) -> str:
    """Embed all five venture fields verbatim in the generation prompt."""
    return (
        f'Generate a 6-slide pitch deck narrative for a company called "{venture.company_name}".\n'
        f"The problem they solve is: {venture.problem}.\n"
        f"Their solution is: {venture.solution}.\n"
        f"Target Market: {venture.target_market}.\n"
        f"How they make money: {venture.revenue_model}.\n"
        f"Ensure the narrative reflects the 'Irtus' vision of professionalizing African startups."
    )


def build_payload(prompt: str) -> dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": DECK_RESPONSE_SCHEMA,
        },
        "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
    }


# ---------------------------------------------------------------------------
# 2.  Response handling
# ---------------------------------------------------------------------------

def _candidate_text(body: Any) -> str | None:
    """Return ``candidates[0].content.parts[0].text`` or ``None`` if any hop is missing."""
    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


def parse_generation_response(body: Any) -> GeneratedDeck:
    """Turn a decoded ``generateContent`` response into a ``GeneratedDeck``.

    Raises ``EmptyResponseError``, ``ParseError`` or ``SchemaError``.
    """
    text = _candidate_text(body)
    if not text:
        raise EmptyResponseError()

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Malformed JSON received: {e.msg}") from e

    if not isinstance(data, dict) or data.get("slides") is None:
        raise SchemaError()

    try:
        return GeneratedDeck.model_validate(data)
    except ValidationError as e:
        raise SchemaError(f"Invalid format received: {e.error_count()} validation error(s)") from e


# ---------------------------------------------------------------------------
# 3.  Single attempt
# ---------------------------------------------------------------------------

async def request_deck(
    client: httpx.AsyncClient,
    prompt: str,
    settings: Settings = default_settings,
) -> GeneratedDeck:
    """Issue one ``generateContent`` call and parse the result."""
    try:
        response = await client.post(
            settings.generate_content_url,
            params={"key": settings.GEMINI_API_KEY},
            headers={"Content-Type": "application/json"},
            json=build_payload(prompt),
            timeout=settings.REQUEST_TIMEOUT_SECONDS,
        )
    except httpx.RequestError as e:
        # str(e.request.url) would leak the key
        raise TransportError(f"API request failed: {type(e).__name__}") from e

    if not response.is_success:
        raise TransportError(status_code=response.status_code)

    try:
        body = response.json()
    except ValueError as e:
        raise TransportError("API returned a non-JSON body", status_code=response.status_code) from e

    return parse_generation_response(body)


# ---------------------------------------------------------------------------
# 4.  Retry-wrapped generation
# ---------------------------------------------------------------------------

async def generate_deck(
    venture: VentureInput,
    *,
    client: httpx.AsyncClient,
    settings: Settings = default_settings,
    retry_policy: RetryPolicy | None = None,
) -> GeneratedDeck:
    """Generate a deck for *venture*, retrying every ``GenerationError`` alike.

    Callers must gate on ``venture.is_ready`` first; this function does not.
    The exception from the last attempt propagates once retries run out.

    Parameters
    ----------
    venture:
        The submitted venture details.
    client:
        Shared ``httpx.AsyncClient`` used for the outbound call.
    settings:
        Endpoint, credential and retry configuration.
    retry_policy:
        Overrides the policy derived from *settings*.
    """
    if retry_policy is None:
        retry_policy = RetryPolicy.from_settings(settings, retry_on=(GenerationError,))

    prompt = build_prompt(venture)

    async def attempt() -> GeneratedDeck:
        return await request_deck(client, prompt, settings)

    deck = await retry_policy(attempt, label=f"deck generation for '{venture.company_name}'")
    logger.info("Generated %s slide(s) for '%s'", len(deck.slides), venture.company_name)
    return deck
