"""
Unit Tests for the deck generator
Tests for: prompt/payload construction, response parsing, single attempts, retries
"""
import json

import httpx
import pytest

from irtus.core.config import Settings
from irtus.core.deck_generator import (
    DECK_RESPONSE_SCHEMA,
    SYSTEM_INSTRUCTION,
    build_payload,
    build_prompt,
    generate_deck,
    parse_generation_response,
    request_deck,
)
from irtus.core.exceptions import (
    EmptyResponseError,
    GenerationError,
    ParseError,
    SchemaError,
    TransportError,
)
from mocks.mock_gemini import ECOWATT_DECK, gemini_body


class TestPrompt:
    def test_prompt_embeds_every_field(self, ecowatt):
        prompt = build_prompt(ecowatt)

        assert '"EcoWatt"' in prompt
        assert "no reliable power" in prompt
        assert "solar micro-grids" in prompt
        assert "off-grid households" in prompt
        assert "subscription" in prompt
        assert "6-slide" in prompt

    def test_prompt_keeps_fields_verbatim(self, ecowatt):
        venture = ecowatt.model_copy(update={"problem": "  <b>spaces & tags</b>  "})
        assert "  <b>spaces & tags</b>  " in build_prompt(venture)

    def test_payload_shape(self):
        payload = build_payload("hello")

        assert payload["contents"] == [{"parts": [{"text": "hello"}]}]
        assert payload["generationConfig"]["responseMimeType"] == "application/json"
        assert payload["generationConfig"]["responseSchema"] == DECK_RESPONSE_SCHEMA
        assert payload["systemInstruction"] == {"parts": [{"text": SYSTEM_INSTRUCTION}]}

    def test_schema_declares_slide_fields(self):
        slide_props = DECK_RESPONSE_SCHEMA["properties"]["slides"]["items"]["properties"]
        assert set(slide_props) == {"title", "subtitle", "bulletPoints", "strategicInsight"}
        assert slide_props["bulletPoints"] == {"type": "ARRAY", "items": {"type": "STRING"}}
        assert DECK_RESPONSE_SCHEMA["properties"]["advisorySummary"] == {"type": "STRING"}

    def test_system_instruction_persona(self):
        assert "Irtus Business AI Advisory Engine" in SYSTEM_INSTRUCTION
        assert "Eye-R-Tus" in SYSTEM_INSTRUCTION


class TestParseGenerationResponse:
    def test_valid_response(self):
        deck = parse_generation_response(gemini_body(json.dumps(ECOWATT_DECK)))

        assert len(deck.slides) == 1
        assert deck.slides[0].title == "Problem"
        assert deck.slides[0].bullet_points == ["x"]
        assert deck.slides[0].strategic_insight == "y"
        assert deck.advisory_summary == "z"

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"candidates": []},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{}]}}]},
            gemini_body(""),
            None,
        ],
    )
    def test_missing_text_is_empty_response(self, body):
        with pytest.raises(EmptyResponseError):
            parse_generation_response(body)

    def test_malformed_json_is_parse_error(self):
        with pytest.raises(ParseError):
            parse_generation_response(gemini_body("{slides: ["))

    def test_missing_slides_is_schema_error(self):
        """Valid JSON without slides still fails"""
        with pytest.raises(SchemaError):
            parse_generation_response(gemini_body(json.dumps({"advisorySummary": "z"})))

    def test_null_slides_is_schema_error(self):
        with pytest.raises(SchemaError):
            parse_generation_response(gemini_body(json.dumps({"slides": None})))

    def test_non_object_is_schema_error(self):
        with pytest.raises(SchemaError):
            parse_generation_response(gemini_body(json.dumps(["Problem"])))

    def test_wrong_shape_is_schema_error(self):
        with pytest.raises(SchemaError):
            parse_generation_response(gemini_body(json.dumps({"slides": "Problem"})))

    def test_non_string_bullet_point_is_schema_error(self):
        body = gemini_body(json.dumps({"slides": [{"title": "Problem", "bulletPoints": [{"text": "x"}]}]}))

        with pytest.raises(SchemaError):
            parse_generation_response(body)

    def test_empty_slide_fields_tolerated(self):
        body = gemini_body(json.dumps({"slides": [{}, {"title": None, "bulletPoints": None}]}))

        deck = parse_generation_response(body)

        assert len(deck.slides) == 2
        assert deck.slides[1].title == ""
        assert deck.slides[1].bullet_points == []
        assert deck.advisory_summary == ""


class TestRequestDeck:
    @pytest.mark.asyncio
    async def test_posts_payload_with_key(self, http_client, fake_gemini):
        settings = Settings(GEMINI_API_KEY="secret", GEMINI_MODEL="gemini-test")

        deck = await request_deck(http_client, "the prompt", settings)

        assert deck.slides[0].title == "Problem"
        request = fake_gemini.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/v1beta/models/gemini-test:generateContent"
        assert request.url.params["key"] == "secret"
        assert request.headers["content-type"] == "application/json"
        assert fake_gemini.last_payload()["contents"][0]["parts"][0]["text"] == "the prompt"

    @pytest.mark.asyncio
    async def test_non_success_status_is_transport_error(self, http_client, fake_gemini):
        fake_gemini.always((500, {"error": "boom"}))

        with pytest.raises(TransportError) as exc_info:
            await request_deck(http_client, "p", Settings())

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_network_failure_is_transport_error(self, http_client, fake_gemini):
        fake_gemini.always(httpx.ConnectError)

        with pytest.raises(TransportError) as exc_info:
            await request_deck(http_client, "p", Settings(GEMINI_API_KEY="secret"))

        assert exc_info.value.status_code is None
        assert "secret" not in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_non_json_body_is_transport_error(self, http_client, fake_gemini):
        fake_gemini.always((200, "<html>gateway</html>"))

        with pytest.raises(TransportError):
            await request_deck(http_client, "p", Settings())


class TestGenerateDeck:
    @pytest.mark.asyncio
    async def test_success_first_try(self, ecowatt, http_client, fake_gemini, retry_policy, recording_sleep):
        deck = await generate_deck(ecowatt, client=http_client, retry_policy=retry_policy)

        assert [s.title for s in deck.slides] == ["Problem"]
        assert fake_gemini.call_count == 1
        assert recording_sleep.delays == []

    @pytest.mark.asyncio
    async def test_retries_transient_failures(self, ecowatt, http_client, fake_gemini, retry_policy, recording_sleep):
        fake_gemini.fail_times(3, status_code=503)

        deck = await generate_deck(ecowatt, client=http_client, retry_policy=retry_policy)

        assert deck.slides[0].title == "Problem"
        assert fake_gemini.call_count == 4
        assert recording_sleep.delays == [1, 2, 4]

    @pytest.mark.asyncio
    async def test_schema_errors_are_retried(self, ecowatt, http_client, fake_gemini, retry_policy):
        fake_gemini.queue((200, gemini_body(json.dumps({"advisorySummary": "no slides"}))))

        deck = await generate_deck(ecowatt, client=http_client, retry_policy=retry_policy)

        assert deck.advisory_summary == "z"
        assert fake_gemini.call_count == 2

    @pytest.mark.asyncio
    async def test_exhaustion_propagates_last_error(self, ecowatt, http_client, fake_gemini, retry_policy, recording_sleep):
        fake_gemini.fail_times(5, status_code=500)
        fake_gemini.always((200, gemini_body("not json")))

        with pytest.raises(ParseError):
            await generate_deck(ecowatt, client=http_client, retry_policy=retry_policy)

        assert fake_gemini.call_count == 6
        assert recording_sleep.total == 31

    @pytest.mark.asyncio
    async def test_default_policy_comes_from_settings(self, ecowatt, http_client, fake_gemini):
        settings = Settings(GENERATION_MAX_RETRIES=1, GENERATION_BACKOFF_BASE_SECONDS=0.001)
        fake_gemini.always((500, {"error": "boom"}))

        with pytest.raises(GenerationError):
            await generate_deck(ecowatt, client=http_client, settings=settings)

        assert fake_gemini.call_count == 2
