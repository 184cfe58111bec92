"""
Pydantic models for generated pitch deck content.

The generation endpoint returns a JSON string matching
``DECK_RESPONSE_SCHEMA`` in ``irtus.core.deck_generator``; it is validated
into a ``GeneratedDeck`` and rendered to HTML by ``irtus.core.deck_template``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class Slide(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    title: str = ""
    subtitle: str = ""
    bullet_points: list[str] = []
    strategic_insight: str = ""

    @field_validator("title", "subtitle", "strategic_insight", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("bullet_points", mode="before")
    @classmethod
    def none_as_empty_list(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return ["" if p is None else p for p in v]
        return v


class GeneratedDeck(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    # Required and non-null: a deck without slides is a schema failure
    slides: list[Slide]
    advisory_summary: str = ""

    @field_validator("slides", mode="before")
    @classmethod
    def null_slide_as_empty(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [{} if s is None else s for s in v]
        return v

    @field_validator("advisory_summary", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v
