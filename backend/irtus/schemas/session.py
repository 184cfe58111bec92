import datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from irtus.schemas.deck_content import GeneratedDeck
from irtus.schemas.venture import VentureInput


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class SessionStatus(str, Enum):
    draft = "draft"            # form is being edited
    generating = "generating"  # a generation is in flight
    ready = "ready"            # deck available


class GenerationSession(BaseModel):
    """One founder's use of the pitch deck generator, from empty form to result."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID = Field(default_factory=uuid4)
    venture: VentureInput = Field(default_factory=VentureInput)
    status: SessionStatus = SessionStatus.draft
    deck: GeneratedDeck | None = None
    error: str | None = None
    created_at: datetime.datetime = Field(default_factory=_utcnow)
    updated_at: datetime.datetime | None = None

    @property
    def is_loading(self) -> bool:
        return self.status == SessionStatus.generating

    def touch(self) -> None:
        self.updated_at = _utcnow()
