from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


REQUIRED_VENTURE_FIELDS = ("company_name", "problem")


class VentureInput(BaseModel):
    """Venture details collected by the pitch deck form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    company_name: str = ""
    problem: str = ""
    solution: str = ""
    target_market: str = ""
    revenue_model: str = ""

    @property
    def missing_fields(self) -> list[str]:
        """Camel-case names of the required fields that are still blank."""
        return [
            to_camel(name)
            for name in REQUIRED_VENTURE_FIELDS
            if not getattr(self, name).strip()
        ]

    @property
    def is_ready(self) -> bool:
        return not self.missing_fields


class VentureUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    company_name: str | None = None
    problem: str | None = None
    solution: str | None = None
    target_market: str | None = None
    revenue_model: str | None = None
