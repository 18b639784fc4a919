"""Schema base: snake_case attributes, camelCase JSON."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class StrictCamelModel(CamelModel):
    """Partial-update payloads: unknown fields are rejected, not passed through."""

    model_config = ConfigDict(extra="forbid")


class DeleteResult(CamelModel):
    success: bool = True
    id: str
