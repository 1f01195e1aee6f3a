"""Tag DTOs for the Service Layer (Pydantic v2, immutable)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from modules.core.validation import clean_name
from modules.tags.constants import TAG_NAME_MAX_LENGTH


class CreateTagDTO(BaseModel):
    """Input for explicit tag creation."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        return clean_name(v, max_length=TAG_NAME_MAX_LENGTH)

    @field_validator("description", mode="before")
    @classmethod
    def description_defaults_to_empty(cls, v: str | None) -> str:
        if v is None:
            return ""
        if not isinstance(v, str):
            raise ValueError("description must be a string.")
        return v.strip()
