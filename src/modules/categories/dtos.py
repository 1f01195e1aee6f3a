"""Category DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2, immutable
(``frozen=True``).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from modules.categories.constants import CATEGORY_NAME_MAX_LENGTH
from modules.core.validation import clean_name


class CreateCategoryDTO(BaseModel):
    """Input for category creation.  ``name`` is stripped and must not be blank."""

    model_config = ConfigDict(frozen=True)

    name: str

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        return clean_name(v, max_length=CATEGORY_NAME_MAX_LENGTH)
