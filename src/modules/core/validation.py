"""Input normalisation helpers shared by DTOs and views.

Helpers raise ``ValueError`` so pydantic validators surface them as
validation errors; the request helpers re-raise them as ``InvalidRequest``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, List

from modules.core.exceptions import InvalidRequest
from modules.tags.constants import TAG_NAME_MAX_LENGTH


def clean_name(value: str, field: str = "name", max_length: int | None = None) -> str:
    """Strip surrounding whitespace, reject blank and overlong names."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field} must not be empty.")
    value = value.strip()
    if max_length is not None and len(value) > max_length:
        raise ValueError(f"{field} must be at most {max_length} characters.")
    return value


def clean_names(
    values: Iterable[Any] | None,
    max_length: int | None = TAG_NAME_MAX_LENGTH,
) -> List[str]:
    """Strip every entry and drop blanks, keeping order and duplicates.

    Raises ``ValueError`` unless ``values`` is a collection of strings
    (``None`` entries are skipped) each within ``max_length``.
    """
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    if isinstance(values, Mapping) or not isinstance(values, Iterable):
        raise ValueError("Tag names must be a list of strings.")

    names: List[str] = []
    for value in values:
        if value is None:
            continue
        if not isinstance(value, str):
            raise ValueError("Tag names must be strings.")
        value = value.strip()
        if not value:
            continue
        if max_length is not None and len(value) > max_length:
            raise ValueError(f"Tag names must be at most {max_length} characters.")
        names.append(value)
    return names


def tag_name_list(value: Any) -> List[str]:
    """``clean_names`` for a JSON field that must hold a list (or be absent)."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ValueError("tagNames must be a list of tag names.")
    return clean_names(value)


def json_object(data: Any) -> Mapping[str, Any]:
    """Return ``request.data`` if it is a JSON object, else fail as malformed."""
    if not isinstance(data, Mapping):
        raise InvalidRequest("Request body must be a JSON object.")
    return data


def tag_names_from_body(data: Any) -> List[str]:
    """Accept either a bare JSON list of names or ``{"tagNames": [...]}``."""
    if isinstance(data, Mapping):
        data = data.get("tagNames")
    if not isinstance(data, (list, tuple)):
        raise InvalidRequest("Expected a list of tag names.")
    try:
        names = clean_names(data)
    except ValueError as exc:
        raise InvalidRequest(str(exc)) from exc
    if not names:
        raise InvalidRequest("At least one tag name is required.")
    return names


def tag_names_from_query(values: Iterable[str]) -> List[str]:
    """Accept repeated (``?tags=a&tags=b``) and comma separated (``?tags=a,b``) values."""
    names: List[str] = []
    try:
        for value in values:
            names.extend(clean_names(value.split(",")))
    except ValueError as exc:
        raise InvalidRequest(str(exc)) from exc
    if not names:
        raise InvalidRequest("Query parameter 'tags' is required.")
    return names
