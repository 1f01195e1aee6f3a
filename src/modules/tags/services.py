"""Tag service layer (Use Cases).

Besides plain tag CRUD this service owns tag reconciliation: turning a
batch of tag names into Tag rows, creating the missing ones.

Deleting a tag does not check whether products use it; the tag is simply
detached from them.  Categories, by contrast, refuse deletion while products
reference them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List

import structlog
from django.db import IntegrityError, transaction

from modules.core.exceptions import InvalidRequest
from modules.core.validation import clean_names
from modules.tags.constants import AUTO_TAG_DESCRIPTION, TAG_CREATE_MAX_RETRIES
from modules.tags.exceptions import TagAlreadyExists, TagNotFound, TagReconciliationError
from modules.tags.models import Tag

if TYPE_CHECKING:
    from modules.tags.dtos import CreateTagDTO
    from modules.tags.repositories.interfaces import ITagRepository

logger = structlog.get_logger(__name__)


class TagService:
    """Application service for Tag use-cases."""

    def __init__(self, repository: ITagRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_tag(self, dto: CreateTagDTO) -> Tag:
        """Create a tag explicitly.

        Raises:
            TagAlreadyExists: if the name is taken.
        """
        if self._repo.exists_by_name(dto.name):
            logger.warning("tag.duplicate_name", name=dto.name)
            raise TagAlreadyExists(f"Tag '{dto.name}' already exists.")

        try:
            with transaction.atomic():
                tag = self._repo.save(Tag(name=dto.name, description=dto.description))
        except IntegrityError as exc:
            logger.warning("tag.save_conflict", name=dto.name)
            raise TagAlreadyExists(f"Tag '{dto.name}' already exists.") from exc
        logger.info("tag.created", tag_id=str(tag.id), name=tag.name)
        return tag

    @transaction.atomic
    def delete_tag(self, id: str) -> None:
        """Delete a tag by id, detaching it from any products.

        Raises:
            TagNotFound: if the tag does not exist.
        """
        if not self._repo.get_by_id(id):
            raise TagNotFound(f"Tag {id} not found.")
        self._repo.delete(id)
        logger.info("tag.deleted", tag_id=str(id))

    @transaction.atomic
    def get_or_create_tags(self, names: Iterable[str]) -> List[Tag]:
        """Resolve tag names to Tag rows, creating the missing ones.

        Names are stripped and blanks ignored.  The result holds one Tag per
        distinct name, in first-seen order, deduplicated by primary key.
        Creating a missing tag tolerates a concurrent creator of the same
        name: the unique-name violation is treated as "already created" and
        the tag is re-fetched.

        Raises:
            InvalidRequest: if a name is not a string or is too long.
        """
        try:
            cleaned = clean_names(names)
        except ValueError as exc:
            raise InvalidRequest(str(exc)) from exc

        resolved: Dict[str, Tag] = {}
        for name in dict.fromkeys(cleaned):
            tag = self._repo.get_by_name(name) or self._create_missing(name)
            resolved.setdefault(str(tag.pk), tag)
        return list(resolved.values())

    def _create_missing(self, name: str) -> Tag:
        for attempt in range(1, TAG_CREATE_MAX_RETRIES + 1):
            try:
                with transaction.atomic():
                    tag = self._repo.save(Tag(name=name, description=AUTO_TAG_DESCRIPTION))
            except IntegrityError:
                logger.info("tag.create_conflict", name=name, attempt=attempt)
                existing = self._repo.get_by_name(name)
                if existing:
                    return existing
            else:
                logger.info("tag.auto_created", tag_id=str(tag.id), name=name)
                return tag

        raise TagReconciliationError(
            f"Could not create or load tag '{name}' after "
            f"{TAG_CREATE_MAX_RETRIES} attempts"
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all_tags(self) -> List[Tag]:
        return self._repo.list()

    def get_tag_by_name(self, name: str) -> Tag:
        """Raises ``TagNotFound`` if absent."""
        tag = self._repo.get_by_name(name)
        if not tag:
            raise TagNotFound(f"Tag '{name}' not found.")
        return tag

    def search_tags_by_name(self, term: str) -> List[Tag]:
        """Tags whose name contains ``term`` (case-insensitive)."""
        return self._repo.search_by_name(term)
