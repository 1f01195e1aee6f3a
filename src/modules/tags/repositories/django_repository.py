"""Django ORM implementation of the Tag repository.

Read queries annotate ``product_count`` so serializers never issue one
COUNT query per tag.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, QuerySet

from modules.tags.models import Tag
from modules.tags.repositories.interfaces import ITagRepository

logger = structlog.get_logger(__name__)


def _with_counts() -> QuerySet[Tag]:
    return Tag.objects.annotate(product_count=Count("products", distinct=True))


class TagDjangoRepository(ITagRepository):
    """Concrete Tag repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Tag]:
        """Returns ``None`` for non-existent or malformed IDs."""
        try:
            return _with_counts().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_name(self, name: str) -> Optional[Tag]:
        return _with_counts().filter(name=name).first()

    def exists_by_name(self, name: str) -> bool:
        return Tag.objects.filter(name=name).exists()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Tag]:
        queryset = _with_counts()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def search_by_name(self, term: str) -> List[Tag]:
        return self.list({"name__icontains": term})

    @transaction.atomic
    def save(self, entity: Tag) -> Tag:
        """Persist (create or update) a tag.

        Raises ``IntegrityError`` if another tag already holds the name.
        """
        entity.save()
        logger.debug("tag.saved", tag_id=str(entity.id), name=entity.name)
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Delete a tag; its product associations are removed with it."""
        tag = self.get_by_id(id)
        if not tag:
            return False
        tag.delete()
        logger.info("tag.deleted", tag_id=str(id))
        return True
