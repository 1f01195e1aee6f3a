"""Django ORM implementation of the Category repository.

Follows the Null Object pattern: look-ups return ``None`` instead of
raising, and the Service Layer decides what a missing category means.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.categories.models import Category
from modules.categories.repositories.interfaces import ICategoryRepository

logger = structlog.get_logger(__name__)


class CategoryDjangoRepository(ICategoryRepository):
    """Concrete Category repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Category]:
        try:
            return Category.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_name(self, name: str) -> Optional[Category]:
        return Category.objects.filter(name=name).first()

    def get_for_update(self, name: str) -> Optional[Category]:
        return Category.objects.select_for_update().filter(name=name).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Category]:
        queryset = Category.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: Category) -> Category:
        entity.save()
        logger.debug("category.saved", category_id=str(entity.id), name=entity.name)
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        category = self.get_by_id(id)
        if not category:
            return False
        category.delete()
        logger.info("category.deleted", category_id=str(id))
        return True

    @transaction.atomic
    def delete_by_name(self, name: str) -> bool:
        """Hard-delete a category by name.

        Raises ``ProtectedError`` (from ``Product.category``) if products
        still reference it.
        """
        category = self.get_by_name(name)
        if not category:
            return False
        category.delete()
        logger.info("category.deleted", name=name)
        return True
