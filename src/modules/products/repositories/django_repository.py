"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
instead of raising HTTP-level exceptions, and the Service Layer decides
how to translate a missing entity into an API response.

Every query loads the category (``select_related``) and the tags
(``prefetch_related``) and returns a list, so callers never trigger lazy
loads while rendering.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import structlog

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, Q, QuerySet

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository
from modules.tags.models import Tag

logger = structlog.get_logger(__name__)


def _loaded() -> QuerySet[Product]:
    return Product.objects.select_related("category").prefetch_related("tags")


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return _loaded().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_name(self, name: str) -> Optional[Product]:
        return _loaded().filter(name=name).first()

    def get_for_update(self, name: str) -> Optional[Product]:
        return (
            Product.objects.select_for_update(of=("self",))
            .select_related("category")
            .filter(name=name)
            .first()
        )

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """List products with optional Django ORM look-ups.

        Examples of valid filters::

            {"category__name__iexact": "books"}
            {"name__icontains": "phone", "price__lte": 100}
        """
        queryset = _loaded()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def find_by_category_name(self, category_name: str) -> List[Product]:
        return self.list({"category__name": category_name})

    def find_by_tag_names(self, names: Iterable[str]) -> List[Product]:
        return list(_loaded().filter(tags__name__in=list(names)).distinct())

    def find_by_all_tag_names(self, names: Iterable[str], count: int) -> List[Product]:
        """Products whose matching-tag count equals ``count``.

        ``count`` must be the number of distinct names requested.
        """
        names = list(names)
        queryset = _loaded().annotate(
            matched_tags=Count("tags", filter=Q(tags__name__in=names), distinct=True)
        )
        return list(queryset.filter(matched_tags=count))

    def find_by_tag_name_containing(self, pattern: str) -> List[Product]:
        return list(_loaded().filter(tags__name__contains=pattern).distinct())

    def find_by_category_and_tag_names(
        self, category_name: str, names: Iterable[str]
    ) -> List[Product]:
        queryset = _loaded().filter(
            category__name=category_name,
            tags__name__in=list(names),
        )
        return list(queryset.distinct())

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product.

        Raises ``IntegrityError`` if another product already holds the name.
        """
        entity.save()
        logger.debug(
            "product.saved",
            product_id=str(entity.id),
            name=entity.name,
        )
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Delete a product by ID.

        Its category and tags are left in place; only the tag links go.
        Returns ``False`` if no product exists with the given ID.
        """
        product = self.get_by_id(id)
        if not product:
            return False
        product.delete()
        logger.info("product.deleted", product_id=str(id))
        return True

    # ------------------------------------------------------------------
    # Tag associations
    # ------------------------------------------------------------------

    @transaction.atomic
    def set_tags(self, product: Product, tags: Iterable[Tag]) -> Product:
        product.tags.set(list(tags))
        return self.get_by_id(product.id)

    @transaction.atomic
    def add_tags(self, product: Product, tags: Iterable[Tag]) -> Product:
        product.tags.add(*tags)
        return self.get_by_id(product.id)

    @transaction.atomic
    def remove_tags_by_name(self, product: Product, names: Iterable[str]) -> Product:
        product.tags.remove(*product.tags.filter(name__in=list(names)))
        return self.get_by_id(product.id)
