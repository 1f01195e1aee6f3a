"""Category service layer (Use Cases).

Business rules enforced here:
- Category names are unique.
- A category with products cannot be deleted.  The product check runs
  before the existence check, so deleting an unknown category with no
  products reports "not found" rather than "not empty".
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from modules.categories.exceptions import (
    CategoryAlreadyExists,
    CategoryNotEmpty,
    CategoryNotFound,
)
from modules.categories.models import Category

if TYPE_CHECKING:
    from modules.categories.dtos import CreateCategoryDTO
    from modules.categories.repositories.interfaces import ICategoryRepository
    from modules.products.services import ProductService

logger = structlog.get_logger(__name__)


class CategoryService:
    """Application service for Category use-cases.

    Receives an ``ICategoryRepository`` and the ``ProductService`` (used for
    the non-empty check) via constructor injection.
    """

    def __init__(
        self,
        repository: ICategoryRepository,
        product_service: ProductService,
    ) -> None:
        self._repo = repository
        self._product_service = product_service

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def add_category(self, dto: CreateCategoryDTO) -> Category:
        """Create a category.

        Raises:
            CategoryAlreadyExists: if the name is taken.
        """
        log = logger.bind(name=dto.name)

        if self._repo.get_by_name(dto.name):
            log.warning("category.duplicate_name")
            raise CategoryAlreadyExists(f"Category '{dto.name}' already exists.")

        try:
            with transaction.atomic():
                category = self._repo.save(Category(name=dto.name))
        except IntegrityError as exc:
            log.warning("category.save_conflict")
            raise CategoryAlreadyExists(f"Category '{dto.name}' already exists.") from exc
        log.info("category.created", category_id=str(category.id))
        return category

    @transaction.atomic
    def delete_category_by_name(self, name: str) -> None:
        """Delete a category that no product references.

        Raises:
            CategoryNotEmpty: if any product belongs to the category.
            CategoryNotFound: if the category does not exist.
        """
        log = logger.bind(name=name)

        if self._product_service.get_products_by_category(name):
            log.warning("category.delete_blocked")
            raise CategoryNotEmpty(f"Category '{name}' still has products.")

        if not self._repo.get_for_update(name):
            raise CategoryNotFound(f"Category '{name}' not found.")

        # A product inserted after the check above is caught by the store.
        try:
            with transaction.atomic():
                self._repo.delete_by_name(name)
        except (ProtectedError, IntegrityError) as exc:
            log.warning("category.delete_blocked_by_store")
            raise CategoryNotEmpty(f"Category '{name}' still has products.") from exc

        log.info("category.deleted")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all_categories(self) -> List[Category]:
        return self._repo.list()

    def get_category_by_name(self, name: str) -> Category:
        """Retrieve a category by name.

        Raises:
            CategoryNotFound: if the category does not exist.
        """
        category = self._repo.get_by_name(name)
        if not category:
            raise CategoryNotFound(f"Category '{name}' not found.")
        return category
