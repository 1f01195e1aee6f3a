"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Business rules enforced here:
- Product names are unique; a rename colliding with another product
  fails with ``ProductAlreadyExists``.
- Every product belongs to an existing category.
- Stock adjustments add a signed delta and may leave stock negative, but
  never outside the 32-bit range of the stock column.
- Tag names are resolved through ``TagService.get_or_create_tags``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

import structlog
from django.db import IntegrityError, transaction

from modules.categories.exceptions import CategoryNotFound
from modules.products.constants import STOCK_MAX, STOCK_MIN
from modules.products.exceptions import (
    ProductAlreadyExists,
    ProductNotFound,
    StockOutOfRange,
)
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.categories.models import Category
    from modules.categories.repositories.interfaces import ICategoryRepository
    from modules.products.dtos import (
        AdjustStockDTO,
        CreateProductDTO,
        ProductSearchDTO,
        UpdateProductDTO,
    )
    from modules.products.repositories.interfaces import IProductRepository
    from modules.tags.services import TagService

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives the product and category repositories plus the ``TagService``
    via constructor injection.
    """

    def __init__(
        self,
        repository: IProductRepository,
        category_repository: ICategoryRepository,
        tag_service: TagService,
    ) -> None:
        self._repo = repository
        self._categories = category_repository
        self._tags = tag_service

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def add_product(self, dto: CreateProductDTO) -> Product:
        """Create a new product in an existing category.

        Raises:
            ProductAlreadyExists: if the name is already taken.
            CategoryNotFound: if the category does not exist.
        """
        log = logger.bind(name=dto.name)

        if self._repo.get_by_name(dto.name):
            log.warning("product.duplicate_name")
            raise ProductAlreadyExists(f"Product '{dto.name}' already exists.")

        product = Product(
            name=dto.name,
            category=self._require_category(dto.category_name),
            price=dto.price,
            stock_quantity=dto.stock_quantity,
        )
        product = self._persist(product)
        log.info("product.created", product_id=str(product.id))
        return product

    @transaction.atomic
    def add_product_with_tags(self, dto: CreateProductDTO, tag_names: Iterable[str]) -> Product:
        """Create a product and attach the named tags, creating missing ones."""
        product = self.add_product(dto)
        tags = self._tags.get_or_create_tags(tag_names)
        product = self._repo.set_tags(product, tags)
        logger.info(
            "product.tags_attached",
            product_id=str(product.id),
            tags=[tag.name for tag in tags],
        )
        return product

    @transaction.atomic
    def update_product(self, product: Product) -> Product:
        """Save an existing product as-is.

        Raises:
            ProductAlreadyExists: if the store rejects the name as taken.
        """
        product = self._persist(product)
        logger.info("product.updated", product_id=str(product.id))
        return product

    @transaction.atomic
    def update_product_by_name(self, dto: UpdateProductDTO) -> Product:
        """Apply the supplied fields to the product named ``dto.current_name``.

        Raises:
            ProductNotFound: if no product has the current name.
            ProductAlreadyExists: if the new name belongs to another product.
            CategoryNotFound: if the new category does not exist.
        """
        product = self.get_product_by_name(dto.current_name)

        if dto.new_name is not None and dto.new_name != product.name:
            if self._repo.get_by_name(dto.new_name):
                logger.warning("product.duplicate_name", name=dto.new_name)
                raise ProductAlreadyExists(f"Product '{dto.new_name}' already exists.")
            product.name = dto.new_name
        if dto.category_name is not None:
            product.category = self._require_category(dto.category_name)
        if dto.price is not None:
            product.price = dto.price
        if dto.stock_quantity is not None:
            product.stock_quantity = dto.stock_quantity

        return self.update_product(product)

    @transaction.atomic
    def adjust_stock(self, dto: AdjustStockDTO) -> Product:
        """Add a signed delta to the product's stock under a row lock.

        Raises:
            ProductNotFound: if the product does not exist.
            StockOutOfRange: if the new quantity would not fit the stock column.
        """
        product = self._repo.get_for_update(dto.product_name)
        if not product:
            raise ProductNotFound(f"Product '{dto.product_name}' not found.")

        previous = product.stock_quantity
        current = previous + dto.inventory_change
        if not STOCK_MIN <= current <= STOCK_MAX:
            logger.warning(
                "product.stock_out_of_range",
                product_id=str(product.id),
                previous=previous,
                change=dto.inventory_change,
            )
            raise StockOutOfRange(
                f"Stock of '{product.name}' would become {current}, outside "
                f"[{STOCK_MIN}, {STOCK_MAX}]."
            )
        product.stock_quantity = current
        product = self._repo.save(product)
        logger.info(
            "product.stock_adjusted",
            product_id=str(product.id),
            previous=previous,
            change=dto.inventory_change,
            current=product.stock_quantity,
        )
        return self.get_product_by_id(product.id)

    @transaction.atomic
    def delete_product(self, id: str) -> None:
        """Delete a product; its category and tags stay.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if not self._repo.delete(id):
            raise ProductNotFound(f"Product {id} not found.")
        logger.info("product.deleted", product_id=str(id))

    @transaction.atomic
    def add_tags_to_product(self, id: str, tag_names: Iterable[str]) -> Product:
        """Union the named tags into the product's tags, creating missing ones.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self.get_product_by_id(id)
        tags = self._tags.get_or_create_tags(tag_names)
        product = self._repo.add_tags(product, tags)
        logger.info(
            "product.tags_added",
            product_id=str(id),
            tags=[tag.name for tag in tags],
        )
        return product

    @transaction.atomic
    def remove_tags_from_product(self, id: str, tag_names: Iterable[str]) -> Product:
        """Detach the named tags; names the product does not carry are ignored.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self.get_product_by_id(id)
        names = list(tag_names)
        product = self._repo.remove_tags_by_name(product, names)
        logger.info("product.tags_removed", product_id=str(id), tags=names)
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all_products(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """Return every product, optionally narrowed by ORM look-ups."""
        return self._repo.list(filters)

    def get_product_by_name(self, name: str) -> Product:
        """Raises ``ProductNotFound`` if absent."""
        product = self._repo.get_by_name(name)
        if not product:
            raise ProductNotFound(f"Product '{name}' not found.")
        return product

    def get_product_by_id(self, id: str) -> Product:
        """Raises ``ProductNotFound`` if absent or if ``id`` is malformed."""
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product

    def get_products_by_category(self, category_name: str) -> List[Product]:
        """Products of the category; empty for unknown categories."""
        return self._repo.find_by_category_name(category_name)

    def get_category_products(self, category_name: str) -> List[Product]:
        """Like ``get_products_by_category`` but the category must exist.

        Raises:
            CategoryNotFound: if the category does not exist.
        """
        self._require_category(category_name)
        return self.get_products_by_category(category_name)

    def search_products_by_tags(self, tag_names: Iterable[str]) -> List[Product]:
        """Products carrying at least one of the tags."""
        names = list(dict.fromkeys(tag_names))
        if not names:
            return []
        return self._repo.find_by_tag_names(names)

    def search_products_by_all_tags(self, tag_names: Iterable[str]) -> List[Product]:
        """Products carrying every one of the tags."""
        names = list(dict.fromkeys(tag_names))
        if not names:
            return []
        return self._repo.find_by_all_tag_names(names, len(names))

    def search_products_by_tag_pattern(self, pattern: str) -> List[Product]:
        """Products carrying a tag whose name contains ``pattern``."""
        return self._repo.find_by_tag_name_containing(pattern)

    def search_products(self, criteria: ProductSearchDTO) -> List[Product]:
        """Combine category and tag criteria; no criteria returns everything."""
        if criteria.category_name and criteria.tag_names:
            return self._repo.find_by_category_and_tag_names(
                criteria.category_name, criteria.tag_names
            )
        if criteria.category_name:
            return self.get_products_by_category(criteria.category_name)
        if criteria.tag_names:
            return self.search_products_by_tags(criteria.tag_names)
        return self.get_all_products()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_category(self, name: str) -> Category:
        category = self._categories.get_by_name(name)
        if not category:
            raise CategoryNotFound(f"Category '{name}' not found.")
        return category

    def _persist(self, product: Product) -> Product:
        try:
            with transaction.atomic():
                return self._repo.save(product)
        except IntegrityError as exc:
            logger.warning("product.save_conflict", name=product.name)
            raise ProductAlreadyExists(f"Product '{product.name}' already exists.") from exc
