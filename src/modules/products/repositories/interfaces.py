"""Product repository interface.

Extends ``IRepository[Product]`` with the name look-ups, tag searches and
tag association commands the product use-cases need.  Every query returns
fully materialised products (category and tags loaded).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Iterable, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product
    from modules.tags.models import Tag


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_for_update(self, name: str) -> Optional["Product"]:
        """Retrieve a product by name with a row-level lock (SELECT FOR UPDATE).

        Used for stock adjustment.  Returns ``None`` if absent.
        """

    @abstractmethod
    def find_by_category_name(self, category_name: str) -> List["Product"]:
        """Products whose category name equals ``category_name``."""

    @abstractmethod
    def find_by_tag_names(self, names: Iterable[str]) -> List["Product"]:
        """Products carrying at least one of the tags (no duplicates)."""

    @abstractmethod
    def find_by_all_tag_names(self, names: Iterable[str], count: int) -> List["Product"]:
        """Products carrying ``count`` distinct tags out of ``names``."""

    @abstractmethod
    def find_by_tag_name_containing(self, pattern: str) -> List["Product"]:
        """Products carrying any tag whose name contains ``pattern``."""

    @abstractmethod
    def find_by_category_and_tag_names(
        self, category_name: str, names: Iterable[str]
    ) -> List["Product"]:
        """Products in the category that carry any of the tags."""

    @abstractmethod
    def set_tags(self, product: "Product", tags: Iterable["Tag"]) -> "Product":
        """Replace the product's tag set."""

    @abstractmethod
    def add_tags(self, product: "Product", tags: Iterable["Tag"]) -> "Product":
        """Union ``tags`` into the product's tag set."""

    @abstractmethod
    def remove_tags_by_name(self, product: "Product", names: Iterable[str]) -> "Product":
        """Detach every tag of the product whose name is in ``names``."""
