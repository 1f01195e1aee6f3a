"""Category repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.categories.models import Category


class ICategoryRepository(IRepository["Category"]):
    """Repository contract for the Category aggregate."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List["Category"]:
        """List categories with optional filters."""

    @abstractmethod
    def get_for_update(self, name: str) -> Optional["Category"]:
        """Retrieve a category by name with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def delete_by_name(self, name: str) -> bool:
        """Delete a category by name; ``False`` when no such category exists."""
