"""Tag repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.tags.models import Tag


class ITagRepository(IRepository["Tag"]):
    """Repository contract for the Tag aggregate."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List["Tag"]:
        """List tags, each annotated with ``product_count``."""

    @abstractmethod
    def exists_by_name(self, name: str) -> bool:
        """Whether a tag with exactly this name exists."""

    @abstractmethod
    def search_by_name(self, term: str) -> List["Tag"]:
        """Tags whose name contains ``term``, case-insensitively."""
