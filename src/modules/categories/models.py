"""Category model.

Business rules implemented:
- Category name is unique.
- A category cannot be removed while products reference it.  The service
  checks this explicitly; ``Product.category`` uses ``on_delete=PROTECT`` so
  the store refuses the delete as well.
"""

from __future__ import annotations

from django.db import models

from modules.categories.constants import CATEGORY_NAME_MAX_LENGTH
from modules.core.models import BaseModel


class Category(BaseModel):
    """Independent aggregate grouping products.

    ``products`` (reverse FK from ``Product``) is a lookup-only
    back-reference; the category never owns product lifecycle.
    """

    name = models.CharField(max_length=CATEGORY_NAME_MAX_LENGTH, unique=True)

    class Meta:
        db_table = "categories"
        ordering = ["name"]
        verbose_name_plural = "categories"

    def save(self, *args, **kwargs) -> None:
        if self.name:
            self.name = self.name.strip()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.name
