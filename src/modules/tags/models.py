"""Tag model.

Tags are created explicitly (``POST /tags``) or implicitly when products are
tagged with names that do not exist yet.  ``name`` carries a UNIQUE index,
which is what makes concurrent implicit creation safe (see
``TagService.get_or_create_tags``).
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel
from modules.tags.constants import TAG_NAME_MAX_LENGTH


class Tag(BaseModel):
    """Independent aggregate associated with products (many-to-many).

    The association itself lives on ``Product.tags``; ``products`` is the
    reverse accessor.
    """

    name = models.CharField(max_length=TAG_NAME_MAX_LENGTH, unique=True)
    description = models.TextField(blank=True, default="")

    class Meta:
        db_table = "tags"
        ordering = ["name"]

    def save(self, *args, **kwargs) -> None:
        if self.name:
            self.name = self.name.strip()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.name
