"""Product model with unique name, category ownership and tags.

Business rules implemented:
- Product name must be unique in the system.
- Price must be zero or greater.
- Stock quantity is a signed integer: adjustments may drive it negative.
- Every product belongs to exactly one category; the category cannot be
  deleted while the product exists (``on_delete=PROTECT``).
- Tags are optional and shared; deleting a product leaves its tags alone.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.products.constants import (
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
    PRODUCT_NAME_MAX_LENGTH,
)


class Product(BaseModel):
    """Product aggregate root.

    ``unique=True`` on ``name`` creates the UNIQUE INDEX the name look-ups
    rely on.
    """

    name = models.CharField(max_length=PRODUCT_NAME_MAX_LENGTH, unique=True)
    price = models.DecimalField(
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        validators=[MinValueValidator(Decimal("0"))],
    )
    stock_quantity = models.IntegerField(default=0)
    category = models.ForeignKey(
        "categories.Category",
        on_delete=models.PROTECT,
        related_name="products",
    )
    tags = models.ManyToManyField(
        "tags.Tag",
        related_name="products",
        blank=True,
    )

    class Meta:
        db_table = "products"
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.name:
            self.name = self.name.strip()
        if self.price is not None and self.price < 0:
            raise ValidationError({"price": "Price cannot be negative."})

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        if self.name:
            self.name = self.name.strip()
        super().save(*args, **kwargs)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    @property
    def tag_names(self) -> list[str]:
        """Sorted names of the attached tags (uses the prefetch cache)."""
        return sorted(tag.name for tag in self.tags.all())

    def __str__(self) -> str:
        return self.name
