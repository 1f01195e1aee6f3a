"""Product DRF serializers (response rendering only).

Request bodies are parsed into Pydantic DTOs in the views; this
serializer shapes the outgoing camelCase payload.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Product with its category and tags flattened to names."""

    productName = serializers.CharField(source="name", read_only=True)
    categoryName = serializers.CharField(source="category.name", read_only=True)
    stockQuantity = serializers.IntegerField(source="stock_quantity", read_only=True)
    tagNames = serializers.ListField(
        source="tag_names", child=serializers.CharField(), read_only=True
    )

    class Meta:
        model = Product
        fields = ["id", "productName", "categoryName", "price", "stockQuantity", "tagNames"]
        read_only_fields = fields
