"""Tag DRF serializers (response rendering only)."""

from __future__ import annotations

from rest_framework import serializers

from modules.tags.models import Tag


class TagSerializer(serializers.ModelSerializer):
    """Renders a tag with the number of products carrying it.

    Uses the ``product_count`` annotation from the repository when present.
    """

    productCount = serializers.SerializerMethodField()

    class Meta:
        model = Tag
        fields = ["id", "name", "description", "productCount"]
        read_only_fields = fields

    def get_productCount(self, obj: Tag) -> int:
        count = getattr(obj, "product_count", None)
        if count is None:
            count = obj.products.count()
        return count
