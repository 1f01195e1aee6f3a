"""Category DRF serializers (response rendering only).

Input is parsed into ``CreateCategoryDTO`` by the view.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.categories.models import Category


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name"]
        read_only_fields = ["id"]
