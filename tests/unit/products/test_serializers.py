from __future__ import annotations

from decimal import Decimal

import pytest

from modules.products.serializers import ProductSerializer

pytestmark = pytest.mark.unit


class TestProductSerializer:
    def test_camel_case_fields(self, product):
        data = ProductSerializer(product).data
        assert set(data) == {
            "id",
            "productName",
            "categoryName",
            "price",
            "stockQuantity",
            "tagNames",
        }
        assert data["productName"] == "Phone"
        assert data["categoryName"] == "Electronics"
        assert data["stockQuantity"] == 3

    def test_price_rendered_as_number(self, make_product):
        data = ProductSerializer(make_product(price=Decimal("19.99"))).data
        assert data["price"] == Decimal("19.99")
        assert not isinstance(data["price"], str)

    def test_tag_names_sorted(self, make_product):
        data = ProductSerializer(make_product(tags=["Zeta", "Alpha"])).data
        assert data["tagNames"] == ["Alpha", "Zeta"]

    def test_no_tags(self, product):
        assert ProductSerializer(product).data["tagNames"] == []
