"""Integration tests for Product API endpoints.

Covers:
- list (with filters), retrieve, by-category, create, update, delete, stock.
- Tag searches (union, intersection, substring, criteria).
- Tag attach/detach on a product.
- Domain exception mapping (400, 404, 409).
"""

from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from modules.products.models import Product
from modules.tags.models import Tag

pytestmark = pytest.mark.integration


def _names(response):
    return sorted(p["productName"] for p in response.json())


@pytest.fixture()
def tagged_catalog(make_product):
    make_product(name="a", category="One", price=Decimal("10"), tags=["A"])
    make_product(name="b", category="One", price=Decimal("20"), tags=["B"])
    make_product(name="ab", category="Two", price=Decimal("30"), tags=["A", "B"])
    make_product(name="none", category="Two", price=Decimal("40"))


# ===========================================================================
# READ
# ===========================================================================


class TestProductRead:
    def test_list_empty(self, api_client):
        response = api_client.get("/products")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_payload_shape(self, api_client, make_product):
        make_product(name="Phone", price=Decimal("599.00"), tags=["Premium", "New"])

        [body] = api_client.get("/products").json()

        assert body["productName"] == "Phone"
        assert body["categoryName"] == "Electronics"
        assert body["price"] == 599.0
        assert body["stockQuantity"] == 3
        assert body["tagNames"] == ["New", "Premium"]

    def test_list_filters(self, api_client, tagged_catalog):
        response = api_client.get("/products", {"category": "two", "max_price": "35"})
        assert _names(response) == ["ab"]

    def test_list_name_filter(self, api_client, tagged_catalog):
        assert _names(api_client.get("/products", {"name": "A"})) == ["a", "ab"]

    def test_list_invalid_filter_returns_400(self, api_client):
        response = api_client.get("/products", {"min_price": "cheap"})
        assert response.status_code == 400

    def test_retrieve_by_id(self, api_client, product):
        response = api_client.get(f"/products/{product.id}")
        assert response.status_code == 200
        assert response.json()["id"] == str(product.id)

    @pytest.mark.parametrize("pid", ["00000000-0000-0000-0000-000000000000", "42"])
    def test_retrieve_unknown_returns_404(self, api_client, pid):
        response = api_client.get(f"/products/{pid}")
        assert response.status_code == 404
        assert "not found" in response.json()["message"]

    def test_by_category(self, api_client, tagged_catalog):
        response = api_client.get("/products/category/One")
        assert response.status_code == 200
        assert _names(response) == ["a", "b"]

    def test_by_unknown_category_returns_404(self, api_client):
        assert api_client.get("/products/category/Ghost").status_code == 404


# ===========================================================================
# CREATE
# ===========================================================================


class TestProductCreate:
    def test_create_returns_201(self, api_client, category):
        payload = {
            "productName": "Phone",
            "categoryName": "Electronics",
            "price": 599.0,
            "stockQuantity": 3,
        }
        response = api_client.post("/products", payload, format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["categoryName"] == "Electronics"
        assert body["tagNames"] == []
        assert Product.objects.get(name="Phone").price == Decimal("599.00")

    def test_create_with_tags_reuses_and_creates(self, api_client, category, make_tag):
        make_tag("Premium", "Curated")
        payload = {
            "productName": "Laptop",
            "categoryName": "Electronics",
            "price": 1499.99,
            "stockQuantity": 5,
            "tagNames": ["Premium", "New", "New", " "],
        }
        response = api_client.post("/products", payload, format="json")

        assert response.status_code == 201
        assert response.json()["tagNames"] == ["New", "Premium"]
        assert Tag.objects.count() == 2
        assert Tag.objects.get(name="New").description == "Auto-created tag"
        assert Tag.objects.get(name="Premium").description == "Curated"

    def test_duplicate_name_returns_409(self, api_client, product):
        payload = {"productName": "Phone", "categoryName": "Electronics", "price": 1}
        response = api_client.post("/products", payload, format="json")
        assert response.status_code == 409

    def test_unknown_category_returns_404(self, api_client):
        payload = {"productName": "Phone", "categoryName": "Ghost", "price": 1}
        response = api_client.post("/products", payload, format="json")
        assert response.status_code == 404
        assert not Product.objects.exists()

    @pytest.mark.parametrize(
        "payload",
        [
            {"categoryName": "Electronics", "price": 1},
            {"productName": "X", "categoryName": "Electronics"},
            {"productName": "X", "categoryName": "Electronics", "price": -5},
            {"productName": "X", "categoryName": "Electronics", "price": "abc"},
            {"productName": "X", "categoryName": "Electronics", "price": 1, "stockQuantity": "n"},
            {"productName": "X", "categoryName": "Electronics", "price": 1e30},
            {"productName": "X", "categoryName": "Electronics", "price": 1.005},
            {"productName": "X", "categoryName": "Electronics", "price": 1, "stockQuantity": 10**20},
            {"productName": "X", "categoryName": "Electronics", "price": 1, "tagNames": 5},
            {"productName": "X", "categoryName": "Electronics", "price": 1, "tagNames": {"A": 1}},
            {"productName": "X", "categoryName": "Electronics", "price": 1, "tagNames": ["A", 2]},
            {"productName": "X", "categoryName": "Electronics", "price": 1, "tagNames": ["x" * 101]},
            {"productName": "x" * 256, "categoryName": "Electronics", "price": 1},
        ],
    )
    def test_invalid_payload_returns_400(self, api_client, category, payload):
        response = api_client.post("/products", payload, format="json")
        assert response.status_code == 400
        assert not Product.objects.exists()
        assert not Tag.objects.exists()
        assert response.json()["status"] == 400

    def test_create_logs_one_info_event(self, api_client, category, caplog):
        payload = {"productName": "Phone", "categoryName": "Electronics", "price": 1}
        with caplog.at_level(logging.INFO):
            response = api_client.post("/products", payload, format="json")

        assert response.status_code == 201
        messages = [record.getMessage() for record in caplog.records]
        assert sum("product.created" in m for m in messages) == 1, messages
        assert not any("product_created" in m or "product.saved" in m for m in messages)


# ===========================================================================
# UPDATE / DELETE / STOCK
# ===========================================================================


class TestProductUpdate:
    def test_update_by_current_name(self, api_client, product):
        payload = {
            "currentProductName": "Phone",
            "newProductName": "Phone Pro",
            "price": 1199.99,
        }
        response = api_client.put("/products", payload, format="json")

        assert response.status_code == 200
        body = response.json()
        assert body["productName"] == "Phone Pro"
        assert body["price"] == 1199.99
        assert body["stockQuantity"] == 3

    def test_update_category(self, api_client, product, make_category):
        make_category("Gadgets")
        payload = {"currentProductName": "Phone", "categoryName": "Gadgets"}
        response = api_client.put("/products", payload, format="json")
        assert response.json()["categoryName"] == "Gadgets"

    def test_update_unknown_returns_404(self, api_client):
        response = api_client.put("/products", {"currentProductName": "Ghost"}, format="json")
        assert response.status_code == 404

    def test_rename_conflict_returns_409(self, api_client, product, make_product):
        make_product(name="Laptop")
        payload = {"currentProductName": "Phone", "newProductName": "Laptop"}
        response = api_client.put("/products", payload, format="json")
        assert response.status_code == 409

    def test_update_missing_current_name_returns_400(self, api_client):
        assert api_client.put("/products", {"price": 1}, format="json").status_code == 400

    @pytest.mark.parametrize(
        "changes",
        [
            {"newProductName": "x" * 256},
            {"categoryName": "x" * 101},
            {"price": 1e30},
            {"stockQuantity": 2**31},
        ],
    )
    def test_update_out_of_range_returns_400(self, api_client, product, changes):
        payload = {"currentProductName": "Phone", **changes}
        response = api_client.put("/products", payload, format="json")
        assert response.status_code == 400
        product.refresh_from_db()
        assert product.name == "Phone"


class TestProductDelete:
    def test_delete_by_name(self, api_client, make_product):
        make_product(tags=["Premium"])

        response = api_client.delete("/products", {"productName": "Phone"}, format="json")

        assert response.status_code == 200
        assert response.json() == "Product deleted."
        assert not Product.objects.exists()
        assert Tag.objects.filter(name="Premium").exists()

    def test_delete_unknown_returns_404(self, api_client):
        response = api_client.delete("/products", {"productName": "Ghost"}, format="json")
        assert response.status_code == 404

    def test_delete_without_name_returns_400(self, api_client):
        assert api_client.delete("/products", {}, format="json").status_code == 400


class TestProductStock:
    @pytest.mark.parametrize(("change", "expected"), [(-1, 2), (5, 8), (-10, -7)])
    def test_adjust(self, api_client, product, change, expected):
        response = api_client.patch(
            "/products/stock",
            {"productName": "Phone", "inventoryChange": change},
            format="json",
        )
        assert response.status_code == 200
        assert response.json()["stockQuantity"] == expected
        product.refresh_from_db()
        assert product.stock_quantity == expected

    def test_adjust_unknown_returns_404(self, api_client):
        response = api_client.patch(
            "/products/stock",
            {"productName": "Ghost", "inventoryChange": 1},
            format="json",
        )
        assert response.status_code == 404

    def test_adjust_without_change_returns_400(self, api_client, product):
        response = api_client.patch("/products/stock", {"productName": "Phone"}, format="json")
        assert response.status_code == 400

    @pytest.mark.parametrize("change", [10**20, 2**31 - 1])
    def test_adjust_beyond_stock_range_returns_400(self, api_client, product, change):
        response = api_client.patch(
            "/products/stock",
            {"productName": "Phone", "inventoryChange": change},
            format="json",
        )
        assert response.status_code == 400
        product.refresh_from_db()
        assert product.stock_quantity == 3


# ===========================================================================
# SEARCH
# ===========================================================================


class TestProductSearch:
    def test_by_tags_union(self, api_client, tagged_catalog):
        response = api_client.get("/products/search/tags?tags=A&tags=B")
        assert response.status_code == 200
        assert _names(response) == ["a", "ab", "b"]

    def test_by_tags_comma_separated(self, api_client, tagged_catalog):
        assert _names(api_client.get("/products/search/tags?tags=A,B")) == ["a", "ab", "b"]

    def test_by_all_tags_intersection(self, api_client, tagged_catalog):
        response = api_client.get("/products/search/all-tags?tags=A&tags=B")
        assert _names(response) == ["ab"]

    def test_by_tags_requires_tags(self, api_client):
        assert api_client.get("/products/search/tags").status_code == 400
        assert api_client.get("/products/search/all-tags?tags=").status_code == 400

    def test_by_tag_pattern(self, api_client, make_product):
        make_product(name="p1", tags=["Premium"])
        make_product(name="p2", tags=["Budget"])
        assert _names(api_client.get("/products/search/tag-pattern?pattern=rem")) == ["p1"]

    def test_by_tag_pattern_requires_pattern(self, api_client):
        assert api_client.get("/products/search/tag-pattern").status_code == 400

    @pytest.mark.parametrize(
        ("criteria", "expected"),
        [
            ({"categoryName": "Two", "tagNames": ["A"]}, ["ab"]),
            ({"categoryName": "One"}, ["a", "b"]),
            ({"tagNames": ["B"]}, ["ab", "b"]),
            ({}, ["a", "ab", "b", "none"]),
        ],
    )
    def test_search_criteria(self, api_client, tagged_catalog, criteria, expected):
        response = api_client.post("/products/search", criteria, format="json")
        assert response.status_code == 200
        assert _names(response) == expected

    @pytest.mark.parametrize("criteria", [{"tagNames": 7}, {"tagNames": "A"}, {"tagNames": [1]}])
    def test_search_malformed_tag_names_returns_400(self, api_client, criteria):
        response = api_client.post("/products/search", criteria, format="json")
        assert response.status_code == 400

    def test_by_tags_overlong_name_returns_400(self, api_client):
        response = api_client.get("/products/search/tags", {"tags": "x" * 101})
        assert response.status_code == 400


# ===========================================================================
# TAG ASSOCIATIONS
# ===========================================================================


class TestProductTags:
    def test_add_tags_bare_list(self, api_client, make_product):
        product = make_product(tags=["Premium"])
        response = api_client.post(f"/products/{product.id}/tags", ["New", "Premium"], format="json")
        assert response.status_code == 200
        assert response.json()["tagNames"] == ["New", "Premium"]

    def test_add_tags_object_body(self, api_client, product):
        response = api_client.post(
            f"/products/{product.id}/tags", {"tagNames": ["New"]}, format="json"
        )
        assert response.json()["tagNames"] == ["New"]

    def test_remove_tags(self, api_client, make_product):
        product = make_product(tags=["Premium", "New"])
        response = api_client.delete(f"/products/{product.id}/tags", ["Premium"], format="json")
        assert response.status_code == 200
        assert response.json()["tagNames"] == ["New"]
        assert Tag.objects.filter(name="Premium").exists()

    def test_unknown_product_returns_404(self, api_client):
        pid = "00000000-0000-0000-0000-000000000000"
        assert api_client.post(f"/products/{pid}/tags", ["A"], format="json").status_code == 404
        assert api_client.delete(f"/products/{pid}/tags", ["A"], format="json").status_code == 404
        assert not Tag.objects.exists()

    def test_empty_tag_list_returns_400(self, api_client, product):
        response = api_client.post(f"/products/{product.id}/tags", [], format="json")
        assert response.status_code == 400

    @pytest.mark.parametrize("body", [[5], ["x" * 101], {"tagNames": "A"}])
    def test_malformed_tag_list_returns_400(self, api_client, product, body):
        response = api_client.post(f"/products/{product.id}/tags", body, format="json")
        assert response.status_code == 400
        assert not Tag.objects.exists()
