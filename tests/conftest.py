from decimal import Decimal

import pytest

from rest_framework.test import APIClient

from modules.categories.models import Category
from modules.products.models import Product
from modules.tags.models import Tag


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Catalog factories
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_category():
    def _make(name="Electronics"):
        return Category.objects.create(name=name)

    return _make


@pytest.fixture()
def make_tag():
    def _make(name="Premium", description=""):
        return Tag.objects.create(name=name, description=description)

    return _make


@pytest.fixture()
def make_product(make_category):
    """Persist a product; ``category`` may be a Category or a name."""

    def _make(
        name="Phone",
        category="Electronics",
        price=Decimal("599.00"),
        stock_quantity=3,
        tags=(),
    ):
        if isinstance(category, str):
            category = (
                Category.objects.filter(name=category).first() or make_category(category)
            )
        product = Product.objects.create(
            name=name,
            category=category,
            price=price,
            stock_quantity=stock_quantity,
        )
        if tags:
            product.tags.set(
                Tag.objects.get_or_create(name=tag)[0] if isinstance(tag, str) else tag
                for tag in tags
            )
        return product

    return _make


@pytest.fixture()
def category(make_category):
    return make_category("Electronics")


@pytest.fixture()
def product(make_product, category):
    return make_product(name="Phone", category=category)
