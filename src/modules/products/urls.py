"""Product URL configuration.

Mapped explicitly: update, delete and stock changes act on the collection
path with the product named in the body, which a router cannot express.
Static segments are listed before ``products/<id>``.
"""

from __future__ import annotations

from django.urls import path

from modules.products.views import ProductViewSet

product_collection = ProductViewSet.as_view(
    {"get": "list", "post": "create", "put": "update", "delete": "destroy"}
)
product_stock = ProductViewSet.as_view({"patch": "adjust_stock"})
product_search = ProductViewSet.as_view({"post": "search"})
product_search_tags = ProductViewSet.as_view({"get": "search_by_tags"})
product_search_all_tags = ProductViewSet.as_view({"get": "search_by_all_tags"})
product_search_pattern = ProductViewSet.as_view({"get": "search_by_tag_pattern"})
product_by_category = ProductViewSet.as_view({"get": "by_category"})
product_detail = ProductViewSet.as_view({"get": "retrieve"})
product_tags = ProductViewSet.as_view({"post": "add_tags", "delete": "remove_tags"})

urlpatterns = [
    path("products", product_collection, name="product-list"),
    path("products/stock", product_stock, name="product-stock"),
    path("products/search", product_search, name="product-search"),
    path("products/search/tags", product_search_tags, name="product-search-tags"),
    path("products/search/all-tags", product_search_all_tags, name="product-search-all-tags"),
    path("products/search/tag-pattern", product_search_pattern, name="product-search-tag-pattern"),
    path("products/category/<str:name>", product_by_category, name="product-by-category"),
    path("products/<str:id>", product_detail, name="product-detail"),
    path("products/<str:id>/tags", product_tags, name="product-tags"),
]
