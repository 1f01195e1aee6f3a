"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.  Request
bodies are parsed into Pydantic DTOs; domain exceptions and validation
errors propagate to ``modules.core.exception_handler``.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, inline_serializer
from rest_framework import serializers, status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.categories.repositories.django_repository import CategoryDjangoRepository
from modules.core.exceptions import InvalidRequest
from modules.core.validation import json_object, tag_names_from_body, tag_names_from_query
from modules.products.dtos import (
    AdjustStockDTO,
    CreateProductDTO,
    ProductSearchDTO,
    UpdateProductDTO,
)
from modules.products.filters import ProductFilter
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService
from modules.tags.repositories.django_repository import TagDjangoRepository
from modules.tags.services import TagService

PRODUCT_DELETED_MESSAGE = "Product deleted."

TAG_NAMES_REQUEST = inline_serializer(
    "TagNamesRequest",
    {"tagNames": serializers.ListField(child=serializers.CharField())},
)
TAGS_QUERY = OpenApiParameter(
    "tags",
    OpenApiTypes.STR,
    required=True,
    many=True,
    description="Repeat the parameter or separate names with commas.",
)


class ProductViewSet(GenericViewSet):
    """ViewSet for Product operations.

    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.  Update, delete and stock changes
    address the product by name in the request body.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = ProductFilter

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(
            repository=ProductDjangoRepository(),
            category_repository=CategoryDjangoRepository(),
            tag_service=TagService(repository=TagDjangoRepository()),
        )

    def _render(self, products, **kwargs) -> Response:
        many = isinstance(products, list)
        return Response(ProductSerializer(products, many=many).data, **kwargs)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /products"""
        filterset = self.filterset_class(request.query_params, queryset=self.queryset)
        if not filterset.is_valid():
            raise InvalidRequest(_describe(filterset.errors))
        return self._render(self._service.get_all_products(filterset.lookups()))

    def retrieve(self, request: Request, id: str) -> Response:
        """GET /products/{id}"""
        return self._render(self._service.get_product_by_id(id))

    @extend_schema(responses={200: ProductSerializer(many=True)})
    def by_category(self, request: Request, name: str) -> Response:
        """GET /products/category/{name}"""
        return self._render(self._service.get_category_products(name))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @extend_schema(
        request=inline_serializer(
            "ProductRequest",
            {
                "productName": serializers.CharField(),
                "categoryName": serializers.CharField(),
                "price": serializers.DecimalField(max_digits=12, decimal_places=2),
                "stockQuantity": serializers.IntegerField(),
                "tagNames": serializers.ListField(
                    child=serializers.CharField(), required=False
                ),
            },
        ),
        responses={201: ProductSerializer},
    )
    def create(self, request: Request) -> Response:
        """POST /products"""
        data = json_object(request.data)
        dto = CreateProductDTO(
            name=data.get("productName", ""),
            category_name=data.get("categoryName", ""),
            price=data.get("price"),
            stock_quantity=data.get("stockQuantity", 0),
            tag_names=data.get("tagNames"),
        )
        if dto.tag_names:
            product = self._service.add_product_with_tags(dto, dto.tag_names)
        else:
            product = self._service.add_product(dto)
        return self._render(product, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=inline_serializer(
            "ProductUpdateRequest",
            {
                "currentProductName": serializers.CharField(),
                "newProductName": serializers.CharField(required=False),
                "categoryName": serializers.CharField(required=False),
                "price": serializers.DecimalField(
                    max_digits=12, decimal_places=2, required=False
                ),
                "stockQuantity": serializers.IntegerField(required=False),
            },
        ),
        responses={200: ProductSerializer},
    )
    def update(self, request: Request) -> Response:
        """PUT /products"""
        data = json_object(request.data)
        dto = UpdateProductDTO(
            current_name=data.get("currentProductName", ""),
            new_name=data.get("newProductName"),
            category_name=data.get("categoryName"),
            price=data.get("price"),
            stock_quantity=data.get("stockQuantity"),
        )
        return self._render(self._service.update_product_by_name(dto))

    @extend_schema(
        request=inline_serializer(
            "ProductDeleteRequest", {"productName": serializers.CharField()}
        ),
        responses={200: OpenApiTypes.STR},
    )
    def destroy(self, request: Request) -> Response:
        """DELETE /products"""
        data = json_object(request.data)
        name = data.get("productName")
        if not isinstance(name, str) or not name.strip():
            raise InvalidRequest("productName must not be empty.")
        product = self._service.get_product_by_name(name.strip())
        self._service.delete_product(product.id)
        return Response(PRODUCT_DELETED_MESSAGE, status=status.HTTP_200_OK)

    @extend_schema(
        request=inline_serializer(
            "InventoryRequest",
            {
                "productName": serializers.CharField(),
                "inventoryChange": serializers.IntegerField(),
            },
        ),
        responses={200: ProductSerializer},
    )
    def adjust_stock(self, request: Request) -> Response:
        """PATCH /products/stock"""
        data = json_object(request.data)
        dto = AdjustStockDTO(
            product_name=data.get("productName", ""),
            inventory_change=data.get("inventoryChange"),
        )
        return self._render(self._service.adjust_stock(dto))

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    @extend_schema(
        request=inline_serializer(
            "ProductSearchRequest",
            {
                "categoryName": serializers.CharField(required=False),
                "tagNames": serializers.ListField(
                    child=serializers.CharField(), required=False
                ),
            },
        ),
        responses={200: ProductSerializer(many=True)},
    )
    def search(self, request: Request) -> Response:
        """POST /products/search"""
        data = json_object(request.data)
        criteria = ProductSearchDTO(
            category_name=data.get("categoryName"),
            tag_names=data.get("tagNames"),
        )
        return self._render(self._service.search_products(criteria))

    @extend_schema(parameters=[TAGS_QUERY], responses={200: ProductSerializer(many=True)})
    def search_by_tags(self, request: Request) -> Response:
        """GET /products/search/tags?tags=A&tags=B"""
        names = tag_names_from_query(request.query_params.getlist("tags"))
        return self._render(self._service.search_products_by_tags(names))

    @extend_schema(parameters=[TAGS_QUERY], responses={200: ProductSerializer(many=True)})
    def search_by_all_tags(self, request: Request) -> Response:
        """GET /products/search/all-tags?tags=A,B"""
        names = tag_names_from_query(request.query_params.getlist("tags"))
        return self._render(self._service.search_products_by_all_tags(names))

    @extend_schema(
        parameters=[OpenApiParameter("pattern", OpenApiTypes.STR, required=True)],
        responses={200: ProductSerializer(many=True)},
    )
    def search_by_tag_pattern(self, request: Request) -> Response:
        """GET /products/search/tag-pattern?pattern=sub"""
        pattern = request.query_params.get("pattern")
        if not pattern:
            raise InvalidRequest("Query parameter 'pattern' is required.")
        return self._render(self._service.search_products_by_tag_pattern(pattern))

    # ------------------------------------------------------------------
    # Tag associations
    # ------------------------------------------------------------------

    @extend_schema(request=TAG_NAMES_REQUEST, responses={200: ProductSerializer})
    def add_tags(self, request: Request, id: str) -> Response:
        """POST /products/{id}/tags"""
        names = tag_names_from_body(request.data)
        return self._render(self._service.add_tags_to_product(id, names))

    @extend_schema(request=TAG_NAMES_REQUEST, responses={200: ProductSerializer})
    def remove_tags(self, request: Request, id: str) -> Response:
        """DELETE /products/{id}/tags"""
        names = tag_names_from_body(request.data)
        return self._render(self._service.remove_tags_from_product(id, names))


def _describe(errors) -> str:
    return "; ".join(
        f"{field}: {' '.join(str(m) for m in messages)}" for field, messages in errors.items()
    )
