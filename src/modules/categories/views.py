"""Category API views.

Exposes ``CategoryService`` via HTTP using a DRF ViewSet.  Domain
exceptions propagate to ``modules.core.exception_handler``, which renders
them as the standard error envelope.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import serializers, status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.categories.dtos import CreateCategoryDTO
from modules.categories.models import Category
from modules.categories.repositories.django_repository import CategoryDjangoRepository
from modules.categories.serializers import CategorySerializer
from modules.categories.services import CategoryService
from modules.core.validation import json_object
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService
from modules.tags.repositories.django_repository import TagDjangoRepository
from modules.tags.services import TagService


class CategoryViewSet(GenericViewSet):
    """ViewSet for Category operations, addressed by category name.

    All ORM access goes through the service/repository layer.
    """

    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    lookup_field = "name"
    lookup_value_regex = "[^/]+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        category_repository = CategoryDjangoRepository()
        product_service = ProductService(
            repository=ProductDjangoRepository(),
            category_repository=category_repository,
            tag_service=TagService(repository=TagDjangoRepository()),
        )
        self._service = CategoryService(
            repository=category_repository,
            product_service=product_service,
        )

    def list(self, request: Request) -> Response:
        """GET /categories"""
        categories = self._service.get_all_categories()
        return Response(CategorySerializer(categories, many=True).data)

    def retrieve(self, request: Request, name: str) -> Response:
        """GET /categories/{name}"""
        category = self._service.get_category_by_name(name)
        return Response(CategorySerializer(category).data)

    @extend_schema(
        request=inline_serializer("CategoryRequest", {"name": serializers.CharField()}),
        responses={200: CategorySerializer},
    )
    def create(self, request: Request) -> Response:
        """POST /categories (answers 200, not 201)"""
        data = json_object(request.data)
        dto = CreateCategoryDTO(name=data.get("name", ""))
        category = self._service.add_category(dto)
        return Response(CategorySerializer(category).data, status=status.HTTP_200_OK)

    @extend_schema(responses={200: None})
    def destroy(self, request: Request, name: str) -> Response:
        """DELETE /categories/{name}"""
        self._service.delete_category_by_name(name)
        return Response(status=status.HTTP_200_OK)
