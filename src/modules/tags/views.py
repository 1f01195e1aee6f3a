"""Tag API views."""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, inline_serializer
from rest_framework import serializers, status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import InvalidRequest
from modules.core.validation import json_object
from modules.tags.dtos import CreateTagDTO
from modules.tags.models import Tag
from modules.tags.repositories.django_repository import TagDjangoRepository
from modules.tags.serializers import TagSerializer
from modules.tags.services import TagService

TAG_DELETED_MESSAGE = "Tag deleted successfully"


class TagViewSet(GenericViewSet):
    """ViewSet for Tag operations.

    ``GET /tags/{identifier}`` looks a tag up by name while
    ``DELETE /tags/{identifier}`` deletes by id.
    """

    queryset = Tag.objects.all()
    serializer_class = TagSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = TagService(repository=TagDjangoRepository())

    def list(self, request: Request) -> Response:
        """GET /tags"""
        return Response(TagSerializer(self._service.get_all_tags(), many=True).data)

    def retrieve(self, request: Request, identifier: str) -> Response:
        """GET /tags/{name}"""
        tag = self._service.get_tag_by_name(identifier)
        return Response(TagSerializer(tag).data)

    @extend_schema(
        request=inline_serializer(
            "TagRequest",
            {
                "name": serializers.CharField(),
                "description": serializers.CharField(required=False),
            },
        ),
        responses={201: TagSerializer},
    )
    def create(self, request: Request) -> Response:
        """POST /tags"""
        data = json_object(request.data)
        dto = CreateTagDTO(
            name=data.get("name", ""),
            description=data.get("description"),
        )
        tag = self._service.create_tag(dto)
        return Response(TagSerializer(tag).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: OpenApiTypes.STR})
    def destroy(self, request: Request, identifier: str) -> Response:
        """DELETE /tags/{id}"""
        self._service.delete_tag(identifier)
        return Response(TAG_DELETED_MESSAGE, status=status.HTTP_200_OK)

    @extend_schema(
        parameters=[OpenApiParameter("q", OpenApiTypes.STR, required=True)],
        responses={200: TagSerializer(many=True)},
    )
    def search(self, request: Request) -> Response:
        """GET /tags/search?q=term"""
        term = request.query_params.get("q")
        if term is None:
            raise InvalidRequest("Query parameter 'q' is required.")
        tags = self._service.search_tags_by_name(term)
        return Response(TagSerializer(tags, many=True).data)
