"""Tag URL configuration.

Mapped explicitly because the detail route reads its segment as a name on
GET and as an id on DELETE.
"""

from __future__ import annotations

from django.urls import path

from modules.tags.views import TagViewSet

tag_list = TagViewSet.as_view({"get": "list", "post": "create"})
tag_search = TagViewSet.as_view({"get": "search"})
tag_detail = TagViewSet.as_view({"get": "retrieve", "delete": "destroy"})

urlpatterns = [
    path("tags", tag_list, name="tag-list"),
    path("tags/search", tag_search, name="tag-search"),
    path("tags/<str:identifier>", tag_detail, name="tag-detail"),
]
