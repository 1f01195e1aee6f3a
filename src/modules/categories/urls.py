"""Category URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.categories.views import CategoryViewSet

router = SimpleRouter(trailing_slash=False)
router.register("categories", CategoryViewSet, basename="category")

urlpatterns = router.urls
