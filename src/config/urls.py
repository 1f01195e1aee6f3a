from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

from django.urls import include, path
from rest_framework_simplejwt.views import (
    TokenObtainPairView,
    TokenRefreshView,
    TokenVerifyView,
)

handler404 = "modules.core.views.not_found"
handler500 = "modules.core.views.server_error"

urlpatterns = [
    path("", include("modules.core.urls")),
    # Catalog resources
    path("", include("modules.categories.urls")),
    path("", include("modules.products.urls")),
    path("", include("modules.tags.urls")),
    # Auth (SimpleJWT)
    path("auth/token", TokenObtainPairView.as_view(), name="token_obtain"),
    path("auth/token/refresh", TokenRefreshView.as_view(), name="token_refresh"),
    path("auth/token/verify", TokenVerifyView.as_view(), name="token_verify"),
    # OpenAPI schema & docs (public)
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
]
