"""Root URL configuration.

Public: ``/health``, the OpenAPI schema and docs, token issuing.
Everything under ``/api/v1/`` otherwise requires a Bearer JWT unless
a view opts out.
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)
from rest_framework_simplejwt import views as jwt_views

auth_patterns = [
    path("token/", jwt_views.TokenObtainPairView.as_view(), name="token_obtain"),
    path("token/refresh/", jwt_views.TokenRefreshView.as_view(), name="token_refresh"),
    path("token/verify/", jwt_views.TokenVerifyView.as_view(), name="token_verify"),
]

docs_patterns = [
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
]

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("modules.core.urls")),
    path("api/v1/", include("modules.orders.urls")),
    path("api/v1/auth/", include(auth_patterns)),
    path("api/", include(docs_patterns)),
]
