"""Root URL configuration. Every app mounts its API routes under ``/api/``."""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("user_auth_app.api.urls")),
    path("api/", include("games.api.urls")),
    path("api/", include("reviews.api.urls")),
    path("api/", include("common.api.urls")),
]
