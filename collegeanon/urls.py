"""
URL configuration for the collegeanon project.

The JSON API lives under ``/api/``; ``/admin/`` is the Django admin site
used by staff for moderation outside the API.
"""
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("community.urls")),
]
