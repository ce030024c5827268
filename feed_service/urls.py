"""Root URL configuration for the notification feed service."""

from django.urls import include, path

urlpatterns = [
    path("api/v1/notification-feed/", include("feed.urls")),
]
