"""URL routing configuration for the feed app."""

from django.urls import path

from .views import (
    AcceptFollowRequestView,
    DeclineFollowRequestView,
    DeleteNotificationView,
    LivenessCheckView,
    NotificationFeedView,
    ReadAllView,
    ReadinessCheckView,
    UnreadCountView,
)

urlpatterns = [
    # Health check endpoints
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    # Feed endpoints
    path(
        "users/me/notifications",
        NotificationFeedView.as_view(),
        name="notification-feed",
    ),
    path(
        "users/me/notifications/unread-count",
        UnreadCountView.as_view(),
        name="notification-unread-count",
    ),
    path(
        "users/me/notifications/read-all",
        ReadAllView.as_view(),
        name="notification-read-all",
    ),
    path(
        "users/me/notifications/delete",
        DeleteNotificationView.as_view(),
        name="notification-delete",
    ),
    # Follow request endpoints
    path(
        "users/me/follow-requests/accept",
        AcceptFollowRequestView.as_view(),
        name="follow-request-accept",
    ),
    path(
        "users/me/follow-requests/decline",
        DeclineFollowRequestView.as_view(),
        name="follow-request-decline",
    ),
]
