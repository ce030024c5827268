"""API views for the notification feed."""

from uuid import UUID

from django.utils import timezone

import structlog
from asgiref.sync import async_to_sync
from pydantic import ValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from feed.auth.oauth2 import OAuth2Authentication
from feed.enums import ActionOutcome
from feed.exceptions import ConflictError
from feed.logging import set_user_id
from feed.schemas.notification import (
    FeedNotification,
    NotificationCandidate,
    NotificationFeedResponse,
    ReadAllResponse,
    UnreadCountResponse,
)
from feed.services.action_router import notification_action_router
from feed.services.health_service import health_service
from feed.services.notification_feed_service import (
    NotificationFeed,
    notification_feed_service,
)
from feed.services.notification_store import notification_store

logger = structlog.get_logger(__name__)


def _forbidden(request, action: str) -> Response:
    logger.warning(
        "User lacks required scope",
        action=action,
        user_id=request.user.user_id,
        scopes=request.user.scopes,
    )
    return Response(
        {
            "error": "forbidden",
            "message": "You do not have permission to perform this action",
            "detail": "Requires notification:user or notification:admin scope",
        },
        status=status.HTTP_403_FORBIDDEN,
    )


def _bad_request(error: ValidationError) -> Response:
    logger.warning(
        "Invalid notification in request body",
        validation_errors=error.errors(),
    )
    return Response(
        {
            "error": "bad_request",
            "message": "Invalid request parameters",
            "errors": error.errors(),
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


def _feed_owner(request) -> UUID:
    """Profile id of the authenticated user, also bound to the log context."""
    user_id = request.user.profile_id
    set_user_id(str(user_id))
    return user_id


def _feed_response(feed: NotificationFeed) -> dict:
    now = timezone.now()
    response = NotificationFeedResponse(
        notifications=[FeedNotification.render(item, now) for item in feed.items],
        total_count=len(feed.items),
        unread_count=feed.unread_count,
    )
    return response.model_dump(by_alias=True, mode="json")


class LivenessCheckView(APIView):
    """Liveness probe. Never checks dependencies."""

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        liveness = health_service.get_liveness_status()
        return Response(liveness.model_dump(), status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness probe.

    Returns 200 with status "degraded" when the database or the dismissal
    store is down, since the feed keeps serving with empty sources.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        readiness = health_service.get_readiness_status()
        return Response(readiness.model_dump(mode="json"), status=status.HTTP_200_OK)


class NotificationFeedView(APIView):
    """Merged notification feed of the authenticated user."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, request):
        """Run a merge cycle and return the feed.

        Returns:
            200 with notifications, totalCount and unreadCount
            401 Unauthorized if authentication fails
            403 Forbidden if the token lacks the notification scopes
        """
        if not request.user.has_any_scope():
            return _forbidden(request, "feed")

        feed = notification_feed_service.new_feed(_feed_owner(request))
        async_to_sync(feed.refresh)()

        logger.info(
            "Notification feed served",
            user_id=str(feed.user_id),
            total_count=len(feed.items),
        )
        return Response(_feed_response(feed), status=status.HTTP_200_OK)


class UnreadCountView(APIView):
    """Unread structured notification count, used for the tab badge."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, request):
        if not request.user.has_any_scope():
            return _forbidden(request, "unread_count")

        count = async_to_sync(notification_store.count_unread)(_feed_owner(request))
        response = UnreadCountResponse(unread_count=count)
        return Response(response.model_dump(by_alias=True), status=status.HTTP_200_OK)


class ReadAllView(APIView):
    """Marks every structured notification of the user as read."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        if not request.user.has_any_scope():
            return _forbidden(request, "read_all")

        user_id = _feed_owner(request)
        updated = async_to_sync(notification_store.mark_all_read)(user_id)

        logger.info("Notifications marked read", user_id=str(user_id), updated=updated)
        response = ReadAllResponse(updated_count=updated)
        return Response(response.model_dump(by_alias=True), status=status.HTTP_200_OK)


class _CandidateActionView(APIView):
    """Base view for actions that take a notification candidate body."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)
    action_name = ""

    def post(self, request):
        """Apply the action and return the user's feed afterwards.

        Returns:
            200 with the feed after the action
            400 Bad Request if the body is not a valid notification
            403 Forbidden if the token lacks the notification scopes
            409 Conflict if the same action is already in flight
            502 Bad Gateway if the backend rejected the action
        """
        if not request.user.has_any_scope():
            return _forbidden(request, self.action_name)

        try:
            candidate = NotificationCandidate.model_validate(request.data)
        except ValidationError as e:
            return _bad_request(e)

        feed = notification_feed_service.new_feed(_feed_owner(request))
        outcome = async_to_sync(self._run)(feed, candidate)

        if outcome is ActionOutcome.SUPPRESSED:
            raise ConflictError(
                "Action already in progress",
                detail=f"A {self.action_name} for notification {candidate.id} "
                "is still being processed",
            )

        logger.info(
            "Notification action handled",
            action=self.action_name,
            notification_id=candidate.id,
            outcome=outcome.value,
        )
        return Response(_feed_response(feed), status=status.HTTP_200_OK)

    async def _run(
        self, feed: NotificationFeed, candidate: NotificationCandidate
    ) -> ActionOutcome:
        await feed.refresh()
        return await self.apply(feed, candidate)

    async def apply(
        self, feed: NotificationFeed, candidate: NotificationCandidate
    ) -> ActionOutcome:
        raise NotImplementedError


class DeleteNotificationView(_CandidateActionView):
    """Deletes a feed entry from whichever source produced it."""

    action_name = "delete"

    async def apply(self, feed, candidate):
        return await notification_action_router.delete_notification(feed, candidate)


class AcceptFollowRequestView(_CandidateActionView):
    """Accepts the follow request behind a follow_request entry."""

    action_name = "accept"

    async def apply(self, feed, candidate):
        return await notification_action_router.accept_follow_request(feed, candidate)


class DeclineFollowRequestView(_CandidateActionView):
    """Declines the follow request behind a follow_request entry."""

    action_name = "decline"

    async def apply(self, feed, candidate):
        return await notification_action_router.decline_follow_request(
            feed, candidate
        )
