"""Unit tests for the custom exception handler."""

import unittest
from unittest.mock import Mock, patch

from django.core.exceptions import PermissionDenied
from django.http import Http404

from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, ValidationError
from rest_framework.views import APIView

from feed.exceptions import (
    ActionFailedError,
    ConflictError,
    OverlayUnavailableError,
    custom_exception_handler,
)


@patch("feed.exceptions.handlers.get_request_id", return_value="test-request-id")
class TestCustomExceptionHandler(unittest.TestCase):
    """Test cases for custom_exception_handler."""

    def setUp(self):
        """Set up test fixtures."""
        self.mock_request = Mock()
        self.mock_request.path = "/api/v1/notification-feed/users/me/notifications"
        self.mock_request.method = "POST"

        self.mock_view = Mock(spec=APIView)
        self.mock_view.request = self.mock_request

        self.context = {"view": self.mock_view, "request": self.mock_request}

    def test_action_failed_is_bad_gateway(self, _mock_request_id):
        exc = ActionFailedError("accept", "n-1", "Follow request no longer exists")

        response = custom_exception_handler(exc, self.context)

        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(response.data["action"], "accept")
        self.assertEqual(response.data["notification_id"], "n-1")
        self.assertEqual(response.data["message"], "Follow request no longer exists")
        self.assertEqual(response["X-Request-ID"], "test-request-id")

    def test_conflict_is_409(self, _mock_request_id):
        exc = ConflictError("Action already in progress", detail="n-1")

        response = custom_exception_handler(exc, self.context)

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"], "conflict")
        self.assertEqual(response.data["detail"], "n-1")

    def test_http404(self, _mock_request_id):
        response = custom_exception_handler(Http404("missing"), self.context)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_permission_denied(self, _mock_request_id):
        response = custom_exception_handler(PermissionDenied("no"), self.context)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_drf_exceptions_keep_their_status(self, _mock_request_id):
        self.assertEqual(
            custom_exception_handler(ValidationError("bad"), self.context).status_code,
            status.HTTP_400_BAD_REQUEST,
        )
        self.assertEqual(
            custom_exception_handler(NotAuthenticated(), self.context).status_code,
            status.HTTP_401_UNAUTHORIZED,
        )

    def test_unhandled_feed_error_is_500(self, _mock_request_id):
        response = custom_exception_handler(
            OverlayUnavailableError("write"), self.context
        )

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["message"], "An internal server error occurred.")
        self.assertEqual(response.data["request_id"], "test-request-id")
        self.assertIn("timestamp", response.data)

    def test_missing_view_is_handled(self, _mock_request_id):
        response = custom_exception_handler(RuntimeError("boom"), {})

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)


if __name__ == "__main__":
    unittest.main()
