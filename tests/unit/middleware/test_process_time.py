"""Unit tests for ProcessTimeMiddleware."""

import unittest
from unittest.mock import patch

from django.http import HttpRequest, HttpResponse
from django.test import override_settings

from feed.constants import PROCESS_TIME_HEADER
from feed.middleware import ProcessTimeMiddleware


class TestProcessTimeMiddleware(unittest.TestCase):
    """Test cases for ProcessTimeMiddleware."""

    def setUp(self):
        """Set up test fixtures."""
        self.middleware = ProcessTimeMiddleware(lambda request: HttpResponse("OK"))
        self.request = HttpRequest()
        self.request.method = "GET"
        self.request.path = "/api/v1/notification-feed/health/live"

    def test_adds_numeric_process_time_header(self):
        response = self.middleware(self.request)

        self.assertGreaterEqual(float(response[PROCESS_TIME_HEADER]), 0)

    @patch("feed.middleware.process_time.logger")
    @patch("feed.middleware.process_time.time.perf_counter", side_effect=[0.0, 2.5])
    def test_slow_request_is_logged(self, _mock_counter, mock_logger):
        response = self.middleware(self.request)

        self.assertEqual(response[PROCESS_TIME_HEADER], "2.500000")
        mock_logger.warning.assert_called_once()

    @override_settings(SLOW_REQUEST_THRESHOLD=5.0)
    @patch("feed.middleware.process_time.logger")
    @patch("feed.middleware.process_time.time.perf_counter", side_effect=[0.0, 2.5])
    def test_threshold_follows_settings(self, _mock_counter, mock_logger):
        self.middleware(self.request)

        mock_logger.warning.assert_not_called()

    @patch("feed.middleware.process_time.logger")
    def test_fast_request_is_not_logged(self, mock_logger):
        self.middleware(self.request)

        mock_logger.warning.assert_not_called()


if __name__ == "__main__":
    unittest.main()
