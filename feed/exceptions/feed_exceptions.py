"""Custom exceptions for notification feed reconciliation."""


class FeedError(Exception):
    """Base exception for notification feed errors."""


class SourceUnavailableError(FeedError):
    """A collector could not read its source.

    The feed degrades that source to an empty sequence.
    """

    def __init__(self, source: str, message: str | None = None):
        """Initialize source unavailable error.

        Args:
            source: Name of the collector that failed
            message: Optional custom error message
        """
        self.source = source
        super().__init__(message or f"Notification source '{source}' is unavailable")


class OverlayUnavailableError(FeedError):
    """The dismissal overlay store could not be read or written."""

    def __init__(self, operation: str, message: str | None = None):
        """Initialize overlay unavailable error.

        Args:
            operation: The overlay operation that failed ("read" or "write")
            message: Optional custom error message
        """
        self.operation = operation
        super().__init__(
            message or f"Dismissal overlay {operation} failed",
        )


class ActionFailedError(FeedError):
    """A delete, accept or decline call against the backend failed (502)."""

    def __init__(
        self,
        action: str,
        notification_id: str | None = None,
        message: str | None = None,
    ):
        """Initialize action failed error.

        Args:
            action: Name of the action ("delete", "accept", "decline")
            notification_id: ID of the notification the action targeted
            message: Optional custom error message
        """
        self.action = action
        self.notification_id = notification_id
        super().__init__(
            message or f"Failed to {action} notification {notification_id}",
        )


class ConflictError(Exception):
    """Conflict error for operations that cannot be performed (409)."""

    def __init__(self, message: str, detail: str | None = None):
        """Initialize conflict error.

        Args:
            message: Error message
            detail: Additional details about the conflict
        """
        self.detail = detail
        super().__init__(message)
