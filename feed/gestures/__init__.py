"""Swipe-to-delete gesture state machine."""

from feed.gestures.swipe import (
    Committed,
    Dragging,
    Idle,
    SnappedBack,
    SwipeConfig,
    SwipeController,
    SwipeState,
    drag_release,
    drag_update,
)

__all__ = [
    "Committed",
    "Dragging",
    "Idle",
    "SnappedBack",
    "SwipeConfig",
    "SwipeController",
    "SwipeState",
    "drag_release",
    "drag_update",
]
