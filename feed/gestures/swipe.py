"""Horizontal swipe-to-delete for feed entries.

Each entry moves through Idle -> Dragging -> Committed or SnappedBack.
Only a rightward drag past the activation offset starts a gesture, and a
release commits only when the drag exceeds a fraction of the viewport.
Transitions are pure functions; `SwipeController` keeps the per-entry
state and fires the delete callback.
"""

from collections.abc import Callable
from dataclasses import dataclass

from django.conf import settings

import structlog

from feed.constants import DEFAULT_SWIPE_ACTIVATION_OFFSET, DEFAULT_SWIPE_COMMIT_RATIO

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Idle:
    """Entry at rest."""


@dataclass(frozen=True)
class Dragging:
    """Entry following the finger, offset to the right by translate_x."""

    translate_x: float


@dataclass(frozen=True)
class Committed:
    """Drag released past the commit threshold; the entry is deleted."""

    released_x: float


@dataclass(frozen=True)
class SnappedBack:
    """Drag released short of the threshold; the entry animates back to rest."""

    released_x: float


SwipeState = Idle | Dragging | Committed | SnappedBack

IDLE = Idle()


@dataclass(frozen=True)
class SwipeConfig:
    activation_offset: float = DEFAULT_SWIPE_ACTIVATION_OFFSET
    commit_ratio: float = DEFAULT_SWIPE_COMMIT_RATIO

    def commit_threshold(self, viewport_width: float) -> float:
        return viewport_width * self.commit_ratio

    @classmethod
    def from_settings(cls) -> "SwipeConfig":
        return cls(
            activation_offset=getattr(
                settings,
                "FEED_SWIPE_ACTIVATION_OFFSET",
                DEFAULT_SWIPE_ACTIVATION_OFFSET,
            ),
            commit_ratio=getattr(
                settings, "FEED_SWIPE_COMMIT_RATIO", DEFAULT_SWIPE_COMMIT_RATIO
            ),
        )


def is_terminal(state: SwipeState) -> bool:
    return isinstance(state, (Committed, SnappedBack))


def drag_update(state: SwipeState, delta_x: float, config: SwipeConfig) -> SwipeState:
    """Apply a drag update with the cumulative horizontal displacement.

    An update after a terminal state starts a new gesture. Leftward or
    small movements never leave Idle.
    """
    if is_terminal(state):
        state = IDLE

    if isinstance(state, Idle):
        if delta_x > config.activation_offset:
            return Dragging(translate_x=delta_x)
        return state

    return Dragging(translate_x=max(delta_x, 0.0))


def drag_release(
    state: SwipeState,
    delta_x: float,
    viewport_width: float,
    config: SwipeConfig,
) -> SwipeState:
    """Finish a gesture.

    A release that arrives without a prior update is evaluated as an update
    first. Releasing an entry already in a terminal state changes nothing.
    """
    if is_terminal(state):
        return state

    state = drag_update(state, delta_x, config)
    if not isinstance(state, Dragging):
        return state

    if delta_x > config.commit_threshold(viewport_width):
        return Committed(released_x=delta_x)
    return SnappedBack(released_x=delta_x)


class SwipeController:
    """Tracks swipe state per feed entry and triggers deletes on commit."""

    def __init__(
        self,
        viewport_width: float,
        on_commit: Callable[[str], None],
        config: SwipeConfig | None = None,
    ):
        if viewport_width <= 0:
            raise ValueError("viewport_width must be positive")
        self.viewport_width = viewport_width
        self.on_commit = on_commit
        self.config = config or SwipeConfig.from_settings()
        self._states: dict[str, SwipeState] = {}

    def state_of(self, item_id: str) -> SwipeState:
        return self._states.get(item_id, IDLE)

    def on_drag_update(self, item_id: str, delta_x: float) -> SwipeState:
        state = drag_update(self.state_of(item_id), delta_x, self.config)
        self._states[item_id] = state
        return state

    def on_drag_release(self, item_id: str, delta_x: float) -> SwipeState:
        """Release the drag on an entry; a commit calls on_commit once."""
        previous = self.state_of(item_id)
        state = drag_release(previous, delta_x, self.viewport_width, self.config)
        self._states[item_id] = state

        if isinstance(state, Committed) and not isinstance(previous, Committed):
            logger.debug(
                "Swipe committed",
                item_id=item_id,
                released_x=delta_x,
                threshold=self.config.commit_threshold(self.viewport_width),
            )
            self.on_commit(item_id)
        return state

    def forget(self, item_id: str) -> None:
        """Drop the state of an entry that left the feed."""
        self._states.pop(item_id, None)
