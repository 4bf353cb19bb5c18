"""Geometry and state for drag-to-reorder lists of equally tall rows."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DRAG_START_DISTANCE_SQUARED = 64.0
DEFAULT_SPACING = 8.0
MIME_TYPE = "application/x-reorder-index"

Point = tuple[float, float]


def _item_height(height: float, item_count: int, spacing: float) -> float:
    total_spacing = spacing * max(item_count - 1, 0)
    return (height - total_spacing) / item_count


def insertion_index(
    y: float, top: float, height: float, item_count: int, spacing: float = DEFAULT_SPACING
) -> int:
    """Insertion slot for a cursor at ``y``.

    The list spans ``height`` from ``top`` and holds ``item_count`` rows of
    equal height separated by ``spacing``. The result lies in
    ``0..item_count - 1``, or is 0 for an empty list.
    """
    if item_count <= 0:
        return 0
    item_height = _item_height(height, item_count, spacing)
    threshold = top
    for index in range(item_count):
        threshold += item_height / 2 if index == 0 else item_height + spacing
        if y <= threshold:
            return index
    return item_count - 1


def pressed_item_index(
    start_y: float,
    top: float,
    height: float,
    item_count: int,
    spacing: float = DEFAULT_SPACING,
) -> int | None:
    """Index of the row under ``start_y``, or None if none is there."""
    if item_count <= 0:
        return None
    item_height = _item_height(height, item_count, spacing)
    relative = start_y - top
    if relative < 0:
        return None
    for index in range(item_count):
        if relative < index * (item_height + spacing) + item_height:
            return index
    return None


def drag_started(start: Point, position: Point) -> bool:
    """Whether the pointer moved far enough from ``start`` to begin a drag."""
    dx = position[0] - start[0]
    dy = position[1] - start[1]
    return dx * dx + dy * dy > DRAG_START_DISTANCE_SQUARED


class DragPhase(Enum):
    IDLE = "idle"
    PRESSED = "pressed"
    DRAGGING = "dragging"


@dataclass
class DragTracker:
    """Press, threshold and drag state of a reorderable list.

    The list occupies ``top .. top + height`` vertically and, when ``width``
    is given, ``left .. left + width`` horizontally.
    """

    item_count: int
    height: float
    top: float = 0.0
    spacing: float = DEFAULT_SPACING
    left: float = 0.0
    width: float | None = None
    phase: DragPhase = field(default=DragPhase.IDLE, init=False)
    press_point: Point | None = field(default=None, init=False)
    dragging_index: int | None = field(default=None, init=False)
    drag_offset: Point | None = field(default=None, init=False)

    def _contains(self, point: Point) -> bool:
        x, y = point
        if not self.top <= y <= self.top + self.height:
            return False
        if self.width is None:
            return True
        return self.left <= x <= self.left + self.width

    def _reset(self) -> None:
        self.phase = DragPhase.IDLE
        self.press_point = None
        self.dragging_index = None
        self.drag_offset = None

    def press(self, point: Point) -> bool:
        """Begin a press at ``point``; True if the list took the press."""
        if self.phase is not DragPhase.IDLE or not self._contains(point):
            return False
        self.phase = DragPhase.PRESSED
        self.press_point = point
        return True

    def move(self, point: Point) -> int | None:
        """Track pointer motion; returns the row index when a drag starts."""
        if self.phase is not DragPhase.PRESSED or self.press_point is None:
            return None
        start = self.press_point
        if not drag_started(start, point):
            return None
        index = pressed_item_index(
            start[1], self.top, self.height, self.item_count, self.spacing
        )
        if index is None:
            return None
        item_height = _item_height(self.height, self.item_count, self.spacing)
        item_top = self.top + index * (item_height + self.spacing)
        self.drag_offset = (start[0] - self.left, start[1] - item_top)
        self.phase = DragPhase.DRAGGING
        self.dragging_index = index
        return index

    def release(self) -> bool:
        """Release the button; True if a pending press was dropped.

        A drag in progress is not ended by a release; it ends through
        ``finish`` or ``cancel``.
        """
        if self.phase is DragPhase.PRESSED:
            self._reset()
            return True
        return False

    def cancel(self) -> bool:
        """Abort a drag; True if one was in progress."""
        if self.phase is not DragPhase.DRAGGING:
            return False
        self._reset()
        return True

    def finish(self) -> bool:
        """Complete a drag; True if one was in progress."""
        if self.phase is not DragPhase.DRAGGING:
            return False
        self._reset()
        return True