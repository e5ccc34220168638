"""
stackwm.core.events - Window lifecycle events.

The host delivers one WindowEvent per notification; the workspace
manager dispatches on ``kind``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from stackwm.core.window import Window


class EventKind(enum.Enum):
    """Lifecycle notifications the engine reacts to."""

    # A window appeared (created or became visible).
    CREATED = "created"

    # A window was destroyed.
    DESTROYED = "destroyed"

    # The user finished moving or resizing a window.
    MOVED = "moved"

    # A window received keyboard focus.
    FOCUSED = "focused"


@dataclass(frozen=True, slots=True)
class WindowEvent:
    kind: EventKind
    window: Window

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.window.id}"
