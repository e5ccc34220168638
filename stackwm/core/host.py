"""
stackwm.core.host - The host window-server interface.

The engine asks the host three things: which windows exist, which one
has keyboard focus, and where the screen is.  Everything else goes
through the Window handles it returns.
"""

from __future__ import annotations

import abc
from typing import Optional

from stackwm.core.window import Window
from stackwm.tiling.rect import Rect


class Host(abc.ABC):
    """Window server plus screen geometry, as seen by the engine."""

    @abc.abstractmethod
    def windows(self) -> list[Window]:
        """All top-level windows, frontmost first."""
        ...

    @abc.abstractmethod
    def focused_window(self) -> Optional[Window]:
        """The window holding keyboard focus, or None."""
        ...

    @abc.abstractmethod
    def screen_frame(self) -> Rect:
        """Frame of the (single) screen the workspaces are drawn on."""
        ...
