"""
stackwm.core.window - The Window capability interface.

A Window is a lightweight, live handle to a window owned by the host
window server.  Every attribute is read from the host on demand; the
engine never caches titles, frames or visibility.  Concrete handles
live in ``stackwm.host`` (and in the test fakes).

Equality and hashing are based solely on ``id``, so a Window can be
used in sets and as a dict key, and two handles for the same OS
window compare equal.
"""

from __future__ import annotations

import abc
import logging
from typing import Optional

from stackwm.tiling.rect import Rect

log = logging.getLogger(__name__)


class Window(abc.ABC):
    """Interface every host window handle implements."""

    __slots__ = ()

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------
    @property
    @abc.abstractmethod
    def id(self) -> int:
        """Stable integer identity assigned by the host."""
        ...

    # ------------------------------------------------------------------
    # Descriptors (read live from the host)
    # ------------------------------------------------------------------
    @property
    @abc.abstractmethod
    def title(self) -> str:
        ...

    @property
    @abc.abstractmethod
    def app_name(self) -> str:
        """Human readable name of the owning application."""
        ...

    @property
    @abc.abstractmethod
    def app_id(self) -> Optional[str]:
        """
        Identity of the owning application (bundle identifier or
        executable name), or None if the host cannot tell.
        """
        ...

    @property
    @abc.abstractmethod
    def frame(self) -> Rect:
        ...

    @property
    @abc.abstractmethod
    def is_visible(self) -> bool:
        ...

    @property
    @abc.abstractmethod
    def is_standard(self) -> bool:
        """True for regular application windows (not utility/tool windows)."""
        ...

    # ------------------------------------------------------------------
    # Enhanced UI accessibility flag of the owning application
    # ------------------------------------------------------------------
    @property
    def enhanced_ui(self) -> Optional[bool]:
        """
        Application-level "enhanced UI" flag, or None when the host has
        no such concept.  Some applications ignore frame changes while
        it is on.
        """
        return None

    @enhanced_ui.setter
    def enhanced_ui(self, value: bool) -> None:
        pass

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    @abc.abstractmethod
    def set_frame(self, frame: Rect) -> bool:
        """Reposition and resize the window.  Returns False on failure."""
        ...

    @abc.abstractmethod
    def focus(self) -> bool:
        ...

    @abc.abstractmethod
    def raise_(self) -> bool:
        """Bring the window above others without activating it."""
        ...

    @abc.abstractmethod
    def close(self) -> bool:
        """Ask the window to close gracefully."""
        ...

    # ------------------------------------------------------------------
    # Dunder methods
    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if isinstance(other, Window):
            return self.id == other.id
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id})"

    def __str__(self) -> str:
        app = self.app_name or "Unknown App"
        return f"{app} {self.title!r}(id={self.id})"
