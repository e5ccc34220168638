"""
stackwm.tiling.floating - Ventanas flotantes (excluidas del tiling).

Las ventanas flotantes no pertenecen a ningun workspace: se ven en
todos y siempre quedan por encima de las ventanas tileadas. El set
esta indexado por id de ventana para busquedas O(1).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from stackwm.core.window import Window
from stackwm.tiling.rect import Rect

log = logging.getLogger(__name__)


@dataclass(slots=True)
class FloatingWindow:
    """Ventana flotante y el ultimo frame conocido."""

    window: Window
    frame: Rect


class FloatingSet:
    """Conjunto de ventanas flotantes, en orden de insercion."""

    def __init__(self) -> None:
        self._entries: dict[int, FloatingWindow] = {}

    def add(self, window: Window) -> None:
        """Agrega (o re-agrega) una ventana recordando su frame actual."""
        self._entries[window.id] = FloatingWindow(window, window.frame)
        log.info("FLOAT + %s", window)

    def remove(self, window: Window) -> bool:
        """Remueve la ventana. Retorna True si estaba."""
        entry = self._entries.pop(window.id, None)
        if entry is None:
            return False
        log.info("FLOAT - %s", window)
        return True

    def contains(self, window: Window) -> bool:
        return window.id in self._entries

    def __contains__(self, window: object) -> bool:
        return isinstance(window, Window) and self.contains(window)

    def refresh_frame(self, window: Window) -> bool:
        """
        Actualiza el frame recordado si la ventana es flotante.

        Returns:
            True si se actualizo, False si la ventana no es flotante.
        """
        entry = self._entries.get(window.id)
        if entry is None:
            return False
        entry.window = window
        entry.frame = window.frame
        log.debug("FLOAT frame %s -> %s", window, entry.frame)
        return True

    def frame_of(self, window: Window) -> Rect | None:
        entry = self._entries.get(window.id)
        return entry.frame if entry is not None else None

    @property
    def windows(self) -> list[Window]:
        return [e.window for e in self._entries.values()]

    def __iter__(self) -> Iterator[FloatingWindow]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"FloatingSet(count={len(self._entries)})"
