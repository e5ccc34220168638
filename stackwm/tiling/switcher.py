"""
stackwm.tiling.switcher - Alternador de ventanas del workspace activo.

Recorre solo las candidatas del WorkspaceManager (ventanas del
workspace activo mas las flotantes), en orden estable: main, stack,
flotantes. No tiene interfaz visual: cada next()/previous() enfoca
directamente la siguiente candidata, circularmente.
"""

from __future__ import annotations

import logging
from typing import Optional

from stackwm.core.host import Host
from stackwm.core.window import Window
from stackwm.tiling.workspace_manager import WorkspaceManager

log = logging.getLogger(__name__)


class WindowSwitcher:
    """Cicla el foco entre las candidatas del workspace activo."""

    def __init__(self, host: Host, manager: WorkspaceManager) -> None:
        self._host = host
        self._manager = manager

    def candidates(self) -> list[Window]:
        return self._manager.switcher_candidates()

    def next(self) -> Optional[Window]:
        """Enfoca la candidata siguiente a la enfocada."""
        return self._step(+1)

    def previous(self) -> Optional[Window]:
        """Enfoca la candidata anterior a la enfocada."""
        return self._step(-1)

    def _step(self, offset: int) -> Optional[Window]:
        candidates = self.candidates()
        if not candidates:
            return None

        focused = self._host.focused_window()
        try:
            index = candidates.index(focused)  # type: ignore[arg-type]
        except ValueError:
            # La enfocada no es candidata: empezar por un extremo
            target = candidates[0] if offset > 0 else candidates[-1]
        else:
            target = candidates[(index + offset) % len(candidates)]

        if target == focused:
            return None
        target.focus()
        log.debug("SWITCHER %s -> %s", focused, target)
        return target
