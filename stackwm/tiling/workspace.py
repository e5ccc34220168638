"""
stackwm.tiling.workspace - Workspaces y su registro.

Cada workspace tiene un nombre (una tecla) y su propio Layout
main/stack. Los workspaces se crean bajo demanda la primera vez que
se nombran y nunca se eliminan: un workspace vacio sigue siendo
valido y se puede activar.

El workspace no sabe nada de la pantalla: el Display le pasa el
frame cuando lo muestra.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Optional

from stackwm.core.window import Window
from stackwm.tiling.layout import Layout

log = logging.getLogger(__name__)


class Workspace:
    """Workspace virtual con nombre y layout independiente."""

    __slots__ = ("_name", "layout")

    def __init__(self, name: str) -> None:
        if not name:
            raise ValueError("workspace name must not be empty")
        self._name = name
        self.layout = Layout()

    @property
    def name(self) -> str:
        return self._name

    def contains(self, window: Window) -> bool:
        """True si la ventana esta en el layout (main o stack)."""
        return self.layout.position_of(window) is not None

    @property
    def window_count(self) -> int:
        return len(self.layout)

    # ------------------------------------------------------------------
    # Debug
    # ------------------------------------------------------------------
    def dump_state(self) -> str:
        layout = self.layout
        lines = [
            f"--- Workspace {self._name} ---",
            f"    main: {layout.main if layout.main is not None else '-'}",
        ]
        for i, w in enumerate(layout.others, start=1):
            lines.append(f"    [stack-{i}] {w}")
        large = layout.temp_large
        lines.append(f"    tempLarge: {large if large is not None else '-'}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Workspace(name={self._name!r}, windows={self.window_count})"


class WorkspaceRegistry:
    """Mapa nombre -> Workspace, con creacion perezosa."""

    def __init__(self) -> None:
        self._workspaces: dict[str, Workspace] = {}

    def get(self, name: str) -> Optional[Workspace]:
        return self._workspaces.get(name)

    def get_or_create(self, name: str) -> Workspace:
        """Retorna el workspace *name*, creandolo vacio si no existe."""
        ws = self._workspaces.get(name)
        if ws is None:
            ws = Workspace(name)
            self._workspaces[name] = ws
            log.debug("Workspace creado: %s", name)
        return ws

    def find_owning(self, window: Window) -> Optional[Workspace]:
        """Workspace cuyo layout contiene la ventana, o None."""
        for ws in self._workspaces.values():
            if ws.contains(window):
                return ws
        return None

    @property
    def names(self) -> list[str]:
        return list(self._workspaces)

    def __contains__(self, name: object) -> bool:
        return name in self._workspaces

    def __iter__(self) -> Iterator[Workspace]:
        return iter(list(self._workspaces.values()))

    def __len__(self) -> int:
        return len(self._workspaces)
