"""
stackwm.tiling.workspace_manager - Maquina de estados de workspaces.

El WorkspaceManager es el intermediario entre los eventos del host y
los workspaces. Es un objeto de contexto explicito (sin singletons):
cada instancia tiene su propio registro de workspaces, su set de
ventanas flotantes y su puntero al workspace activo.

Responsabilidades:
    - Poblar el workspace inicial con las ventanas existentes.
    - Reaccionar a eventos de ventanas (created/destroyed/moved/focused)
      manteniendo el modelo y la pantalla sincronizados.
    - Comandos interactivos: cambiar de workspace, enviar la ventana
      enfocada a otro workspace, focus/move direccional, agrandar,
      flotar.
    - Filtro del switcher: solo ventanas del workspace activo y
      flotantes.

Invariantes:
    - Despues de initialize() siempre hay un workspace activo.
    - Una ventana esta en a lo sumo un layout, y nunca a la vez en un
      layout y en el set flotante.
    - Los eventos repetidos o fuera de orden no rompen el modelo: una
      referencia desconocida es un no-op.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional

from stackwm.config.settings import Settings
from stackwm.core import rules
from stackwm.core.events import EventKind, WindowEvent
from stackwm.core.host import Host
from stackwm.core.window import Window
from stackwm.tiling.display import Display, FocusPolicy, FocusTarget
from stackwm.tiling.floating import FloatingSet
from stackwm.tiling.layout import Direction
from stackwm.tiling.workspace import Workspace, WorkspaceRegistry

log = logging.getLogger(__name__)


EventHandler = Callable[[Window], None]


class WorkspaceManager:
    """
    Gestiona todos los workspaces de la pantalla.

    Uso:
        manager = WorkspaceManager(host, settings)
        manager.initialize()
        manager.handle(WindowEvent(EventKind.CREATED, window))
        manager.switch_to("I")
    """

    def __init__(
        self,
        host: Host,
        settings: Settings,
        display: Display | None = None,
    ) -> None:
        self._host = host
        self._settings = settings
        self._registry = WorkspaceRegistry()
        self._floating = FloatingSet()
        self._display = display or Display(
            host,
            self._floating,
            margin=settings.margin,
            enlarge_ratio=settings.enlarge_ratio,
        )
        self._current: Optional[Workspace] = None

        self._handlers: dict[EventKind, EventHandler] = {
            EventKind.CREATED: self._on_created,
            EventKind.DESTROYED: self._on_destroyed,
            EventKind.MOVED: self._on_moved,
            EventKind.FOCUSED: self._on_focused,
        }

    # ------------------------------------------------------------------
    # Propiedades
    # ------------------------------------------------------------------
    @property
    def current(self) -> Optional[Workspace]:
        """Workspace activo (None antes de initialize())."""
        return self._current

    @property
    def registry(self) -> WorkspaceRegistry:
        return self._registry

    @property
    def floating(self) -> FloatingSet:
        return self._floating

    @property
    def display(self) -> Display:
        return self._display

    @property
    def settings(self) -> Settings:
        return self._settings

    # ------------------------------------------------------------------
    # Inicializacion
    # ------------------------------------------------------------------
    def initialize(self) -> Workspace:
        """
        Crea el workspace inicial con todas las ventanas existentes.

        La ventana al frente (si es manejable) entra primero para que
        sea el main del workspace inicial. Las ventanas con workspace
        por defecto distinto se agregan a ese workspace y se ocultan.
        """
        if self._current is not None:
            return self._current

        first = self._registry.get_or_create(self._settings.workspaces[0])
        self._current = first

        candidates: list[Window] = []
        frontmost = self._host.focused_window()
        if frontmost is not None and rules.is_manageable(frontmost):
            candidates.append(frontmost)
        for window in self._host.windows():
            if window not in candidates and rules.is_manageable(window):
                candidates.append(window)

        for window in candidates:
            ws = self._route(window)
            if ws is not None and ws is not first:
                self._display.hide(window)

        log.info(
            "Workspace inicial %s: %d tiled, %d floating",
            first.name,
            first.window_count,
            len(self._floating),
        )
        self._display.show(first)
        return first

    # ------------------------------------------------------------------
    # Eventos
    # ------------------------------------------------------------------
    def handle(self, event: WindowEvent) -> None:
        """Procesa un evento del host. Ignorado antes de initialize()."""
        if self._current is None:
            log.debug("Evento ignorado (sin inicializar): %s", event)
            return
        log.debug("EVENT %s %s", event.kind.value, event.window)
        self._handlers[event.kind](event.window)

    def _on_created(self, window: Window) -> None:
        if not rules.is_manageable(window):
            return
        if self._is_tracked(window):
            log.debug("CREATED repetido, ignorado: %s", window)
            return

        ws = self._route(window)
        if ws is None:
            return
        if ws is self._current:
            self._display.show(ws, window)
        else:
            # No debe verse hasta que su workspace se active
            self._display.hide(window)

    def _on_destroyed(self, window: Window) -> None:
        if self._floating.remove(window):
            return

        ws = self._registry.find_owning(window)
        if ws is None:
            return

        to_focus = ws.layout.remove(window)
        log.info("UNMANAGE %s (ws %s)", window, ws.name)
        if ws is self._current:
            self._display.show(ws, to_focus)

    def _on_moved(self, window: Window) -> None:
        if not rules.is_manageable(window):
            return
        if self._floating.refresh_frame(window):
            return

        current = self._require_current()
        if not current.contains(window):
            return
        # Devolver la ventana arrastrada a su lugar en la grilla
        self._display.show(current, FocusPolicy.KEEP)

    def _on_focused(self, window: Window) -> None:
        if not rules.is_manageable(window):
            return

        current = self._require_current()
        if current.contains(window) or self._floating.contains(window):
            return

        ws = self._registry.find_owning(window)
        if ws is None:
            return
        log.info("FOCUS trae ws %s al frente: %s", ws.name, window)
        self._activate(ws, window)

    # ------------------------------------------------------------------
    # Comandos interactivos
    # ------------------------------------------------------------------
    def switch_to(self, name: str) -> bool:
        """
        Cambia al workspace *name* (creandolo si no existe).

        Primero muestra el destino y despues oculta el anterior, para
        evitar un estado intermedio vacio en pantalla.

        Returns:
            True si se cambio, False si ya estaba activo.
        """
        current = self._current
        if current is None:
            return False
        if current.name == name:
            log.debug("switch_to: ya en ws %s", name)
            return False

        target = self._registry.get_or_create(name)
        self._activate(target, FocusPolicy.MAIN)
        return True

    def send_to(self, name: str) -> bool:
        """
        Envia la ventana enfocada al workspace *name*.

        La ventana se oculta de inmediato; el workspace destino no se
        redibuja porque no esta visible.

        Returns:
            True si la ventana se movio.
        """
        current = self._current
        if current is None:
            return False

        window = self._host.focused_window()
        if window is None:
            return False
        if self._floating.contains(window):
            return False
        if current.name == name:
            return False
        if not current.contains(window):
            log.debug("send_to: %s no esta en ws %s", window, current.name)
            return False

        self._display.hide(window)
        to_focus = current.layout.remove(window)
        target = self._registry.get_or_create(name)
        target.layout.insert(window)

        log.info("SEND %s: ws %s -> ws %s", window, current.name, name)
        self._display.show(current, to_focus)
        return True

    def toggle_enlarge(self) -> bool:
        """
        Alterna el agrandado temporal de la ventana enfocada.

        Returns:
            True si el layout cambio.
        """
        current = self._current
        if current is None:
            return False
        window = self._host.focused_window()
        if window is None or not current.contains(window):
            return False

        enlarged = current.layout.toggle_enlarge(window)
        log.info("ENLARGE %s %s", "on" if enlarged else "off", window)
        self._display.show(current, window)
        return True

    def toggle_float(self) -> bool:
        """
        Alterna la ventana enfocada entre flotante y tileada.

        Flotante -> tileada: entra al workspace activo y recibe el foco.
        Tileada -> flotante: sale de su layout sin mover el foco.
        """
        current = self._current
        if current is None:
            return False
        window = self._host.focused_window()
        if window is None:
            return False

        if self._floating.remove(window):
            current.layout.insert(window)
            log.info("TILE %s (ws %s)", window, current.name)
            self._display.show(current, window)
            return True

        owner = self._registry.find_owning(window)
        if owner is None and not rules.is_manageable(window):
            return False
        if owner is not None:
            owner.layout.remove(window)
        self._floating.add(window)
        self._display.show(current, FocusPolicy.KEEP)
        return True

    def focus(self, direction: Direction) -> Optional[Window]:
        """Enfoca la vecina en *direction* (sin redibujar)."""
        current = self._current
        if current is None:
            return None
        window = self._host.focused_window()
        if window is None:
            return None
        position = current.layout.position_of(window)
        if position is None:
            return None

        target = current.layout.focus_direction(position, direction)
        if target is None:
            log.debug("focus_%s: sin destino desde %s", direction.value, position)
            return None
        target.focus()
        log.debug("focus_%s: %s -> %s", direction.value, window, target)
        return target

    def move(self, direction: Direction) -> Optional[Window]:
        """Intercambia la ventana enfocada con su vecina en *direction*."""
        current = self._current
        if current is None:
            return None
        window = self._host.focused_window()
        if window is None:
            return None
        position = current.layout.position_of(window)
        if position is None:
            return None

        moved = current.layout.move_direction(position, direction)
        if moved is None:
            log.debug("move_%s: sin destino desde %s", direction.value, position)
            return None
        log.info("MOVE %s %s desde %s", direction.value, window, position)
        self._display.show(current, moved)
        return moved

    def close_focused(self) -> bool:
        """Pide al host cerrar la ventana enfocada (el modelo se actualiza con DESTROYED)."""
        window = self._host.focused_window()
        if window is None:
            return False
        return bool(window.close())

    def restore_all(self) -> int:
        """
        Devuelve a la pantalla las ventanas de los workspaces ocultos.

        Se llama al salir: sin esto, las ventanas de workspaces
        inactivos quedarian fuera de la pantalla.

        Returns:
            Cantidad de ventanas reposicionadas.
        """
        restored = 0
        for ws in self._registry:
            if ws is not self._current:
                restored += self._display.place(ws)
        log.info("Restauradas %d ventanas de workspaces ocultos", restored)
        return restored

    # ------------------------------------------------------------------
    # Filtro del switcher
    # ------------------------------------------------------------------
    def is_switcher_candidate(self, window: Window) -> bool:
        """True si la ventana esta en el workspace activo o es flotante."""
        if self._floating.contains(window):
            return True
        return self._current is not None and self._current.contains(window)

    def switcher_candidates(self) -> list[Window]:
        """Candidatas en orden: main, stack, flotantes."""
        tiled = self._current.layout.windows if self._current is not None else []
        return tiled + self._floating.windows

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------
    def _require_current(self) -> Workspace:
        assert self._current is not None
        return self._current

    def _is_tracked(self, window: Window) -> bool:
        if self._floating.contains(window):
            return True
        return self._registry.find_owning(window) is not None

    def _route(self, window: Window) -> Optional[Workspace]:
        """
        Ubica una ventana recien descubierta segun las reglas.

        Returns:
            El workspace donde quedo, o None si quedo flotante.
        """
        current = self._require_current()
        settings = self._settings

        if rules.is_float_by_default(
            window, settings.float_titles, settings.float_apps
        ):
            self._floating.add(window)
            return None

        ws = current
        default = rules.default_workspace_of(window, settings.app_workspace)
        if default is not None and default != current.name:
            ws = self._registry.get_or_create(default)

        ws.layout.insert(window)
        log.info("MANAGE %s -> ws %s", window, ws.name)
        return ws

    def _activate(self, target: Workspace, focus: FocusTarget) -> None:
        """Activa *target*: muestra el destino y despues oculta el anterior."""
        previous = self._current
        # El puntero cambia antes para que el indicador vea el nombre nuevo
        self._current = target
        self._display.show(target, focus)
        if previous is not None and previous is not target:
            self._display.hide_workspace(previous)

        log.info(
            "SWITCH ws %s -> ws %s",
            previous.name if previous is not None else "-",
            target.name,
        )

    # ------------------------------------------------------------------
    # Debug
    # ------------------------------------------------------------------
    def dump_state(self) -> str:
        current = self._current
        lines = [
            f"=== WorkspaceManager: {len(self._registry)} workspaces, "
            f"{len(self._floating)} floating ===",
            f"    Active: {current.name if current is not None else '-'}",
            "",
        ]
        for ws in self._registry:
            if ws.window_count > 0 or ws is current:
                lines.append(ws.dump_state())
                lines.append("")
        for entry in self._floating:
            lines.append(f"    [float] {entry.window} @ {entry.frame}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        current = self._current
        return (
            f"WorkspaceManager("
            f"workspaces={len(self._registry)}, "
            f"floating={len(self._floating)}, "
            f"active={current.name if current is not None else None!r})"
        )
