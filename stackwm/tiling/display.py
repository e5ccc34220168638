"""
stackwm.tiling.display - Sincroniza el modelo con la pantalla.

El Display toma un workspace, calcula los frames con ``geometry`` y
los aplica a traves del host. Tambien oculta ventanas (las saca de
la pantalla, sin minimizarlas) y resuelve el foco despues de cada
redisplay.

Reglas:
    - Un fallo al posicionar una ventana se registra y no aborta el
      resto del pase.
    - El flag "enhanced UI" de la aplicacion se apaga alrededor de
      cada set_frame y se restaura siempre, incluso si falla.
    - Las ventanas flotantes se elevan despues de cada show para que
      queden por encima del set tileado.
"""

from __future__ import annotations

import contextlib
import enum
import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Union

from stackwm.core.host import Host
from stackwm.core.window import Window
from stackwm.tiling.floating import FloatingSet
from stackwm.tiling.geometry import (
    DEFAULT_ENLARGE_RATIO,
    compute_frames,
    hidden_frame,
)
from stackwm.tiling.rect import Rect
from stackwm.tiling.workspace import Workspace

log = logging.getLogger(__name__)


class FocusPolicy(enum.Enum):
    """Que hacer con el foco despues de un show()."""

    # No tocar el foco actual.
    KEEP = "keep"

    # Enfocar el main del workspace.
    MAIN = "main"


# Destino de foco: una ventana concreta, una politica, o None (= MAIN).
FocusTarget = Union[Window, FocusPolicy, None]

# callback(workspace_name) en cada redisplay
RedisplayCallback = Callable[[str], None]


@contextlib.contextmanager
def suppressed_enhanced_ui(window: Window) -> Iterator[None]:
    """
    Apaga el flag "enhanced UI" de la aplicacion mientras dura el bloque.

    Algunas aplicaciones ignoran los cambios de frame con el flag
    activo. Si no se puede leer el flag, se asume que no existe.
    """
    try:
        was_enhanced = window.enhanced_ui
    except Exception:
        log.exception("No se pudo leer enhanced UI de %r", window)
        was_enhanced = None

    if was_enhanced:
        try:
            window.enhanced_ui = False
        except Exception:
            log.exception("No se pudo apagar enhanced UI de %r", window)
    try:
        yield
    finally:
        if was_enhanced:
            try:
                window.enhanced_ui = True
            except Exception:
                log.exception("No se pudo restaurar enhanced UI de %r", window)


class Display:
    """Aplica layouts en la pantalla del host."""

    def __init__(
        self,
        host: Host,
        floating: FloatingSet,
        margin: int,
        enlarge_ratio: float = DEFAULT_ENLARGE_RATIO,
    ) -> None:
        self._host = host
        self._floating = floating
        self._margin = margin
        self._enlarge_ratio = enlarge_ratio
        self._on_redisplay: list[RedisplayCallback] = []

    @property
    def margin(self) -> int:
        return self._margin

    # ------------------------------------------------------------------
    # Suscripcion (indicador del workspace actual)
    # ------------------------------------------------------------------
    def on_redisplay(self, callback: RedisplayCallback) -> None:
        """Registra un callback que recibe el nombre en cada show()."""
        self._on_redisplay.append(callback)

    def off_redisplay(self, callback: RedisplayCallback) -> None:
        try:
            self._on_redisplay.remove(callback)
        except ValueError:
            pass

    def _emit_redisplay(self, name: str) -> None:
        for cb in self._on_redisplay:
            try:
                cb(name)
            except Exception:
                log.exception("Error en callback on_redisplay")

    # ------------------------------------------------------------------
    # Aplicar frames
    # ------------------------------------------------------------------
    def set_frame(self, window: Window, frame: Rect) -> bool:
        """
        Posiciona una ventana. Nunca lanza: los errores del host se
        registran y se retorna False.
        """
        try:
            with suppressed_enhanced_ui(window):
                return bool(window.set_frame(frame))
        except Exception:
            log.exception("Error al posicionar %r en %s", window, frame)
            return False

    def apply_frames(self, frames: Mapping[Window, Rect]) -> int:
        """
        Aplica todos los frames, en orden.

        Returns:
            Cantidad de ventanas posicionadas con exito.
        """
        applied = 0
        for window, frame in frames.items():
            if self.set_frame(window, frame):
                applied += 1
        return applied

    # ------------------------------------------------------------------
    # Ocultar
    # ------------------------------------------------------------------
    def hide(self, window: Window) -> bool:
        """
        Saca la ventana de la pantalla conservando su tamano.

        Ventanas sin tamano se ignoran (no hay nada que ocultar).
        """
        try:
            current = window.frame
        except Exception:
            log.exception("No se pudo leer el frame de %r", window)
            return False

        if current.is_empty:
            return False

        target = hidden_frame(current, self._host.screen_frame())
        log.debug("HIDE %s -> %s", window, target)
        return self.set_frame(window, target)

    def hide_workspace(self, workspace: Workspace) -> None:
        """Oculta main y todo el stack del workspace."""
        for window in workspace.layout.windows:
            self.hide(window)
        log.debug("Workspace %s oculto", workspace.name)

    # ------------------------------------------------------------------
    # Mostrar
    # ------------------------------------------------------------------
    def show(
        self,
        workspace: Workspace,
        focus: FocusTarget = FocusPolicy.MAIN,
    ) -> None:
        """
        Muestra el workspace: posiciona main y stack, resuelve el foco
        y eleva las ventanas flotantes.

        Args:
            workspace: Workspace a mostrar.
            focus:     Ventana a enfocar, FocusPolicy.MAIN (o None) para
                       enfocar el main, o FocusPolicy.KEEP para no
                       cambiar el foco.
        """
        self._emit_redisplay(workspace.name)

        layout = workspace.layout
        if layout.main is None:
            # Nada que mostrar
            return

        frames = compute_frames(
            layout,
            self._host.screen_frame(),
            self._margin,
            self._enlarge_ratio,
        )
        applied = self.apply_frames(frames)
        log.debug(
            "SHOW %s | %d/%d frames | focus=%s",
            workspace.name,
            applied,
            len(frames),
            focus.value if isinstance(focus, FocusPolicy) else focus,
        )

        if focus is None or focus is FocusPolicy.MAIN:
            layout.main.focus()
        elif isinstance(focus, Window):
            focus.focus()

        self.raise_floating()

    def place(self, workspace: Workspace) -> int:
        """
        Posiciona las ventanas del workspace sin tocar el foco ni
        avisar a los suscriptores.

        Returns:
            Cantidad de ventanas posicionadas con exito.
        """
        if workspace.layout.main is None:
            return 0
        frames = compute_frames(
            workspace.layout,
            self._host.screen_frame(),
            self._margin,
            self._enlarge_ratio,
        )
        return self.apply_frames(frames)

    def raise_floating(self) -> None:
        for entry in self._floating:
            try:
                entry.window.raise_()
            except Exception:
                log.exception("Error al elevar flotante %r", entry.window)
