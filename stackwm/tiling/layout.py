"""
stackwm.tiling.layout - Modelo main/stack de un workspace.

Cada workspace tiene un unico Layout:

    +------------+------------+
    |  stack 1   |            |
    +------------+    main    |
    |  stack 2   |            |
    +------------+------------+

    - main      : la ventana destacada (columna derecha).
    - others    : el stack ordenado (columna izquierda, 1 = arriba).
    - temp_large: ventana agrandada temporalmente (main o del stack),
                  sin cambiar su posicion logica.

Las operaciones aqui son estructurales: no tocan la pantalla. La
geometria se calcula en ``geometry`` y se aplica en ``display``.

Las posiciones del stack son 1-based en toda la API publica.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from stackwm.core.window import Window

log = logging.getLogger(__name__)


class Direction(enum.Enum):
    """Direcciones para focus/move."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True, slots=True)
class Position:
    """
    Posicion de una ventana dentro de un layout.

    index == 0 es el main; index >= 1 es la posicion en el stack.
    "No encontrada" se representa con None, no con un Position.
    """

    index: int

    @property
    def is_main(self) -> bool:
        return self.index == 0

    @property
    def is_stack(self) -> bool:
        return self.index > 0

    def __str__(self) -> str:
        return "main" if self.is_main else f"stack-{self.index}"


MAIN = Position(0)


def stack(index: int) -> Position:
    """Posicion *index* (1-based) del stack."""
    if index < 1:
        raise ValueError(f"stack index must be >= 1, got {index}")
    return Position(index)


class Layout:
    """
    Layout main/stack de un workspace.

    Invariantes:
        - main nunca aparece en others.
        - others no tiene duplicados.
        - temp_large es None, main, o un elemento de others.
    """

    __slots__ = ("main", "others", "temp_large")

    def __init__(self) -> None:
        self.main: Optional[Window] = None
        self.others: list[Window] = []
        self.temp_large: Optional[Window] = None

    # ------------------------------------------------------------------
    # Consultas
    # ------------------------------------------------------------------
    @property
    def windows(self) -> list[Window]:
        """main seguido del stack, en orden."""
        if self.main is None:
            return list(self.others)
        return [self.main, *self.others]

    @property
    def is_empty(self) -> bool:
        return self.main is None and not self.others

    def __len__(self) -> int:
        return len(self.windows)

    def __contains__(self, window: object) -> bool:
        return self.position_of(window) is not None  # type: ignore[arg-type]

    def position_of(self, window: Window) -> Optional[Position]:
        """Main, stack(i) o None si la ventana no esta en el layout."""
        if self.main is not None and self.main == window:
            return MAIN
        try:
            return Position(self.others.index(window) + 1)
        except ValueError:
            return None

    def at(self, position: Position) -> Optional[Window]:
        """Ventana en *position*, o None si la posicion esta vacia."""
        if position.is_main:
            return self.main
        if position.index <= len(self.others):
            return self.others[position.index - 1]
        return None

    # ------------------------------------------------------------------
    # Insercion / eliminacion
    # ------------------------------------------------------------------
    def insert(self, window: Window) -> bool:
        """
        Agrega una ventana al layout.

        Si no hay main, la ventana pasa a ser main; si no, va al final
        del stack.

        Returns:
            True si se agrego, False si ya estaba (idempotente).
        """
        if self.position_of(window) is not None:
            return False

        if self.main is None:
            self.main = window
        else:
            self.others.append(window)
        return True

    def remove(self, window: Window) -> Optional[Window]:
        """
        Remueve una ventana y retorna la ventana que debe recibir el foco.

        - Si era main, el primero del stack sube a main (FIFO) y es el
          nuevo foco; sin stack, el layout queda vacio y no hay foco.
        - Si era stack(i), el foco queda "en su lugar": la ventana que
          ocupa ahora la posicion i, la ultima si i quedo fuera de rango,
          o main si el stack quedo vacio.
        - Si no estaba, retorna None sin modificar nada.
        """
        position = self.position_of(window)
        if position is None:
            return None

        if self.temp_large is not None and self.temp_large == window:
            self.temp_large = None

        if position.is_main:
            if self.others:
                self.main = self.others.pop(0)
            else:
                self.main = None
            return self.main

        i = position.index
        del self.others[i - 1]
        if not self.others:
            return self.main
        if i > len(self.others):
            return self.others[-1]
        return self.others[i - 1]

    # ------------------------------------------------------------------
    # Agrandar temporalmente
    # ------------------------------------------------------------------
    def toggle_enlarge(self, window: Window) -> bool:
        """
        Alterna el agrandado temporal de *window*.

        Returns:
            True si la ventana quedo agrandada, False si se desactivo
            (o si la ventana no pertenece al layout).
        """
        if self.temp_large is not None and self.temp_large == window:
            self.temp_large = None
            return False
        if self.position_of(window) is None:
            return False
        self.temp_large = window
        return True

    # ------------------------------------------------------------------
    # Navegacion direccional
    # ------------------------------------------------------------------
    def focus_direction(
        self, position: Position, direction: Direction
    ) -> Optional[Window]:
        """
        Ventana destino para mover el foco desde *position* (sin mutar).

        LEFT : main -> stack 1.
        RIGHT: stack(i) -> main.
        DOWN : stack(i) -> stack(i+1).
        UP   : stack(i) -> stack(i-1).
        Cualquier otro caso (limites incluidos) retorna None.
        """
        n = len(self.others)
        i = position.index

        if direction == Direction.LEFT:
            if position.is_main and n > 0:
                return self.others[0]
        elif direction == Direction.RIGHT:
            if position.is_stack and i <= n:
                return self.main
        elif direction == Direction.DOWN:
            if position.is_stack and i < n:
                return self.others[i]
        elif direction == Direction.UP:
            if position.is_stack and 1 < i <= n:
                return self.others[i - 2]
        return None

    def move_direction(
        self, position: Position, direction: Direction
    ) -> Optional[Window]:
        """
        Intercambia la ventana en *position* con su vecina en *direction*.

        LEFT : main <-> stack 1; el foco sigue al main anterior.
        RIGHT: stack(i) <-> main; el foco sigue a la ventana promovida.
        DOWN : stack(i) <-> stack(i+1).
        UP   : stack(i) <-> stack(i-1).

        Returns:
            La ventana que se movio (a enfocar), o None si no hubo
            cambio (limite del layout).
        """
        n = len(self.others)
        i = position.index

        if direction == Direction.LEFT:
            if position.is_main and n > 0 and self.main is not None:
                old_main = self.main
                self.main, self.others[0] = self.others[0], old_main
                return old_main
        elif direction == Direction.RIGHT:
            if position.is_stack and i <= n and self.main is not None:
                promoted = self.others[i - 1]
                self.others[i - 1], self.main = self.main, promoted
                return promoted
        elif direction == Direction.DOWN:
            if position.is_stack and i < n:
                moved = self.others[i - 1]
                self.others[i - 1], self.others[i] = self.others[i], moved
                return moved
        elif direction == Direction.UP:
            if position.is_stack and 1 < i <= n:
                moved = self.others[i - 1]
                self.others[i - 1], self.others[i - 2] = self.others[i - 2], moved
                return moved
        return None

    # ------------------------------------------------------------------
    # Representacion
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return (
            f"Layout(main={self.main!r}, others={self.others!r}, "
            f"temp_large={self.temp_large!r})"
        )
