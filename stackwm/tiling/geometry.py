"""
stackwm.tiling.geometry - Calculo de frames para el layout main/stack.

Funciones puras: reciben el layout y el frame de la pantalla y
retornan donde debe ir cada ventana. No tocan la pantalla.

Esquema con margen m y stack de 2 ventanas:

    m +--------+ m +--------+ m
      | stack1 |   |        |
      +--------+   |  main  |
    m +--------+   |        |
      | stack2 |   |        |
      +--------+   +--------+
"""

from __future__ import annotations

import logging
import math

from stackwm.core.window import Window
from stackwm.tiling.layout import Layout
from stackwm.tiling.rect import Rect

log = logging.getLogger(__name__)


DEFAULT_ENLARGE_RATIO = 0.9

# Pixeles de la ventana oculta que quedan dentro de la pantalla.
# Algunos servidores de ventanas no permiten sacar una ventana por
# completo del area visible.
HIDE_PEEK = 1


def compute_frames(
    layout: Layout,
    screen: Rect,
    margin: int,
    enlarge_ratio: float = DEFAULT_ENLARGE_RATIO,
) -> dict[Window, Rect]:
    """
    Calcula el frame de main y de cada ventana del stack.

    Args:
        layout:        Layout del workspace.
        screen:        Frame de la pantalla.
        margin:        Separacion en pixeles entre ventanas y bordes.
        enlarge_ratio: Fraccion del ancho util para la ventana agrandada.

    Returns:
        Mapa ventana -> Rect, con main primero y luego el stack en
        orden. Vacio si el layout no tiene main.
    """
    main = layout.main
    if main is None:
        return {}

    width = screen.w - 3 * margin
    height = screen.h - 2 * margin
    half = math.floor(width / 2)
    large = math.floor(width * enlarge_ratio)

    # Main: mitad derecha por defecto
    main_frame = Rect(screen.w - margin - half, screen.y + margin, half, height)

    if not layout.others:
        main_frame = Rect(screen.x + margin, main_frame.y, width, height)
    elif layout.temp_large is not None and layout.temp_large == main:
        main_frame = Rect(
            math.floor(screen.w - margin - large), main_frame.y, large, height
        )

    frames: dict[Window, Rect] = {main: main_frame}

    n = len(layout.others)
    if n == 0:
        return frames

    # Alto de cada slot del stack
    slot_h = math.floor((height - margin * (n - 1)) / n)
    slot_x = screen.x + margin

    for i, window in enumerate(layout.others, start=1):
        frame = Rect(
            slot_x,
            screen.y + margin * i + slot_h * (i - 1),
            half,
            slot_h,
        )
        if layout.temp_large is not None and layout.temp_large == window:
            frame = Rect(slot_x, main_frame.y, large, main_frame.h)
        frames[window] = frame

    return frames


def hidden_frame(current: Rect, screen: Rect) -> Rect:
    """
    Frame para "ocultar" una ventana sacandola de la pantalla.

    Conserva el tamano y la mueve a la esquina inferior-derecha,
    dejando solo HIDE_PEEK pixeles dentro del area visible.
    """
    return current.moved_to(
        screen.x + screen.w - HIDE_PEEK,
        screen.y + screen.h - HIDE_PEEK,
    )
