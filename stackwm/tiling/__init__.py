"""
stackwm.tiling - Motor de tiling (main + stack).

Este paquete contiene:
    - rect              : Estructura Rect para geometria de areas
    - layout            : Layout main/stack, Direction y Position
    - geometry          : Calculo puro de frames
    - floating          : Set de ventanas flotantes
    - workspace         : Workspace y WorkspaceRegistry
    - display           : Display - aplica layouts en la pantalla
    - workspace_manager : WorkspaceManager - maquina de estados
    - switcher          : WindowSwitcher - ciclo de foco sin UI
"""

from stackwm.tiling.rect import Rect

__all__ = ["Rect"]
