"""
stackwm.config.hotkeys - Definicion de hotkeys para el WM.

Tabla de keybindings (combo -> comando del dispatcher):
    Workspaces:
        Alt + <ws>            -> Cambiar al workspace <ws>
        Alt + Shift + <ws>    -> Enviar ventana enfocada al workspace <ws>

    Foco direccional (estilo vim):
        Alt + H / L / J / K   -> Foco izquierda / derecha / abajo / arriba

    Mover ventana (estilo vim):
        Alt + Shift + H/L/J/K -> Mover ventana en esa direccion

    Ventana:
        Alt + W               -> Cerrar ventana enfocada
        Alt + Space           -> Alternar flotante
        Alt + E               -> Alternar agrandado

    Switcher:
        Alt + `               -> Siguiente ventana del workspace
        Alt + Shift + `       -> Ventana anterior
        (Alt + Tab esta reservado por Windows)

    WM:
        Alt + Shift + Q       -> Cerrar stackwm

Los combos son strings legibles ("alt+shift+h"); parse_combo() los
convierte en (modifiers, vk) para RegisterHotKey.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Optional, Protocol

from stackwm.core.commands import CommandDispatcher

log = logging.getLogger(__name__)


# ============================================================================
# Modificadores y virtual keys (valores Win32)
# ============================================================================
MOD_ALT = 0x0001
MOD_CONTROL = 0x0002
MOD_SHIFT = 0x0004
MOD_WIN = 0x0008
MOD_NOREPEAT = 0x4000

_MODIFIER_MAP: dict[str, int] = {
    "alt": MOD_ALT,
    "option": MOD_ALT,
    "ctrl": MOD_CONTROL,
    "control": MOD_CONTROL,
    "shift": MOD_SHIFT,
    "win": MOD_WIN,
    "super": MOD_WIN,
}

_VK_MAP: dict[str, int] = {
    **{chr(ord("a") + i): 0x41 + i for i in range(26)},
    **{str(i): 0x30 + i for i in range(10)},
    **{f"f{i}": 0x70 + (i - 1) for i in range(1, 13)},
    "return": 0x0D,
    "enter": 0x0D,
    "escape": 0x1B,
    "space": 0x20,
    "tab": 0x09,
    "left": 0x25,
    "up": 0x26,
    "right": 0x27,
    "down": 0x28,
    "semicolon": 0xBA,
    "equals": 0xBB,
    "comma": 0xBC,
    "minus": 0xBD,
    "period": 0xBE,
    "slash": 0xBF,
    "backquote": 0xC0,
    "`": 0xC0,
    "bracketleft": 0xDB,
    "backslash": 0xDC,
    "bracketright": 0xDD,
    "quote": 0xDE,
}


class ComboParseError(ValueError):
    """Raised when a combo string cannot be parsed."""
    pass


def parse_combo(combo: str) -> tuple[int, int]:
    """
    Convierte un combo como "alt+shift+h" en (modifiers, vk).

    Case-insensitive; las partes se separan con '+'. Debe haber
    exactamente una tecla que no sea modificador.

    Raises:
        ComboParseError: combo vacio, sin tecla, con mas de una tecla,
                         con partes desconocidas o modificadores repetidos.
    """
    if not combo or not combo.strip():
        raise ComboParseError("Empty combo string")

    parts = [p.strip().lower() for p in combo.split("+")]
    parts = [p for p in parts if p]

    modifiers = 0
    vk: Optional[int] = None

    for part in parts:
        if part in _MODIFIER_MAP:
            flag = _MODIFIER_MAP[part]
            if modifiers & flag:
                raise ComboParseError(
                    f"Duplicate modifier {part!r} in combo: {combo!r}"
                )
            modifiers |= flag
        elif part in _VK_MAP:
            if vk is not None:
                raise ComboParseError(
                    f"Multiple key parts in combo: {combo!r}"
                )
            vk = _VK_MAP[part]
        else:
            raise ComboParseError(
                f"Unknown key or modifier: {part!r} in combo: {combo!r}"
            )

    if vk is None:
        raise ComboParseError(f"No key found in combo: {combo!r}")

    return modifiers, vk


# ============================================================================
# Tabla de bindings
# ============================================================================
@dataclass(frozen=True, slots=True)
class Binding:
    combo: str
    command: str
    description: str = ""


_DIRECTION_KEYS: tuple[tuple[str, str], ...] = (
    ("h", "left"),
    ("l", "right"),
    ("j", "down"),
    ("k", "up"),
)


def default_bindings(workspaces: Sequence[str]) -> list[Binding]:
    """Bindings por defecto para los workspaces configurados."""
    bindings: list[Binding] = []

    for name in workspaces:
        key = name.lower()
        bindings.append(
            Binding(f"alt+{key}", f"switch_workspace_{name}",
                    f"Switch to workspace {name}")
        )
        bindings.append(
            Binding(f"alt+shift+{key}", f"send_to_workspace_{name}",
                    f"Send window to workspace {name}")
        )

    for key, direction in _DIRECTION_KEYS:
        bindings.append(
            Binding(f"alt+{key}", f"focus_{direction}", f"Focus {direction}")
        )
        bindings.append(
            Binding(f"alt+shift+{key}", f"move_window_{direction}",
                    f"Move window {direction}")
        )

    bindings += [
        Binding("alt+w", "close_window", "Close focused window"),
        Binding("alt+space", "toggle_float", "Toggle floating"),
        Binding("alt+e", "toggle_enlarge", "Toggle enlarge"),
        Binding("alt+backquote", "switcher_next", "Next window"),
        Binding("alt+shift+backquote", "switcher_previous", "Previous window"),
        Binding("alt+shift+q", "quit_wm", "Quit stackwm"),
    ]
    return bindings


class HotkeyRegistrar(Protocol):
    """Lo que register_all_hotkeys necesita de un gestor de hotkeys."""

    def register(
        self,
        modifiers: int,
        vk: int,
        callback: Callable[[], None],
        description: str = "",
    ) -> int | None:
        ...


def register_all_hotkeys(
    hk_manager: HotkeyRegistrar,
    dispatcher: CommandDispatcher,
    bindings: Iterable[Binding],
) -> int:
    """
    Registra cada binding, vinculando el combo al comando del dispatcher.

    Bindings con comando desconocido o combo invalido se omiten con
    un warning.

    Returns:
        Numero de hotkeys registrados exitosamente.
    """
    registered = 0

    for binding in bindings:
        if not dispatcher.has(binding.command):
            log.warning(
                "Hotkey bind: command %r not found, skipping", binding.command
            )
            continue
        try:
            modifiers, vk = parse_combo(binding.combo)
        except ComboParseError as exc:
            log.warning("Hotkey bind: %s, skipping", exc)
            continue

        def _run(command: str = binding.command) -> None:
            dispatcher.execute(command)

        result = hk_manager.register(
            modifiers | MOD_NOREPEAT,
            vk,
            _run,
            binding.description or binding.command,
        )
        if result is not None:
            registered += 1

    log.info("Hotkeys registered: %d", registered)
    return registered
