"""
stackwm.core.commands - Internal command dispatcher.

Maps command name strings to WM operations, so the hotkey table can
say "toggle_float" or "switch_workspace_U" without knowing which
object implements it.

    dispatcher = CommandDispatcher()
    build_default_commands(dispatcher, manager, switcher, settings.workspaces)
    dispatcher.execute("switch_workspace_I")

Commands can also be registered with the decorator:

    @dispatcher.command("close_window", category="window")
    def close_window():
        ...
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stackwm.tiling.switcher import WindowSwitcher
    from stackwm.tiling.workspace_manager import WorkspaceManager

log = logging.getLogger(__name__)


# Type for command functions: called with no arguments
CommandFn = Callable[[], object]


@dataclass(frozen=True, slots=True)
class Command:
    """Metadata for a registered command."""

    name: str
    fn: CommandFn
    description: str
    category: str


class CommandDispatcher:
    """Registry that maps command name strings to callables."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    @property
    def count(self) -> int:
        return len(self._commands)

    @property
    def command_names(self) -> list[str]:
        """All registered command names, sorted."""
        return sorted(self._commands)

    def register(
        self,
        name: str,
        fn: CommandFn,
        description: str = "",
        category: str = "general",
    ) -> None:
        """Register (or replace) a command by name."""
        if name in self._commands:
            log.info("Command replaced: %s", name)

        self._commands[name] = Command(
            name=name,
            fn=fn,
            description=description,
            category=category,
        )
        log.debug("Command registered: %s (%s)", name, category)

    def command(
        self,
        name: str,
        description: str = "",
        category: str = "general",
    ) -> Callable[[CommandFn], CommandFn]:
        """Decorator form of register()."""

        def decorator(fn: CommandFn) -> CommandFn:
            self.register(name, fn, description=description, category=category)
            return fn

        return decorator

    def get(self, name: str) -> Command | None:
        return self._commands.get(name)

    def has(self, name: str) -> bool:
        return name in self._commands

    def execute(self, name: str) -> bool:
        """
        Execute a command by name.

        Errors raised by the command are logged, never propagated: a
        failing key binding must not take down the event loop.

        Returns:
            True if the command was found and ran without raising.
        """
        cmd = self._commands.get(name)
        if cmd is None:
            log.warning("Unknown command: %s", name)
            return False

        log.debug("Executing command: %s", name)
        try:
            cmd.fn()
        except Exception:
            log.exception("Error executing command: %s", name)
            return False
        return True

    def list_commands(self, category: str | None = None) -> list[Command]:
        commands = list(self._commands.values())
        if category is not None:
            commands = [c for c in commands if c.category == category]
        return sorted(commands, key=lambda c: c.name)

    def dump_state(self) -> str:
        lines = [
            f"=== CommandDispatcher: {len(self._commands)} commands ===",
            "",
        ]
        for cmd in self.list_commands():
            desc = f"  {cmd.description}" if cmd.description else ""
            lines.append(f"  [{cmd.category}] {cmd.name}{desc}")
        return "\n".join(lines)


def build_default_commands(
    dispatcher: CommandDispatcher,
    manager: WorkspaceManager,
    switcher: WindowSwitcher,
    workspaces: Iterable[str],
    stop: Callable[[], None] | None = None,
) -> None:
    """
    Register every built-in command into the dispatcher.

    Args:
        dispatcher: The CommandDispatcher to populate.
        manager:    The WorkspaceManager the commands act on.
        switcher:   The WindowSwitcher for next/previous.
        workspaces: Configured workspace names.
        stop:       Optional callback that stops the event loop.
    """
    from stackwm.tiling.layout import Direction

    # -- Workspace commands --------------------------------------------
    def _make_switch(name: str) -> CommandFn:
        return lambda: manager.switch_to(name)

    def _make_send(name: str) -> CommandFn:
        return lambda: manager.send_to(name)

    for name in workspaces:
        dispatcher.register(
            f"switch_workspace_{name}",
            _make_switch(name),
            description=f"Switch to workspace {name}",
            category="workspace",
        )
        dispatcher.register(
            f"send_to_workspace_{name}",
            _make_send(name),
            description=f"Send focused window to workspace {name}",
            category="workspace",
        )

    # -- Directional commands ------------------------------------------
    def _make_focus(direction: Direction) -> CommandFn:
        return lambda: manager.focus(direction)

    def _make_move(direction: Direction) -> CommandFn:
        return lambda: manager.move(direction)

    for _dir in Direction:
        dispatcher.register(
            f"focus_{_dir.value}",
            _make_focus(_dir),
            description=f"Focus window to the {_dir.value}",
            category="focus",
        )
        dispatcher.register(
            f"move_window_{_dir.value}",
            _make_move(_dir),
            description=f"Swap window with neighbor to the {_dir.value}",
            category="window",
        )

    # -- Window commands -----------------------------------------------
    dispatcher.register(
        "toggle_enlarge", manager.toggle_enlarge,
        description="Toggle enlarge on focused window", category="window",
    )
    dispatcher.register(
        "toggle_float", manager.toggle_float,
        description="Toggle floating on focused window", category="window",
    )
    dispatcher.register(
        "close_window", manager.close_focused,
        description="Close focused window", category="window",
    )

    # -- Switcher ------------------------------------------------------
    dispatcher.register(
        "switcher_next", switcher.next,
        description="Focus next window in workspace", category="switcher",
    )
    dispatcher.register(
        "switcher_previous", switcher.previous,
        description="Focus previous window in workspace", category="switcher",
    )

    # -- WM lifecycle --------------------------------------------------
    if stop is not None:
        @dispatcher.command("quit_wm", description="Quit stackwm", category="wm")
        def quit_wm() -> None:
            log.info("Command: quit_wm")
            log.info("\n%s", manager.dump_state())
            stop()

    log.info("Default commands registered: %d", dispatcher.count)
