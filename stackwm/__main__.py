"""
stackwm - Entry point.

Run with:  python -m stackwm [--config PATH] [--debug]
"""

from __future__ import annotations

import argparse
import logging
import sys

from stackwm import __version__
from stackwm.config.hotkeys import default_bindings, register_all_hotkeys
from stackwm.config.settings import ConfigError, Settings
from stackwm.core.commands import CommandDispatcher, build_default_commands
from stackwm.tiling.switcher import WindowSwitcher
from stackwm.tiling.workspace_manager import WorkspaceManager

log = logging.getLogger("stackwm")


class SafeStreamHandler(logging.StreamHandler):
    """Handler that replaces unencodable characters instead of crashing."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            enc = getattr(self.stream, "encoding", "utf-8") or "utf-8"
            safe = msg.encode(enc, errors="replace").decode(enc, errors="replace")
            self.stream.write(safe + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


def setup_logging(debug: bool = False) -> None:
    """Configure logging for the WM."""
    fmt = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
    handler = SafeStreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    root.addHandler(handler)

    # Floating frame refreshes fire on every drag of a floating window
    logging.getLogger("stackwm.tiling.floating").setLevel(logging.INFO)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="stackwm",
        description="Tiling workspace manager with a main + stack layout.",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="TOML configuration file (defaults are used if omitted)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="log event traces and geometry",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(argv)


def load_settings(path: str | None) -> Settings:
    if path is None:
        return Settings().validate()
    return Settings.from_toml(path)


def on_redisplay(name: str) -> None:
    """Stands in for the workspace indicator."""
    log.info("WORKSPACE [%s]", name)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.debug)

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        log.error("Invalid configuration: %s", exc)
        sys.exit(2)

    # The Win32 host is only importable on Windows
    from stackwm.host.loop import HotkeyManager, Win32EventLoop
    from stackwm.host.win32 import Win32Host

    host = Win32Host()
    manager = WorkspaceManager(host, settings)
    manager.display.on_redisplay(on_redisplay)
    switcher = WindowSwitcher(host, manager)

    hk_manager = HotkeyManager()
    loop = Win32EventLoop(manager.handle, hk_manager)

    dispatcher = CommandDispatcher()
    build_default_commands(
        dispatcher, manager, switcher, settings.workspaces, stop=loop.stop
    )
    hk_count = register_all_hotkeys(
        hk_manager, dispatcher, default_bindings(settings.workspaces)
    )

    manager.initialize()

    log.info("=" * 60)
    log.info("stackwm %s running. Press Ctrl+C to stop.", __version__)
    log.info("  Screen: %s", host.screen_frame())
    log.info("  Workspaces: %s", " ".join(settings.workspaces))
    log.info("  Hotkeys: %d", hk_count)
    log.info("  Commands: %d", dispatcher.count)
    log.info("=" * 60)
    log.debug("\n%s", dispatcher.dump_state())
    log.debug("\n%s", hk_manager.dump_state())

    try:
        loop.run()
    finally:
        # Windows parked by hidden workspaces must come back on screen
        manager.restore_all()
        log.info("\n%s", manager.dump_state())


if __name__ == "__main__":
    main()
