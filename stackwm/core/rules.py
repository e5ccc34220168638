"""
stackwm.core.rules - Window classification rules.

Decides, once per window at discovery time, whether the engine should
manage it at all, whether it floats by default, and which workspace
it belongs to by default.

These functions are pure: they only read the window and the static
configuration passed in.  A window's workspace assignment is never
re-evaluated after discovery.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping
from typing import Optional

from stackwm.core.window import Window

log = logging.getLogger(__name__)


def is_manageable(window: Window) -> bool:
    """
    Return True if *window* should be tracked by the engine.

    The window must be visible and the host must classify it as a
    standard application window (no tool palettes, tooltips, etc.).
    """
    return window.is_visible and window.is_standard


def is_float_by_default(
    window: Window,
    float_titles: Collection[str],
    float_apps: Collection[str],
) -> bool:
    """
    Return True if *window* is excluded from tiling by configuration.

    A window floats when its title is in *float_titles* or its owning
    application's identity is in *float_apps*.
    """
    if window.title in float_titles:
        log.debug("Float by title: %s", window)
        return True

    app_id = window.app_id
    if app_id is None:
        return False
    if app_id in float_apps:
        log.debug("Float by app %r: %s", app_id, window)
        return True
    return False


def default_workspace_of(
    window: Window,
    app_workspace: Mapping[str, str],
) -> Optional[str]:
    """Configured home workspace for the window's application, if any."""
    app_id = window.app_id
    if app_id is None:
        return None
    return app_workspace.get(app_id)
