"""
Pytest fixtures and host fakes for stackwm tests.

FakeWindow and FakeHost implement the Window / Host interfaces in
memory, recording every action so tests can assert on what the
engine asked the window server to do.
"""

from __future__ import annotations

from typing import Optional

import pytest

from stackwm.config.settings import Settings
from stackwm.core.host import Host
from stackwm.core.window import Window
from stackwm.tiling.display import Display
from stackwm.tiling.floating import FloatingSet
from stackwm.tiling.rect import Rect
from stackwm.tiling.workspace_manager import WorkspaceManager

SCREEN = Rect(0, 0, 1200, 800)


class FakeWindow(Window):
    """In-memory window that records the calls made on it."""

    def __init__(
        self,
        wid: int,
        title: str = "",
        app_name: str = "app",
        app_id: Optional[str] = None,
        frame: Rect = Rect(100, 100, 400, 300),
        visible: bool = True,
        standard: bool = True,
        enhanced_ui: Optional[bool] = None,
    ) -> None:
        self._id = wid
        self._title = title or f"window {wid}"
        self._app_name = app_name
        self._app_id = app_id
        self._frame = frame
        self.visible = visible
        self.standard = standard
        self._enhanced_ui = enhanced_ui
        self.host: Optional[FakeHost] = None

        self.calls: list[tuple] = []
        self.fail_set_frame = False
        # enhanced_ui value seen at each set_frame call
        self.enhanced_during_set_frame: list[Optional[bool]] = []

    @property
    def id(self) -> int:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def app_name(self) -> str:
        return self._app_name

    @property
    def app_id(self) -> Optional[str]:
        return self._app_id

    @property
    def frame(self) -> Rect:
        return self._frame

    @property
    def is_visible(self) -> bool:
        return self.visible

    @property
    def is_standard(self) -> bool:
        return self.standard

    @property
    def enhanced_ui(self) -> Optional[bool]:
        return self._enhanced_ui

    @enhanced_ui.setter
    def enhanced_ui(self, value: bool) -> None:
        self.calls.append(("enhanced_ui", value))
        self._enhanced_ui = value

    def set_frame(self, frame: Rect) -> bool:
        self.enhanced_during_set_frame.append(self._enhanced_ui)
        if self.fail_set_frame:
            raise RuntimeError(f"set_frame failed for {self._id}")
        self.calls.append(("set_frame", frame))
        self._frame = frame
        return True

    def focus(self) -> bool:
        self.calls.append(("focus",))
        if self.host is not None:
            self.host.focused = self
        return True

    def raise_(self) -> bool:
        self.calls.append(("raise",))
        return True

    def close(self) -> bool:
        self.calls.append(("close",))
        return True

    # -- helpers for assertions -------------------------------------------
    @property
    def frames_set(self) -> list[Rect]:
        return [c[1] for c in self.calls if c[0] == "set_frame"]

    @property
    def last_frame_set(self) -> Optional[Rect]:
        frames = self.frames_set
        return frames[-1] if frames else None

    def count(self, name: str) -> int:
        return sum(1 for c in self.calls if c[0] == name)

    def reset_calls(self) -> None:
        self.calls.clear()
        self.enhanced_during_set_frame.clear()


class FakeHost(Host):
    """In-memory window server with a single screen."""

    def __init__(self, screen: Rect = SCREEN) -> None:
        self.screen = screen
        self.all_windows: list[FakeWindow] = []
        self.focused: Optional[FakeWindow] = None

    def add(self, window: FakeWindow, focus: bool = False) -> FakeWindow:
        window.host = self
        self.all_windows.append(window)
        if focus:
            self.focused = window
        return window

    def windows(self) -> list[Window]:
        return list(self.all_windows)

    def focused_window(self) -> Optional[Window]:
        return self.focused

    def screen_frame(self) -> Rect:
        return self.screen

    def reset_calls(self) -> None:
        for w in self.all_windows:
            w.reset_calls()


# ============================================================================
# Fixtures
# ============================================================================
@pytest.fixture
def settings() -> Settings:
    return Settings().validate()


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def floating() -> FloatingSet:
    return FloatingSet()


@pytest.fixture
def display(host: FakeHost, floating: FloatingSet) -> Display:
    return Display(host, floating, margin=5)


@pytest.fixture
def make_window(host: FakeHost):
    """Factory: create a FakeWindow registered with the host."""
    counter = iter(range(1, 10_000))

    def _make(focus: bool = False, **kwargs) -> FakeWindow:
        wid = kwargs.pop("wid", None) or next(counter) * 100
        return host.add(FakeWindow(wid, **kwargs), focus=focus)

    return _make


@pytest.fixture
def manager(host: FakeHost, settings: Settings) -> WorkspaceManager:
    """An initialized manager over an empty host."""
    mgr = WorkspaceManager(host, settings)
    mgr.initialize()
    return mgr
