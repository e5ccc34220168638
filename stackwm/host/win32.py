"""
stackwm.host.win32 - Win32 implementation of the host interfaces.

Win32Window wraps an HWND and reads every property live through
pywin32, so the engine never sees stale data.  Win32Host enumerates
top-level windows in z-order and reports the primary monitor's work
area as the screen frame.

Calls against a destroyed HWND never raise: queries return empty
values and actions return False, matching the engine's rule that a
stale reference is a silent no-op.
"""

from __future__ import annotations

import ctypes
import ctypes.wintypes
import logging
import os
from typing import Optional

import pywintypes
import win32api
import win32con
import win32gui
import win32process

from stackwm.core.host import Host
from stackwm.core.window import Window
from stackwm.tiling.rect import Rect

log = logging.getLogger(__name__)

_user32 = ctypes.windll.user32
_dwmapi = ctypes.windll.dwmapi

DWMWA_CLOAKED = 14

# ============================================================================
# Filter lists: shell and system windows that are never standard
# ============================================================================
IGNORED_CLASSES: frozenset[str] = frozenset({
    "Shell_TrayWnd",            # Taskbar
    "Shell_SecondaryTrayWnd",   # Secondary monitor taskbar
    "Progman",                  # Desktop Program Manager
    "WorkerW",                  # Desktop wallpaper worker
    "DV2ControlHost",           # Start menu
    "Windows.UI.Core.CoreWindow",
    "NotifyIconOverflowWindow",
    "TopLevelWindowForOverflowXamlIsland",
    "MultitaskingViewFrame",    # Alt-Tab / Task View
    "ForegroundStaging",
    "tooltips_class32",
    "#32768",                   # Popup menus
    "#32769",                   # Desktop
})

IGNORED_PROCESSES: frozenset[str] = frozenset({
    "searchhost.exe",
    "shellexperiencehost.exe",
    "startmenuexperiencehost.exe",
    "textinputhost.exe",
    "lockapp.exe",
})

IGNORED_TITLES: frozenset[str] = frozenset({
    "",
    "Program Manager",
    "Windows Input Experience",
})


def _is_cloaked(hwnd: int) -> bool:
    """UWP and other-virtual-desktop windows are cloaked by DWM."""
    cloaked = ctypes.c_int(0)
    hr = _dwmapi.DwmGetWindowAttribute(
        ctypes.wintypes.HWND(hwnd),
        DWMWA_CLOAKED,
        ctypes.byref(cloaked),
        ctypes.sizeof(cloaked),
    )
    return hr == 0 and cloaked.value != 0


def _process_name(pid: int) -> str:
    """Lowercase executable name of a process, or "" if unavailable."""
    try:
        handle = win32api.OpenProcess(
            win32con.PROCESS_QUERY_INFORMATION | win32con.PROCESS_VM_READ,
            False,
            pid,
        )
    except pywintypes.error:
        return ""
    try:
        path = win32process.GetModuleFileNameEx(handle, None)
    except pywintypes.error:
        return ""
    finally:
        win32api.CloseHandle(handle)
    return os.path.basename(path).lower()


# ============================================================================
# Win32Window
# ============================================================================
class Win32Window(Window):
    """Live handle to a top-level Win32 window."""

    __slots__ = ("_hwnd",)

    def __init__(self, hwnd: int) -> None:
        self._hwnd = hwnd

    @property
    def hwnd(self) -> int:
        return self._hwnd

    @property
    def id(self) -> int:
        return self._hwnd

    @property
    def is_valid(self) -> bool:
        return bool(win32gui.IsWindow(self._hwnd))

    # ------------------------------------------------------------------
    # Descriptors
    # ------------------------------------------------------------------
    @property
    def title(self) -> str:
        try:
            return win32gui.GetWindowText(self._hwnd)
        except pywintypes.error:
            return ""

    @property
    def class_name(self) -> str:
        try:
            return win32gui.GetClassName(self._hwnd)
        except pywintypes.error:
            return ""

    @property
    def pid(self) -> int:
        try:
            _tid, pid = win32process.GetWindowThreadProcessId(self._hwnd)
        except pywintypes.error:
            return 0
        return pid

    @property
    def app_name(self) -> str:
        name = _process_name(self.pid)
        return name.removesuffix(".exe")

    @property
    def app_id(self) -> Optional[str]:
        return _process_name(self.pid) or None

    @property
    def frame(self) -> Rect:
        try:
            return Rect.from_ltrb(*win32gui.GetWindowRect(self._hwnd))
        except pywintypes.error:
            return Rect(0, 0, 0, 0)

    @property
    def is_visible(self) -> bool:
        return bool(win32gui.IsWindowVisible(self._hwnd)) and not _is_cloaked(
            self._hwnd
        )

    @property
    def is_standard(self) -> bool:
        """
        Regular application window heuristics:
            - not a child window,
            - not a tool window unless it opts in with WS_EX_APPWINDOW,
            - not a non-activating overlay,
            - class, process and title not in the ignore lists,
            - not the shell or desktop window.
        """
        hwnd = self._hwnd
        if not self.is_valid:
            return False
        try:
            style = win32gui.GetWindowLong(hwnd, win32con.GWL_STYLE)
            ex_style = win32gui.GetWindowLong(hwnd, win32con.GWL_EXSTYLE)
        except pywintypes.error:
            return False

        if style & win32con.WS_CHILD:
            return False
        if ex_style & win32con.WS_EX_TOOLWINDOW and not (
            ex_style & win32con.WS_EX_APPWINDOW
        ):
            return False
        if ex_style & win32con.WS_EX_NOACTIVATE:
            return False

        if self.class_name in IGNORED_CLASSES:
            return False
        if self.title in IGNORED_TITLES:
            return False
        if (self.app_id or "") in IGNORED_PROCESSES:
            return False

        if hwnd in (_user32.GetShellWindow(), win32gui.GetDesktopWindow()):
            return False
        return True

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def set_frame(self, frame: Rect) -> bool:
        if win32gui.IsIconic(self._hwnd) or win32gui.IsZoomed(self._hwnd):
            win32gui.ShowWindow(self._hwnd, win32con.SW_RESTORE)
        try:
            win32gui.SetWindowPos(
                self._hwnd,
                0,
                frame.x,
                frame.y,
                frame.w,
                frame.h,
                win32con.SWP_NOZORDER | win32con.SWP_NOACTIVATE,
            )
        except pywintypes.error:
            log.debug("SetWindowPos failed for %#010x", self._hwnd)
            return False
        return True

    def focus(self) -> bool:
        try:
            win32gui.SetForegroundWindow(self._hwnd)
        except pywintypes.error:
            log.debug("SetForegroundWindow failed for %#010x", self._hwnd)
            return False
        return True

    def raise_(self) -> bool:
        try:
            win32gui.SetWindowPos(
                self._hwnd,
                win32con.HWND_TOP,
                0, 0, 0, 0,
                win32con.SWP_NOMOVE | win32con.SWP_NOSIZE | win32con.SWP_NOACTIVATE,
            )
        except pywintypes.error:
            return False
        return True

    def close(self) -> bool:
        try:
            win32gui.PostMessage(self._hwnd, win32con.WM_CLOSE, 0, 0)
        except pywintypes.error:
            return False
        return True

    def __repr__(self) -> str:
        return f"Win32Window(hwnd={self._hwnd:#010x})"


# ============================================================================
# Win32Host
# ============================================================================
def primary_work_area() -> Rect:
    """Work area (without taskbar) of the primary monitor."""
    for hmonitor, _hdc, _rect in win32api.EnumDisplayMonitors(None, None):
        try:
            info = win32api.GetMonitorInfo(hmonitor)
        except pywintypes.error:
            log.warning("Could not read monitor info for %s", hmonitor)
            continue
        if info["Flags"] & win32con.MONITORINFOF_PRIMARY:
            return Rect.from_ltrb(*info["Work"])

    # Fallback: full virtual screen size
    width = win32api.GetSystemMetrics(win32con.SM_CXSCREEN)
    height = win32api.GetSystemMetrics(win32con.SM_CYSCREEN)
    return Rect(0, 0, width, height)


class Win32Host(Host):
    """Host interface on top of the Win32 window manager."""

    def windows(self) -> list[Window]:
        hwnds: list[int] = []

        def _callback(hwnd: int, _extra: object) -> bool:
            hwnds.append(hwnd)
            return True

        win32gui.EnumWindows(_callback, None)
        return [Win32Window(h) for h in hwnds]

    def focused_window(self) -> Optional[Window]:
        hwnd = win32gui.GetForegroundWindow()
        if not hwnd:
            return None
        return Win32Window(hwnd)

    def screen_frame(self) -> Rect:
        return primary_work_area()
