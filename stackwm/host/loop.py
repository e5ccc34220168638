"""
stackwm.host.loop - Win32 event loop: WinEvent hook and global hotkeys.

Win32EventLoop:

  1. Installs a WinEventHook and translates the raw notifications for
     top-level windows into WindowEvents:
        EVENT_OBJECT_SHOW        -> CREATED
        EVENT_OBJECT_DESTROY     -> DESTROYED
        EVENT_SYSTEM_MOVESIZEEND -> MOVED
        EVENT_SYSTEM_FOREGROUND  -> FOCUSED
  2. Runs the blocking Win32 message loop, dispatching WM_HOTKEY to a
     HotkeyManager.
  3. Stops on stop(), SIGINT or SIGTERM.

Events are delivered one at a time to a single handler, in the order
the OS reports them; the handler runs to completion before the next
message is read.
"""

from __future__ import annotations

import ctypes
import ctypes.wintypes
import logging
import signal
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from stackwm.core.events import EventKind, WindowEvent
from stackwm.host.win32 import Win32Window

log = logging.getLogger(__name__)

_user32 = ctypes.windll.user32
_kernel32 = ctypes.windll.kernel32

# ============================================================================
# Constants
# ============================================================================
WM_QUIT = 0x0012
WM_HOTKEY = 0x0312

WINEVENT_OUTOFCONTEXT = 0x0000
WINEVENT_SKIPOWNPROCESS = 0x0002

EVENT_SYSTEM_FOREGROUND = 0x0003
EVENT_SYSTEM_MOVESIZEEND = 0x000B
EVENT_OBJECT_DESTROY = 0x8001
EVENT_OBJECT_SHOW = 0x8002

OBJID_WINDOW = 0
CHILDID_SELF = 0

_EVENT_KINDS: dict[int, EventKind] = {
    EVENT_OBJECT_SHOW: EventKind.CREATED,
    EVENT_OBJECT_DESTROY: EventKind.DESTROYED,
    EVENT_SYSTEM_MOVESIZEEND: EventKind.MOVED,
    EVENT_SYSTEM_FOREGROUND: EventKind.FOCUSED,
}

# WinEventProc: void callback(HWINEVENTHOOK, DWORD, HWND, LONG, LONG, DWORD, DWORD)
WinEventProc = ctypes.WINFUNCTYPE(
    None,
    ctypes.wintypes.HANDLE,   # hWinEventHook
    ctypes.wintypes.DWORD,    # event
    ctypes.wintypes.HWND,     # hwnd
    ctypes.c_long,            # idObject
    ctypes.c_long,            # idChild
    ctypes.wintypes.DWORD,    # idEventThread
    ctypes.wintypes.DWORD,    # dwmsEventTime
)

_user32.SetWinEventHook.restype = ctypes.wintypes.HANDLE
_user32.UnhookWinEvent.argtypes = [ctypes.wintypes.HANDLE]


# ============================================================================
# Global hotkeys
# ============================================================================
HotkeyCallback = Callable[[], None]


@dataclass(frozen=True, slots=True)
class Hotkey:
    """A registered hotkey binding."""

    id: int
    modifiers: int
    vk: int
    callback: HotkeyCallback
    description: str


class HotkeyManager:
    """
    Registers global hotkeys with RegisterHotKey.

    WM_HOTKEY arrives through the event loop's message queue, which
    calls dispatch() with the hotkey id.
    """

    def __init__(self) -> None:
        self._hotkeys: dict[int, Hotkey] = {}
        self._next_id: int = 1

    @property
    def count(self) -> int:
        return len(self._hotkeys)

    def register(
        self,
        modifiers: int,
        vk: int,
        callback: HotkeyCallback,
        description: str = "",
    ) -> int | None:
        """
        Register a global hotkey.

        Returns:
            The hotkey id, or None if the OS refused the combination
            (typically because another program owns it).
        """
        hotkey_id = self._next_id
        if not _user32.RegisterHotKey(None, hotkey_id, modifiers, vk):
            log.error(
                "Failed to register hotkey: mods=%#06x vk=%#04x (%s)",
                modifiers,
                vk,
                description,
            )
            return None

        self._hotkeys[hotkey_id] = Hotkey(
            id=hotkey_id,
            modifiers=modifiers,
            vk=vk,
            callback=callback,
            description=description,
        )
        self._next_id += 1
        log.debug("Hotkey registered: id=%d %s", hotkey_id, description)
        return hotkey_id

    def unregister_all(self) -> None:
        for hotkey_id in list(self._hotkeys):
            _user32.UnregisterHotKey(None, hotkey_id)
        log.info("All hotkeys unregistered (%d total)", len(self._hotkeys))
        self._hotkeys.clear()

    def dispatch(self, hotkey_id: int) -> bool:
        hotkey = self._hotkeys.get(hotkey_id)
        if hotkey is None:
            log.warning("Unknown hotkey id: %d", hotkey_id)
            return False

        log.debug("Hotkey dispatched: %s", hotkey.description)
        try:
            hotkey.callback()
        except Exception:
            log.exception("Error in hotkey callback: %s", hotkey.description)
        return True

    def dump_state(self) -> str:
        lines = [f"=== HotkeyManager: {len(self._hotkeys)} hotkeys ===", ""]
        for hk in self._hotkeys.values():
            lines.append(
                f"  id={hk.id:3d}  mods={hk.modifiers:#06x} "
                f"vk={hk.vk:#04x}  {hk.description}"
            )
        return "\n".join(lines)


# ============================================================================
# Event loop
# ============================================================================
class Win32EventLoop:
    """
    Blocking Win32 message loop feeding WindowEvents to one handler.

    Usage:
        loop = Win32EventLoop(manager.handle, hotkeys)
        loop.run()   # blocks until stop()
    """

    def __init__(
        self,
        handler: Callable[[WindowEvent], None],
        hotkeys: Optional[HotkeyManager] = None,
    ) -> None:
        self._handler = handler
        self._hotkeys = hotkeys
        self._hook_handle: int = 0
        # Must prevent GC of the ctypes callback
        self._hook_proc: Optional[WinEventProc] = None  # type: ignore[valid-type]
        self._thread_id: int = 0
        self._running = False

    def _on_win_event(
        self,
        hook: int,
        event: int,
        hwnd: int,
        id_object: int,
        id_child: int,
        event_thread: int,
        event_time: int,
    ) -> None:
        """Raw WinEvent callback: only top-level window events pass."""
        if id_object != OBJID_WINDOW or id_child != CHILDID_SELF or not hwnd:
            return
        kind = _EVENT_KINDS.get(event)
        if kind is None:
            return

        try:
            self._handler(WindowEvent(kind, Win32Window(hwnd)))
        except Exception:
            log.exception("Error handling event %#06x for hwnd %#010x", event, hwnd)

    def run(self) -> None:
        """Install the hook and block in the message loop."""
        self._hook_proc = WinEventProc(self._on_win_event)
        self._hook_handle = _user32.SetWinEventHook(
            EVENT_SYSTEM_FOREGROUND,
            EVENT_OBJECT_SHOW,
            0,
            self._hook_proc,
            0,
            0,
            WINEVENT_OUTOFCONTEXT | WINEVENT_SKIPOWNPROCESS,
        )
        if not self._hook_handle:
            raise RuntimeError("SetWinEventHook failed")
        log.info("WinEvent hook installed (handle=%#x)", self._hook_handle)

        def _signal_handler(sig: int, frame: object) -> None:
            log.info("Signal %d received, stopping...", sig)
            self.stop()

        signal.signal(signal.SIGINT, _signal_handler)
        signal.signal(signal.SIGTERM, _signal_handler)

        self._running = True
        self._thread_id = _kernel32.GetCurrentThreadId()
        msg = ctypes.wintypes.MSG()
        try:
            while self._running:
                if _user32.GetMessageW(ctypes.byref(msg), 0, 0, 0) <= 0:
                    break
                if msg.message == WM_HOTKEY and self._hotkeys is not None:
                    self._hotkeys.dispatch(msg.wParam)
                    continue
                _user32.TranslateMessage(ctypes.byref(msg))
                _user32.DispatchMessageW(ctypes.byref(msg))
        finally:
            self._cleanup()

    def stop(self) -> None:
        """Request the loop to stop.  Safe to call from a callback."""
        self._running = False
        if self._thread_id:
            _user32.PostThreadMessageW(self._thread_id, WM_QUIT, 0, 0)
        else:
            _user32.PostQuitMessage(0)

    def _cleanup(self) -> None:
        if self._hotkeys is not None:
            self._hotkeys.unregister_all()
        if self._hook_handle:
            _user32.UnhookWinEvent(self._hook_handle)
            self._hook_handle = 0
            log.info("WinEvent hook removed")
        self._hook_proc = None
