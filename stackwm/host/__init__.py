"""
stackwm.host - Win32 collaborator.

Only the entry point imports this package; the engine talks to it
through the ``Window`` and ``Host`` interfaces in ``stackwm.core``.

    - win32 : Win32Window, Win32Host (pywin32)
    - loop  : Win32EventLoop (WinEvent hook) and HotkeyManager
"""
