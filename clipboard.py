"""Copying the selection and pasting text via the clipboard (Windows only)."""

import sys
import time
from typing import Optional

# Windows-only imports are guarded for Linux dev/test
if sys.platform == 'win32':
    import ctypes
    import keyboard

    user32 = ctypes.windll.user32
    kernel32 = ctypes.windll.kernel32

    CF_UNICODETEXT = 13

    OpenClipboard = user32.OpenClipboard
    CloseClipboard = user32.CloseClipboard
    EmptyClipboard = user32.EmptyClipboard
    GetClipboardData = user32.GetClipboardData
    SetClipboardData = user32.SetClipboardData
    GlobalAlloc = kernel32.GlobalAlloc
    GlobalLock = kernel32.GlobalLock
    GlobalUnlock = kernel32.GlobalUnlock

    GMEM_MOVEABLE = 0x0002


class SelectionClipboard:
    """Reads the selected text with Ctrl+C and replaces it with Ctrl+V."""

    COPY_DELAY = 0.05    # 50ms for the app to fill the clipboard
    PASTE_DELAY = 0.05   # 50ms before restoring the clipboard

    def __init__(self):
        self._saved_clipboard: Optional[str] = None

    @staticmethod
    def _send(hotkey: str) -> None:
        """Send a shortcut with the user's held modifiers released.

        The triggering hotkey (e.g. ctrl+shift+p) is still held down, so a
        bare send would reach the app as ctrl+shift+c.
        """
        state = keyboard.stash_state()
        try:
            keyboard.send(hotkey)
        finally:
            keyboard.restore_modifiers(state)

    def copy_selection(self) -> Optional[str]:
        """Copy the selection of the focused window and return it.

        Returns None if nothing was selected. The previous clipboard is kept
        until restore() or paste_text().
        """
        if sys.platform != 'win32':
            return None
        self._saved_clipboard = self._get_clipboard()
        self._clear_clipboard()
        self._send('ctrl+c')
        time.sleep(self.COPY_DELAY)
        return self._get_clipboard() or None

    def paste_text(self, text: str) -> bool:
        """Paste text over the selection, then restore the saved clipboard.

        Returns True on success.
        """
        if sys.platform != 'win32':
            return False
        self._set_clipboard(text)
        self._send('ctrl+v')
        time.sleep(self.PASTE_DELAY)
        self.restore()
        return True

    def restore(self) -> None:
        """Put back the clipboard saved by copy_selection(), if any."""
        if sys.platform != 'win32':
            return
        if self._saved_clipboard is not None:
            self._set_clipboard(self._saved_clipboard)
        self._saved_clipboard = None

    @staticmethod
    def _clear_clipboard() -> None:
        """Empty the clipboard (Windows only)."""
        if not OpenClipboard(0):
            return
        try:
            EmptyClipboard()
        finally:
            CloseClipboard()

    @staticmethod
    def _get_clipboard() -> Optional[str]:
        """Read current clipboard text (Windows only)."""
        if not OpenClipboard(0):
            return None
        try:
            handle = GetClipboardData(CF_UNICODETEXT)
            if not handle:
                return None
            ptr = GlobalLock(handle)
            if not ptr:
                return None
            try:
                return ctypes.wstring_at(ptr)
            finally:
                GlobalUnlock(handle)
        finally:
            CloseClipboard()

    @staticmethod
    def _set_clipboard(text: str) -> None:
        """Set clipboard text (Windows only)."""
        if not OpenClipboard(0):
            return
        try:
            EmptyClipboard()
            data = text.encode('utf-16-le') + b'\x00\x00'
            h = GlobalAlloc(GMEM_MOVEABLE, len(data))
            ptr = GlobalLock(h)
            ctypes.memmove(ptr, data, len(data))
            GlobalUnlock(h)
            SetClipboardData(CF_UNICODETEXT, h)
        finally:
            CloseClipboard()
