"""System tray icon for LayoutSwitch (pystray + Pillow)."""

import sys
from typing import Callable, Optional, Sequence

if sys.platform == 'win32':
    import pystray
    from PIL import Image, ImageDraw, ImageFont


def _create_icon_image(label: str) -> 'Image.Image':
    """Generate tray icon: blue circle with short text."""
    size = 64
    img = Image.new('RGBA', (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.ellipse([2, 2, size - 2, size - 2], fill=(33, 150, 243, 255))
    try:
        font = ImageFont.truetype('arial.ttf', 22)
    except (OSError, IOError):
        font = ImageFont.load_default()
    bbox = draw.textbbox((0, 0), label, font=font)
    tw, th = bbox[2] - bbox[0], bbox[3] - bbox[1]
    x = (size - tw) // 2
    y = (size - th) // 2 - 2
    draw.text((x, y), label, fill=(255, 255, 255, 255), font=font)
    return img


class TrayIcon:
    """System tray icon with menu."""

    def __init__(
        self,
        pair: Sequence[str],
        on_convert: Callable[[], None],
        on_exit: Callable[[], None],
    ):
        self._pair = list(pair)
        self._on_convert = on_convert
        self._on_exit = on_exit
        self._icon: Optional['pystray.Icon'] = None

    @property
    def title(self) -> str:
        return 'LayoutSwitch: ' + ' / '.join(lang.upper() for lang in self._pair)

    def _build_menu(self) -> 'pystray.Menu':
        return pystray.Menu(
            pystray.MenuItem(self.title, None, enabled=False),
            pystray.Menu.SEPARATOR,
            pystray.MenuItem('Convert selection', lambda _i, _it: self._on_convert()),
            pystray.Menu.SEPARATOR,
            pystray.MenuItem('Exit', lambda _i, _it: self._on_exit()),
        )

    def run(self) -> None:
        """Start the tray icon (blocking - run in main thread)."""
        if sys.platform != 'win32':
            return
        self._icon = pystray.Icon(
            'LayoutSwitch',
            _create_icon_image('LS'),
            self.title,
            menu=self._build_menu(),
        )
        self._icon.run()

    def stop(self) -> None:
        """Stop the tray icon."""
        if self._icon:
            self._icon.stop()

    def notify(self, message: str) -> None:
        """Show a Windows notification balloon."""
        if self._icon:
            self._icon.notify(message, 'LayoutSwitch')
