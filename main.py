"""LayoutSwitch - retype text typed in the wrong keyboard layout. Entry point."""

import sys
import threading
import logging
from dataclasses import dataclass
from logging.handlers import TimedRotatingFileHandler

from actions import Action, convert_selected_text
from clipboard import SelectionClipboard
from config import Config, user_data_dir
from detector import LanguageDetector
from dictionary import LayoutRegistry
from tray import TrayIcon

__version__ = '1.2.0'

log = logging.getLogger('layoutswitch')


def setup_logging() -> None:
    """Daily rotating file log plus console output."""
    log_dir = user_data_dir() / 'logs'
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = TimedRotatingFileHandler(
        log_dir / 'layoutswitch.log',
        when='D', interval=1, backupCount=1,  # keep today + 1 day
        encoding='utf-8',
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s'))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s'))

    logging.basicConfig(level=logging.DEBUG, handlers=[console_handler, file_handler])
    log.info('Log file: %s', log_dir / 'layoutswitch.log')


@dataclass
class Binding:
    hotkey: str
    action: Action
    description: str = ''


def parse_bindings(key_bindings: dict) -> list[Binding]:
    """Turn configured hotkeys into bindings. Unknown actions are skipped."""
    bindings = []
    for hotkey, settings in key_bindings.items():
        name = settings.get('action', '') if isinstance(settings, dict) else ''
        action = Action.parse(name)
        if action is None:
            log.warning('Unknown action %r for hotkey %s, skipped', name, hotkey)
            continue
        description = settings.get('description') or ''
        bindings.append(Binding(hotkey, action, description.replace('{hotkey}', hotkey)))
    return bindings


class LayoutSwitch:
    """Main application class."""

    def __init__(self, config: Config):
        self.config = config
        self.pair = config.language_pair
        self.registry = LayoutRegistry.from_config(config)
        self.detector = LanguageDetector(config.lang_patterns)
        self.clipboard = SelectionClipboard()
        self.bindings = parse_bindings(config.key_bindings)
        self._busy = threading.Lock()
        self.tray = TrayIcon(
            self.pair,
            on_convert=lambda: self.dispatch(Action.CONVERT_SELECTED_TEXT),
            on_exit=self._exit,
        )

    def run(self) -> None:
        if sys.platform != 'win32':
            log.error('LayoutSwitch requires Windows. Exiting.')
            return

        import keyboard

        for binding in self.bindings:
            keyboard.add_hotkey(binding.hotkey, self.dispatch,
                                args=(binding.action,), suppress=True)
            if binding.description:
                log.info('- %s', binding.description)
        log.info('Listening to key bindings. Languages: %s', ', '.join(self.pair))

        self.tray.run()

    def dispatch(self, action: Action) -> None:
        """Hotkey callback - run the action off the hook thread."""
        threading.Thread(target=self._run_action, args=(action,), daemon=True).start()

    def _run_action(self, action: Action) -> None:
        # Drop presses that arrive while a conversion is still pasting
        if not self._busy.acquire(blocking=False):
            return
        try:
            if action is Action.CONVERT_SELECTED_TEXT:
                result = convert_selected_text(
                    self.clipboard, self.pair, self.detector, self.registry)
                if result and self.config.show_notification:
                    self.tray.notify(f'{result.original} -> {result.converted}')
        except Exception:
            log.exception('Error running action %s', action.value)
        finally:
            self._busy.release()

    def _exit(self) -> None:
        log.info('LayoutSwitch shutting down')
        self.tray.stop()


def main():
    setup_logging()
    log.info('=== LayoutSwitch %s starting ===', __version__)
    log.info('Python %s, platform %s', sys.version, sys.platform)
    config = Config.load()
    log.info('Using config: %s', config.source_path)
    app = LayoutSwitch(config)
    app.run()


if __name__ == '__main__':
    main()
