"""Tests for clipboard module with a simulated keyboard and clipboard."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from types import SimpleNamespace

import pytest

import clipboard
from actions import convert_selected_text
from clipboard import SelectionClipboard
from config import Config
from detector import LanguageDetector
from dictionary import LayoutRegistry


class FakeDesktop:
    """Focused app with a selection, the system clipboard and held keys."""

    def __init__(self, clipboard_text, selection=''):
        self.clipboard = clipboard_text
        self.selection = selection
        self.document = []
        self.held = {'ctrl', 'shift'}  # hotkey still pressed
        self.sent = []

    # keyboard module
    def stash_state(self):
        state = sorted(self.held)
        self.held = set()
        return state

    def restore_modifiers(self, state):
        self.held = set(state)

    def send(self, hotkey):
        keys = frozenset(self.held | set(hotkey.split('+')))
        self.sent.append(keys)
        if keys == {'ctrl', 'c'} and self.selection:
            self.clipboard = self.selection
        elif keys == {'ctrl', 'v'}:
            self.document.append(self.clipboard)

    # clipboard accessors
    def get(self):
        return self.clipboard

    def set(self, text):
        self.clipboard = text

    def clear(self):
        self.clipboard = None


@pytest.fixture
def desktop(monkeypatch):
    desk = FakeDesktop('ghbdtn')
    monkeypatch.setattr(clipboard, 'sys', SimpleNamespace(platform='win32'))
    monkeypatch.setattr(clipboard, 'keyboard', desk, raising=False)
    monkeypatch.setattr(clipboard.time, 'sleep', lambda _s: None)
    monkeypatch.setattr(SelectionClipboard, '_get_clipboard', staticmethod(desk.get))
    monkeypatch.setattr(SelectionClipboard, '_set_clipboard', staticmethod(desk.set))
    monkeypatch.setattr(SelectionClipboard, '_clear_clipboard', staticmethod(desk.clear))
    return desk


def _convert(board):
    config = Config()
    return convert_selected_text(board, config.language_pair,
                                 LanguageDetector(config.lang_patterns),
                                 LayoutRegistry(config.dictionary_paths))


class TestSelectionClipboard:
    def test_copy_returns_selection(self, desktop):
        desktop.selection = 'hello'
        assert SelectionClipboard().copy_selection() == 'hello'

    def test_copy_without_selection(self, desktop):
        assert SelectionClipboard().copy_selection() is None

    def test_held_modifiers_released_for_send(self, desktop):
        desktop.selection = 'hello'
        SelectionClipboard().copy_selection()
        assert desktop.sent == [frozenset({'ctrl', 'c'})]
        assert desktop.held == {'ctrl', 'shift'}

    def test_paste_restores_clipboard(self, desktop):
        desktop.selection = 'hello'
        board = SelectionClipboard()
        board.copy_selection()
        assert board.paste_text('руддщ') is True
        assert desktop.document == ['руддщ']
        assert desktop.clipboard == 'ghbdtn'

    def test_restore_without_copy(self, desktop):
        SelectionClipboard().restore()
        assert desktop.clipboard == 'ghbdtn'


class TestConvertSelection:
    def test_converts_selection(self, desktop):
        desktop.selection = 'ghbdtn vbh'
        result = _convert(SelectionClipboard())
        assert result.converted == 'привет мир'
        assert desktop.document == ['привет мир']
        assert desktop.clipboard == 'ghbdtn'

    def test_nothing_selected_pastes_nothing(self, desktop):
        assert _convert(SelectionClipboard()) is None
        assert desktop.document == []
        assert desktop.clipboard == 'ghbdtn'

    def test_undetected_selection_restores_clipboard(self, desktop):
        desktop.selection = '12345'
        assert _convert(SelectionClipboard()) is None
        assert desktop.document == []
        assert desktop.clipboard == 'ghbdtn'
