"""Hotkey actions: detect the layout of selected text and retype it."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from detector import LanguageDetector, inverse_language
from dictionary import DictionaryError, LayoutRegistry
from keymap import remap

log = logging.getLogger('layoutswitch')


class Action(Enum):
    CONVERT_SELECTED_TEXT = 'convert_selected_text'

    @classmethod
    def parse(cls, name: str) -> Optional['Action']:
        """Action for a configured name, or None if unknown."""
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass
class ConversionResult:
    original: str
    converted: str
    source: str  # language the text was detected as
    target: str


def convert_text(text: str, pair: Sequence[str], detector: LanguageDetector,
                 registry: LayoutRegistry) -> Optional[ConversionResult]:
    """Convert text typed in one language of the pair into the other one.

    Returns:
        ConversionResult, or None if the pair is invalid, no language matches
        or the text would convert to the same language.

    Raises:
        DictionaryError: A layout of the pair can't be loaded.
    """
    if len(set(pair)) != 2:
        log.error('Invalid number of selected layouts. Expected 2, got %d: %s',
                  len(set(pair)), ', '.join(pair))
        return None

    source = detector.detect(text, pair)
    if source is None:
        log.error('Could not detect layout for the text: %r', text)
        return None

    target = inverse_language(source, pair)
    if target is None:
        log.warning('Language is the same (%s). No transformation will be applied.',
                    source)
        return None

    converted = remap(text, registry.layout(source), registry.layout(target),
                      registry.index(source))
    return ConversionResult(text, converted, source, target)


def convert_selected_text(clipboard, pair: Sequence[str],
                          detector: LanguageDetector,
                          registry: LayoutRegistry) -> Optional[ConversionResult]:
    """Copy the current selection, convert it and paste the result back.

    The clipboard content from before the copy is restored on every path.
    """
    try:
        original = clipboard.copy_selection()
        if not original or not original.strip():
            log.debug('Nothing selected')
            return None
        original = original.strip()

        try:
            result = convert_text(original, pair, detector, registry)
        except DictionaryError:
            log.exception('Failed to load layout dictionaries')
            return None
        if result is None:
            return None

        clipboard.paste_text(result.converted)
        log.info('Transformed (%s -> %s): %s -> %s',
                 result.source, result.target, result.original, result.converted)
        return result
    finally:
        clipboard.restore()
