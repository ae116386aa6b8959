"""Language detection for selected text."""

import re
from typing import Iterable, Mapping, Optional, Sequence

# Most distinguishing alphabet first, plain Latin last. Detection walks this
# order, never the order of the configured pair.
LANGUAGE_PRIORITY = ('uk', 'ru', 'pl', 'cz', 'de', 'fr', 'en')
GENERIC_LANGUAGE = 'en'


class LanguageDetector:
    """Guesses which of the candidate languages a text is written in."""

    def __init__(self, patterns: Mapping[str, str]):
        self.patterns = {lang: re.compile(pattern, re.IGNORECASE)
                         for lang, pattern in patterns.items()}
        self.priority = self._build_priority(self.patterns)

    @staticmethod
    def _build_priority(languages: Iterable[str]) -> tuple[str, ...]:
        known = [lang for lang in LANGUAGE_PRIORITY if lang != GENERIC_LANGUAGE]
        extra = [lang for lang in languages if lang not in LANGUAGE_PRIORITY]
        return tuple(known + extra + [GENERIC_LANGUAGE])

    def detect(self, text: str, candidates: Iterable[str]) -> Optional[str]:
        """Return the first candidate language (in priority order) whose
        pattern matches anywhere in ``text``, or None if none does.
        """
        candidates = set(candidates)
        for lang in self.priority:
            if lang not in candidates:
                continue
            pattern = self.patterns.get(lang)
            if pattern is not None and pattern.search(text):
                return lang
        return None


def inverse_language(language: str, pair: Sequence[str]) -> Optional[str]:
    """The other language of the selected pair, or None if there is none."""
    for lang in pair:
        if lang != language:
            return lang
    return None
