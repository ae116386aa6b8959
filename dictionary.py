"""Layout dictionary loading and the per-language layout registry."""

import json
import logging
import sys
import threading
from pathlib import Path
from typing import Mapping, Optional, Union

from config import Config
from keymap import KeyIndex, build_index
from layouts import LayoutDict

log = logging.getLogger('layoutswitch')

REFERENCE_FILE = 'en.qwerty.json'


class DictionaryError(Exception):
    """Base class for layout dictionary errors."""


class DictionaryNotFound(DictionaryError):
    """Language has no layout file configured, or the file doesn't exist."""


class InvalidDictionaryFormat(DictionaryError):
    """Layout file isn't a valid layout document."""


def bundle_dir() -> Path:
    """Directory holding the bundled ``dictionaries/`` folder."""
    # PyInstaller bundles data into sys._MEIPASS temp dir
    return Path(getattr(sys, '_MEIPASS', Path(__file__).parent))


def _search_dirs(base_dir: Optional[Path]) -> list[Path]:
    dirs = [base_dir] if base_dir else []
    dirs.append(bundle_dir())
    dirs.append(Path(sys.prefix) / 'share' / 'layoutswitch')
    return dirs


def resolve_path(path: Union[str, Path], base_dir: Optional[Path] = None) -> Path:
    """Locate a layout file. Relative paths are tried against ``base_dir``
    first and the bundled data directories after it."""
    path = Path(path)
    if path.is_absolute():
        return path
    for directory in _search_dirs(base_dir):
        candidate = directory / path
        if candidate.exists():
            return candidate
    return (base_dir or bundle_dir()) / path


def load_layout(path: Path, name: str = '') -> LayoutDict:
    """Read and validate a layout file.

    Raises:
        DictionaryNotFound: File doesn't exist.
        InvalidDictionaryFormat: File isn't valid JSON or lacks the layout shape.
    """
    if not path.exists():
        raise DictionaryNotFound(f'Dictionary file not found for {name or "layout"}: {path}')
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidDictionaryFormat(f'Invalid JSON in {path}: {e}') from e
    try:
        return LayoutDict.from_dict(data, name=name)
    except ValueError as e:
        raise InvalidDictionaryFormat(f'Invalid dictionary format in {path}: {e}') from e


def load_reference() -> LayoutDict:
    """The bundled English QWERTY layout alt combinations are placed against."""
    return load_layout(resolve_path(Path('dictionaries') / REFERENCE_FILE), name='en')


class LayoutRegistry:
    """Language -> layout -> key index, loaded and built on first use.

    Layouts and indexes are never mutated once cached, so a registry can be
    shared between threads.
    """

    def __init__(self, dictionary_paths: Mapping[str, str],
                 base_dir: Optional[Path] = None,
                 reference: Optional[LayoutDict] = None):
        self.dictionary_paths = dict(dictionary_paths)
        self.base_dir = base_dir
        self._reference = reference
        self._layouts: dict[str, LayoutDict] = {}
        self._indexes: dict[str, KeyIndex] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Config) -> 'LayoutRegistry':
        return cls(config.dictionary_paths, base_dir=config.base_dir)

    @property
    def languages(self) -> list[str]:
        return list(self.dictionary_paths)

    @property
    def reference(self) -> LayoutDict:
        with self._lock:
            if self._reference is None:
                self._reference = load_reference()
            return self._reference

    def path_for(self, language: str) -> Path:
        dict_path = self.dictionary_paths.get(language)
        if not dict_path:
            raise DictionaryNotFound(f'Dictionary path not found for language: {language}')
        return resolve_path(dict_path, self.base_dir)

    def layout(self, language: str) -> LayoutDict:
        """Layout of a language. Raises DictionaryError subclasses."""
        with self._lock:
            cached = self._layouts.get(language)
        if cached is not None:
            return cached
        path = self.path_for(language)
        layout = load_layout(path, name=language)
        log.debug('Loaded layout %s from %s', language, path)
        with self._lock:
            return self._layouts.setdefault(language, layout)

    def index(self, language: str) -> KeyIndex:
        """Key index of a language's layout, built once."""
        with self._lock:
            cached = self._indexes.get(language)
        if cached is not None:
            return cached
        index = build_index(self.layout(language), self.reference)
        with self._lock:
            return self._indexes.setdefault(language, index)
