"""Configuration management for LayoutSwitch."""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional

log = logging.getLogger('layoutswitch')

CONFIG_ENV = 'LAYOUTSWITCH_CONFIG'
CONFIG_NAME = 'config.json'


def _default_pair() -> list[str]:
    return ['en', 'ru']


def _default_patterns() -> dict[str, str]:
    return {
        'uk': '[а-яіїєґ]',
        'ru': '[а-яё]',
        'de': '[a-zäöüß]',
        'fr': '[a-zàâäçèéêëîïôùûüÿñ]',
        'cz': '[a-záčďéěíňóřšťúůýž]',
        'pl': '[a-ząćęłńóśźż]',
        'en': '[a-z]',
    }


def _default_dictionaries() -> dict[str, str]:
    return {
        'en': 'dictionaries/en.qwerty.json',
        'ru': 'dictionaries/ru.qwerty.json',
        'uk': 'dictionaries/uk.qwerty.json',
        'de': 'dictionaries/de.qwertz.json',
        'fr': 'dictionaries/fr.azerty.json',
        'cz': 'dictionaries/cz.qwertz.json',
        'pl': 'dictionaries/pl.qwerty.json',
    }


def _default_bindings() -> dict[str, dict[str, str]]:
    return {
        'ctrl+shift+p': {
            'action': 'convert_selected_text',
            'description': 'Press {hotkey} to convert selected text',
        },
    }


def user_data_dir() -> Path:
    """Per-user directory for config and logs."""
    appdata = os.environ.get('APPDATA', '')
    if appdata:
        base = Path(appdata) / 'LayoutSwitch'
    else:
        base = Path.home() / '.config' / 'layoutswitch'
    base.mkdir(parents=True, exist_ok=True)
    return base


@dataclass
class Config:
    selected_pair: list[str] = field(default_factory=_default_pair)
    lang_patterns: dict[str, str] = field(default_factory=_default_patterns)
    dictionary_paths: dict[str, str] = field(default_factory=_default_dictionaries)
    key_bindings: dict[str, dict[str, str]] = field(default_factory=_default_bindings)
    show_notification: bool = True

    # File the config was read from; relative dictionary paths resolve
    # against its directory.
    source_path = None

    @property
    def base_dir(self) -> Optional[Path]:
        return self.source_path.parent if self.source_path else None

    @property
    def language_pair(self) -> list[str]:
        """Selected languages, de-duplicated, at most two."""
        pair: list[str] = []
        for lang in self.selected_pair:
            if lang not in pair:
                pair.append(lang)
        return pair[:2]

    @classmethod
    def _config_path(cls) -> Path:
        return user_data_dir() / CONFIG_NAME

    @classmethod
    def find_path(cls) -> Path:
        """First existing config file: $LAYOUTSWITCH_CONFIG, ./config.json,
        then the user data dir. Falls back to the user data dir path."""
        candidates = []
        env_path = os.environ.get(CONFIG_ENV, '')
        if env_path:
            candidates.append(Path(env_path))
        candidates.append(Path.cwd() / CONFIG_NAME)
        candidates.append(cls._config_path())
        for candidate in candidates:
            if candidate.exists():
                return candidate
        return cls._config_path()

    @classmethod
    def load(cls, path: Optional[Path] = None) -> 'Config':
        """Load config from JSON file.

        Without an explicit path the file is discovered with find_path() and
        created with defaults if it does not exist yet. Returns defaults if
        the file can't be read.
        """
        config_path = path or cls.find_path()
        config = None
        if config_path.exists():
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                config = cls(**{k: v for k, v in data.items()
                                if k in cls.__dataclass_fields__})
            except (json.JSONDecodeError, TypeError, AttributeError) as e:
                log.warning('Error loading config from %s: %s', config_path, e)
        elif path is None:
            config = cls()
            config.save(config_path)
            log.info('Created default config: %s', config_path)
        if config is None:
            config = cls()
        config.source_path = config_path
        return config

    def save(self, path: Optional[Path] = None) -> None:
        """Save config to JSON file."""
        config_path = path or self.source_path or self._config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w', encoding='utf-8') as f:
            json.dump(asdict(self), f, indent=2, ensure_ascii=False)
