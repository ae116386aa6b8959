"""Tests for config module."""

import sys
import os
import json
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from config import CONFIG_ENV, Config


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Isolated user data dir and working directory."""
    monkeypatch.setenv('APPDATA', str(tmp_path / 'appdata'))
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    workdir = tmp_path / 'work'
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return tmp_path


class TestDefaults:
    def test_pair(self):
        assert Config().language_pair == ['en', 'ru']

    def test_pair_deduplicated(self):
        assert Config(selected_pair=['en', 'en', 'ru', 'uk']).language_pair == ['en', 'ru']
        assert Config(selected_pair=['en', 'en']).language_pair == ['en']

    def test_every_language_has_layout(self):
        config = Config()
        assert set(config.lang_patterns) == set(config.dictionary_paths)

    def test_default_binding(self):
        binding = Config().key_bindings['ctrl+shift+p']
        assert binding['action'] == 'convert_selected_text'


class TestLoad:
    def test_explicit_path(self, home):
        path = home / 'custom.json'
        path.write_text(json.dumps({'selected_pair': ['uk', 'en'],
                                    'unknown_key': 1}), encoding='utf-8')
        config = Config.load(path)
        assert config.selected_pair == ['uk', 'en']
        assert config.source_path == path
        assert config.base_dir == home

    def test_explicit_missing_path_not_created(self, home):
        path = home / 'missing.json'
        config = Config.load(path)
        assert config == Config()
        assert not path.exists()

    def test_invalid_json_defaults(self, home):
        path = home / 'broken.json'
        path.write_text('{not json', encoding='utf-8')
        assert Config.load(path) == Config()

    def test_not_an_object_defaults(self, home):
        path = home / 'list.json'
        path.write_text('[1, 2]', encoding='utf-8')
        assert Config.load(path) == Config()

    def test_created_on_first_run(self, home):
        config = Config.load()
        expected = home / 'appdata' / 'LayoutSwitch' / 'config.json'
        assert config.source_path == expected
        assert json.loads(expected.read_text(encoding='utf-8'))['selected_pair'] == ['en', 'ru']

    def test_save_roundtrip(self, home):
        path = home / 'saved.json'
        Config(selected_pair=['de', 'en'], show_notification=False).save(path)
        loaded = Config.load(path)
        assert loaded.selected_pair == ['de', 'en']
        assert loaded.show_notification is False


class TestFindPath:
    def test_env_first(self, home, monkeypatch):
        env_path = home / 'env.json'
        env_path.write_text('{}', encoding='utf-8')
        (home / 'work' / 'config.json').write_text('{}', encoding='utf-8')
        monkeypatch.setenv(CONFIG_ENV, str(env_path))
        assert Config.find_path() == env_path

    def test_working_dir_before_user_dir(self, home):
        (home / 'work' / 'config.json').write_text('{}', encoding='utf-8')
        assert Config.find_path() == home / 'work' / 'config.json'

    def test_missing_env_file_skipped(self, home, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV, str(home / 'nope.json'))
        assert Config.find_path() == home / 'appdata' / 'LayoutSwitch' / 'config.json'
