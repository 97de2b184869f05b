#!/usr/bin/env python3
"""
Unit tests for config loading utility.

Usage:
    python -m pytest tests/unit/shared/test_config.py -v
"""

import logging
from pathlib import Path
from unittest import mock

import pytest
import yaml

import tools.shared.config as config_module
from tools.shared.config import (
    DEFAULT_CHANGELOG,
    FALLBACK_NOTES,
    ChangelogSettings,
    get_changelog_settings,
    get_logging_settings,
    load_config,
)


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_config_returns_none(self, tmp_path):
        with mock.patch.object(config_module, 'CONFIG_PATH', tmp_path / "nonexistent.yaml"):
            assert load_config() is None

    def test_missing_config_returns_fallback(self, tmp_path):
        with mock.patch.object(config_module, 'CONFIG_PATH', tmp_path / "nonexistent.yaml"):
            assert load_config(fallback={'default': True}) == {'default': True}

    def test_missing_config_required_exits(self, tmp_path):
        with mock.patch.object(config_module, 'CONFIG_PATH', tmp_path / "nonexistent.yaml"):
            with pytest.raises(SystemExit):
                load_config(required=True)

    def test_valid_config_loads(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        with open(config_path, 'w') as f:
            yaml.dump({'changelog': {'path': 'docs/CHANGES.md'}}, f)

        with mock.patch.object(config_module, 'CONFIG_PATH', config_path):
            assert load_config()['changelog']['path'] == 'docs/CHANGES.md'

    def test_empty_yaml_returns_empty_dict(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("")

        with mock.patch.object(config_module, 'CONFIG_PATH', config_path):
            assert load_config() == {}

    def test_invalid_yaml_returns_fallback(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("{{invalid: yaml: content::")

        with mock.patch.object(config_module, 'CONFIG_PATH', config_path):
            assert load_config(fallback={'default': True}) == {'default': True}

    def test_invalid_yaml_required_exits(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("{{invalid: yaml: content::")

        with mock.patch.object(config_module, 'CONFIG_PATH', config_path):
            with pytest.raises(SystemExit):
                load_config(required=True)

    def test_non_mapping_returns_fallback(self, tmp_path):
        """A top-level list is not a usable config."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("- one\n- two\n")

        with mock.patch.object(config_module, 'CONFIG_PATH', config_path):
            assert load_config(fallback={}) == {}

    def test_config_path_is_in_home_dir(self):
        expected = Path.home() / ".changelog-notes" / "config.yaml"
        assert config_module.CONFIG_PATH == expected


class TestGetChangelogSettings:
    """Tests for get_changelog_settings()."""

    def test_defaults_without_config(self):
        settings = get_changelog_settings(None)
        assert settings == ChangelogSettings(path=Path(DEFAULT_CHANGELOG), fallback=FALLBACK_NOTES)

    def test_defaults_with_empty_section(self):
        settings = get_changelog_settings({'changelog': None})
        assert settings.path == Path("changelog.md")
        assert settings.fallback == FALLBACK_NOTES

    def test_overrides(self):
        settings = get_changelog_settings({
            'changelog': {'path': 'docs/CHANGES.md', 'fallback': 'See the website.'},
        })
        assert settings.path == Path("docs/CHANGES.md")
        assert settings.fallback == 'See the website.'

    def test_tilde_expanded(self):
        settings = get_changelog_settings({'changelog': {'path': '~/notes.md'}})
        assert settings.path == Path.home() / "notes.md"

    @pytest.mark.parametrize("section", [
        ['not', 'a', 'mapping'],
        {'path': ''},
        {'path': 42},
        {'fallback': ['x']},
    ])
    def test_invalid_values_raise(self, section):
        with pytest.raises(ValueError):
            get_changelog_settings({'changelog': section})

    def test_fallback_points_at_online_changelog(self):
        assert "https://www.uiua.org/docs/changelog" in FALLBACK_NOTES


class TestGetLoggingSettings:
    """Tests for get_logging_settings()."""

    @pytest.mark.parametrize("config", [None, {}, {'logging': None}, {'logging': False}])
    def test_disabled_by_default(self, config):
        assert get_logging_settings(config).enabled is False

    def test_defaults(self):
        settings = get_logging_settings({'logging': {'enabled': True}})
        assert settings.level == logging.DEBUG
        assert settings.file == Path.home() / ".changelog-notes" / "logs" / "debug.log"
        assert settings.max_bytes == 5 * 1024 * 1024
        assert settings.backup_count == 3

    def test_overrides(self):
        settings = get_logging_settings({'logging': {
            'enabled': True,
            'level': 'Info',
            'file': '/var/tmp/notes.log',
            'max_size_mb': 0.5,
            'backup_count': 0,
        }})
        assert settings.level == logging.INFO
        assert settings.file == Path('/var/tmp/notes.log')
        assert settings.max_bytes == 512 * 1024
        assert settings.backup_count == 0

    @pytest.mark.parametrize("section", [
        True,
        'debug',
        {'enabled': 'yes'},
        {'level': 'verbose'},
        {'level': 10},
        {'file': ''},
        {'max_size_mb': '5'},
        {'max_size_mb': 0},
        {'max_size_mb': True},
        {'backup_count': -1},
        {'backup_count': 2.5},
    ])
    def test_invalid_values_raise(self, section):
        with pytest.raises(ValueError):
            get_logging_settings({'logging': section})
