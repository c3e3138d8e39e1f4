"""Tests for the persisted theme preference."""

import pytest
from PySide6.QtCore import QSettings

from quantumsketches.config import THEME_SETTINGS_KEY
from quantumsketches.controller.settings import load_theme, save_theme
from quantumsketches.model.colors import Theme


@pytest.fixture
def ini_path(tmp_path):
    return str(tmp_path / "settings.ini")


def test_missing_value_defaults_to_light(qapp, ini_path):
    assert load_theme(QSettings(ini_path, QSettings.Format.IniFormat)) is Theme.LIGHT


@pytest.mark.parametrize("theme", [Theme.DARK, Theme.LIGHT])
def test_round_trip(qapp, ini_path, theme):
    save_theme(theme, QSettings(ini_path, QSettings.Format.IniFormat))
    assert load_theme(QSettings(ini_path, QSettings.Format.IniFormat)) is theme


def test_invalid_value_falls_back_to_light(qapp, ini_path):
    settings = QSettings(ini_path, QSettings.Format.IniFormat)
    settings.setValue(THEME_SETTINGS_KEY, "sepia")
    settings.sync()
    assert load_theme(QSettings(ini_path, QSettings.Format.IniFormat)) is Theme.LIGHT
