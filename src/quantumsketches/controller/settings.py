"""
Persisted Preferences
=====================
Reads and writes the theme preference through QSettings.

The theme is the only value that survives a restart. It is resolved once at
start-up; changing it stores the preference for the next session.
"""
import logging
from typing import Optional

from PySide6.QtCore import QSettings

from quantumsketches.config import THEME_SETTINGS_KEY
from quantumsketches.model.colors import Theme

logger = logging.getLogger(__name__)


def load_theme(settings: Optional[QSettings] = None) -> Theme:
    """Return the stored theme, LIGHT when nothing (valid) is stored."""
    settings = settings if settings is not None else QSettings()
    raw = settings.value(THEME_SETTINGS_KEY, "", type=str)
    theme = Theme.from_setting(raw)
    logger.info(f"Theme preference: {theme.value}")
    return theme


def save_theme(theme: Theme, settings: Optional[QSettings] = None) -> None:
    settings = settings if settings is not None else QSettings()
    settings.setValue(THEME_SETTINGS_KEY, theme.value)
    settings.sync()
    logger.info(f"Theme preference saved: {theme.value}")
