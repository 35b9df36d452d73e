"""Per-install user preferences: credit counter state and source language."""

from .languages import LANGUAGES, Language, LanguageSettings, available_languages
from .preferences import Preferences, PreferencesStore

__all__ = ["LANGUAGES", "Language", "LanguageSettings", "Preferences", "PreferencesStore", "available_languages"]
