"""Source language preference.

Language codes map to an English name and the language's own name. The
selected code is stored in the preferences file.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from pydantic import BaseModel

from .preferences import PreferencesStore

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

# code: (English name, native name)
LANGUAGES: Dict[str, tuple[str, str]] = {
    "en": ("English", "English"),
    "zh": ("Traditional Chinese", "中文"),
    "es": ("Spanish", "Español"),
    "fr": ("French", "Français"),
    "de": ("German", "Deutsch"),
    "ja": ("Japanese", "日本語"),
    "ko": ("Korean", "한국어"),
    "pt": ("Portuguese", "Português"),
    "it": ("Italian", "Italiano"),
    "ru": ("Russian", "Русский"),
    "tr": ("Turkish", "Türkçe"),
    "vi": ("Vietnamese", "Tiếng Việt"),
    "pl": ("Polish", "Polski"),
    "uk": ("Ukrainian", "Українська"),
    "nl": ("Dutch", "Nederlands"),
    "ar": ("Arabic", "العربية"),
    "sv": ("Swedish", "Svenska"),
    "hi": ("Hindi", "हिन्दी"),
    "fi": ("Finnish", "Suomi"),
    "no": ("Norwegian", "Norsk"),
    "da": ("Danish", "Dansk"),
    "he": ("Hebrew", "עברית"),
    "th": ("Thai", "ไทย"),
    "cs": ("Czech", "Čeština"),
    "el": ("Greek", "Ελληνικά"),
    "hu": ("Hungarian", "Magyar"),
    "ro": ("Romanian", "Română"),
    "id": ("Indonesian", "Bahasa Indonesia"),
    "ms": ("Malay", "Bahasa Melayu"),
    "sk": ("Slovak", "Slovenčina"),
    "bg": ("Bulgarian", "Български"),
    "hr": ("Croatian", "Hrvatski"),
    "lt": ("Lithuanian", "Lietuvių"),
    "sl": ("Slovenian", "Slovenščina"),
    "lv": ("Latvian", "Latviešu"),
    "et": ("Estonian", "Eesti"),
    "tl": ("Tagalog", "Tagalog"),
    "kk": ("Kazakh", "Қазақ тілі"),
}


class Language(BaseModel):
    code: str
    english_name: str
    native_name: str


def available_languages() -> List[Language]:
    return [Language(code=code, english_name=en, native_name=native) for code, (en, native) in LANGUAGES.items()]


class LanguageSettings:
    """Read and change the source language stored in preferences."""

    def __init__(self, preferences: PreferencesStore) -> None:
        self._preferences = preferences

    @property
    def source_language(self) -> str:
        code = self._preferences.data.source_language
        return code if code in LANGUAGES else DEFAULT_LANGUAGE

    @property
    def english_name(self) -> str:
        return LANGUAGES[self.source_language][0]

    def set_source_language(self, code: str) -> str:
        if code not in LANGUAGES:
            raise ValueError(f"Unsupported language code: {code}")
        self._preferences.update(source_language=code)
        logger.info("LanguageSettings: source language set to %s", code)
        return code
