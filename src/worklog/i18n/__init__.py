"""Localization of user-facing messages."""

import os
from typing import Any, Optional

from worklog.i18n.catalogs import CATALOGS

DEFAULT_LANGUAGE = "sv"

_LANGUAGE_ALIASES = {
    "svenska": "sv",
    "swedish": "sv",
    "english": "en",
    "engelska": "en",
}


def normalize_language(lang: str) -> str:
    """Reduce a locale or language name to a supported code.

    Example:
        >>> normalize_language("sv_SE.UTF-8")
        'sv'
        >>> normalize_language("English")
        'en'
    """
    lang = lang.strip().lower()
    for separator in ("_", ".", "-"):
        lang = lang.split(separator, 1)[0]
    lang = _LANGUAGE_ALIASES.get(lang, lang)
    return lang if lang in CATALOGS else DEFAULT_LANGUAGE


def detect_language(config_language: Optional[str] = None) -> str:
    """Pick the UI language.

    Order: $WORKLOG_LANG, the configured language, $LANG, Swedish.
    """
    for candidate in (os.environ.get("WORKLOG_LANG"), config_language, os.environ.get("LANG")):
        if candidate:
            return normalize_language(candidate)
    return DEFAULT_LANGUAGE


class Translator:
    """Looks up messages in one language's catalog."""

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        self.language = normalize_language(language)
        self._messages = CATALOGS[self.language]

    def __call__(self, message_key: str, /, **params: Any) -> str:
        """Translate a message key, formatting it with params.

        Unknown keys are returned unchanged.
        """
        message = self._messages.get(message_key)
        if message is None:
            return message_key
        return message.format(**params) if params else message

    @classmethod
    def detect(cls, config_language: Optional[str] = None) -> "Translator":
        """Create a translator for the detected language."""
        return cls(detect_language(config_language))


__all__ = ["Translator", "detect_language", "normalize_language", "DEFAULT_LANGUAGE"]
