"""Policy language codes and their English display names."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

DEFAULT_LANGUAGE = "en"
DEFAULT_LANGUAGE_NAME = "English"

LANGUAGE_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "en": "English",
        "de": "German",
        "fr": "French",
        "es": "Spanish",
        "it": "Italian",
        "pt": "Portuguese",
        "nl": "Dutch",
        "pl": "Polish",
        "sv": "Swedish",
        "da": "Danish",
        "fi": "Finnish",
        "no": "Norwegian",
        "cs": "Czech",
        "hu": "Hungarian",
        "ro": "Romanian",
        "bg": "Bulgarian",
        "el": "Greek",
        "ja": "Japanese",
        "zh": "Chinese",
        "ko": "Korean",
        "ar": "Arabic",
        "he": "Hebrew",
        "tr": "Turkish",
        "ru": "Russian",
        "uk": "Ukrainian",
    }
)


def resolve_language(requested: Optional[str], stored: Optional[str]) -> str:
    """Pick the request override, then the client's stored language, then English."""
    return requested or stored or DEFAULT_LANGUAGE


def language_name(code: Optional[str]) -> str:
    """Return the display name for ``code``; unknown codes read as English."""
    return LANGUAGE_NAMES.get(code or "", DEFAULT_LANGUAGE_NAME)
