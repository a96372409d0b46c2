"""Supported languages and lookups by language code."""

from __future__ import annotations

from dataclasses import dataclass


class LanguageNotFoundError(LookupError):
    """Raised when a language code is not supported."""

    def __init__(self) -> None:
        super().__init__("language not found")


@dataclass(frozen=True)
class Language:
    """A supported language with its code and native display name."""

    language: str
    language_code: str
    display_name: str

    def to_dict(self) -> dict[str, str]:
        """Return the language in its JSON field naming."""
        return {
            "language": self.language,
            "languageCode": self.language_code,
            "displayName": self.display_name,
        }


BASE_LANGUAGE_CODE = "en"

_LANGUAGES: dict[str, Language] = {
    lang.language_code: lang
    for lang in (
        Language("English", "en", "English"),
        Language("Arabic", "ar", "العربية"),
        Language("Chinese", "zh", "中文"),
        Language("French", "fr", "Français"),
        Language("German", "de", "Deutsch"),
        Language("Italian", "it", "Italiano"),
        Language("Irish", "ga", "Gaeilge"),
        Language("Japanese", "ja", "日本語"),
        Language("Portuguese", "pt", "Português"),
        Language("Spanish", "es", "Español"),
        Language("Hindi", "hi", "हिन्दी"),
        Language("Kannada", "kn", "ಕನ್ನಡ"),
        Language("Bengali", "bn", "বাংলা"),
        Language("Punjabi", "pa", "ਪੰਜਾਬੀ; پنجابی"),
        Language("Marathi", "mr", "मराठी"),
        Language("Malay", "ms", "മലയാളം"),
        Language("Turkish", "tr", "Türkçe"),
        Language("Korean", "ko", "한국어"),
        Language("Russian", "ru", "Русский язык"),
        Language("Vietnamese", "vi", "tiếng Việt"),
        Language("Javanese", "jv", "ꦧꦱꦗꦮ"),
        Language("Gujarati", "gu", "ગુજરાતી"),
        Language("Dutch", "nl", "Nederlands"),
        Language("Swedish", "sv", "Svenska"),
        Language("Czech", "cs", "Čeština"),
        Language("Polish", "pl", "Polski"),
        Language("Latvian", "lv", "Latviski"),
        Language("Slovak", "sk", "Slovenčina"),
        Language("Greek", "el", "Νέα Ελληνικά"),
        Language("Lithuanian", "lt", "Lietuvių"),
        Language("Ukrainian", "uk", "Українська"),
        Language("Farsi", "fa", "فارسی"),
    )
}

SUPPORTED_LANGUAGE_CODES: tuple[str, ...] = tuple(_LANGUAGES)


def is_valid_language_code(code: str) -> bool:
    """Return True when ``code`` names a supported language."""
    return code in _LANGUAGES


def get_language(code: str) -> Language:
    """Return the language for ``code`` or raise LanguageNotFoundError."""
    try:
        return _LANGUAGES[code]
    except KeyError:
        raise LanguageNotFoundError() from None