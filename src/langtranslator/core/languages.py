"""Supported languages and language-code mapping for the translation endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field


class UnsupportedLanguageError(ValueError):
    """Raised when a language code is not in the supported table."""


@dataclass(frozen=True)
class Language:
    """A selectable language. Two languages are equal when their codes match."""

    code: str
    name: str = field(compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "code", self.code.strip().lower())

    @property
    def label(self) -> str:
        """Display label, e.g. "EN English"."""
        return f"{self.code.upper()} {self.name}"


ENGLISH = Language("en", "English")
SPANISH = Language("es", "Spanish")
HINDI = Language("hi", "Hindi")
PUNJABI = Language("pa", "Punjabi")

SUPPORTED_LANGUAGES: tuple[Language, ...] = (ENGLISH, SPANISH, HINDI, PUNJABI)

_BY_CODE: dict[str, Language] = {lang.code: lang for lang in SUPPORTED_LANGUAGES}

# Supported code → code used by the endpoint. All ISO 639-1 today.
_ENDPOINT_CODES: dict[str, str] = {
    "en": "en",
    "es": "es",
    "hi": "hi",
    "pa": "pa",
}


def find_language(code: str) -> Language:
    """Look up a supported language by code (case-insensitive)."""
    try:
        return _BY_CODE[code.strip().lower()]
    except KeyError:
        supported = ", ".join(_BY_CODE)
        raise UnsupportedLanguageError(
            f"Unsupported language code {code!r} (supported: {supported})"
        ) from None


def map_language_code(code: str) -> str:
    """Map a language code to the endpoint's code space.

    Supported codes map to themselves; anything else is passed through lowercased.
    """
    lowered = code.strip().lower()
    return _ENDPOINT_CODES.get(lowered, lowered)
