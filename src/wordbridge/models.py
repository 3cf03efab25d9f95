"""Data model definitions for the language catalog and dictionary lookup results."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Language:
    """A selectable language. Equality is by value (code and name)."""

    code: str  # Short code as returned by the API ("en", "mhr")
    full_name: str  # Display name; the code itself when unknown


@dataclass(frozen=True)
class LanguagePair:
    """A supported lookup direction."""

    source: Language
    target: Language

    @property
    def code(self) -> str:
        """Hyphen-joined pair code used by the lookup endpoint ("en-es")."""
        return f"{self.source.code}-{self.target.code}"


@dataclass(frozen=True)
class Synonym:
    text: str
    part_of_speech: str | None = None


@dataclass(frozen=True)
class Meaning:
    text: str


@dataclass(frozen=True)
class Example:
    """Usage example with its own translations (one level of nesting)."""

    text: str
    translations: tuple["Translation", ...] = ()


@dataclass(frozen=True)
class Translation:
    """A single translation of a definition."""

    text: str
    part_of_speech: str | None = None
    synonyms: tuple[Synonym, ...] = ()
    meanings: tuple[Meaning, ...] = ()
    examples: tuple[Example, ...] = ()
    gender: str | None = None  # "m", "f", "n" for gendered languages
    aspect: str | None = None  # Verb aspect ("pf", "impf")
    frequency: int | None = None  # API frequency hint, higher = more common


@dataclass(frozen=True)
class Definition:
    """A dictionary entry for the looked-up word in one part of speech."""

    text: str
    part_of_speech: str | None = None
    translations: tuple[Translation, ...] = ()
    transcription: str | None = None  # Phonetic transcription ("ˈhɛləʊ")


@dataclass(frozen=True)
class DictionaryResult:
    """Full lookup response. The sole input to the result renderer."""

    head: dict[str, Any] = field(default_factory=dict)  # Opaque API metadata
    definitions: tuple[Definition, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True when the word was found in no definition."""
        return not self.definitions
