"""Lookup input validation. Runs before any cache or network access."""

import re

_SINGLE_WORD = re.compile(r"[a-zA-Z]+")


def validate_word(text: str | None) -> str | None:
    """Return None if text is a single word, else an i18n error key.

    ``"error_required"`` for empty input, ``"error_single_word"`` for anything
    else that is not one run of ASCII letters, whitespace-only input included.
    """
    if not text:
        return "error_required"
    if not _SINGLE_WORD.fullmatch(text):
        return "error_single_word"
    return None
