"""Language catalog derivation: source/target options from supported pairs.

Pure functions over an already-resolved pair list; no network or storage.
"""

from collections.abc import Iterable

from wordbridge.languages import to_language
from wordbridge.models import Language, LanguagePair


def parse_pair_code(code: str) -> LanguagePair:
    """Split a pair code ("en-es") on its first hyphen into a LanguagePair.

    Raises:
        ValueError: If the code contains no hyphen.
    """
    source_code, sep, target_code = code.partition("-")
    if not sep:
        raise ValueError(f"Not a language pair code: {code!r}")
    return LanguagePair(source=to_language(source_code), target=to_language(target_code))


def list_source_languages(pairs: Iterable[LanguagePair]) -> list[Language]:
    """Return every distinct source language in first-occurrence order.

    Deduplicated by code only: the first Language seen for a code wins.
    """
    seen: set[str] = set()
    languages: list[Language] = []
    for pair in pairs:
        if pair.source.code in seen:
            continue
        seen.add(pair.source.code)
        languages.append(pair.source)
    return languages


def list_target_languages(
    pairs: Iterable[LanguagePair], source_code: str
) -> list[Language]:
    """Return the target languages reachable from source_code.

    Deduplicated by full value (code and name), first-occurrence order.
    An unknown source_code yields an empty list.
    """
    targets = (pair.target for pair in pairs if pair.source.code == source_code)
    return list(dict.fromkeys(targets))
