"""JSON ↔ model conversion for dictionary payloads and cached language pairs.

Wire format follows the dictionary API: short keys (``def``, ``tr``, ``pos``,
``syn``, ``mean``, ``ex``). Language pairs are stored as
``[{"from": {"code", "fullName"}, "to": {...}}, ...]``.
"""

import json
from typing import Any

from wordbridge.models import (
    Definition,
    DictionaryResult,
    Example,
    Language,
    LanguagePair,
    Meaning,
    Synonym,
    Translation,
)


class PayloadError(ValueError):
    """JSON text could not be decoded into the expected shape."""


def _loads(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise PayloadError(f"Invalid JSON: {e}") from e


def _items(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    """Return data[key] as a list of objects; missing key → empty list."""
    value = data.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise PayloadError(f"Expected a list of objects under {key!r}")
    return value


def _text(data: dict[str, Any]) -> str:
    text = data.get("text")
    if not isinstance(text, str):
        raise PayloadError(f"Missing 'text' in {data!r}")
    return text


def _translation(data: dict[str, Any]) -> Translation:
    fr = data.get("fr")
    return Translation(
        text=_text(data),
        part_of_speech=data.get("pos"),
        synonyms=tuple(
            Synonym(text=_text(s), part_of_speech=s.get("pos"))
            for s in _items(data, "syn")
        ),
        meanings=tuple(Meaning(text=_text(m)) for m in _items(data, "mean")),
        examples=tuple(
            Example(
                text=_text(ex),
                translations=tuple(_translation(t) for t in _items(ex, "tr")),
            )
            for ex in _items(data, "ex")
        ),
        gender=data.get("gen"),
        aspect=data.get("asp"),
        frequency=fr if isinstance(fr, int) else None,
    )


def decode_result(raw: str) -> DictionaryResult:
    """Decode a lookup response body into a DictionaryResult.

    Raises:
        PayloadError: If the text is not JSON or not shaped like a lookup result.
    """
    data = _loads(raw)
    if not isinstance(data, dict):
        raise PayloadError("Lookup result must be a JSON object")
    head = data.get("head")
    if head is None:
        head = {}
    if not isinstance(head, dict):
        raise PayloadError("'head' must be an object")
    definitions = tuple(
        Definition(
            text=_text(d),
            part_of_speech=d.get("pos"),
            translations=tuple(_translation(t) for t in _items(d, "tr")),
            transcription=d.get("ts"),
        )
        for d in _items(data, "def")
    )
    return DictionaryResult(head=head, definitions=definitions)


def decode_pair_codes(raw: str) -> list[str]:
    """Decode a getLangs response body (JSON array of pair codes)."""
    data = _loads(raw)
    if not isinstance(data, list) or not all(isinstance(c, str) for c in data):
        raise PayloadError("Language list must be a JSON array of strings")
    return data


def _language_to_dict(language: Language) -> dict[str, str]:
    return {"code": language.code, "fullName": language.full_name}


def _language_from_dict(data: Any) -> Language:
    if not isinstance(data, dict):
        raise PayloadError(f"Expected a language object, got {data!r}")
    code = data.get("code")
    full_name = data.get("fullName")
    if not isinstance(code, str) or not isinstance(full_name, str):
        raise PayloadError(f"Malformed language object: {data!r}")
    return Language(code=code, full_name=full_name)


def encode_pairs(pairs: list[LanguagePair]) -> str:
    """Serialize language pairs for the store."""
    return json.dumps(
        [
            {"from": _language_to_dict(p.source), "to": _language_to_dict(p.target)}
            for p in pairs
        ],
        ensure_ascii=False,
    )


def decode_pairs(raw: str) -> list[LanguagePair]:
    """Deserialize language pairs written by encode_pairs."""
    data = _loads(raw)
    if not isinstance(data, list):
        raise PayloadError("Cached language pairs must be a JSON array")
    pairs: list[LanguagePair] = []
    for item in data:
        if not isinstance(item, dict):
            raise PayloadError(f"Expected a pair object, got {item!r}")
        pairs.append(
            LanguagePair(
                source=_language_from_dict(item.get("from")),
                target=_language_from_dict(item.get("to")),
            )
        )
    return pairs
