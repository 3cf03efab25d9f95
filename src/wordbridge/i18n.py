"""Simple two-language (en/ko) UI string helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "워드브리지 사전",
        "en": "WordBridge Dictionary",
    },
    "label_from": {
        "ko": "출발 언어",
        "en": "From",
    },
    "label_to": {
        "ko": "도착 언어",
        "en": "To",
    },
    "label_word": {
        "ko": "단어",
        "en": "Word",
    },
    "btn_translate": {
        "ko": "번역하기",
        "en": "Translate",
    },
    "loading_languages": {
        "ko": "지원 언어를 불러오는 중",
        "en": "Loading supported languages",
    },
    "loading_lookup": {
        "ko": "사전을 찾는 중",
        "en": "Looking it up",
    },
    "error_required": {
        "ko": "단어를 입력하세요",
        "en": "Please enter text",
    },
    "error_single_word": {
        "ko": "한 단어만 입력할 수 있어요",
        "en": "Input must be a single word",
    },
    "error_select_languages": {
        "ko": "출발 언어와 도착 언어를 선택하세요",
        "en": "Choose both languages first",
    },
    "error_languages": {
        "ko": "지원 언어 목록을 불러오지 못했어요. ({error})",
        "en": "Could not load the supported languages. ({error})",
    },
    "error_lookup": {
        "ko": "사전 요청에 실패했어요. ({error})",
        "en": "The dictionary request failed. ({error})",
    },
    "no_definitions": {
        "ko": "검색 결과가 없어요.",
        "en": "No definitions found.",
    },
    "heading_synonyms": {
        "ko": "동의어",
        "en": "Synonyms",
    },
    "heading_meanings": {
        "ko": "의미",
        "en": "Meanings",
    },
    "heading_examples": {
        "ko": "예문",
        "en": "Examples",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
