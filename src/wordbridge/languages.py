"""Static language code → English display name table."""

from wordbridge.models import Language

# Codes the dictionary API is known to use. Anything else displays as its code.
LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "zh": "Chinese",
    "hi": "Hindi",
    "es": "Spanish",
    "fr": "French",
    "ar": "Arabic",
    "bn": "Bengali",
    "ru": "Russian",
    "pt": "Portuguese",
    "id": "Indonesian",
    "ur": "Urdu",
    "ja": "Japanese",
    "de": "German",
    "pa": "Punjabi",
    "jv": "Javanese",
    "sw": "Swahili",
    "te": "Telugu",
    "vi": "Vietnamese",
    "ko": "Korean",
    "mr": "Marathi",
    "ta": "Tamil",
    "it": "Italian",
    "tr": "Turkish",
    "pl": "Polish",
    "uk": "Ukrainian",
    "nl": "Dutch",
    "fa": "Persian",
    "th": "Thai",
    "gu": "Gujarati",
    "ro": "Romanian",
    "uz": "Uzbek",
    "am": "Amharic",
    "bg": "Bulgarian",
    "ms": "Malay",
    "ca": "Catalan",
    "hu": "Hungarian",
    "sv": "Swedish",
    "cs": "Czech",
    "el": "Greek",
    "he": "Hebrew",
    "no": "Norwegian",
    "fi": "Finnish",
    "da": "Danish",
    "sk": "Slovak",
    "lt": "Lithuanian",
    "sl": "Slovenian",
    "et": "Estonian",
    "lv": "Latvian",
    "mt": "Maltese",
    "be": "Belarusian",
    "mhr": "Eastern Mari",
    "mrj": "Hill Mari",
    "tt": "Tatar",
    "emj": "Eastern Meohja",
}


def language_name(code: str) -> str:
    """Return the display name for code, or the code itself if unknown."""
    return LANGUAGE_NAMES.get(code) or code


def to_language(code: str) -> Language:
    return Language(code=code, full_name=language_name(code))
