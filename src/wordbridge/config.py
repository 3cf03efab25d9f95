"""Runtime settings read from the environment (.env is loaded by the entry point)."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

DEFAULT_API_URL = "https://dictionary.yandex.net/api/v1/dicservice.json/"


@dataclass(frozen=True)
class Settings:
    api_key: str  # Yandex Dictionary key; not validated locally
    api_url: str = DEFAULT_API_URL
    cache_path: Path = Path(".cache") / "wordbridge.json"
    http_timeout: float = 10.0  # seconds
    log_level: str = "INFO"


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    Raises:
        ValueError: If WORDBRIDGE_HTTP_TIMEOUT is not a number.
    """
    env = os.environ if environ is None else environ
    raw_timeout = env.get("WORDBRIDGE_HTTP_TIMEOUT", "10")
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ValueError(
            f"WORDBRIDGE_HTTP_TIMEOUT must be a number, got {raw_timeout!r}"
        ) from None
    return Settings(
        api_key=env.get("YANDEX_DICTIONARY_API_KEY", ""),
        api_url=env.get("DICTIONARY_API_URL") or DEFAULT_API_URL,
        cache_path=Path(env.get("WORDBRIDGE_CACHE_PATH") or Path(".cache") / "wordbridge.json"),
        http_timeout=timeout,
        log_level=env.get("WORDBRIDGE_LOG_LEVEL", "INFO"),
    )
