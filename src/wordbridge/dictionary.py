"""Dictionary API gateway with a read-through / write-through cache over the lookup API.

Both endpoints are single attempt: no retry, no backoff. Successful responses
are written to the store and served from it for every later call with the same
cache key.
"""

import copy
import logging
import threading
from collections.abc import Callable
from typing import TypeVar

import httpx

from wordbridge.catalog import parse_pair_code
from wordbridge.codec import (
    PayloadError,
    decode_pair_codes,
    decode_pairs,
    decode_result,
    encode_pairs,
)
from wordbridge.config import DEFAULT_API_URL, Settings
from wordbridge.models import DictionaryResult, LanguagePair
from wordbridge.store import KeyValueStore

logger = logging.getLogger(__name__)

LANGUAGE_PAIRS_KEY = "languageCombinations"

# Documented lookup API error statuses
_API_ERRORS: dict[int, str] = {
    401: "Invalid API key",
    402: "Blocked API key",
    403: "Daily request limit exceeded",
    413: "Text size exceeds the maximum",
    501: "The specified translation direction is not supported",
}

T = TypeVar("T")


class DictionaryError(Exception):
    """Base class for gateway failures."""


class DictionaryRequestError(DictionaryError):
    """Remote call failed: transport error, non-2xx status, or unreadable body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def cache_key(text: str, lang_pair_code: str) -> str:
    """Store key for a lookup: lowercased text joined to the pair code."""
    return f"{text.lower()}-{lang_pair_code}"


class _Call:
    def __init__(self) -> None:
        self.done = threading.Event()
        self.result: object = None
        self.error: BaseException | None = None


def _waiter_error(error: BaseException) -> BaseException:
    """Copy of the leader's error so each waiter raises with its own traceback."""
    try:
        copied = copy.copy(error)
    except TypeError:
        # Constructor does not accept its own args back; share the instance
        return error.with_traceback(None)
    copied.__cause__ = error
    return copied


class SingleFlight:
    """Run at most one call per key at a time; concurrent callers share its outcome."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: dict[str, _Call] = {}

    def do(self, key: str, fn: Callable[[], T]) -> T:
        with self._lock:
            call = self._calls.get(key)
            leader = call is None
            if call is None:
                call = _Call()
                self._calls[key] = call

        if not leader:
            call.done.wait()
            if call.error is not None:
                raise _waiter_error(call.error)
            return call.result  # type: ignore[return-value]

        try:
            call.result = fn()
        except BaseException as e:
            call.error = e
            raise
        finally:
            with self._lock:
                del self._calls[key]
            call.done.set()
        return call.result  # type: ignore[return-value]


class DictionaryGateway:
    """Fronts the dictionary API with a persistent cache.

    Args:
        api_key: API credential, sent as-is with every request.
        store: Cache backing; see wordbridge.store.
        base_url: API base, e.g. ``https://dictionary.yandex.net/api/v1/dicservice.json/``.
        client: Optional preconfigured httpx.Client. When omitted the gateway
            creates (and owns) one with the given timeout.
        timeout: Request timeout in seconds for an owned client.
    """

    def __init__(
        self,
        api_key: str,
        store: KeyValueStore,
        base_url: str = DEFAULT_API_URL,
        client: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.api_key = api_key
        self.store = store
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)
        self._flights = SingleFlight()

    @classmethod
    def from_settings(cls, settings: Settings, store: KeyValueStore) -> "DictionaryGateway":
        return cls(
            api_key=settings.api_key,
            store=store,
            base_url=settings.api_url,
            timeout=settings.http_timeout,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "DictionaryGateway":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def fetch_language_pairs(self) -> list[LanguagePair]:
        """Return all supported language pairs, from the store when cached.

        Raises:
            DictionaryRequestError: On a cache miss whose remote call fails.
        """
        return self._resolve(LANGUAGE_PAIRS_KEY, decode_pairs, self._fetch_language_pairs)

    def translate(self, text: str, lang_pair_code: str) -> DictionaryResult:
        """Look up text for a pair code ("en-es"), from the store when cached.

        The cache key is case-insensitive; the remote call receives text as given.
        An unknown word is not an error: the result simply has no definitions.

        Raises:
            DictionaryRequestError: On a cache miss whose remote call fails.
        """
        key = cache_key(text, lang_pair_code)
        return self._resolve(
            key, decode_result, lambda: self._fetch_result(text, lang_pair_code, key)
        )

    def _resolve(
        self, key: str, decode: Callable[[str], T], fetch: Callable[[], T]
    ) -> T:
        def load() -> T:
            cached = self._read_cache(key, decode)
            if cached is not None:
                logger.debug("Cache hit: %s", key)
                return cached
            logger.debug("Cache miss: %s", key)
            return fetch()

        return self._flights.do(key, load)

    def _read_cache(self, key: str, decode: Callable[[str], T]) -> T | None:
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return decode(raw)
        except PayloadError as e:
            # Treated as a miss; the fresh response overwrites it
            logger.warning("Discarding malformed cache entry %s: %s", key, e)
            return None

    def _fetch_language_pairs(self) -> list[LanguagePair]:
        logger.info("Fetching supported language pairs")
        raw = self._get("getLangs", {"key": self.api_key})
        try:
            codes = decode_pair_codes(raw)
        except PayloadError as e:
            logger.error("Unreadable language list: %s", e)
            raise DictionaryRequestError(f"Unreadable language list: {e}") from e
        try:
            pairs = [parse_pair_code(code) for code in codes]
        except ValueError as e:
            logger.error("Unreadable language list: %s", e)
            raise DictionaryRequestError(f"Unreadable language list: {e}") from e
        self.store.set(LANGUAGE_PAIRS_KEY, encode_pairs(pairs))
        return pairs

    def _fetch_result(self, text: str, lang_pair_code: str, key: str) -> DictionaryResult:
        logger.info("Looking up %r (%s)", text, lang_pair_code)
        raw = self._get(
            "lookup",
            {"key": self.api_key, "lang": lang_pair_code, "text": text},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        try:
            result = decode_result(raw)
        except PayloadError as e:
            logger.error("Unreadable lookup result for %r: %s", text, e)
            raise DictionaryRequestError(f"Unreadable lookup result: {e}") from e
        self.store.set(key, raw)
        return result

    def _get(
        self, endpoint: str, params: dict[str, str], headers: dict[str, str] | None = None
    ) -> str:
        url = f"{self.base_url}/{endpoint}"
        try:
            resp = self._client.get(url, params=params, headers=headers)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = _API_ERRORS.get(status, f"HTTP {status}")
            logger.error("%s failed: %s (%d)", endpoint, message, status)
            raise DictionaryRequestError(message, status_code=status) from e
        except httpx.HTTPError as e:
            logger.error("%s failed: %s", endpoint, e)
            raise DictionaryRequestError(f"Request failed: {e}") from e
        return resp.text
