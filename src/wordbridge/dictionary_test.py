import json
import threading
import time

import httpx
import pytest

from wordbridge.config import Settings
from wordbridge.dictionary import (
    LANGUAGE_PAIRS_KEY,
    DictionaryGateway,
    DictionaryRequestError,
    SingleFlight,
    cache_key,
)
from wordbridge.models import Language, LanguagePair
from wordbridge.store import MemoryStore

BASE_URL = "https://dictionary.example/api/v1/dicservice.json/"

LOOKUP_BODY = {
    "head": {},
    "def": [
        {
            "text": "hello",
            "pos": "noun",
            "tr": [{"text": "hola", "pos": "noun", "syn": [{"text": "saludo"}]}],
        }
    ],
}


class FakeApi:
    """Records requests and answers like the dictionary API."""

    def __init__(self, langs=None, lookup=None, status_code=200):
        self.langs = langs if langs is not None else ["en-es", "en-fr", "fr-es"]
        self.lookup = lookup if lookup is not None else LOOKUP_BODY
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(
                self.status_code, json={"code": self.status_code, "message": "error"}
            )
        if request.url.path.endswith("/getLangs"):
            return httpx.Response(200, json=self.langs)
        if request.url.path.endswith("/lookup"):
            return httpx.Response(200, json=self.lookup)
        return httpx.Response(404)


def _gateway(api, store=None) -> DictionaryGateway:
    client = httpx.Client(transport=httpx.MockTransport(api))
    return DictionaryGateway(
        api_key="test-key",
        store=store if store is not None else MemoryStore(),
        base_url=BASE_URL,
        client=client,
    )


def test_cache_key_lowercases_text():
    assert cache_key("Hello", "en-es") == "hello-en-es"


def test_fetch_language_pairs_fetches_and_stores():
    api = FakeApi()
    store = MemoryStore()
    gateway = _gateway(api, store)

    pairs = gateway.fetch_language_pairs()

    assert [p.code for p in pairs] == ["en-es", "en-fr", "fr-es"]
    assert pairs[0].source == Language("en", "English")
    assert len(api.requests) == 1
    request = api.requests[0]
    assert request.url.path == "/api/v1/dicservice.json/getLangs"
    assert request.url.params["key"] == "test-key"
    assert json.loads(store.get(LANGUAGE_PAIRS_KEY))[0] == {
        "from": {"code": "en", "fullName": "English"},
        "to": {"code": "es", "fullName": "Spanish"},
    }


def test_fetch_language_pairs_served_from_store_on_second_call():
    api = FakeApi()
    gateway = _gateway(api)

    first = gateway.fetch_language_pairs()
    second = gateway.fetch_language_pairs()

    assert first == second
    assert len(api.requests) == 1


def test_fetch_language_pairs_uses_existing_store_without_network():
    store = MemoryStore(
        {
            LANGUAGE_PAIRS_KEY: '[{"from": {"code": "ru", "fullName": "Russian"},'
            ' "to": {"code": "en", "fullName": "English"}}]'
        }
    )
    api = FakeApi()
    pairs = _gateway(api, store).fetch_language_pairs()

    assert pairs == [LanguagePair(Language("ru", "Russian"), Language("en", "English"))]
    assert api.requests == []


def test_fetch_language_pairs_unknown_codes_fall_back():
    api = FakeApi(langs=["xx-yy"])
    pairs = _gateway(api).fetch_language_pairs()
    assert pairs[0].source == Language(code="xx", full_name="xx")


def test_fetch_language_pairs_code_without_hyphen_raises_request_error():
    api = FakeApi(langs=["en-es", "ru"])
    store = MemoryStore()

    with pytest.raises(DictionaryRequestError) as excinfo:
        _gateway(api, store).fetch_language_pairs()

    assert "Unreadable language list" in str(excinfo.value)
    assert excinfo.value.status_code is None
    assert store.get(LANGUAGE_PAIRS_KEY) is None


def test_translate_sends_original_text_and_caches_lowercase_key():
    api = FakeApi()
    store = MemoryStore()
    gateway = _gateway(api, store)

    result = gateway.translate("Hello", "en-es")

    assert result.definitions[0].translations[0].text == "hola"
    request = api.requests[0]
    assert request.url.path.endswith("/lookup")
    assert request.url.params["text"] == "Hello"
    assert request.url.params["lang"] == "en-es"
    assert request.url.params["key"] == "test-key"
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert json.loads(store.get("hello-en-es")) == LOOKUP_BODY


def test_translate_is_idempotent_from_cache():
    api = FakeApi()
    gateway = _gateway(api)

    first = gateway.translate("hello", "en-es")
    second = gateway.translate("hello", "en-es")

    assert first == second
    assert len(api.requests) == 1


def test_translate_case_variants_share_cache_entry():
    api = FakeApi()
    gateway = _gateway(api)

    gateway.translate("Hello", "en-es")
    cached = gateway.translate("hello", "en-es")

    assert cached.definitions[0].text == "hello"
    assert len(api.requests) == 1


def test_translate_different_pairs_are_separate_entries():
    api = FakeApi()
    gateway = _gateway(api)

    gateway.translate("hello", "en-es")
    gateway.translate("hello", "en-fr")

    assert len(api.requests) == 2


def test_translate_empty_definitions_is_not_an_error():
    api = FakeApi(lookup={"head": {}, "def": []})
    result = _gateway(api).translate("qwzx", "en-es")
    assert result.is_empty


@pytest.mark.parametrize(
    "status_code, message",
    [
        (401, "Invalid API key"),
        (403, "Daily request limit exceeded"),
        (501, "The specified translation direction is not supported"),
        (500, "HTTP 500"),
    ],
)
def test_translate_http_error_raises_and_does_not_cache(status_code, message):
    api = FakeApi(status_code=status_code)
    store = MemoryStore()
    gateway = _gateway(api, store)

    with pytest.raises(DictionaryRequestError) as excinfo:
        gateway.translate("hello", "en-es")

    assert excinfo.value.status_code == status_code
    assert str(excinfo.value) == message
    assert store.get("hello-en-es") is None
    assert len(api.requests) == 1


def test_transport_failure_raises_request_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    store = MemoryStore()
    gateway = _gateway(handler, store)

    with pytest.raises(DictionaryRequestError) as excinfo:
        gateway.fetch_language_pairs()

    assert excinfo.value.status_code is None
    assert store.get(LANGUAGE_PAIRS_KEY) is None


def test_failed_call_is_retried_on_next_request():
    api = FakeApi(status_code=500)
    gateway = _gateway(api)

    with pytest.raises(DictionaryRequestError):
        gateway.translate("hello", "en-es")
    api.status_code = 200
    result = gateway.translate("hello", "en-es")

    assert not result.is_empty
    assert len(api.requests) == 2


def test_unreadable_response_body_raises_request_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    store = MemoryStore()
    with pytest.raises(DictionaryRequestError):
        _gateway(handler, store).translate("hello", "en-es")
    assert store.get("hello-en-es") is None


def test_malformed_cache_entry_is_treated_as_miss():
    store = MemoryStore({"hello-en-es": "{broken", LANGUAGE_PAIRS_KEY: "[1, 2]"})
    api = FakeApi()
    gateway = _gateway(api, store)

    result = gateway.translate("hello", "en-es")
    pairs = gateway.fetch_language_pairs()

    assert result.definitions[0].text == "hello"
    assert len(pairs) == 3
    assert len(api.requests) == 2
    assert json.loads(store.get("hello-en-es")) == LOOKUP_BODY


def test_concurrent_translate_calls_share_one_request():
    started = threading.Event()
    release = threading.Event()
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        started.set()
        release.wait(timeout=5)
        return httpx.Response(200, json=LOOKUP_BODY)

    gateway = _gateway(handler)
    results = []

    def worker(text: str) -> None:
        results.append(gateway.translate(text, "en-es"))

    first = threading.Thread(target=worker, args=("Hello",))
    first.start()
    assert started.wait(timeout=5)
    others = [threading.Thread(target=worker, args=("hello",)) for _ in range(3)]
    for thread in others:
        thread.start()
    release.set()
    for thread in [first, *others]:
        thread.join(timeout=5)

    assert len(calls) == 1
    assert len(results) == 4
    assert all(r == results[0] for r in results)


def test_single_flight_runs_function_and_clears_key():
    flights = SingleFlight()
    assert flights.do("k", lambda: 1) == 1
    assert flights.do("k", lambda: 2) == 2


def test_single_flight_propagates_errors_and_clears_key():
    flights = SingleFlight()

    def fail():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        flights.do("k", fail)
    assert flights.do("k", lambda: "ok") == "ok"


def test_single_flight_waiters_get_their_own_error_instance():
    flights = SingleFlight()
    started = threading.Event()
    release = threading.Event()
    leader_error = DictionaryRequestError("Daily request limit exceeded", status_code=403)
    caught: dict[str, BaseException] = {}

    def fail():
        started.set()
        release.wait(timeout=5)
        raise leader_error

    def run(name: str) -> None:
        try:
            flights.do("k", fail)
        except DictionaryRequestError as e:
            caught[name] = e

    leader = threading.Thread(target=run, args=("leader",))
    leader.start()
    assert started.wait(timeout=5)
    waiters = [threading.Thread(target=run, args=(f"waiter{i}",)) for i in range(2)]
    for thread in waiters:
        thread.start()
    time.sleep(0.2)
    release.set()
    for thread in [leader, *waiters]:
        thread.join(timeout=5)

    assert caught["leader"] is leader_error
    for name in ("waiter0", "waiter1"):
        error = caught[name]
        assert error is not leader_error
        assert str(error) == "Daily request limit exceeded"
        assert error.status_code == 403
        assert error.__cause__ is leader_error
    assert caught["waiter0"] is not caught["waiter1"]


def test_from_settings_uses_configured_values():
    settings = Settings(api_key="abc", api_url="https://example.test/api/", http_timeout=3.0)
    with DictionaryGateway.from_settings(settings, MemoryStore()) as gateway:
        assert gateway.api_key == "abc"
        assert gateway.base_url == "https://example.test/api"
        assert gateway._client.timeout.read == 3.0
