"""WordBridge: Streamlit dictionary lookup page."""

import html

import streamlit as st
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from wordbridge.catalog import (  # noqa: E402
    list_source_languages,
    list_target_languages,
)
from wordbridge.config import load_settings  # noqa: E402
from wordbridge.dictionary import DictionaryGateway, DictionaryRequestError  # noqa: E402
from wordbridge.i18n import t  # noqa: E402
from wordbridge.logging_config import setup_logging  # noqa: E402
from wordbridge.models import Language  # noqa: E402
from wordbridge.renderers.result_html import render_result_html  # noqa: E402
from wordbridge.store import JsonFileStore  # noqa: E402
from wordbridge.validation import validate_word  # noqa: E402


@st.cache_resource
def _gateway() -> DictionaryGateway:
    """One gateway (and one cache file handle) shared by every session."""
    settings = load_settings()
    setup_logging(settings.log_level)
    return DictionaryGateway.from_settings(settings, JsonFileStore(settings.cache_path))


# --- Language detection (browser-first via streamlit-js-eval) ---
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="📖",
    layout="centered",
)

# --- Session state initialization ---
if "pairs" not in st.session_state:
    st.session_state.pairs = None
if "result" not in st.session_state:
    st.session_state.result = None
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None

st.markdown(
    """
    <style>
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    .wb-result ol { margin-top: 0.3rem; }
    .wb-result ul { margin: 0.2rem 0 0.4rem 0; }
    .wb-empty { color: #8a94a6; font-style: italic; }
    .error-box {
        border: 1px solid #ff6b6b;
        border-radius: 6px;
        color: #ff9999;
        padding: 0.6rem 1rem;
        margin: 0.5rem 0;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

st.title(t("page_title", _lang))

gateway = _gateway()

# --- Supported language pairs ---
if st.session_state.pairs is None:
    with st.spinner(t("loading_languages", _lang)):
        try:
            st.session_state.pairs = gateway.fetch_language_pairs()
            st.session_state.error_msg = None
        except DictionaryRequestError as e:
            # Not stored, so the next rerun retries
            st.session_state.error_msg = t("error_languages", _lang).format(
                error=html.escape(str(e))
            )

pairs = st.session_state.pairs or []


def _on_source_change() -> None:
    st.session_state.pop("target_lang", None)
    st.session_state.result = None


def _language_label(language: Language) -> str:
    return language.full_name


col1, col2 = st.columns(2)
with col1:
    source: Language | None = st.selectbox(
        t("label_from", _lang),
        options=list_source_languages(pairs),
        format_func=_language_label,
        index=None,
        key="source_lang",
        on_change=_on_source_change,
    )
with col2:
    target: Language | None = st.selectbox(
        t("label_to", _lang),
        options=list_target_languages(pairs, source.code) if source else [],
        format_func=_language_label,
        index=None,
        key="target_lang",
        disabled=source is None,
    )

with st.form("lookup_form"):
    word = st.text_input(t("label_word", _lang), max_chars=64)
    submitted = st.form_submit_button(t("btn_translate", _lang))

# --- Form submission handler ---
if submitted:
    st.session_state.error_msg = None
    st.session_state.result = None
    error_key = validate_word(word)
    if error_key is not None:
        st.session_state.error_msg = t(error_key, _lang)
    elif source is None or target is None:
        st.session_state.error_msg = t("error_select_languages", _lang)
    else:
        pair_code = f"{source.code}-{target.code}"
        with st.spinner(t("loading_lookup", _lang)):
            try:
                st.session_state.result = gateway.translate(word, pair_code)
            except DictionaryRequestError as e:
                st.session_state.error_msg = t("error_lookup", _lang).format(
                    error=html.escape(str(e))
                )

# --- Error message ---
if st.session_state.error_msg:
    st.markdown(
        f"<div class='error-box'>{st.session_state.error_msg}</div>",
        unsafe_allow_html=True,
    )

# --- Lookup result ---
if st.session_state.result is not None:
    st.markdown(render_result_html(st.session_state.result, _lang), unsafe_allow_html=True)
