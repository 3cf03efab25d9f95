"""HTML renderer for dictionary lookup results.

Produces an HTML fragment for st.markdown(..., unsafe_allow_html=True).
Every string that comes from the API is escaped.
"""

from __future__ import annotations

from html import escape

from wordbridge.i18n import t
from wordbridge.models import Definition, DictionaryResult, Example, Translation

_ACCENT = "#7ec8e3"
_MUTED = "#8a94a6"


def _pos_tag(part_of_speech: str | None) -> str:
    if not part_of_speech:
        return ""
    return f' <span class="wb-pos" style="color:{_MUTED};font-style:italic;">{escape(part_of_speech)}</span>'


def _example_html(example: Example) -> str:
    line = escape(example.text)
    if example.translations:
        line += " — " + ", ".join(escape(tr.text) for tr in example.translations)
    return f"<li>{line}</li>"


def _translation_html(translation: Translation, lang: str) -> str:
    title = f'<span class="wb-tr" style="color:{_ACCENT};font-weight:600;">{escape(translation.text)}</span>'
    title += _pos_tag(translation.part_of_speech)
    if translation.gender:
        title += f" <small>({escape(translation.gender)})</small>"

    parts = [f"<div>{title}</div>"]
    if translation.synonyms:
        names = ", ".join(escape(s.text) for s in translation.synonyms)
        parts.append(f"<div><small>{t('heading_synonyms', lang)}:</small> {names}</div>")
    if translation.meanings:
        names = ", ".join(escape(m.text) for m in translation.meanings)
        parts.append(f"<div><small>{t('heading_meanings', lang)}:</small> ({names})</div>")
    if translation.examples:
        items = "".join(_example_html(ex) for ex in translation.examples)
        parts.append(
            f"<div><small>{t('heading_examples', lang)}:</small><ul>{items}</ul></div>"
        )
    return f'<li class="wb-translation">{"".join(parts)}</li>'


def _definition_html(definition: Definition, lang: str) -> str:
    heading = f"<strong>{escape(definition.text)}</strong>"
    if definition.transcription:
        heading += f" [{escape(definition.transcription)}]"
    heading += _pos_tag(definition.part_of_speech)
    items = "".join(_translation_html(tr, lang) for tr in definition.translations)
    return (
        f'<div class="wb-definition" style="margin-bottom:1rem;">'
        f"<div>{heading}</div><ol>{items}</ol></div>"
    )


def render_result_html(result: DictionaryResult, lang: str = "en") -> str:
    """Return an HTML fragment describing a lookup result.

    Args:
        result: Decoded lookup result.
        lang: UI language code ('en' or 'ko') for section labels.

    Returns:
        HTML string. An empty result renders the "no definitions" notice.
    """
    if result.is_empty:
        return f'<div class="wb-result wb-empty">{t("no_definitions", lang)}</div>'
    body = "".join(_definition_html(d, lang) for d in result.definitions)
    return f'<div class="wb-result">{body}</div>'
