import re
from typing import Iterable

TAG = re.compile(r'<[^>]*>')
WHITESPACE = re.compile(r'\s+')
SENTENCE_BREAK = re.compile(r'\.\s+')


def normalize_text(s: str) -> str:
    s = (s or '').replace('\u00A0', ' ')
    s = WHITESPACE.sub(' ', s).strip()
    return s


def strip_html(html: str) -> str:
    """Replace every tag with a space and collapse whitespace."""
    return normalize_text(TAG.sub(' ', html or ''))


def count_words(text: str) -> int:
    return len([w for w in strip_html(text).split() if w])


def count_paragraphs(text: str) -> int:
    """
    Sentence-based paragraph estimate used when the page carries no paragraph
    markers: split on '. ' boundaries, floor at 1 when any text exists.
    """
    stripped = strip_html(text)
    if not stripped:
        return 0
    sentences = [s for s in SENTENCE_BREAK.split(stripped) if s.strip()]
    return max(1, len(sentences))


def contains_any(text: str, needles: Iterable[str]) -> bool:
    low = (text or '').lower()
    return any(n.lower() in low for n in needles if n)


def has_digit_run(text: str, length: int = 6) -> bool:
    return re.search(r'\d{%d,}' % length, text or '') is not None
