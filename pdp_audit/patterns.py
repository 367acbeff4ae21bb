"""
Named extraction patterns used by the analyzers.

Everything that knows about markup lives here. The analyzers only receive a
PatternTable, so a page family with different markers (or a real parser
wrapped to look like one) can be swapped in without touching scoring logic.
"""

import re
from dataclasses import dataclass, field
from typing import Tuple

IS = re.IGNORECASE | re.DOTALL


@dataclass(frozen=True)
class PatternTable:
    # images
    modal_block: re.Pattern
    img_src: re.Pattern
    img_tag: re.Pattern
    # specs
    tables: re.Pattern
    spec_blocks: re.Pattern
    spec_scan: Tuple[re.Pattern, ...]
    # description
    about_block: re.Pattern
    marker_paragraph: re.Pattern
    centered_paragraph: re.Pattern
    description_blocks: Tuple[re.Pattern, ...]
    paragraphs: re.Pattern
    headings: re.Pattern
    # secondary image filter
    image_reject_tokens: Tuple[str, ...] = field(default=('thumbnail', 'preview', '_small'))
    image_accept_tokens: Tuple[str, ...] = field(default=('product', 'item'))
    image_id_digits: int = 6


# The modal marker is matched case-sensitively on purpose; only the tag
# names are case-insensitive.
MODAL_BLOCK = re.compile(r'<(?i:div)[^>]*class="[^"]*js-product-modal[^"]*"[^>]*>.*?</(?i:div)>', re.DOTALL)
IMG_SRC     = re.compile(r'<img[^>]+src="([^"]+)"[^>]*>', re.I)
IMG_TAG     = re.compile(r'<img[^>]*>', re.I)

TABLES      = re.compile(r'<table[^>]*>.*?</table>', IS)
SPEC_BLOCKS = re.compile(
    r'<(div|ul|dl|section)[^>]*class="[^"]*(?:spec|characteristic|param|attribute|feature|харак)[^"]*"[^>]*>.*?</\1>',
    IS,
)

# label keyword ... value ... unit, across RU/UK/EN wording. Gaps are bounded
# so a long script run with a label but no unit fails in linear time.
SPEC_SCAN = (
    re.compile(r'(?:розмір|размер|диагональ|диагонал|діагональ|screen size|display)[^<]{0,60}?(\d+(?:[,.]\d+)?)(?!\d)[^<]{0,20}?(?:дюйм|"|інч|inch)', re.I),
    re.compile(r"(?:пам'ять|память|пам’ять|ram|rom|memory|storage)[^<]{0,60}?(\d+)(?!\d)[^<]{0,20}?(?:гб|gb|мб|mb|тб|tb)", re.I),
    re.compile(r'(?:процесор|процессор|cpu|processor|chipset)[^<]{0,20}?([^<]{10,50})', re.I),
    re.compile(r'(?:батарея|аккумулятор|акумулятор|battery)[^<]{0,60}?(\d+)(?!\d)[^<]{0,20}?(?:мач|mah)', re.I),
)

ABOUT_BLOCK        = re.compile(r'<div[^>]*class="[^"]*section-about-text-block[^"]*"[^>]*>(.*?)</div>', IS)
MARKER_PARAGRAPH   = re.compile(r'<p[^>]*class="[^"]*ptovar[^"]*"[^>]*>.*?</p>', IS)
CENTERED_PARAGRAPH = re.compile(r'<p[^>]*style="[^"]*text-align:\s*center[^"]*"[^>]*>.*?</p>', IS)
DESCRIPTION_BLOCKS = (
    re.compile(r'<div[^>]*class="[^"]*(?:product-description|description|product-about|about-product)[^"]*"[^>]*>.*?</div>', IS),
    re.compile(r'<section[^>]*class="[^"]*description[^"]*"[^>]*>.*?</section>', IS),
    re.compile(r'<(div|section)[^>]*itemprop="description"[^>]*>.*?</\1>', IS),
)
PARAGRAPHS = re.compile(r'<p[^>]*>(.*?)</p>', IS)
HEADINGS   = re.compile(r'<h[1-6][^>]*>.*?</h[1-6]>', IS)


DEFAULT_PATTERNS = PatternTable(
    modal_block=MODAL_BLOCK,
    img_src=IMG_SRC,
    img_tag=IMG_TAG,
    tables=TABLES,
    spec_blocks=SPEC_BLOCKS,
    spec_scan=SPEC_SCAN,
    about_block=ABOUT_BLOCK,
    marker_paragraph=MARKER_PARAGRAPH,
    centered_paragraph=CENTERED_PARAGRAPH,
    description_blocks=DESCRIPTION_BLOCKS,
    paragraphs=PARAGRAPHS,
    headings=HEADINGS,
)


def find_blocks(pattern: re.Pattern, html: str) -> list:
    """Whole-match text of every occurrence (groups are ignored)."""
    return [m.group(0) for m in pattern.finditer(html or '')]
