"""
Description quality: word / paragraph / image / heading counts.

The description text is located by an ordered chain of strategies; the first
one that yields non-blank content wins. Paragraphs are counted two different
ways depending on the tier:
  - about_block: number of p.ptovar marker paragraphs (when there are any)
  - otherwise:   sentence split of the stripped text ('. ' boundaries)
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .config import AnalysisConfig, get_config
from .logging_utils import log_event
from .models import DescriptionResult, Status
from .patterns import DEFAULT_PATTERNS, PatternTable, find_blocks
from .preprocess import count_paragraphs, count_words, strip_html
from .scoring import classify, description_message

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DescriptionSource:
    strategy: str
    content: str
    paragraph_count: int = 0     # marker-based; 0 means "derive from text"
    image_count: int = 0         # marker-based; 0 means "count in content"


DescriptionStrategy = Callable[[str, PatternTable, AnalysisConfig], Optional[DescriptionSource]]


def about_block(html: str, patterns: PatternTable, _config: AnalysisConfig) -> Optional[DescriptionSource]:
    m = patterns.about_block.search(html or '')
    if not m:
        return None
    block = m.group(0)
    images = 0
    for para in find_blocks(patterns.centered_paragraph, block):
        images += len(patterns.img_tag.findall(para))
    return DescriptionSource(
        strategy='about_block',
        content=strip_html(block),
        paragraph_count=len(patterns.marker_paragraph.findall(block)),
        image_count=images,
    )


def description_blocks(html: str, patterns: PatternTable, _config: AnalysisConfig) -> Optional[DescriptionSource]:
    matches: List[str] = []
    for rx in patterns.description_blocks:
        matches.extend(find_blocks(rx, html))
    if not matches:
        return None
    # raw markup is kept so embedded <img> tags can still be counted
    return DescriptionSource(strategy='description_blocks', content=' '.join(matches))


def long_paragraphs(html: str, patterns: PatternTable, config: AnalysisConfig) -> Optional[DescriptionSource]:
    texts = []
    for m in patterns.paragraphs.finditer(html or ''):
        text = strip_html(m.group(1))
        if len(text) > config.description.min_paragraph_chars:
            texts.append(text)
    if not texts:
        return None
    return DescriptionSource(strategy='long_paragraphs', content=' '.join(texts))


DESCRIPTION_STRATEGIES: List[DescriptionStrategy] = [about_block, description_blocks, long_paragraphs]


def locate_description(html: str, patterns: PatternTable, config: AnalysisConfig,
                       strategies: Optional[List[DescriptionStrategy]] = None) -> DescriptionSource:
    for strategy in strategies or DESCRIPTION_STRATEGIES:
        source = strategy(html, patterns, config)
        if source is not None and source.content.strip():
            return source
    return DescriptionSource(strategy='none', content='')


def count_headings(html: str, patterns: PatternTable) -> int:
    return len(patterns.headings.findall(html or ''))


def analyze_description(html: str, config: Optional[AnalysisConfig] = None,
                        patterns: Optional[PatternTable] = None) -> DescriptionResult:
    cfg = config or get_config()
    pt = patterns or DEFAULT_PATTERNS
    settings = cfg.description

    source = locate_description(html, pt, cfg)
    words = count_words(source.content)
    paragraphs = source.paragraph_count if source.paragraph_count > 0 else count_paragraphs(source.content)
    images = source.image_count if source.image_count > 0 else len(pt.img_tag.findall(source.content))
    headings = count_headings(html, pt)

    if words == 0:
        status = Status.ERROR
    else:
        status = classify(words, settings.min_words, settings.recommended_words)

    log_event(logger, logging.INFO, "description_analyzed", strategy=source.strategy,
              words=words, paragraphs=paragraphs, images=images, headings=headings)

    return DescriptionResult(
        words=words,
        paragraphs=paragraphs,
        images=images,
        headings=headings,
        status=status,
        message=description_message(words, paragraphs, status, settings.recommended_words),
    )
