import logging
from typing import Callable, List, Optional, Tuple

from .config import AnalysisConfig, get_config
from .logging_utils import log_event
from .models import SpecResult
from .patterns import DEFAULT_PATTERNS, PatternTable, find_blocks
from .preprocess import strip_html
from .scoring import classify, completeness_pct, specs_message

logger = logging.getLogger(__name__)

CorpusSource = Callable[[str, PatternTable], str]


# ---- Corpus sources (all of them contribute)

def table_text(html: str, patterns: PatternTable) -> str:
    return ' '.join(strip_html(t) for t in find_blocks(patterns.tables, html))


def spec_block_text(html: str, patterns: PatternTable) -> str:
    return ' '.join(strip_html(b) for b in find_blocks(patterns.spec_blocks, html))


def keyword_scan_text(html: str, patterns: PatternTable) -> str:
    """Label + value + unit snippets picked straight out of the raw markup."""
    chunks: List[str] = []
    for rx in patterns.spec_scan:
        chunks.extend(find_blocks(rx, html))
    return ' '.join(chunks)


CORPUS_SOURCES: List[CorpusSource] = [table_text, spec_block_text, keyword_scan_text]


def build_corpus(html: str, patterns: PatternTable) -> str:
    return ' '.join(source(html, patterns) for source in CORPUS_SOURCES)


def spec_present(corpus: str, label: str, config: AnalysisConfig) -> bool:
    low = corpus.lower()
    if label.lower() in low:
        return True
    return any(alt.lower() in low for alt in config.alternatives_for(label) if alt)


def partition(required: Tuple[str, ...], corpus: str, config: AnalysisConfig) -> Tuple[List[str], List[str]]:
    found, missing = [], []
    for label in required:
        (found if spec_present(corpus, label, config) else missing).append(label)
    return found, missing


def analyze_specs(html: str, category: str, config: Optional[AnalysisConfig] = None,
                  patterns: Optional[PatternTable] = None) -> SpecResult:
    cfg = config or get_config()
    pt = patterns or DEFAULT_PATTERNS

    required = cfg.required_specs(category)
    corpus = build_corpus(html, pt)
    found, missing = partition(required, corpus, cfg)

    total = len(required)
    pct = completeness_pct(len(found), total)
    status = classify(pct, cfg.specs.min_completeness, cfg.specs.warning_threshold)
    log_event(logger, logging.INFO, "specs_analyzed", category=category,
              found=len(found), total=total, completeness=pct)

    return SpecResult(
        found=tuple(found),
        missing=tuple(missing),
        completeness=pct,
        status=status,
        total=total,
        message=specs_message(len(found), total, pct),
    )
