import re
from typing import Dict, Optional

from .config import AnalysisConfig, get_config
from .preprocess import strip_html

TITLE = re.compile(r'<title[^>]*>(.*?)</title>', re.I | re.S)
TITLE_WEIGHT = 3


def _hits(text: str, keywords) -> int:
    return sum(text.count(k) for k in keywords if k)


def detect_category(html: str, config: Optional[AnalysisConfig] = None) -> str:
    """
    Guess the category from keyword hits in the page text; words in <title>
    count extra. Falls back to the configured default category.
    """
    cfg = config or get_config()
    m = TITLE.search(html or '')
    title = strip_html(m.group(1)).lower() if m else ''
    body = strip_html(html).lower()

    scores: Dict[str, int] = {}
    for cat_id, cat in cfg.categories.items():
        score = _hits(body, cat.keywords) + TITLE_WEIGHT * _hits(title, cat.keywords)
        if score:
            scores[cat_id] = score
    if not scores:
        return cfg.default_category
    # ties go to the category listed first in the table
    return max(scores, key=lambda c: scores[c])


def category_display_name(category: str, config: Optional[AnalysisConfig] = None) -> str:
    cfg = config or get_config()
    cat = cfg.categories.get(category or '')
    return cat.name if cat else 'Undetermined'
