"""
Product photo detection.

Candidates come from an ordered list of strategies (first non-empty wins):
  1. modal_images     - <img> inside div.js-product-modal, http(s) only
  2. document_images  - every <img> on the page that looks like a product shot
Whichever tier fired, the candidates are deduplicated and passed through the
same URL-shape filter before counting.
"""

import logging
from typing import Callable, List, Optional

from .config import AnalysisConfig, ImageSettings, get_config
from .logging_utils import log_event
from .models import ImageResult, Status
from .patterns import DEFAULT_PATTERNS, PatternTable
from .preprocess import contains_any, has_digit_run
from .scoring import classify, image_message

logger = logging.getLogger(__name__)

ImageStrategy = Callable[[str, PatternTable, ImageSettings], List[str]]


def is_product_image(src: str, settings: ImageSettings) -> bool:
    if not src or 'data:' in src or 'base64' in src:
        return False
    filename = src.lower()
    if contains_any(filename, settings.exclude_keywords):
        return False
    return contains_any(filename, settings.allowed_extensions)


def modal_images(html: str, patterns: PatternTable, _settings: ImageSettings) -> List[str]:
    # no keyword/extension filter on this path; see is_product_image for the other one
    found: List[str] = []
    for block in patterns.modal_block.finditer(html or ''):
        for m in patterns.img_src.finditer(block.group(0)):
            src = m.group(1)
            if src and src.startswith('http'):
                found.append(src)
    return found


def document_images(html: str, patterns: PatternTable, settings: ImageSettings) -> List[str]:
    return [m.group(1) for m in patterns.img_src.finditer(html or '')
            if is_product_image(m.group(1), settings)]


IMAGE_STRATEGIES: List[ImageStrategy] = [modal_images, document_images]


def dedupe(urls: List[str]) -> List[str]:
    return list(dict.fromkeys(urls))


def looks_like_product_url(src: str, patterns: PatternTable) -> bool:
    url = src.lower()
    if contains_any(url, patterns.image_reject_tokens):
        return False
    return contains_any(url, patterns.image_accept_tokens) or has_digit_run(url, patterns.image_id_digits)


def collect_candidates(html: str, patterns: PatternTable, settings: ImageSettings,
                       strategies: Optional[List[ImageStrategy]] = None) -> List[str]:
    for strategy in strategies or IMAGE_STRATEGIES:
        found = strategy(html, patterns, settings)
        log_event(logger, logging.DEBUG, "image_strategy", strategy=strategy.__name__, found=len(found))
        if found:
            return found
    return []


def analyze_images(html: str, config: Optional[AnalysisConfig] = None,
                   patterns: Optional[PatternTable] = None) -> ImageResult:
    cfg = config or get_config()
    pt = patterns or DEFAULT_PATTERNS
    settings = cfg.images

    candidates = dedupe(collect_candidates(html, pt, settings))
    product_images = [src for src in candidates if looks_like_product_url(src, pt)]

    total = len(product_images)
    status = classify(total, 1, settings.min_recommended)
    log_event(logger, logging.INFO, "images_analyzed", total=total, status=status.value)

    return ImageResult(
        total=total,
        status=status,
        images=tuple(product_images[:settings.preview_limit]),
        message=image_message(total, status, settings.min_recommended),
    )
