"""
Threshold classification and the human-readable lines attached to results.

Every status in a report comes out of `classify`; analyzers never pick a
status by hand.
"""

import math

from .models import Status


def classify(value: float, lower: float, upper: float) -> Status:
    """below `lower` -> error, below `upper` -> warning, otherwise success."""
    if value < lower:
        return Status.ERROR
    if value < upper:
        return Status.WARNING
    return Status.SUCCESS


def completeness_pct(found: int, total: int) -> int:
    # half-up, so 12.5% reports as 13 rather than banker's 12
    if total <= 0:
        return 100
    return int(math.floor(found * 100 / total + 0.5))


def image_message(count: int, status: Status, min_recommended: int) -> str:
    if count == 0:
        return "No product photos found"
    if status == Status.WARNING:
        return f"Found {count} photos. At least {min_recommended} are recommended"
    return f"Found {count} quality product photos"


def specs_message(found: int, total: int, pct: int) -> str:
    return f"Filled {found} of {total} required specifications ({pct}%)"


def description_message(words: int, paragraphs: int, status: Status, recommended_words: int) -> str:
    if status == Status.ERROR:
        return "Product description is missing" if words == 0 else f"Description is too short: {words} words"
    if status == Status.WARNING:
        return f"Description has {words} words. Expanding it to {recommended_words} words is recommended"
    return f"Detailed description: {words} words in {paragraphs} paragraphs"
