from typing import List, Optional

from .config import AnalysisConfig, get_config
from .models import AnalysisReport, Recommendation, Status


def build_recommendations(report: AnalysisReport, config: Optional[AnalysisConfig] = None) -> List[Recommendation]:
    """Deterministic, prioritized fixes for whatever did not score 'success'."""
    cfg = config or get_config()
    recs: List[Recommendation] = []

    # Images: anything short of success
    if report.images.status != Status.SUCCESS:
        recs.append(Recommendation(
            type="images",
            priority="high" if report.images.total == 0 else "medium",
            message=report.images.message,
        ))

    # Specs: every missing checklist label
    if report.specs.missing:
        recs.append(Recommendation(
            type="specs",
            priority="high" if report.specs.completeness < cfg.specs.min_completeness else "medium",
            message="Add missing specifications: " + ", ".join(report.specs.missing),
        ))

    # Description: below the recommended length
    recommended = cfg.description.recommended_words
    if report.description.words < recommended:
        recs.append(Recommendation(
            type="description",
            priority="high" if report.description.words < cfg.description.min_words else "low",
            message=f"Expand the description to {recommended} words",
        ))

    return recs


def summarize_recommendations(report: AnalysisReport, config: Optional[AnalysisConfig] = None) -> List[str]:
    """Short display lines for the scorecard."""
    cfg = config or get_config()
    lines: List[str] = []

    if report.images.status != Status.SUCCESS:
        if report.images.total == 0:
            lines.append("Add product photos to improve conversion")
        elif report.images.total < cfg.images.min_recommended:
            more = cfg.images.min_recommended - report.images.total
            lines.append(f"Add {more} more photos to show the product fully")

    missing = list(report.specs.missing)
    if missing:
        head = ", ".join(missing[:3])
        tail = " and others" if len(missing) > 3 else ""
        lines.append(f"Fill in the missing specifications: {head}{tail}")

    recommended = cfg.description.recommended_words
    if report.description.words < recommended:
        needed = recommended - report.description.words
        lines.append(f"Expand the description by {needed} words for better SEO and detail")

    if not lines:
        lines.append("Excellent! The product page has all the essential elements")
    return lines
