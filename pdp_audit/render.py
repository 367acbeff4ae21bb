# pdp_audit/render.py
from typing import List, Optional

from .categories import category_display_name
from .config import AnalysisConfig, get_config
from .models import AnalysisReport, Recommendation, Status
from .recommender import summarize_recommendations

STATUS_BADGE = {
    Status.SUCCESS: "✅ good",
    Status.WARNING: "⚠️ needs work",
    Status.ERROR: "❌ poor",
}


def _cell(value):
    text = (value or "").strip() if isinstance(value, str) else str(value if value is not None else "")
    if not text:
        text = "(empty)"
    return text.replace("|", "\\|").replace("\n", "<br>")


def _progress_bar(pct: int, width: int = 20) -> str:
    filled = max(0, min(width, round(pct * width / 100)))
    return "█" * filled + "░" * (width - filled)


def render_markdown_report(
    report: AnalysisReport,
    url: str = "",
    recommendations: Optional[List[Recommendation]] = None,
    config: Optional[AnalysisConfig] = None,
) -> str:
    cfg = config or get_config()
    images, specs, desc = report.images, report.specs, report.description

    lines = []
    lines.append("# Product Page Content Audit")
    if url:
        lines.append(f"**URL:** {url}")
    lines.append(f"**Category:** {category_display_name(report.category, cfg)} (`{report.category}`)")
    lines.append(f"**Analyzed at:** {report.timestamp.isoformat()}\n")

    # Scorecard
    lines.append("## Scorecard\n")
    lines.append("| Dimension | Score | Status | Summary |")
    lines.append("|---|---:|:--:|---|")
    lines.append(f"| Photos | {images.total} | {STATUS_BADGE[images.status]} | {_cell(images.message)} |")
    lines.append(f"| Specifications | {specs.completeness}% | {STATUS_BADGE[specs.status]} | {_cell(specs.message)} |")
    lines.append(f"| Description | {desc.words} words | {STATUS_BADGE[desc.status]} | {_cell(desc.message)} |")
    lines.append("")

    # Photos
    lines.append("## Photos")
    lines.append(f"Found **{images.total}** product photos (recommended minimum: {cfg.images.min_recommended}).")
    if images.images:
        shown = len(images.images)
        suffix = f" (showing first {shown} of {images.total})" if images.total > shown else ""
        lines.append(f"\nPreview{suffix}:")
        lines.extend(f"{i}. {src}" for i, src in enumerate(images.images, 1))
    lines.append("")

    # Specs
    lines.append("## Specifications")
    lines.append(f"`{_progress_bar(specs.completeness)}` {specs.completeness}% ({len(specs.found)}/{specs.total})")
    if specs.total == 0:
        lines.append("\n_No required specifications for this category._")
    else:
        lines.append("")
        lines.append("| Specification | Present |")
        lines.append("|---|:--:|")
        for label in specs.found:
            lines.append(f"| {_cell(label)} | ✅ |")
        for label in specs.missing:
            lines.append(f"| {_cell(label)} | ❌ |")
    lines.append("")

    # Description
    lines.append("## Description\n")
    lines.append("| Metric | Value |")
    lines.append("|---|---:|")
    lines.append(f"| Words | {desc.words} |")
    lines.append(f"| Paragraphs | {desc.paragraphs} |")
    lines.append(f"| Images in description | {desc.images} |")
    lines.append(f"| Headings on page | {desc.headings} |")
    if 0 < desc.words < cfg.description.recommended_words:
        lines.append(f"\n_Expanding the description to {cfg.description.recommended_words} words is recommended for SEO._")
    lines.append("")

    # Recommendations
    lines.append("## Recommendations")
    for line in summarize_recommendations(report, cfg):
        lines.append(f"- {line}")
    if recommendations:
        lines.append("")
        lines.append("| Area | Priority | Action |")
        lines.append("|---|---|---|")
        for r in recommendations:
            lines.append(f"| {r.type} | {r.priority} | {_cell(r.message)} |")

    return "\n".join(lines)
