from pdp_audit.models import Recommendation, Status
from pdp_audit.render import render_markdown_report


def test_full_report_sections(cfg, make_report):
    report = make_report(found=("Процессор",), missing=("Основная камера",), completeness=50,
                         spec_status=Status.WARNING)
    recs = [Recommendation(type="specs", priority="medium", message="Add | pipes")]
    md = render_markdown_report(report, url="https://shop.example/p/1", recommendations=recs, config=cfg)

    assert md.startswith("# Product Page Content Audit")
    assert "**URL:** https://shop.example/p/1" in md
    assert "**Category:** Smartphones (`phones`)" in md
    for heading in ("## Scorecard", "## Photos", "## Specifications", "## Description", "## Recommendations"):
        assert heading in md
    assert "| Процессор | ✅ |" in md
    assert "| Основная камера | ❌ |" in md
    assert "50% (1/2)" in md
    assert "| specs | medium | Add \\| pipes |" in md


def test_preview_note_when_truncated(cfg, make_report):
    md = render_markdown_report(make_report(images=14), config=cfg)
    assert "Preview (showing first 10 of 14):" in md
    assert "10. https://x/product/9.jpg" in md


def test_category_without_checklist(cfg, make_report):
    report = make_report(found=(), missing=(), completeness=100, category="other")
    md = render_markdown_report(report, config=cfg)
    assert "_No required specifications for this category._" in md
    assert "**Category:** Undetermined (`other`)" in md
    assert "**URL:**" not in md


def test_short_description_hint(cfg, make_report):
    md = render_markdown_report(make_report(words=80, desc_status=Status.WARNING), config=cfg)
    assert "Expanding the description to 150 words is recommended for SEO." in md
    assert "| Words | 80 |" in md
