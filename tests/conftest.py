from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from pdp_audit.config import AnalysisConfig, CategorySpec, load_config

ROOT = Path(__file__).resolve().parents[1]
CONFIG_DIR = ROOT / "data" / "config"
FIXTURES = ROOT / "eval" / "fixtures"


@pytest.fixture(scope="session")
def cfg() -> AnalysisConfig:
    """The shipped configuration tables."""
    return load_config(str(CONFIG_DIR))


@pytest.fixture()
def with_required(cfg):
    """Shipped config with one category's checklist replaced."""

    def _make(category: str, labels) -> AnalysisConfig:
        categories = dict(cfg.categories)
        categories[category] = CategorySpec(id=category, name=category, required_specs=tuple(labels))
        return dataclasses.replace(cfg, categories=categories)

    return _make


@pytest.fixture(scope="session")
def phone_html() -> str:
    return (FIXTURES / "phone_full.html").read_text(encoding="utf-8")


@pytest.fixture()
def make_report():
    """Build an AnalysisReport directly from the numbers a test cares about."""
    from datetime import datetime, timezone

    from pdp_audit.models import AnalysisReport, DescriptionResult, ImageResult, SpecResult, Status

    def _make(images=6, image_status=Status.SUCCESS, found=("A",), missing=(), completeness=100,
              spec_status=Status.SUCCESS, words=200, desc_status=Status.SUCCESS, category="phones"):
        return AnalysisReport(
            category=category,
            timestamp=datetime(2024, 5, 17, 9, 30, tzinfo=timezone.utc),
            images=ImageResult(total=images, status=image_status,
                               images=tuple(f"https://x/product/{i}.jpg" for i in range(min(images, 10))),
                               message=f"{images} photos"),
            specs=SpecResult(found=tuple(found), missing=tuple(missing), completeness=completeness,
                             status=spec_status, total=len(found) + len(missing), message="specs"),
            description=DescriptionResult(words=words, paragraphs=3, images=1, headings=2,
                                          status=desc_status, message="desc"),
        )

    return _make
