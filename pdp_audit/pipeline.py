# pdp_audit/pipeline.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import requests

from .analyzer import analyze_page
from .categories import detect_category
from .config import AnalysisConfig, get_config
from .export import export_json
from .fetcher import fetch_page_content
from .logging_utils import log_event
from .models import AnalysisReport, Recommendation
from .recommender import build_recommendations
from .render import render_markdown_report

logger = logging.getLogger(__name__)

Fetcher = Callable[..., str]


@dataclass
class AnalysisSession:
    """
    What one user/run has analyzed so far. Passed explicitly to rendering and
    export instead of living in module globals.
    """
    url: str = ""
    category: str = ""
    category_detected: bool = False
    report: Optional[AnalysisReport] = None
    recommendations: List[Recommendation] = field(default_factory=list)

    @property
    def has_report(self) -> bool:
        return self.report is not None

    def clear(self) -> None:
        self.url = ""
        self.category = ""
        self.category_detected = False
        self.report = None
        self.recommendations = []


def analyze_html(
    html: str,
    category: str = "",
    url: str = "",
    config: Optional[AnalysisConfig] = None,
    session: Optional[AnalysisSession] = None,
) -> AnalysisSession:
    cfg = config or get_config()
    session = session or AnalysisSession()

    chosen = (category or "").strip()
    detected = False
    if not chosen:
        chosen = detect_category(html, cfg)
        detected = True
        log_event(logger, logging.INFO, "category_detected", category=chosen)

    report = analyze_page(html, chosen, cfg)

    session.url = url or ""
    session.category = chosen
    session.category_detected = detected
    session.report = report
    session.recommendations = build_recommendations(report, cfg)
    return session


def run_analysis(
    url: str,
    category: str = "",
    config: Optional[AnalysisConfig] = None,
    session: Optional[AnalysisSession] = None,
    fetch: Fetcher = fetch_page_content,
    http: Optional[requests.Session] = None,
) -> AnalysisSession:
    """
    Fetch `url` through the proxy chain and analyze it. FetchError and
    ValueError (bad URL) propagate to the caller.
    """
    cfg = config or get_config()
    url = (url or "").strip()
    html = fetch(url, settings=cfg.fetch, session=http)
    return analyze_html(html, category=category, url=url, config=cfg, session=session)


def reanalyze_with_category(
    session: AnalysisSession,
    category: str,
    config: Optional[AnalysisConfig] = None,
    fetch: Fetcher = fetch_page_content,
) -> AnalysisSession:
    if not session.url:
        raise ValueError("Nothing to re-analyze: run an analysis first.")
    return run_analysis(session.url, category=category, config=config, session=session, fetch=fetch)


def session_markdown(session: AnalysisSession, config: Optional[AnalysisConfig] = None) -> str:
    if session.report is None:
        raise ValueError("No analysis results to render.")
    return render_markdown_report(session.report, session.url, session.recommendations, config)


def session_export_json(session: AnalysisSession, config: Optional[AnalysisConfig] = None) -> str:
    if session.report is None:
        raise ValueError("No analysis results to export.")
    return export_json(session.report, session.url, session.recommendations, config)
