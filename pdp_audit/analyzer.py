import logging
from datetime import datetime, timezone
from typing import Optional

from .config import AnalysisConfig, get_config
from .description import analyze_description
from .images import analyze_images
from .logging_utils import log_event
from .models import AnalysisReport
from .patterns import DEFAULT_PATTERNS, PatternTable
from .specs import analyze_specs

logger = logging.getLogger(__name__)


def analyze_page(html: str, category: str, config: Optional[AnalysisConfig] = None,
                 patterns: Optional[PatternTable] = None) -> AnalysisReport:
    """
    Run the image, spec and description analyzers over one HTML document.

    The three passes share nothing but the (read-only) config and pattern
    table. Any exception from them reaches the caller as-is; there is no
    partial report.
    """
    cfg = config or get_config()
    pt = patterns or DEFAULT_PATTERNS
    log_event(logger, logging.INFO, "analysis_started", category=category, html_length=len(html or ""))

    try:
        report = AnalysisReport(
            category=category,
            timestamp=datetime.now(timezone.utc),
            images=analyze_images(html, cfg, pt),
            specs=analyze_specs(html, category, cfg, pt),
            description=analyze_description(html, cfg, pt),
        )
    except Exception as exc:
        log_event(logger, logging.ERROR, "analysis_failed", category=category, error=str(exc))
        raise

    log_event(
        logger,
        logging.INFO,
        "analysis_completed",
        category=category,
        images=report.images.status.value,
        specs=report.specs.status.value,
        description=report.description.status.value,
    )
    return report
