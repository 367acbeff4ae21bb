from dataclasses import dataclass
from typing import List, Optional

import pandas as pd

from .pipeline import AnalysisSession

# Column names seen in catalog exports, first match wins
URL_ALIASES      = ["url", "product_url", "page_url", "link", "href"]
CATEGORY_ALIASES = ["category", "pdp_category", "dept", "vertical"]

SUMMARY_COLUMNS = [
    "url", "category",
    "images_total", "images_status",
    "specs_completeness", "specs_missing", "specs_status",
    "description_words", "description_paragraphs", "description_status",
    "recommendations",
]


@dataclass
class Target:
    url: str
    category: str = ""


def load_csv(path: str) -> pd.DataFrame:
    return pd.read_csv(path)


def _first_col(df: pd.DataFrame, candidates: List[str]) -> Optional[str]:
    lowered = {c.lower().strip(): c for c in df.columns}
    for c in candidates:
        if c in lowered:
            return lowered[c]
    return None


def load_targets(df: pd.DataFrame) -> List[Target]:
    url_col = _first_col(df, URL_ALIASES)
    if not url_col:
        raise ValueError(f"No URL column found. Columns: {df.columns.tolist()}")
    cat_col = _first_col(df, CATEGORY_ALIASES)

    targets: List[Target] = []
    for _, row in df.iterrows():
        url = row[url_col]
        if not isinstance(url, str) or not url.strip():
            continue
        cat = row[cat_col] if cat_col else ""
        targets.append(Target(url=url.strip(), category=cat.strip() if isinstance(cat, str) else ""))
    return targets


def sessions_to_frame(sessions: List[AnalysisSession]) -> pd.DataFrame:
    rows = []
    for s in sessions:
        r = s.report
        if r is None:
            continue
        rows.append({
            "url": s.url,
            "category": r.category,
            "images_total": r.images.total,
            "images_status": r.images.status.value,
            "specs_completeness": r.specs.completeness,
            "specs_missing": "; ".join(r.specs.missing),
            "specs_status": r.specs.status.value,
            "description_words": r.description.words,
            "description_paragraphs": r.description.paragraphs,
            "description_status": r.description.status.value,
            "recommendations": len(s.recommendations),
        })
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
