"""
JSON export of an analysis run, and the pydantic models used to read it back.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .config import AnalysisConfig
from .models import AnalysisReport, Recommendation, Status
from .recommender import build_recommendations

Priority = Literal["low", "medium", "high"]


class ImagesExport(BaseModel):
    total: int = Field(..., ge=0)
    status: Status
    message: str


class SpecsExport(BaseModel):
    completeness: int = Field(..., ge=0, le=100)
    found: List[str]
    missing: List[str]
    status: Status


class DescriptionExport(BaseModel):
    words: int = Field(..., ge=0)
    paragraphs: int = Field(..., ge=0)
    images: int = Field(..., ge=0)
    headings: int = Field(..., ge=0)
    status: Status


class ResultsExport(BaseModel):
    images: ImagesExport
    specs: SpecsExport
    description: DescriptionExport


class RecommendationExport(BaseModel):
    type: str
    priority: Priority
    message: str


class ExportDocument(BaseModel):
    url: str = ""
    timestamp: datetime
    category: str
    results: ResultsExport
    recommendations: List[RecommendationExport] = []


def build_export(
    report: AnalysisReport,
    url: str = "",
    recommendations: Optional[List[Recommendation]] = None,
    config: Optional[AnalysisConfig] = None,
) -> ExportDocument:
    recs = recommendations if recommendations is not None else build_recommendations(report, config)
    return ExportDocument(
        url=url or "",
        timestamp=report.timestamp,
        category=report.category,
        results=ResultsExport(
            images=ImagesExport(
                total=report.images.total,
                status=report.images.status,
                message=report.images.message,
            ),
            specs=SpecsExport(
                completeness=report.specs.completeness,
                found=list(report.specs.found),
                missing=list(report.specs.missing),
                status=report.specs.status,
            ),
            description=DescriptionExport(
                words=report.description.words,
                paragraphs=report.description.paragraphs,
                images=report.description.images,
                headings=report.description.headings,
                status=report.description.status,
            ),
        ),
        recommendations=[
            RecommendationExport(type=r.type, priority=r.priority, message=r.message) for r in recs
        ],
    )


def export_json(
    report: AnalysisReport,
    url: str = "",
    recommendations: Optional[List[Recommendation]] = None,
    config: Optional[AnalysisConfig] = None,
) -> str:
    return build_export(report, url, recommendations, config).model_dump_json(indent=2)


def parse_export(text: str) -> ExportDocument:
    return ExportDocument.model_validate_json(text)


def export_filename(when: datetime) -> str:
    return f"analysis_{when.date().isoformat()}.json"


def write_export(path: Path, report: AnalysisReport, url: str = "",
                 recommendations: Optional[List[Recommendation]] = None,
                 config: Optional[AnalysisConfig] = None) -> Path:
    path = Path(path)
    if path.is_dir():
        path = path / export_filename(report.timestamp)
    path.write_text(export_json(report, url, recommendations, config), encoding="utf-8")
    return path
