from __future__ import annotations

from typing import List, Optional

import markdown2
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from .config import get_config
from .export import ExportDocument, build_export
from .fetcher import FetchError
from .pipeline import AnalysisSession, analyze_html, run_analysis, session_markdown

# ---------- Pydantic DTOs ----------


class AnalyzeRequest(BaseModel):
    url: Optional[str] = Field(default=None, description="Product page URL to fetch.")
    html: Optional[str] = Field(default=None, description="Raw HTML; skips fetching when given.")
    category: str = Field(default="", description="Category id; auto-detected when empty.")


class ImagesDTO(BaseModel):
    total: int
    status: str
    images: List[str]
    message: str


class SpecsDTO(BaseModel):
    found: List[str]
    missing: List[str]
    completeness: int
    status: str
    total: int
    message: str


class DescriptionDTO(BaseModel):
    words: int
    paragraphs: int
    images: int
    headings: int
    status: str
    message: str


class RecommendationDTO(BaseModel):
    type: str
    priority: str
    message: str


class AnalyzeResponse(BaseModel):
    url: str
    category: str
    category_detected: bool
    timestamp: str
    images: ImagesDTO
    specs: SpecsDTO
    description: DescriptionDTO
    recommendations: List[RecommendationDTO]
    report_markdown: str
    report_html: str


class CategoryDTO(BaseModel):
    id: str
    name: str
    required_specs: List[str]


# ---------- Serialization helpers ----------

def _serialize_session(session: AnalysisSession) -> AnalyzeResponse:
    r = session.report
    md = session_markdown(session)
    return AnalyzeResponse(
        url=session.url,
        category=session.category,
        category_detected=session.category_detected,
        timestamp=r.timestamp.isoformat(),
        images=ImagesDTO(
            total=r.images.total,
            status=r.images.status.value,
            images=list(r.images.images),
            message=r.images.message,
        ),
        specs=SpecsDTO(
            found=list(r.specs.found),
            missing=list(r.specs.missing),
            completeness=r.specs.completeness,
            status=r.specs.status.value,
            total=r.specs.total,
            message=r.specs.message,
        ),
        description=DescriptionDTO(
            words=r.description.words,
            paragraphs=r.description.paragraphs,
            images=r.description.images,
            headings=r.description.headings,
            status=r.description.status.value,
            message=r.description.message,
        ),
        recommendations=[RecommendationDTO(type=x.type, priority=x.priority, message=x.message)
                         for x in session.recommendations],
        report_markdown=md,
        report_html=markdown2.markdown(md, extras=["tables"]),
    )


def _run(req: AnalyzeRequest) -> AnalysisSession:
    if not (req.html or "").strip() and not (req.url or "").strip():
        raise HTTPException(status_code=400, detail="Provide either 'url' or 'html'.")
    try:
        if (req.html or "").strip():
            return analyze_html(req.html, category=req.category, url=req.url or "")
        return run_analysis(req.url, category=req.category)
    except FetchError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


# ---------- FastAPI application ----------

app = FastAPI(
    title="PDP Audit: Product Page Content Scorecard API",
    version="1.0.0",
    description="Scores a product page on photos, specification completeness and description quality.",
)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/categories", response_model=List[CategoryDTO])
def categories() -> List[CategoryDTO]:
    cfg = get_config()
    return [CategoryDTO(id=c.id, name=c.name, required_specs=list(c.required_specs))
            for c in cfg.categories.values()]


@app.post("/analyze", response_model=AnalyzeResponse)
def analyze(req: AnalyzeRequest) -> AnalyzeResponse:
    return _serialize_session(_run(req))


@app.post("/export", response_model=ExportDocument)
def export(req: AnalyzeRequest) -> ExportDocument:
    session = _run(req)
    return build_export(session.report, session.url, session.recommendations)
