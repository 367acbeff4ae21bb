"""
Analysis configuration: thresholds, image filters, proxy list and the
per-category spec checklists, loaded from YAML tables under data/config.

Layout (all files optional except analysis.yaml):
  analysis.yaml          thresholds / image filters / fetch settings
  categories.yaml        {categories: {<id>: {name, keywords, required_specs}}}
  spec_alternatives.yaml {alternatives: {<label>: [synonym, ...]}}
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from dotenv import load_dotenv

CONFIG_DIR_ENV = "PDP_AUDIT_CONFIG_DIR"


class ConfigError(ValueError):
    """A configuration table has the wrong shape."""


@dataclass(frozen=True)
class ImageSettings:
    min_recommended: int = 5
    preview_limit: int = 10
    exclude_keywords: Tuple[str, ...] = ("icon", "logo", "avatar", "banner", "sprite", "placeholder")
    allowed_extensions: Tuple[str, ...] = (".jpg", ".jpeg", ".png", ".webp")


@dataclass(frozen=True)
class SpecSettings:
    min_completeness: int = 50     # below -> error
    warning_threshold: int = 80    # below -> warning, at/above -> success


@dataclass(frozen=True)
class DescriptionSettings:
    min_words: int = 50
    recommended_words: int = 150
    min_paragraph_chars: int = 50


@dataclass(frozen=True)
class FetchSettings:
    proxies: Tuple[str, ...] = ()
    timeout_seconds: float = 15.0
    min_body_length: int = 1000
    user_agent: str = "pdp-audit/1.0"


@dataclass(frozen=True)
class CategorySpec:
    id: str
    name: str
    keywords: Tuple[str, ...] = ()
    required_specs: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AnalysisConfig:
    images: ImageSettings = field(default_factory=ImageSettings)
    specs: SpecSettings = field(default_factory=SpecSettings)
    description: DescriptionSettings = field(default_factory=DescriptionSettings)
    fetch: FetchSettings = field(default_factory=FetchSettings)
    categories: Dict[str, CategorySpec] = field(default_factory=dict)
    spec_alternatives: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    default_category: str = "other"

    def required_specs(self, category: str) -> Tuple[str, ...]:
        cat = self.categories.get(category or "")
        return cat.required_specs if cat else ()

    def alternatives_for(self, label: str) -> Tuple[str, ...]:
        return self.spec_alternatives.get(label) or (label,)


# ---- YAML helpers

def _safe_load(path: Path) -> Optional[Any]:
    if not path.exists():
        return None
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def _project_root() -> Path:
    return Path(__file__).resolve().parents[1]


def resolve_config_dir(root: Optional[str] = None) -> Path:
    if root:
        return Path(root)
    load_dotenv()
    raw = (os.getenv(CONFIG_DIR_ENV) or "").strip()
    if raw:
        return Path(raw)
    return _project_root() / "data" / "config"


def _str_tuple(value: Any, what: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list):
        raise ConfigError(f"{what} must be a list of strings")
    return tuple(str(v) for v in value if str(v).strip())


def _section(doc: Dict[str, Any], name: str) -> Dict[str, Any]:
    sec = doc.get(name) or {}
    if not isinstance(sec, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return sec


def _image_settings(sec: Dict[str, Any]) -> ImageSettings:
    base = ImageSettings()
    return ImageSettings(
        min_recommended=int(sec.get("min_recommended", base.min_recommended)),
        preview_limit=int(sec.get("preview_limit", base.preview_limit)),
        exclude_keywords=tuple(k.lower() for k in _str_tuple(sec.get("exclude_keywords"), "images.exclude_keywords"))
        if "exclude_keywords" in sec else base.exclude_keywords,
        allowed_extensions=tuple(e.lower() for e in _str_tuple(sec.get("allowed_extensions"), "images.allowed_extensions"))
        if "allowed_extensions" in sec else base.allowed_extensions,
    )


def _spec_settings(sec: Dict[str, Any]) -> SpecSettings:
    base = SpecSettings()
    lower = int(sec.get("min_completeness", base.min_completeness))
    upper = int(sec.get("warning_threshold", base.warning_threshold))
    if lower > upper:
        raise ConfigError("specs.min_completeness must not exceed specs.warning_threshold")
    return SpecSettings(min_completeness=lower, warning_threshold=upper)


def _description_settings(sec: Dict[str, Any]) -> DescriptionSettings:
    base = DescriptionSettings()
    lower = int(sec.get("min_words", base.min_words))
    upper = int(sec.get("recommended_words", base.recommended_words))
    if lower > upper:
        raise ConfigError("description.min_words must not exceed description.recommended_words")
    return DescriptionSettings(
        min_words=lower,
        recommended_words=upper,
        min_paragraph_chars=int(sec.get("min_paragraph_chars", base.min_paragraph_chars)),
    )


def _fetch_settings(sec: Dict[str, Any]) -> FetchSettings:
    base = FetchSettings()
    return FetchSettings(
        proxies=_str_tuple(sec.get("proxies"), "fetch.proxies"),
        timeout_seconds=max(1.0, float(sec.get("timeout_seconds", base.timeout_seconds))),
        min_body_length=max(0, int(sec.get("min_body_length", base.min_body_length))),
        user_agent=str(sec.get("user_agent") or base.user_agent),
    )


def _categories(doc: Dict[str, Any]) -> Dict[str, CategorySpec]:
    raw = _section(doc, "categories")
    out: Dict[str, CategorySpec] = {}
    for cat_id, entry in raw.items():
        entry = entry or {}
        if not isinstance(entry, dict):
            raise ConfigError(f"category '{cat_id}' must be a mapping")
        required = _str_tuple(entry.get("required_specs"), f"{cat_id}.required_specs")
        # checklist labels are unique per category; keep first occurrence
        required = tuple(dict.fromkeys(required))
        out[str(cat_id)] = CategorySpec(
            id=str(cat_id),
            name=str(entry.get("name") or cat_id),
            keywords=tuple(k.lower() for k in _str_tuple(entry.get("keywords"), f"{cat_id}.keywords")),
            required_specs=required,
        )
    return out


def _alternatives(doc: Dict[str, Any]) -> Dict[str, Tuple[str, ...]]:
    raw = _section(doc, "alternatives")
    return {str(label): _str_tuple(alts, f"alternatives.{label}") for label, alts in raw.items()}


def load_config(root: Optional[str] = None) -> AnalysisConfig:
    """Read the YAML tables from `root` (or the configured default dir)."""
    config_dir = resolve_config_dir(root)
    analysis_doc = _safe_load(config_dir / "analysis.yaml")
    if analysis_doc is None:
        raise FileNotFoundError(f"Analysis config not found: {config_dir / 'analysis.yaml'}")
    categories_doc = _safe_load(config_dir / "categories.yaml") or {}
    alternatives_doc = _safe_load(config_dir / "spec_alternatives.yaml") or {}

    for name, doc in (("analysis.yaml", analysis_doc), ("categories.yaml", categories_doc),
                      ("spec_alternatives.yaml", alternatives_doc)):
        if not isinstance(doc, dict):
            raise ConfigError(f"{name} must contain a mapping at the top level")

    return AnalysisConfig(
        images=_image_settings(_section(analysis_doc, "images")),
        specs=_spec_settings(_section(analysis_doc, "specs")),
        description=_description_settings(_section(analysis_doc, "description")),
        fetch=_fetch_settings(_section(analysis_doc, "fetch")),
        categories=_categories(categories_doc),
        spec_alternatives=_alternatives(alternatives_doc),
        default_category=str(analysis_doc.get("default_category") or "other"),
    )


@lru_cache(maxsize=1)
def get_config() -> AnalysisConfig:
    """Cached configuration for the default config directory."""
    return load_config()
