"""
Lightweight regression checks for the page auditor.

Usage:
    python3 -m eval.run_eval                     # run every case in eval/cases
    python3 -m eval.run_eval --case foo --case bar   # run only these cases
    python3 -m eval.run_eval --list              # print case names and exit
    python3 -m eval.run_eval --verbose           # echo signals for passing cases too

A case names a saved HTML fixture (relative to eval/), a category ("" means
auto-detect) and the expected scores.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

from pdp_audit.pipeline import analyze_html

EVAL_DIR = Path(__file__).resolve().parent
CASES_DIR = EVAL_DIR / "cases"


def _load_case(path: Path) -> Dict[str, object]:
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    data.setdefault("name", path.stem)
    return data


def _evaluate_case(case: Dict[str, object]) -> tuple[List[str], Dict[str, object]]:
    """Run the analysis for a given case and collect human-friendly errors."""
    errors: List[str] = []
    info: Dict[str, object] = {}
    try:
        html = (EVAL_DIR / str(case["html_file"])).read_text(encoding="utf-8")
        session = analyze_html(html, category=str(case.get("category", "")))
    except Exception as exc:  # pragma: no cover - report and keep going
        errors.append(f"runtime error: {exc}")
        return errors, info

    report = session.report
    info = {
        "category": session.category,
        "images": (report.images.total, report.images.status.value),
        "specs": (report.specs.completeness, list(report.specs.missing)),
        "description": (report.description.words, report.description.paragraphs,
                        report.description.images, report.description.status.value),
        "recommendations": [r.type for r in session.recommendations],
    }
    exp: Dict[str, object] = case.get("expectations", {})

    checks = [
        ("detected_category", session.category),
        ("images_total", report.images.total),
        ("images_status", report.images.status.value),
        ("specs_completeness", report.specs.completeness),
        ("description_status", report.description.status.value),
        ("description_paragraphs", report.description.paragraphs),
        ("description_images", report.description.images),
    ]
    for key, actual in checks:
        if key in exp and exp[key] != actual:
            errors.append(f"{key}: expected {exp[key]!r}, saw {actual!r}")

    max_recs = exp.get("max_recommendations")
    if isinstance(max_recs, int) and len(session.recommendations) > max_recs:
        errors.append(f"expected <= {max_recs} recommendations, saw {len(session.recommendations)}")

    required_types = exp.get("required_recommendation_types") or []
    seen = {r.type for r in session.recommendations}
    missing_types = [t for t in required_types if t not in seen]
    if missing_types:
        errors.append(f"missing recommendation types: {', '.join(missing_types)}")

    return errors, info


def _print_debug(info: Dict[str, object]) -> None:
    for key, value in info.items():
        print(f"    {key}: {value}")


def _select(paths: List[Path], names: Optional[List[str]]) -> List[Path]:
    if not names:
        return paths
    by_name = {p.stem: p for p in paths}
    unknown = [n for n in names if n not in by_name]
    if unknown:
        raise SystemExit(f"Unknown case(s): {', '.join(unknown)}")
    return [by_name[n] for n in names]


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the HTML fixture cases through the page auditor.")
    parser.add_argument("--case", action="append", metavar="NAME",
                        help="Run only <NAME>.json from eval/cases (repeatable).")
    parser.add_argument("--list", action="store_true", help="List available cases and exit.")
    parser.add_argument("--verbose", action="store_true", help="Show signals for passing cases too.")
    args = parser.parse_args(argv)

    paths = sorted(CASES_DIR.glob("*.json"))
    if not paths:
        print(f"No cases under {CASES_DIR}", file=sys.stderr)
        return 1
    if args.list:
        print("\n".join(p.stem for p in paths))
        return 0

    failed: List[str] = []
    selected = _select(paths, args.case)
    for path in selected:
        case = _load_case(path)
        errors, info = _evaluate_case(case)
        print(f"[{'FAIL' if errors else 'PASS'}] {case['name']}")
        for err in errors:
            print(f"  - {err}")
        if errors or args.verbose:
            _print_debug(info)
        if errors:
            failed.append(str(case["name"]))

    print(f"\n{len(selected) - len(failed)}/{len(selected)} cases passed")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
