import argparse
import logging
import sys
from pathlib import Path

from .config import get_config
from .fetcher import FetchError
from .loaders import load_csv, load_targets, sessions_to_frame
from .pipeline import analyze_html, run_analysis, session_export_json, session_markdown


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Audit product page content: photos, specs, description.")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument('--url', help='Product page URL (fetched through the proxy chain).')
    src.add_argument('--html-file', help='Analyze a saved HTML file instead of fetching.')
    src.add_argument('--csv', help='Batch mode: CSV with url (and optional category) columns.')
    p.add_argument('--category', default='', help='Category id; auto-detected when omitted.')
    p.add_argument('--out', default='report.md', help='Markdown report path (single page mode).')
    p.add_argument('--json', dest='json_out', default=None, help='Also write the JSON export here.')
    p.add_argument('--summary', default='summary.csv', help='Batch summary CSV path.')
    p.add_argument('-v', '--verbose', action='store_true')
    return p.parse_args(argv)


def _run_batch(args, cfg) -> int:
    targets = load_targets(load_csv(args.csv))
    sessions, failures = [], 0
    for t in targets:
        try:
            sessions.append(run_analysis(t.url, category=t.category or args.category, config=cfg))
            print(f"ok    {t.url}")
        except (FetchError, ValueError) as exc:
            failures += 1
            print(f"fail  {t.url}: {exc}", file=sys.stderr)
    sessions_to_frame(sessions).to_csv(args.summary, index=False)
    print(f'Wrote {args.summary} ({len(sessions)} analyzed, {failures} failed)')
    return 1 if failures and not sessions else 0


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(asctime)s %(levelname)s %(name)s %(message)s")
    cfg = get_config()

    if args.csv:
        return _run_batch(args, cfg)

    try:
        if args.html_file:
            html = Path(args.html_file).read_text(encoding='utf-8', errors='replace')
            session = analyze_html(html, category=args.category, config=cfg)
        else:
            session = run_analysis(args.url, category=args.category, config=cfg)
    except (FetchError, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if session.category_detected:
        print(f"Detected category: {session.category}")

    Path(args.out).write_text(session_markdown(session, cfg), encoding='utf-8')
    print(f'Wrote {args.out}')
    if args.json_out:
        Path(args.json_out).write_text(session_export_json(session, cfg), encoding='utf-8')
        print(f'Wrote {args.json_out}')
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
