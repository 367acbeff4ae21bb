from pathlib import Path

import pandas as pd
import pytest

import pdp_audit.main as cli
from pdp_audit.fetcher import FetchError
from pdp_audit.pipeline import analyze_html

FIXTURES = Path(__file__).resolve().parents[1] / "eval" / "fixtures"


@pytest.fixture(autouse=True)
def shipped_config(cfg, monkeypatch):
    monkeypatch.setattr(cli, "get_config", lambda: cfg)


def test_html_file_writes_markdown_and_json(tmp_path, capsys):
    out, js = tmp_path / "report.md", tmp_path / "report.json"
    code = cli.main(["--html-file", str(FIXTURES / "phone_full.html"), "--out", str(out), "--json", str(js)])
    assert code == 0
    printed = capsys.readouterr().out
    assert "Detected category: phones" in printed
    assert f"Wrote {out}" in printed
    assert out.read_text(encoding="utf-8").startswith("# Product Page Content Audit")
    assert '"category": "phones"' in js.read_text(encoding="utf-8")


def test_explicit_category_is_not_reported_as_detected(tmp_path, capsys):
    out = tmp_path / "r.md"
    assert cli.main(["--html-file", str(FIXTURES / "bare.html"), "--category", "tvs", "--out", str(out)]) == 0
    assert "Detected category" not in capsys.readouterr().out
    assert "(`tvs`)" in out.read_text(encoding="utf-8")


def test_invalid_url_exits_with_error(tmp_path, capsys):
    out = tmp_path / "r.md"
    assert cli.main(["--url", "not-a-url", "--out", str(out)]) == 1
    assert "Invalid URL" in capsys.readouterr().err
    assert not out.exists()


def test_csv_batch_writes_summary(tmp_path, monkeypatch, cfg, capsys):
    html = (FIXTURES / "phone_full.html").read_text(encoding="utf-8")

    def fake_run(url, category="", config=None):
        if "down" in url:
            raise FetchError("all proxies failed")
        return analyze_html(html, category=category, url=url, config=config)

    monkeypatch.setattr(cli, "run_analysis", fake_run)
    targets = tmp_path / "targets.csv"
    targets.write_text("url,category\nhttps://shop.example/a,phones\nhttps://down.example/b,\n", encoding="utf-8")
    summary = tmp_path / "summary.csv"

    assert cli.main(["--csv", str(targets), "--summary", str(summary)]) == 0
    df = pd.read_csv(summary)
    assert df["url"].tolist() == ["https://shop.example/a"]
    assert df["specs_completeness"].tolist() == [100]
    streams = capsys.readouterr()
    assert "1 analyzed, 1 failed" in streams.out
    assert "fail  https://down.example/b" in streams.err


def test_csv_batch_fails_when_nothing_succeeds(tmp_path, monkeypatch):
    def fake_run(url, category="", config=None):
        raise FetchError("down")

    monkeypatch.setattr(cli, "run_analysis", fake_run)
    targets = tmp_path / "t.csv"
    targets.write_text("url\nhttps://down.example/a\n", encoding="utf-8")
    assert cli.main(["--csv", str(targets), "--summary", str(tmp_path / "s.csv")]) == 1


def test_a_source_is_required():
    with pytest.raises(SystemExit):
        cli.parse_args([])


def test_missing_html_file_exits_with_error(tmp_path, capsys):
    out = tmp_path / "r.md"
    assert cli.main(["--html-file", str(tmp_path / "missing.html"), "--out", str(out)]) == 1
    assert capsys.readouterr().err.startswith("Error:")
    assert not out.exists()
