# File: tests/test_report.py
import json

from site_crawler.aggregator import aggregate_results
from site_crawler.crawler.models import CrawlResult
from site_crawler.report import render_html, render_json

RESULT = CrawlResult(pages_stored=2, unique_urls_seen=3, errors=1, elapsed_seconds=1.23456)


def test_aggregate_orders_by_depth_then_url(make_page):
    pages = [
        make_page("https://x.test/z", depth=1),
        make_page("https://x.test/", depth=0, outbound_links=[]),
        make_page("https://x.test/b", depth=1),
    ]
    report = aggregate_results(RESULT, pages)
    assert [p["url"] for p in report.pages] == ["https://x.test/", "https://x.test/b", "https://x.test/z"]
    assert report.pages[0]["links"] == 0
    assert report.summary["elapsed_seconds"] == 1.235
    assert "raw_content" not in report.pages[0]


def test_render_json(tmp_path, make_page):
    report = aggregate_results(RESULT, [make_page()])
    path = render_json(report, tmp_path / "nested" / "report.json")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["summary"]["errors"] == 1
    assert data["pages"][0]["title"] == "Title"


def test_render_html_escapes_content(tmp_path, make_page):
    report = aggregate_results(RESULT, [make_page(title="<script>x</script>")])
    path = render_html(report, None, tmp_path / "report.html")
    text = path.read_text(encoding="utf-8")
    assert "&lt;script&gt;x&lt;/script&gt;" in text
    assert "<script>x</script>" not in text


def test_render_html_custom_template(tmp_path, make_page):
    (tmp_path / "report.html.j2").write_text("{{ summary.pages_stored }}|{{ pages|length }}", encoding="utf-8")
    report = aggregate_results(RESULT, [make_page()])
    path = render_html(report, tmp_path, tmp_path / "out.html")
    assert path.read_text(encoding="utf-8") == "2|1"
