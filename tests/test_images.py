import dataclasses

import pytest

from pdp_audit.config import ImageSettings
from pdp_audit.images import (
    analyze_images,
    collect_candidates,
    dedupe,
    document_images,
    is_product_image,
    looks_like_product_url,
    modal_images,
)
from pdp_audit.models import Status
from pdp_audit.patterns import DEFAULT_PATTERNS


def _modal(*srcs, cls="js-product-modal"):
    imgs = "".join(f'<img src="{s}">' for s in srcs)
    return f'<div class="{cls}">{imgs}</div>'


def _page_imgs(*srcs):
    return "<body>" + "".join(f'<img alt="" src="{s}" />' for s in srcs) + "</body>"


def test_modal_duplicates_collapse_and_icon_is_dropped(cfg):
    html = _modal("http://x/123456789.jpg", "http://x/123456789.jpg", "http://x/icon.png")
    result = analyze_images(html, cfg)
    assert result.total == 1
    assert result.images == ("http://x/123456789.jpg",)
    assert result.status is Status.WARNING


def test_modal_path_skips_keyword_and_extension_filter(cfg):
    # 'logo' is an excluded keyword and .gif is not an allowed extension, but
    # the modal tier only checks for an http(s) prefix
    html = _modal("https://cdn.shop/logo/product-shot.gif")
    assert modal_images(html, DEFAULT_PATTERNS, cfg.images) == ["https://cdn.shop/logo/product-shot.gif"]
    assert analyze_images(html, cfg).total == 1
    assert not is_product_image("https://cdn.shop/logo/product-shot.gif", cfg.images)


def test_modal_spans_lines(cfg):
    html = '<div class="js-product-modal">\n  <img\n src="http://x/product/1.jpg">\n</div>'
    assert analyze_images(html, cfg).images == ("http://x/product/1.jpg",)


def test_modal_marker_is_case_sensitive(cfg):
    html = _modal("http://x/product/1.jpg", cls="JS-PRODUCT-MODAL")
    assert modal_images(html, DEFAULT_PATTERNS, cfg.images) == []
    # the document-wide tier still picks the photo up
    assert analyze_images(html, cfg).total == 1


def test_relative_modal_sources_fall_back_to_document_scan(cfg):
    html = _modal("/media/product/1.jpg") + '<img src="/media/logo.png">'
    assert modal_images(html, DEFAULT_PATTERNS, cfg.images) == []
    assert analyze_images(html, cfg).images == ("/media/product/1.jpg",)


def test_document_tier_only_runs_when_modal_is_empty(cfg):
    html = _modal("http://x/product/1.jpg") + _page_imgs("http://x/product/2.jpg")
    assert analyze_images(html, cfg).images == ("http://x/product/1.jpg",)


@pytest.mark.parametrize(
    "src, expected",
    [
        ("https://cdn/product/1.jpg", True),
        ("https://cdn/product/1.JPEG", True),
        ("https://cdn/product/1.webp?w=800", True),
        ("https://cdn/product/1.svg", False),
        ("https://cdn/site-logo.png", False),
        ("https://cdn/icons/cart.png", False),
        ("https://cdn/AVATAR/u.jpg", False),
        ("data:image/png;base64,AAAA", False),
        ("https://cdn/base64/1.jpg", False),
        ("", False),
    ],
)
def test_is_product_image(src, expected):
    assert is_product_image(src, ImageSettings()) is expected


@pytest.mark.parametrize(
    "src, expected",
    [
        ("http://x/product/a.jpg", True),
        ("http://x/ITEM/a.jpg", True),
        ("http://x/a/1234567.jpg", True),
        ("http://x/a/12345.jpg", False),
        ("http://x/product/a_thumbnail.jpg", False),
        ("http://x/preview/123456.jpg", False),
        ("http://x/product/a_small.jpg", False),
    ],
)
def test_secondary_url_filter(src, expected):
    assert looks_like_product_url(src, DEFAULT_PATTERNS) is expected


def test_secondary_filter_applies_to_document_tier(cfg):
    html = _page_imgs("http://x/gallery/a.jpg", "http://x/product/b_small.jpg", "http://x/product/c.jpg")
    assert analyze_images(html, cfg).images == ("http://x/product/c.jpg",)


def test_dedupe_keeps_first_seen_order():
    assert dedupe(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]


def test_preview_truncated_to_ten_but_total_is_full(cfg):
    srcs = [f"http://x/product/{i}.jpg" for i in range(12)]
    result = analyze_images(_modal(*srcs), cfg)
    assert result.total == 12
    assert result.images == tuple(srcs[:10])
    assert result.status is Status.SUCCESS


def test_no_images_is_error(cfg):
    result = analyze_images("<html><body><p>nothing</p></body></html>", cfg)
    assert result.total == 0
    assert result.images == ()
    assert result.status is Status.ERROR
    assert result.message == "No product photos found"


@pytest.mark.parametrize("count", range(0, 8))
def test_status_tracks_min_recommended(cfg, count):
    srcs = [f"http://x/product/{i}.jpg" for i in range(count)]
    result = analyze_images(_modal(*srcs), cfg)
    assert result.total == count
    assert (result.total == 0) == (result.status is Status.ERROR)
    if count:
        assert (result.status is Status.WARNING) == (count < cfg.images.min_recommended)


def test_returned_images_are_unique(cfg):
    srcs = ["http://x/product/1.jpg", "http://x/product/2.jpg"] * 4
    result = analyze_images(_page_imgs(*srcs), cfg)
    assert len(set(result.images)) == len(result.images) == 2


def test_custom_min_recommended(cfg):
    settings = dataclasses.replace(cfg.images, min_recommended=1)
    custom = dataclasses.replace(cfg, images=settings)
    assert analyze_images(_modal("http://x/product/1.jpg"), custom).status is Status.SUCCESS


def test_collect_candidates_with_custom_strategies(cfg):
    calls = []

    def empty(html, patterns, settings):
        calls.append("empty")
        return []

    def fixed(html, patterns, settings):
        calls.append("fixed")
        return ["http://x/product/9.jpg"]

    def never(html, patterns, settings):
        calls.append("never")
        return ["unused"]

    found = collect_candidates("", DEFAULT_PATTERNS, cfg.images, [empty, fixed, never])
    assert found == ["http://x/product/9.jpg"]
    assert calls == ["empty", "fixed"]


def test_document_images_ignores_unquoted_src(cfg):
    assert document_images("<img src=http://x/product/1.jpg>", DEFAULT_PATTERNS, cfg.images) == []
