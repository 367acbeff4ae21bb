"""
Page download through a list of public CORS-style proxies.

Each proxy is tried once, in order, with its own timeout. The first response
whose body looks like a real page (longer than `min_body_length`) wins.
"""

from __future__ import annotations

import logging
from typing import List, Optional
from urllib.parse import quote, urlparse

import requests

from .config import FetchSettings, get_config
from .logging_utils import log_event

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Every proxy candidate failed."""


def is_valid_url(value: str) -> bool:
    parsed = urlparse((value or "").strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _is_json_proxy(proxy: str) -> bool:
    # allorigins /get wraps the page in {"contents": ...}
    return "allorigins" in proxy


def proxy_urls(url: str, proxies: List[str]) -> List[str]:
    out = []
    for proxy in proxies:
        if _is_json_proxy(proxy):
            out.append(f"{proxy}{quote(url, safe='')}")
        else:
            out.append(f"{proxy}{url}")
    return out


def _body(proxy_url: str, response: requests.Response) -> str:
    if _is_json_proxy(proxy_url):
        data = response.json()
        contents = data.get("contents") if isinstance(data, dict) else None
        return contents if isinstance(contents, str) else ""
    return response.text or ""


def fetch_page_content(
    url: str,
    settings: Optional[FetchSettings] = None,
    session: Optional[requests.Session] = None,
) -> str:
    if not is_valid_url(url):
        raise ValueError(f"Invalid URL: {url!r}")

    settings = settings or get_config().fetch
    if not settings.proxies:
        raise FetchError("No proxies configured")
    if session is not None:
        return _try_proxies(url, settings, session)
    with requests.Session() as owned:
        return _try_proxies(url, settings, owned)


def _try_proxies(url: str, settings: FetchSettings, session: requests.Session) -> str:
    headers = {"User-Agent": settings.user_agent}

    last_error: Optional[str] = None
    for proxy_url in proxy_urls(url, list(settings.proxies)):
        try:
            log_event(logger, logging.INFO, "fetch_attempt", proxy_url=proxy_url)
            response = session.get(proxy_url, headers=headers, timeout=settings.timeout_seconds)
            response.raise_for_status()
            body = _body(proxy_url, response)
        except (requests.RequestException, ValueError) as exc:
            last_error = f"{proxy_url}: {exc}"
            log_event(logger, logging.WARNING, "fetch_attempt_failed", proxy_url=proxy_url, error=str(exc))
            continue

        if len(body) > settings.min_body_length:
            log_event(logger, logging.INFO, "fetch_succeeded", proxy_url=proxy_url, length=len(body))
            return body

        last_error = f"{proxy_url}: response too short ({len(body)} chars)"
        log_event(logger, logging.WARNING, "fetch_body_too_short", proxy_url=proxy_url, length=len(body))

    raise FetchError(f"Could not load {url} through any proxy (last error: {last_error})")
