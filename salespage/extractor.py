"""Fetch a sales page and turn it into a ProductRecord.

``extract_page_data`` never raises: a page that can't be fetched or parsed
degrades to the default record so the chat built on top of it keeps working.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import urljoin

import requests  # type: ignore[import-untyped]

from salespage.config import FETCH_VIA_PROXY, HEADERS, MAX_REDIRECTS, PROXY_URL, REQUEST_TIMEOUT
from salespage.fields import extract_fields
from salespage.logging_config import get_logger, log_extraction_event
from salespage.models import DEFAULTED, EXTRACTED, ExtractionResult, ProductRecord
from salespage.url_validation import validate_url

__all__ = [
    "PageResponse",
    "FetchError",
    "Fetcher",
    "create_session",
    "decode_body",
    "fetch_page",
    "extract_page_data",
    "extract",
]

logger = get_logger("extractor")

# Module-level session for connection reuse
_session: Optional[requests.Session] = None


@dataclass(frozen=True)
class PageResponse:
    """Raw result of fetching one page."""

    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class FetchError(Exception):
    """Raised when a page fetch returns something we can't use."""
    pass


Fetcher = Callable[[str], PageResponse]


def create_session() -> requests.Session:
    """Create a requests Session with browser-like headers."""
    session = requests.Session()
    session.headers.update(HEADERS)
    session.headers.setdefault("Accept-Encoding", "gzip, deflate")
    return session


def _get_session() -> requests.Session:
    global _session
    if _session is None:
        _session = create_session()
    return _session


def decode_body(resp: requests.Response) -> str:
    """Response body as text, assuming UTF-8 when the server names no charset.

    requests falls back to ISO-8859-1 for ``text/html`` without a charset,
    while most landing pages only declare UTF-8 in ``<meta charset>``.
    """
    content_type = resp.headers.get("Content-Type") or ""
    if "charset" in content_type.lower():
        return str(resp.text)
    try:
        return resp.content.decode("utf-8")
    except UnicodeDecodeError:
        resp.encoding = resp.apparent_encoding
        return str(resp.text)


def _get_following_redirects(
    sess: requests.Session, url: str, timeout: float
) -> requests.Response:
    """GET ``url``, validating every redirect target before following it."""
    for _ in range(MAX_REDIRECTS + 1):
        resp = sess.get(url, timeout=timeout, allow_redirects=False)
        if not resp.is_redirect:
            return resp
        url = validate_url(urljoin(url, resp.headers.get("Location", "")))
        logger.debug(f"Following redirect to {url}")
    raise FetchError(f"Too many redirects fetching {url}")


def fetch_page(
    url: str,
    timeout: float = REQUEST_TIMEOUT,
    session: Optional[requests.Session] = None,
    use_proxy: bool = FETCH_VIA_PROXY,
) -> PageResponse:
    """Single HTTP GET for ``url`` with a hard timeout. No retries.

    Redirects are followed by hand, up to MAX_REDIRECTS, and each target
    goes through ``validate_url``.

    With ``use_proxy`` the page goes through the AllOrigins proxy, which
    wraps the HTML in a JSON envelope (``contents`` plus the upstream
    ``status.http_code``).

    Raises:
        requests.RequestException: transport errors and timeouts
        URLValidationError: a redirect points somewhere we won't fetch
        FetchError: too many redirects, or the proxy envelope is malformed
    """
    sess = session or _get_session()

    if not use_proxy:
        resp = _get_following_redirects(sess, url, timeout)
        return PageResponse(status_code=resp.status_code, text=decode_body(resp))

    resp = sess.get(PROXY_URL, params={"url": url}, timeout=timeout)
    if not 200 <= resp.status_code < 300:
        return PageResponse(status_code=resp.status_code, text="")

    try:
        envelope = resp.json()
    except ValueError as e:
        raise FetchError(f"Proxy returned invalid JSON for {url}") from e

    contents = envelope.get("contents") if isinstance(envelope, dict) else None
    if not isinstance(contents, str):
        raise FetchError(f"Proxy response for {url} has no contents")

    upstream_status = (envelope.get("status") or {}).get("http_code") or resp.status_code
    return PageResponse(status_code=int(upstream_status), text=contents)


def extract_page_data(url: str, fetch: Optional[Fetcher] = None) -> ExtractionResult:
    """Fetch ``url`` once and extract its fields.

    Any failure (invalid URL, transport error, timeout, non-2xx status or an
    exception while extracting) is logged and turned into the default record
    for ``url``.
    """
    fetch = fetch or fetch_page
    logger.info(f"Extracting page data from {url}")

    try:
        target = validate_url(url)
        page = fetch(target)
        if not page.ok:
            raise FetchError(f"HTTP {page.status_code} fetching {target}")
        record = extract_fields(page.text, url)
    except Exception as e:
        logger.warning(f"Extraction failed for {url}, using defaults: {e}")
        log_extraction_event(
            "extraction_failed",
            {"url": url, "error": str(e), "error_type": type(e).__name__},
            level=logging.WARNING,
        )
        return ExtractionResult(
            record=ProductRecord.default(url),
            source=DEFAULTED,
            error=str(e),
        )

    logger.info(f"Extraction complete for {url}: {record.title}")
    log_extraction_event(
        "extraction_complete",
        {
            "url": url,
            "title": record.title,
            "benefits_count": len(record.benefits),
            "testimonials_count": len(record.testimonials),
        },
    )
    return ExtractionResult(record=record, source=EXTRACTED)


def extract(url: str, fetch: Optional[Fetcher] = None) -> ProductRecord:
    """Total version of ``extract_page_data`` that returns only the record."""
    return extract_page_data(url, fetch).record
