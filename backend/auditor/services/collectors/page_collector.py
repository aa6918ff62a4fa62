"""
Page Collector - Reduce one fetched page to a structural digest.
"""
import re
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urljoin, urldefrag

from bs4 import BeautifulSoup

from auditor.config import settings
from auditor.logger import logger
from auditor.services.page_fetcher import FetchResult, FetchSuccess, get_origin


_WHITESPACE = re.compile(r"\s+")

SKIPPED_LINK_SCHEMES = ("mailto:", "tel:", "javascript:")


@dataclass(frozen=True)
class PageSummary:
    """One scanned page."""
    url: str
    status_code: int = 0  # 0 means the fetch failed
    title: str = ""
    has_meta_description: bool = False
    has_canonical_tag: bool = False
    h1_count: int = 0
    h2_count: int = 0
    has_structured_data: bool = False
    visible_text: str = ""

    @property
    def is_ok(self) -> bool:
        return 0 < self.status_code < 400

    @property
    def is_error(self) -> bool:
        return self.status_code == 0 or self.status_code >= 400


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


class PageCollector:
    """Builds PageSummary digests and internal link lists from HTML."""

    def __init__(self, max_text_chars: Optional[int] = None):
        self.max_text_chars = max_text_chars if max_text_chars is not None else settings.MAX_TEXT_CHARS

    def summarize(self, url: str, result: FetchResult) -> PageSummary:
        """Summarize a fetch outcome. Failures become zero-signal pages."""
        if not isinstance(result, FetchSuccess):
            return PageSummary(url=url)
        return self.collect(url, result.status_code, result.html)

    def collect(self, url: str, status_code: int, html: str) -> PageSummary:
        """Extract the digest from raw HTML."""
        soup = BeautifulSoup(html or "", "html.parser")

        # JSON-LD lives in <script>, so look before scripts are stripped
        has_structured_data = bool(soup.find_all(
            "script", attrs={"type": lambda t: bool(t) and t.strip().lower() == "application/ld+json"}
        ))

        for tag in soup.find_all(["script", "style", "noscript"]):
            tag.decompose()

        # Title
        title = ""
        title_tag = soup.find("title")
        if title_tag:
            title = title_tag.get_text().strip()

        # Meta description
        has_meta_description = bool(soup.find(
            "meta", attrs={"name": lambda n: bool(n) and n.strip().lower() == "description"}
        ))

        # Canonical
        has_canonical_tag = any(
            "canonical" in [r.lower() for r in (link.get("rel") or [])]
            for link in soup.find_all("link")
        )

        # Body text
        container = soup.body or soup
        text = normalize_whitespace(container.get_text(separator=" "))

        summary = PageSummary(
            url=url,
            status_code=status_code,
            title=title,
            has_meta_description=has_meta_description,
            has_canonical_tag=has_canonical_tag,
            h1_count=len(soup.find_all("h1")),
            h2_count=len(soup.find_all("h2")),
            has_structured_data=has_structured_data,
            visible_text=text[:self.max_text_chars],
        )
        logger.debug(
            f"Summarized {url}: status={status_code} h1={summary.h1_count} "
            f"h2={summary.h2_count} text={len(summary.visible_text)}"
        )
        return summary

    def extract_internal_links(self, html: str, base_url: str, origin: str) -> List[str]:
        """Return sorted, deduplicated same-origin links found in <a href>."""
        soup = BeautifulSoup(html or "", "html.parser")
        links = set()

        for anchor in soup.find_all("a", href=True):
            href = anchor["href"].strip()
            if not href or href.lower().startswith(SKIPPED_LINK_SCHEMES):
                continue
            try:
                resolved, _ = urldefrag(urljoin(base_url, href))
                if not resolved.lower().startswith(("http://", "https://")):
                    continue
                if get_origin(resolved) != origin:
                    continue
            except ValueError:
                # Malformed href (e.g. bad port or IPv6 literal)
                continue
            links.add(resolved)

        return sorted(links)
