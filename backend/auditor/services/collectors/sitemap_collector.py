"""
Sitemap Collector - Fetch and parse {origin}/sitemap.xml.

Checks:
- Sitemap reachable with a success status
- Document parses as a <urlset>
- <url><loc> entries belong to the audited origin
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urldefrag, urlsplit

from auditor.logger import logger
from auditor.services.page_fetcher import FetchSuccess, PageFetcher, get_origin


@dataclass
class SitemapData:
    """Parsed sitemap data."""
    exists: bool = False
    url: Optional[str] = None
    urls: List[str] = field(default_factory=list)  # same-origin, sorted
    skipped: int = 0  # entries dropped for origin mismatch or bad <loc>
    error: Optional[str] = None

    @property
    def usable(self) -> bool:
        return self.exists and bool(self.urls)


def canonical_page_url(url: str) -> str:
    """Lowercase scheme and host, drop default port and fragment, and give a bare origin its root path."""
    url, _ = urldefrag(url.strip())
    parts = urlsplit(url)
    canonical = get_origin(url) + (parts.path or "/")
    if parts.query:
        canonical += "?" + parts.query
    return canonical


def _localname(tag: str) -> str:
    if "}" in tag:
        return tag.rsplit("}", 1)[-1]
    return tag


class SitemapCollector:
    """Collector for sitemap.xml."""

    SITEMAP_PATH = "/sitemap.xml"

    def __init__(self, fetcher: PageFetcher):
        self.fetcher = fetcher

    async def fetch(self, origin: str) -> SitemapData:
        """Fetch and parse the sitemap for an origin.

        Args:
            origin: scheme://host[:port] of the audited site

        Returns:
            SitemapData; `usable` is False whenever link traversal should
            be used instead
        """
        sitemap_url = origin + self.SITEMAP_PATH
        result = await self.fetcher.fetch(sitemap_url)

        if not isinstance(result, FetchSuccess):
            logger.warning(f"Sitemap unreachable at {sitemap_url}: {result.reason}")
            return SitemapData(exists=False, url=sitemap_url, error=result.error or result.reason)

        if not result.is_success or not result.html.strip():
            logger.info(f"No sitemap at {sitemap_url} (HTTP {result.status_code})")
            return SitemapData(exists=False, url=sitemap_url, error=f"HTTP {result.status_code}")

        data = self.parse(result.html, origin)
        data.url = sitemap_url
        logger.info(
            f"Sitemap {sitemap_url}: {len(data.urls)} matching URLs, {data.skipped} skipped"
        )
        return data

    def parse(self, xml_text: str, origin: str) -> SitemapData:
        """Parse a <urlset> document, keeping entries on `origin`."""
        try:
            root = ET.fromstring(xml_text.strip())
        except ET.ParseError as e:
            logger.warning(f"Invalid sitemap XML: {e}")
            return SitemapData(exists=False, error=f"Invalid XML: {e}")

        if _localname(root.tag) != "urlset":
            return SitemapData(exists=True, error=f"Unsupported root element: {_localname(root.tag)}")

        urls = set()
        skipped = 0
        for url_node in root:
            if _localname(url_node.tag) != "url":
                continue
            loc = next(
                (child.text.strip() for child in url_node
                 if _localname(child.tag) == "loc" and child.text and child.text.strip()),
                None,
            )
            if loc is None:
                skipped += 1
                continue
            try:
                if not loc.lower().startswith(("http://", "https://")) or get_origin(loc) != origin:
                    skipped += 1
                    continue
            except ValueError:
                skipped += 1
                continue
            urls.add(canonical_page_url(loc))

        return SitemapData(exists=True, urls=sorted(urls), skipped=skipped)
