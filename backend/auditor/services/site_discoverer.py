"""
Site Discoverer - Decide which pages to scan and scan them.

Strategy:
1. Sitemap-first: {origin}/sitemap.xml, same-origin entries, sorted, capped
2. Fallback: breadth-first traversal of same-origin links from the seed

Sitemap pages are fetched in waves of at most `concurrency` URLs and recorded
in dispatch order. Link traversal fetches one page at a time, always taking
the lexicographically smallest queued URL, since the next pick depends on the
links just found.
"""
import asyncio
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from auditor.config import CrawlBudget, settings
from auditor.logger import logger
from auditor.services.collectors.page_collector import PageCollector, PageSummary
from auditor.services.collectors.sitemap_collector import SitemapCollector, canonical_page_url
from auditor.services.page_fetcher import FetchResult, FetchSuccess, PageFetcher, get_origin


@dataclass(frozen=True)
class CrawlResult:
    """Output of the discovery + fetch phase."""
    pages: List[PageSummary] = field(default_factory=list)
    used_sitemap: bool = False
    duration_ms: int = 0


class SiteDiscoverer:
    """Crawls a bounded page sample of one site."""

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        collector: Optional[PageCollector] = None,
        budget: Optional[CrawlBudget] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.budget = budget or CrawlBudget.from_settings(settings)
        self.fetcher = fetcher or PageFetcher(timeout_ms=self.budget.page_timeout_ms)
        self.collector = collector or PageCollector()
        self.sitemap_collector = SitemapCollector(self.fetcher)
        self.clock = clock

    async def crawl(self, seed_url: str) -> CrawlResult:
        """Scan the site behind an already-normalized seed URL."""
        started = self.clock()
        seed = canonical_page_url(seed_url)
        origin = get_origin(seed)

        sitemap = await self.sitemap_collector.fetch(origin)
        if sitemap.usable:
            logger.info(f"Crawling {origin} from sitemap ({len(sitemap.urls)} candidates)")
            pages = await self._crawl_list(sitemap.urls[:self.budget.max_pages], started)
            return CrawlResult(pages=pages, used_sitemap=True, duration_ms=self._elapsed_ms(started))

        logger.info(f"Crawling {origin} by link traversal from {seed}")
        pages = await self._crawl_links(seed, origin, started)
        return CrawlResult(pages=pages, used_sitemap=False, duration_ms=self._elapsed_ms(started))

    async def _crawl_list(self, urls: Sequence[str], started: float) -> List[PageSummary]:
        pages: List[PageSummary] = []
        for i in range(0, len(urls), self.budget.concurrency):
            if self._budget_exhausted(started):
                logger.warning(f"Crawl budget exhausted after {len(pages)} pages")
                break
            wave = list(urls[i:i + self.budget.concurrency])
            for url, result in await self._fetch_wave(wave):
                pages.append(self.collector.summarize(url, result))
        return pages

    async def _crawl_links(self, seed: str, origin: str, started: float) -> List[PageSummary]:
        # One page at a time: each page's links are queued before the next pick
        queue: Dict[str, int] = {seed: 0}  # url -> depth
        visited = set()
        pages: List[PageSummary] = []

        while queue and len(pages) < self.budget.max_pages:
            if self._budget_exhausted(started):
                logger.warning(f"Crawl budget exhausted after {len(pages)} pages")
                break

            url = min(queue)
            depth = queue.pop(url)
            visited.add(url)

            result = await self.fetcher.fetch(url)
            pages.append(self.collector.summarize(url, result))

            if depth >= self.budget.max_depth:
                continue
            if not isinstance(result, FetchSuccess) or not result.is_success or not result.html:
                continue

            for link in self.collector.extract_internal_links(result.html, url, origin):
                link = canonical_page_url(link)
                if link not in visited:
                    queue[link] = min(queue.get(link, depth + 1), depth + 1)

        return pages

    async def _fetch_wave(self, urls: List[str]) -> List[Tuple[str, FetchResult]]:
        results = await asyncio.gather(*(self.fetcher.fetch(url) for url in urls))
        return list(zip(urls, results))

    def _elapsed_ms(self, started: float) -> int:
        return int(round((self.clock() - started) * 1000))

    def _budget_exhausted(self, started: float) -> bool:
        return self._elapsed_ms(started) > self.budget.total_budget_ms
