"""
Audit Runner - Main orchestrator for site readiness audits.

Coordinates discovery, signal aggregation, scoring, grading, explanations,
recommendations and the result cache.
"""
from typing import Optional

from auditor.config import CrawlBudget, settings
from auditor.logger import logger
from auditor.schemas.audit_result import AuditResult, AuditScope
from auditor.services.explanations import build_explanations
from auditor.services.page_fetcher import get_origin, normalize_site_url
from auditor.services.recommendations import build_recommendations
from auditor.services.result_cache import ResultCache
from auditor.services.scoring.answerability import (
    AnswerabilityClassifier,
    KeywordAnswerabilityClassifier,
)
from auditor.services.scoring.engine import ScoringEngine
from auditor.services.scoring.grades import compute_grades, compute_tier
from auditor.services.scoring.signals import SignalAggregator
from auditor.services.scoring.weights import SCORING_VERSION
from auditor.services.site_discoverer import SiteDiscoverer


class SiteAuditRunner:
    """Orchestrates the complete audit process."""

    def __init__(
        self,
        cache: Optional[ResultCache] = None,
        discoverer: Optional[SiteDiscoverer] = None,
        classifier: Optional[AnswerabilityClassifier] = None,
        budget: Optional[CrawlBudget] = None,
    ):
        self.budget = budget or (discoverer.budget if discoverer else CrawlBudget.from_settings(settings))
        self.cache = cache if cache is not None else ResultCache()
        self.discoverer = discoverer or SiteDiscoverer(budget=self.budget)
        self.classifier = classifier or KeywordAnswerabilityClassifier()
        self.signal_aggregator = SignalAggregator(self.classifier)
        self.scoring_engine = ScoringEngine(self.classifier)

    async def audit_site(self, site_url: str, force_refresh: bool = False) -> AuditResult:
        """
        Audit a site, reusing a cached result for its origin within the TTL.

        Args:
            site_url: Bare domain or full URL
            force_refresh: Crawl again even if a fresh result is cached

        Returns:
            AuditResult (best effort; unreachable sites score near zero)

        Raises:
            InvalidSiteUrlError: if no origin can be derived from site_url
        """
        url = normalize_site_url(site_url)
        origin = get_origin(url)

        if not force_refresh:
            cached = self.cache.get(origin)
            if cached is not None:
                logger.info(f"Cache hit for {origin}")
                return cached

        async with self.cache.origin_lock(origin):
            # Another caller may have finished the crawl while we waited
            if not force_refresh:
                cached = self.cache.get(origin)
                if cached is not None:
                    logger.info(f"Cache hit for {origin} after waiting on in-flight audit")
                    return cached

            result = await self._run(url, origin)
            self.cache.set(origin, result)
            return result

    async def _run(self, url: str, origin: str) -> AuditResult:
        logger.info(f"Starting audit for {origin} (seed={url}, scoring={SCORING_VERSION})")

        crawl = await self.discoverer.crawl(url)
        pages = crawl.pages

        signals = self.signal_aggregator.aggregate(pages, crawl.used_sitemap)
        scores = self.scoring_engine.score(pages, url, origin, signals)
        grades = compute_grades(scores)
        tier = compute_tier(grades)
        explanations = build_explanations(pages, signals, scores, grades, tier)
        recommendations = build_recommendations(signals)

        logger.info(
            f"Completed audit for {origin}: {len(pages)} pages in {crawl.duration_ms}ms, "
            f"overall={scores.overall} ({grades.overall}), tier={tier}, "
            f"{len(recommendations)} recommendations"
        )

        return AuditResult(
            url=origin,
            scope=AuditScope(
                max_pages=self.budget.max_pages,
                scanned_pages=len(pages),
                used_sitemap=crawl.used_sitemap,
                duration_ms=crawl.duration_ms,
            ),
            scores=scores,
            grades=grades,
            tier=tier,
            explanations=explanations,
            recommendations=recommendations,
            signals=signals,
        )


# Process-wide runner for the HTTP surface and scripts
_default_runner: Optional[SiteAuditRunner] = None


def get_default_runner() -> SiteAuditRunner:
    """Get the shared runner instance (singleton)."""
    global _default_runner
    if _default_runner is None:
        _default_runner = SiteAuditRunner()
    return _default_runner


async def audit_site(site_url: str, force_refresh: bool = False) -> AuditResult:
    """Audit a site with the shared runner and cache."""
    return await get_default_runner().audit_site(site_url, force_refresh=force_refresh)
