"""
Signal Aggregator - Reduce page summaries to origin-level rates.
"""
from typing import Optional, Sequence

from auditor.schemas.audit_result import Answerability, SiteSignals
from auditor.services.collectors.page_collector import PageSummary
from auditor.services.scoring.answerability import (
    AnswerabilityClassifier,
    KeywordAnswerabilityClassifier,
)


# Titles of 1-2 characters are treated as placeholders
MIN_TITLE_LENGTH = 3


class SignalAggregator:
    """Computes SiteSignals from one crawl."""

    def __init__(self, classifier: Optional[AnswerabilityClassifier] = None):
        self.classifier = classifier or KeywordAnswerabilityClassifier()

    def aggregate(self, pages: Sequence[PageSummary], used_sitemap: bool) -> SiteSignals:
        total = len(pages) or 1

        def rate(predicate) -> float:
            return sum(1 for page in pages if predicate(page)) / total

        return SiteSignals(
            title_rate=rate(lambda p: len(p.title.strip()) >= MIN_TITLE_LENGTH),
            h1_rate=rate(lambda p: p.h1_count >= 1),
            meta_rate=rate(lambda p: p.has_meta_description),
            canonical_rate=rate(lambda p: p.has_canonical_tag),
            json_ld_rate=rate(lambda p: p.has_structured_data),
            error_rate=rate(lambda p: p.is_error),
            avg_text_length=sum(len(p.visible_text) for p in pages) / total,
            avg_h2_count=sum(p.h2_count for p in pages) / total,
            answerability=self.answerability(pages),
            used_sitemap=used_sitemap,
        )

    def answerability(self, pages: Sequence[PageSummary]) -> Answerability:
        """Rates over successfully fetched pages only."""
        ok_pages = [page for page in pages if page.is_ok]
        total = len(ok_pages) or 1

        counts = {"what": 0, "who": 0, "how": 0, "trust": 0}
        for page in ok_pages:
            for category, matched in self.classifier.classify(page.visible_text).items():
                if matched and category in counts:
                    counts[category] += 1

        return Answerability(
            what_rate=counts["what"] / total,
            who_rate=counts["who"] / total,
            how_rate=counts["how"] / total,
            trust_rate=counts["trust"] / total,
        )
