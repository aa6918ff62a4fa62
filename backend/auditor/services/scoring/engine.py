"""
Scoring Engine - Map site signals to four 0-100 axis scores.

Axes:
- AI readiness (answerability coverage + homepage bonus)
- Structure (titles, H1s, meta descriptions)
- Content depth (text length and H2 steps)
- Technical readiness (JSON-LD, canonicals, error rate)

Overall currently mirrors AI readiness.
"""

import math
from typing import Optional, Sequence

from auditor.logger import logger
from auditor.schemas.audit_result import Answerability, AuditScores, SiteSignals
from auditor.services.collectors.page_collector import PageSummary
from auditor.services.collectors.sitemap_collector import canonical_page_url
from auditor.services.scoring.answerability import (
    AnswerabilityClassifier,
    KeywordAnswerabilityClassifier,
)
from auditor.services.scoring.weights import (
    AI_READINESS_WEIGHTS,
    CONTENT_DEPTH_WEIGHTS,
    STRUCTURE_WEIGHTS,
    TECHNICAL_WEIGHTS,
)


def clamp_score(score: float) -> int:
    """Clamp to [0, 100] and round half up."""
    clamped = max(0.0, min(100.0, score))
    return int(math.floor(clamped + 0.5))


def step_points(value: float, steps, floor: int) -> int:
    for minimum, points in steps:
        if value >= minimum:
            return points
    return floor


def find_homepage(
    pages: Sequence[PageSummary], seed_url: str, origin: str
) -> Optional[PageSummary]:
    """First successfully fetched page at the origin root or the seed."""
    candidates = {origin, origin + "/", seed_url, canonical_page_url(seed_url)}
    return next((page for page in pages if page.is_ok and page.url in candidates), None)


class ScoringEngine:
    """Main scoring orchestrator."""

    def __init__(self, classifier: Optional[AnswerabilityClassifier] = None):
        self.classifier = classifier or KeywordAnswerabilityClassifier()

    def score(
        self,
        pages: Sequence[PageSummary],
        seed_url: str,
        origin: str,
        signals: SiteSignals,
    ) -> AuditScores:
        """Compute all axis scores.

        Returns:
            AuditScores with every value an int in [0, 100]
        """
        ai_readiness = self.ai_readiness(pages, seed_url, origin, signals.answerability)
        structure = self.structure(signals)
        content_depth = self.content_depth(signals)
        technical_readiness = self.technical_readiness(signals)

        logger.info(
            f"Scores: ai={ai_readiness}, structure={structure}, "
            f"content={content_depth}, technical={technical_readiness}"
        )

        return AuditScores(
            ai_readiness=ai_readiness,
            structure=structure,
            content_depth=content_depth,
            technical_readiness=technical_readiness,
            overall=ai_readiness,
        )

    def ai_readiness(
        self,
        pages: Sequence[PageSummary],
        seed_url: str,
        origin: str,
        answerability: Answerability,
    ) -> int:
        w = AI_READINESS_WEIGHTS

        def category_points(rate: float) -> float:
            return min(1.0, rate / w.coverage_target) * w.per_category

        score = (
            category_points(answerability.what_rate)
            + category_points(answerability.who_rate)
            + category_points(answerability.how_rate)
            + category_points(answerability.trust_rate)
        )
        score = min(w.base_cap, score)

        home = find_homepage(pages, seed_url, origin)
        if home is not None:
            matched = self.classifier.classify(home.visible_text)
            if matched.get("what"):
                score += w.homepage_what_bonus
            if matched.get("how"):
                score += w.homepage_how_bonus

        return clamp_score(score)

    def structure(self, signals: SiteSignals) -> int:
        w = STRUCTURE_WEIGHTS
        return clamp_score(
            w.title * signals.title_rate
            + w.h1 * signals.h1_rate
            + w.meta_description * signals.meta_rate
        )

    def content_depth(self, signals: SiteSignals) -> int:
        w = CONTENT_DEPTH_WEIGHTS
        text_points = step_points(signals.avg_text_length, w.text_length_steps, w.text_length_floor)
        h2_points = step_points(signals.avg_h2_count, w.h2_steps, w.h2_floor)
        return clamp_score(text_points + h2_points)

    def technical_readiness(self, signals: SiteSignals) -> int:
        w = TECHNICAL_WEIGHTS
        return clamp_score(
            w.json_ld * signals.json_ld_rate
            + w.canonical * signals.canonical_rate
            + w.error_free * (1 - signals.error_rate)
        )
