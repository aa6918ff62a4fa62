"""
Recommendation Engine - Fixed rule table evaluated against site signals.

Every matching rule fires (no short-circuit); the result is stably sorted by
priority. New rules are appended to RULES.
"""
from dataclasses import dataclass
from typing import Callable, List, Sequence

from auditor.schemas.audit_result import Effort, Priority, Recommendation, SiteSignals


PRIORITY_RANK = {"critical": 0, "high": 1, "medium": 2, "low": 3}


@dataclass(frozen=True)
class RecommendationRule:
    id: str
    category: str
    priority: Priority
    when: Callable[[SiteSignals], bool]
    issue: str
    recommendation: str
    impact: str
    effort: Effort

    def to_recommendation(self) -> Recommendation:
        return Recommendation(
            id=self.id,
            priority=self.priority,
            category=self.category,
            issue=self.issue,
            recommendation=self.recommendation,
            impact=self.impact,
            effort=self.effort,
        )


RULES: Sequence[RecommendationRule] = (
    RecommendationRule(
        id="ai-what-missing",
        category="AI Readiness",
        priority="high",
        when=lambda s: s.answerability.what_rate < 0.2,
        issue='"What you do" messaging is missing or rare across scanned pages.',
        recommendation='Add explicit "what we do" statements on key pages and in hero sections.',
        impact="High - AI systems struggle to classify offerings without clear statements.",
        effort="low",
    ),
    RecommendationRule(
        id="ai-who-missing",
        category="AI Readiness",
        priority="high",
        when=lambda s: s.answerability.who_rate < 0.2,
        issue='"Who it\'s for" messaging is missing or rare across scanned pages.',
        recommendation="Add target audience statements (teams, industries, personas) across primary pages.",
        impact="High - Audience clarity improves answerability and relevance.",
        effort="low",
    ),
    RecommendationRule(
        id="ai-how-missing",
        category="AI Readiness",
        priority="medium",
        when=lambda s: s.answerability.how_rate < 0.2,
        issue='"How it works" content is missing or rare across scanned pages.',
        recommendation='Publish "how it works" sections, feature workflows, or onboarding steps.',
        impact="Medium - Helps AI models explain product functionality.",
        effort="medium",
    ),
    RecommendationRule(
        id="structure-meta-missing",
        category="Structure",
        priority="high",
        when=lambda s: s.meta_rate < 0.6,
        issue="Meta descriptions are missing on many pages.",
        recommendation="Add unique meta descriptions for core pages and templates.",
        impact="High - Meta descriptions improve summarization and relevance signals.",
        effort="low",
    ),
    RecommendationRule(
        id="structure-h1-inconsistent",
        category="Structure",
        priority="medium",
        when=lambda s: s.h1_rate < 0.6,
        issue="H1 headings are inconsistent across scanned pages.",
        recommendation="Ensure every key page has a single, descriptive H1.",
        impact="Medium - Clear structure improves AI parsing and accessibility.",
        effort="low",
    ),
    RecommendationRule(
        id="tech-jsonld-missing",
        category="Technical Readiness",
        priority="high",
        when=lambda s: s.json_ld_rate == 0,
        issue="No JSON-LD structured data detected.",
        recommendation="Implement JSON-LD schema (Organization, Product/Service, FAQ where relevant).",
        impact="High - Structured data is a primary AI parsing signal.",
        effort="medium",
    ),
    RecommendationRule(
        id="tech-canonical-low",
        category="Technical Readiness",
        priority="medium",
        when=lambda s: s.canonical_rate < 0.6,
        issue="Canonical tags are missing on many pages.",
        recommendation="Add canonical tags to all indexable pages and templates.",
        impact="Medium - Canonicals help AI avoid duplicates and identify primary pages.",
        effort="low",
    ),
    RecommendationRule(
        id="tech-errors-high",
        category="Technical Readiness",
        priority="high",
        when=lambda s: s.error_rate > 0.15,
        issue="High error rate detected across scanned pages.",
        recommendation="Fix broken URLs, update redirects, and remove 4xx/5xx pages from navigation.",
        impact="High - Errors reduce crawl coverage and AI trust.",
        effort="medium",
    ),
    RecommendationRule(
        id="tech-sitemap-missing",
        category="Technical Readiness",
        priority="medium",
        when=lambda s: not s.used_sitemap,
        issue="Sitemap.xml was not detected or accessible.",
        recommendation="Publish and verify sitemap.xml, then submit it to search consoles.",
        impact="Medium - Sitemaps improve crawl coverage and determinism.",
        effort="low",
    ),
)


def _validate_rules(rules: Sequence[RecommendationRule]):
    """Rule ids must be unique and priorities known."""
    seen = set()
    for rule in rules:
        if rule.id in seen:
            raise ValueError(f"CRITICAL: duplicate recommendation rule id {rule.id!r}")
        if rule.priority not in PRIORITY_RANK:
            raise ValueError(f"CRITICAL: unknown priority {rule.priority!r} on rule {rule.id!r}")
        seen.add(rule.id)


_validate_rules(RULES)


def build_recommendations(
    signals: SiteSignals, rules: Sequence[RecommendationRule] = RULES
) -> List[Recommendation]:
    """Collect every matching rule, ordered critical → low, table order within a priority."""
    matched = [rule.to_recommendation() for rule in rules if rule.when(signals)]
    return sorted(matched, key=lambda rec: PRIORITY_RANK[rec.priority])
