"""
Explanation Builder - Narrate signals, scores and tier.

Thresholds here decide wording only; they are separate from the scoring
weights and never feed back into scores, grades or tier.
"""
from typing import List, Sequence

from auditor.schemas.audit_result import (
    AuditGrades,
    AuditScores,
    CategoryExplanation,
    CategoryExplanations,
    Explanations,
    SiteSignals,
    Tier,
)
from auditor.services.collectors.page_collector import PageSummary


ANSWERABILITY_TARGET = 0.35
TITLE_TARGET = 0.7
H1_TARGET = 0.7
META_TARGET = 0.6
TEXT_LENGTH_TARGET = 2500
H2_TARGET = 3
CANONICAL_TARGET = 0.6
MAX_ERROR_RATE = 0.15


def format_count(rate: float, total_pages: int) -> str:
    """'N/M' with N recovered from the rate."""
    total = total_pages or 1
    return f"{round(rate * total)}/{total}"


def percent(rate: float) -> int:
    return round(rate * 100)


def _category(strengths: List[str], gaps: List[str], when_clean: str, when_gaps: str) -> CategoryExplanation:
    return CategoryExplanation(
        strengths=strengths,
        gaps=gaps,
        improvements=[when_gaps if gaps else when_clean],
    )


def _ai_readiness(signals: SiteSignals, total_pages: int) -> CategoryExplanation:
    a = signals.answerability
    strengths, gaps = [], []
    statements = (
        (a.what_rate, 'Clear "what you do" messaging appears on {} pages.',
         '"What you do" messaging appears on only {} pages.'),
        (a.who_rate, '"Who it\'s for" messaging appears on {} pages.',
         '"Who it\'s for" messaging appears on only {} pages.'),
        (a.how_rate, '"How it works" details appear on {} pages.',
         '"How it works" details appear on only {} pages.'),
        (a.trust_rate, "Trust signals appear on {} pages.",
         "Trust signals appear on only {} pages."),
    )
    for rate, strength, gap in statements:
        if rate >= ANSWERABILITY_TARGET:
            strengths.append(strength.format(format_count(rate, total_pages)))
        else:
            gaps.append(gap.format(format_count(rate, total_pages)))

    return _category(
        strengths, gaps,
        "Expand high-performing messaging across more key pages to lock in AI comprehension.",
        'Add explicit "what/who/how/trust" statements to priority pages to reach 35% coverage.',
    )


def _structure(signals: SiteSignals) -> CategoryExplanation:
    strengths, gaps = [], []

    if signals.title_rate >= TITLE_TARGET:
        strengths.append(f"Titles are present on {percent(signals.title_rate)}% of pages.")
    else:
        gaps.append(f"Titles are missing on {100 - percent(signals.title_rate)}% of pages.")

    if signals.h1_rate >= H1_TARGET:
        strengths.append(f"H1 headings appear on {percent(signals.h1_rate)}% of pages.")
    else:
        gaps.append(f"H1 headings are inconsistent across {100 - percent(signals.h1_rate)}% of pages.")

    if signals.meta_rate >= META_TARGET:
        strengths.append(f"Meta descriptions appear on {percent(signals.meta_rate)}% of pages.")
    else:
        gaps.append(f"Meta descriptions are missing on {100 - percent(signals.meta_rate)}% of pages.")

    return _category(
        strengths, gaps,
        "Standardize title and meta copy lengths for consistent AI parsing.",
        "Fill missing titles, H1s, and meta descriptions on key pages.",
    )


def _content_depth(signals: SiteSignals) -> CategoryExplanation:
    strengths, gaps = [], []
    avg_text = round(signals.avg_text_length)
    avg_h2 = f"{signals.avg_h2_count:.1f}"

    if signals.avg_text_length >= TEXT_LENGTH_TARGET:
        strengths.append(f"Average page text length is {avg_text} characters.")
    else:
        gaps.append(f"Average page text length is {avg_text} characters (target {TEXT_LENGTH_TARGET}+).")

    if signals.avg_h2_count >= H2_TARGET:
        strengths.append(f"Average H2 count is {avg_h2} per page.")
    else:
        gaps.append(f"Average H2 count is {avg_h2} per page (target {H2_TARGET}+).")

    return _category(
        strengths, gaps,
        "Expand content modules to deepen topic coverage and maintain freshness.",
        f"Add depth sections (H2/H3) and expand copy to exceed {TEXT_LENGTH_TARGET} characters.",
    )


def _technical_readiness(signals: SiteSignals) -> CategoryExplanation:
    strengths, gaps = [], []

    if signals.json_ld_rate > 0:
        strengths.append(f"JSON-LD is present on {percent(signals.json_ld_rate)}% of pages.")
    else:
        gaps.append("No JSON-LD detected on scanned pages.")

    if signals.canonical_rate >= CANONICAL_TARGET:
        strengths.append(f"Canonical tags appear on {percent(signals.canonical_rate)}% of pages.")
    else:
        gaps.append(f"Canonical tags are missing on {100 - percent(signals.canonical_rate)}% of pages.")

    if signals.error_rate <= MAX_ERROR_RATE:
        strengths.append(f"Error rate is {percent(signals.error_rate)}%.")
    else:
        gaps.append(f"Error rate is {percent(signals.error_rate)}% (target <= {percent(MAX_ERROR_RATE)}%).")

    return _category(
        strengths, gaps,
        "Extend schema coverage and keep canonical tags consistent across all templates.",
        "Add JSON-LD, fix canonical gaps, and resolve error pages.",
    )


def build_tier_why(scores: AuditScores, grades: AuditGrades, tier: Tier) -> List[str]:
    why = [f"Overall AI readiness is {scores.overall}/100 ({grades.overall})."]
    if tier == "Gold":
        if grades.overall == "B":
            why.append("Content depth and technical readiness meet minimum C thresholds.")
    elif tier == "Silver":
        why.append("Improve technical readiness and content depth to reach Gold.")
    else:
        why.append("Core answerability and technical readiness need improvement to move beyond Bronze.")
    return why


def build_explanations(
    pages: Sequence[PageSummary],
    signals: SiteSignals,
    scores: AuditScores,
    grades: AuditGrades,
    tier: Tier,
) -> Explanations:
    """Strengths, gaps and one improvement per axis, plus the tier rationale."""
    return Explanations(
        tier_why=build_tier_why(scores, grades, tier),
        per_category=CategoryExplanations(
            ai_readiness=_ai_readiness(signals, len(pages)),
            structure=_structure(signals),
            content_depth=_content_depth(signals),
            technical_readiness=_technical_readiness(signals),
        ),
    )
