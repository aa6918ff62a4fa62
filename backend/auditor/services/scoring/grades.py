"""
Grades & Tier - Letter grades from scores, tier from grades.

Rules:
- 100 → A+, ≥90 → A, ≥80 → B, ≥70 → C, ≥60 → D, else F
- Gold: overall A+/A, or overall B with technical and content depth above D
- Silver: overall B or C
- Bronze: everything else
"""

from auditor.schemas.audit_result import AuditGrades, AuditScores, Tier


GRADE_BREAKPOINTS = ((90, "A"), (80, "B"), (70, "C"), (60, "D"))
FAILING_GRADES = {"D", "F"}


def to_grade(score: int) -> str:
    if score >= 100:
        return "A+"
    for minimum, grade in GRADE_BREAKPOINTS:
        if score >= minimum:
            return grade
    return "F"


def compute_grades(scores: AuditScores) -> AuditGrades:
    return AuditGrades(
        ai_readiness=to_grade(scores.ai_readiness),
        structure=to_grade(scores.structure),
        content_depth=to_grade(scores.content_depth),
        technical_readiness=to_grade(scores.technical_readiness),
        overall=to_grade(scores.overall),
    )


def compute_tier(grades: AuditGrades) -> Tier:
    """Tier depends on grades only, never on raw scores."""
    overall = grades.overall

    if overall in ("A+", "A"):
        return "Gold"
    if (
        overall == "B"
        and grades.technical_readiness not in FAILING_GRADES
        and grades.content_depth not in FAILING_GRADES
    ):
        return "Gold"
    if overall in ("B", "C"):
        return "Silver"
    return "Bronze"
