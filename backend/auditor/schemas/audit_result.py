"""
Pydantic schemas for audit results.

Serialized with camelCase aliases (`model_dump(by_alias=True)`); downstream
report and dashboard consumers read these names verbatim.
"""

from typing import List, Literal
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


Tier = Literal["Gold", "Silver", "Bronze"]
Priority = Literal["critical", "high", "medium", "low"]
Effort = Literal["low", "medium", "high"]


class _ResultModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Answerability(_ResultModel):
    """Share of fetched pages answering each question."""
    what_rate: float = Field(0.0, ge=0, le=1)
    who_rate: float = Field(0.0, ge=0, le=1)
    how_rate: float = Field(0.0, ge=0, le=1)
    trust_rate: float = Field(0.0, ge=0, le=1)


class SiteSignals(_ResultModel):
    """Origin-level aggregate of the scanned pages."""
    title_rate: float = Field(0.0, ge=0, le=1)
    h1_rate: float = Field(0.0, ge=0, le=1)
    meta_rate: float = Field(0.0, ge=0, le=1)
    canonical_rate: float = Field(0.0, ge=0, le=1)
    json_ld_rate: float = Field(0.0, ge=0, le=1)
    error_rate: float = Field(0.0, ge=0, le=1)
    avg_text_length: float = Field(0.0, ge=0)
    avg_h2_count: float = Field(0.0, ge=0)
    answerability: Answerability = Field(default_factory=Answerability)
    used_sitemap: bool = False


class AuditScores(_ResultModel):
    """Score breakdown."""
    ai_readiness: int = Field(..., ge=0, le=100)
    structure: int = Field(..., ge=0, le=100)
    content_depth: int = Field(..., ge=0, le=100)
    technical_readiness: int = Field(..., ge=0, le=100)
    overall: int = Field(..., ge=0, le=100)


class AuditGrades(_ResultModel):
    """Letter grade per score."""
    ai_readiness: str
    structure: str
    content_depth: str
    technical_readiness: str
    overall: str


class CategoryExplanation(_ResultModel):
    strengths: List[str] = Field(default_factory=list)
    gaps: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)


class CategoryExplanations(_ResultModel):
    ai_readiness: CategoryExplanation
    structure: CategoryExplanation
    content_depth: CategoryExplanation
    technical_readiness: CategoryExplanation


class Explanations(_ResultModel):
    tier_why: List[str] = Field(default_factory=list)
    per_category: CategoryExplanations


class Recommendation(_ResultModel):
    """One remediation action."""
    # Rule id for lookups; not part of the serialized output
    id: str = Field(..., exclude=True)
    priority: Priority
    category: str
    issue: str
    recommendation: str
    impact: str
    effort: Effort


class AuditScope(_ResultModel):
    max_pages: int
    scanned_pages: int
    used_sitemap: bool
    duration_ms: int


class AuditResult(_ResultModel):
    """Complete audit response."""
    # Origin of the audited site
    url: str

    scope: AuditScope
    scores: AuditScores
    grades: AuditGrades
    tier: Tier
    explanations: Explanations
    recommendations: List[Recommendation] = Field(default_factory=list)
    signals: SiteSignals

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "url": "https://example.com",
                "scope": {"maxPages": 20, "scannedPages": 12, "usedSitemap": True, "durationMs": 4210},
                "scores": {
                    "aiReadiness": 72,
                    "structure": 88,
                    "contentDepth": 55,
                    "technicalReadiness": 61,
                    "overall": 72
                },
                "grades": {
                    "aiReadiness": "C",
                    "structure": "B",
                    "contentDepth": "F",
                    "technicalReadiness": "D",
                    "overall": "C"
                },
                "tier": "Silver"
            }
        },
    )
