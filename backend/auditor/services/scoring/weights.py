"""
Scoring Weights Configuration.

Axis formulas are linear in the site signals (structure, technical) or
stepped (content depth). Every axis can reach exactly 100.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class AIReadinessWeights:
    """Four answerability categories, 25 pts each."""
    per_category: int = 25
    coverage_target: float = 0.35  # page share earning full category points
    base_cap: int = 94  # headroom left for the homepage bonus
    homepage_what_bonus: int = 3
    homepage_how_bonus: int = 3


@dataclass(frozen=True)
class StructureWeights:
    title: int = 40
    h1: int = 35
    meta_description: int = 25


@dataclass(frozen=True)
class ContentDepthWeights:
    # (minimum average, points), checked top-down
    text_length_steps: Tuple[Tuple[int, int], ...] = ((6000, 75), (2500, 55), (1200, 40))
    text_length_floor: int = 20
    h2_steps: Tuple[Tuple[int, int], ...] = ((6, 25), (3, 15), (1, 5))
    h2_floor: int = 0


@dataclass(frozen=True)
class TechnicalWeights:
    json_ld: int = 45
    canonical: int = 30
    error_free: int = 25


# Default weight instances
AI_READINESS_WEIGHTS = AIReadinessWeights()
STRUCTURE_WEIGHTS = StructureWeights()
CONTENT_DEPTH_WEIGHTS = ContentDepthWeights()
TECHNICAL_WEIGHTS = TechnicalWeights()

# Scoring version
SCORING_VERSION = "site-1.0"


# --- Validation (Prevent Drift) ---
def _validate_weights():
    """Ensure every axis tops out at exactly 100."""
    w_ai = AI_READINESS_WEIGHTS
    total_ai = min(w_ai.per_category * 4, w_ai.base_cap) + w_ai.homepage_what_bonus + w_ai.homepage_how_bonus
    if total_ai != 100:
        raise ValueError(f"CRITICAL: AI readiness maximum is {total_ai}, expected 100")

    w_st = STRUCTURE_WEIGHTS
    total_st = w_st.title + w_st.h1 + w_st.meta_description
    if total_st != 100:
        raise ValueError(f"CRITICAL: Structure weights sum to {total_st}, expected 100")

    w_cd = CONTENT_DEPTH_WEIGHTS
    total_cd = w_cd.text_length_steps[0][1] + w_cd.h2_steps[0][1]
    if total_cd != 100:
        raise ValueError(f"CRITICAL: Content depth maximum is {total_cd}, expected 100")

    w_te = TECHNICAL_WEIGHTS
    total_te = w_te.json_ld + w_te.canonical + w_te.error_free
    if total_te != 100:
        raise ValueError(f"CRITICAL: Technical weights sum to {total_te}, expected 100")


_validate_weights()
