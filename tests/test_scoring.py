"""Tests for signal aggregation, axis scores, grades and tier."""

from __future__ import annotations

import pytest

from auditor.schemas.audit_result import Answerability, AuditGrades, AuditScores, SiteSignals
from auditor.services.collectors.page_collector import PageSummary
from auditor.services.scoring.answerability import KeywordAnswerabilityClassifier
from auditor.services.scoring.engine import ScoringEngine, clamp_score, find_homepage
from auditor.services.scoring.grades import compute_grades, compute_tier, to_grade
from auditor.services.scoring.signals import SignalAggregator

from sitefixtures import ORIGIN


# Best first
GRADE_ORDER = ("A+", "A", "B", "C", "D", "F")


def _page(path: str = "/", status: int = 200, **fields) -> PageSummary:
    return PageSummary(url=f"{ORIGIN}{path}", status_code=status, **fields)


def _grades(overall: str, technical: str = "A", content: str = "A") -> AuditGrades:
    return AuditGrades(
        ai_readiness=overall,
        structure="A",
        content_depth=content,
        technical_readiness=technical,
        overall=overall,
    )


class TestAnswerabilityClassifier:
    def test_matches_case_insensitively(self) -> None:
        matched = KeywordAnswerabilityClassifier().classify("WE HELP you. Trusted By many.")
        assert matched == {"what": True, "who": False, "how": False, "trust": True}

    def test_custom_keywords(self) -> None:
        classifier = KeywordAnswerabilityClassifier(
            {"what": ["widgets"], "who": ["makers"], "how": ["steps"], "trust": ["warranty"]}
        )
        assert classifier.classify("Widgets for makers")["who"] is True
        assert classifier.classify("we help")["what"] is False

    def test_missing_category_rejected(self) -> None:
        with pytest.raises(ValueError):
            KeywordAnswerabilityClassifier({"what": ["x"]})


class TestSignalAggregator:
    def test_rates_over_all_scanned_pages(self) -> None:
        pages = [
            _page("/", title="Home", h1_count=1, h2_count=4, has_meta_description=True,
                  has_canonical_tag=True, has_structured_data=True,
                  visible_text="We help teams. How it works."),
            _page("/b", title="ab", visible_text="Built for teams"),
            _page("/gone", status=404, title="Not Found", visible_text="privacy policy"),
            _page("/down", status=0),
        ]
        signals = SignalAggregator().aggregate(pages, used_sitemap=True)

        assert signals.title_rate == 0.5
        assert signals.h1_rate == 0.25
        assert signals.meta_rate == 0.25
        assert signals.error_rate == 0.5
        assert signals.avg_h2_count == 1.0
        assert signals.used_sitemap is True

    def test_answerability_ignores_error_pages(self) -> None:
        pages = [
            _page("/", visible_text="We help teams. How it works."),
            _page("/b", visible_text="Built for teams"),
            _page("/gone", status=404, visible_text="privacy policy"),
        ]
        answerability = SignalAggregator().aggregate(pages, used_sitemap=False).answerability

        assert answerability.what_rate == 0.5
        assert answerability.who_rate == 0.5
        assert answerability.how_rate == 0.5
        assert answerability.trust_rate == 0.0

    def test_empty_crawl_yields_zero_rates(self) -> None:
        signals = SignalAggregator().aggregate([], used_sitemap=False)

        assert signals.title_rate == 0.0
        assert signals.error_rate == 0.0
        assert signals.avg_text_length == 0.0


class TestClampScore:
    @pytest.mark.parametrize("raw,expected", [(72.5, 73), (72.49, 72), (-3, 0), (120, 100), (0.0, 0)])
    def test_rounds_half_up_within_bounds(self, raw: float, expected: int) -> None:
        assert clamp_score(raw) == expected


class TestFindHomepage:
    def test_picks_origin_root(self) -> None:
        pages = [_page("/pricing"), _page("/")]
        assert find_homepage(pages, "https://example.com", ORIGIN).url == f"{ORIGIN}/"

    def test_failed_homepage_is_ignored(self) -> None:
        pages = [_page("/", status=0), _page("/pricing")]
        assert find_homepage(pages, "https://example.com", ORIGIN) is None


class TestScoringEngine:
    def _full_answerability(self) -> Answerability:
        return Answerability(what_rate=0.35, who_rate=0.35, how_rate=0.35, trust_rate=0.35)

    def test_ai_readiness_is_capped_without_homepage(self) -> None:
        score = ScoringEngine().ai_readiness([], "https://example.com", ORIGIN, self._full_answerability())
        assert score == 94

    def test_homepage_bonus_reaches_full_marks(self) -> None:
        home = _page("/", visible_text="We help you. How it works.")
        score = ScoringEngine().ai_readiness([home], "https://example.com", ORIGIN, self._full_answerability())
        assert score == 100

    def test_homepage_bonus_is_per_category(self) -> None:
        home = _page("/", visible_text="We help you.")
        score = ScoringEngine().ai_readiness([home], "https://example.com", ORIGIN, self._full_answerability())
        assert score == 97

    def test_partial_coverage_scales_linearly(self) -> None:
        half = Answerability(what_rate=0.175, who_rate=0.175, how_rate=0.175, trust_rate=0.175)
        assert ScoringEngine().ai_readiness([], "https://example.com", ORIGIN, half) == 50

    def test_structure(self) -> None:
        signals = SiteSignals(title_rate=1.0, h1_rate=0.5, meta_rate=0.0)
        assert ScoringEngine().structure(signals) == 58

    @pytest.mark.parametrize(
        "avg_text,avg_h2,expected",
        [(6000, 6, 100), (5999, 5.9, 70), (2500, 3, 70), (2499, 2.9, 45), (1200, 1, 45), (0, 0, 20)],
    )
    def test_content_depth_steps(self, avg_text: float, avg_h2: float, expected: int) -> None:
        signals = SiteSignals(avg_text_length=avg_text, avg_h2_count=avg_h2)
        assert ScoringEngine().content_depth(signals) == expected

    def test_technical_readiness(self) -> None:
        engine = ScoringEngine()
        assert engine.technical_readiness(SiteSignals(error_rate=1.0)) == 0
        assert engine.technical_readiness(
            SiteSignals(json_ld_rate=1.0, canonical_rate=1.0, error_rate=0.0)
        ) == 100
        assert engine.technical_readiness(
            SiteSignals(json_ld_rate=0.5, canonical_rate=1.0, error_rate=0.0)
        ) == 78

    def test_overall_mirrors_ai_readiness(self) -> None:
        signals = SiteSignals(answerability=Answerability(what_rate=0.35))
        scores = ScoringEngine().score([], "https://example.com", ORIGIN, signals)
        assert scores.overall == scores.ai_readiness == 25

    def test_empty_crawl_scores_are_bounded_ints(self) -> None:
        signals = SignalAggregator().aggregate([], used_sitemap=False)
        scores = ScoringEngine().score([], "https://example.com", ORIGIN, signals)

        for value in scores.model_dump().values():
            assert isinstance(value, int)
            assert 0 <= value <= 100


class TestGrades:
    @pytest.mark.parametrize(
        "score,grade",
        [(100, "A+"), (99, "A"), (90, "A"), (89, "B"), (80, "B"), (79, "C"),
         (70, "C"), (69, "D"), (60, "D"), (59, "F"), (0, "F")],
    )
    def test_breakpoints(self, score: int, grade: str) -> None:
        assert to_grade(score) == grade

    def test_grades_never_improve_as_score_drops(self) -> None:
        ranks = [GRADE_ORDER.index(to_grade(score)) for score in range(100, -1, -1)]
        assert ranks == sorted(ranks)

    def test_compute_grades(self) -> None:
        scores = AuditScores(ai_readiness=91, structure=80, content_depth=20, technical_readiness=65, overall=91)
        grades = compute_grades(scores)

        assert grades.overall == "A"
        assert grades.structure == "B"
        assert grades.content_depth == "F"
        assert grades.technical_readiness == "D"


class TestTier:
    @pytest.mark.parametrize(
        "grades,tier",
        [
            (_grades("A+"), "Gold"),
            (_grades("A", technical="F", content="F"), "Gold"),
            (_grades("B", technical="C", content="C"), "Gold"),
            (_grades("B", technical="D", content="A"), "Silver"),
            (_grades("B", technical="A", content="F"), "Silver"),
            (_grades("C"), "Silver"),
            (_grades("D"), "Bronze"),
            (_grades("F"), "Bronze"),
        ],
    )
    def test_tier_rules(self, grades: AuditGrades, tier: str) -> None:
        assert compute_tier(grades) == tier
