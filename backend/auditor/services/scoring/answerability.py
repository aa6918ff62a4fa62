"""
Answerability - Does a page say what/who/how and show trust?

The scoring pipeline only depends on `AnswerabilityClassifier.classify`, so
the keyword heuristic can be replaced without touching the scorers.
"""
from typing import Dict, Mapping, Protocol, Sequence

CATEGORIES = ("what", "who", "how", "trust")

WHAT_KEYWORDS = ("we help", "we provide", "our product", "our service", "platform", "solution")
WHO_KEYWORDS = (
    "for teams", "for businesses", "for companies",
    "for marketers", "for recruiters", "for enterprises",
)
HOW_KEYWORDS = ("how it works", "get started", "features", "pricing", "plans", "documentation", "api")
TRUST_KEYWORDS = (
    "case study", "testimonials", "trusted by", "security", "privacy",
    "compliance", "terms", "gdpr", "soc 2",
)

DEFAULT_KEYWORDS: Dict[str, Sequence[str]] = {
    "what": WHAT_KEYWORDS,
    "who": WHO_KEYWORDS,
    "how": HOW_KEYWORDS,
    "trust": TRUST_KEYWORDS,
}


class AnswerabilityClassifier(Protocol):
    def classify(self, text: str) -> Dict[str, bool]:
        """Map each of CATEGORIES to whether `text` addresses it."""
        ...


def has_any(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


class KeywordAnswerabilityClassifier:
    """Literal, case-insensitive keyword presence."""

    def __init__(self, keywords: Mapping[str, Sequence[str]] = DEFAULT_KEYWORDS):
        missing = [c for c in CATEGORIES if c not in keywords]
        if missing:
            raise ValueError(f"Keyword sets missing for: {', '.join(missing)}")
        self.keywords = {c: tuple(k.lower() for k in keywords[c]) for c in CATEGORIES}

    def classify(self, text: str) -> Dict[str, bool]:
        lowered = text.lower()
        return {c: has_any(lowered, self.keywords[c]) for c in CATEGORIES}
