"""E-E-A-T heuristic scoring.

Sub-scores are fixed linear combinations of HTML structure counts. They are a
proxy for content structure, not a semantic quality measure. Changing a
coefficient changes every newly stored score, so keep the table stable.
"""

from seogen.helpers.schemas import (
    GoogleEEAT,
    GuidelineValidation,
    HtmlMetrics,
    ScoreEntry,
    ScoreStatus,
)

GREEN_THRESHOLD = 70
YELLOW_THRESHOLD = 50

# score = base + sum(weight * metric), clamped to 0..100
EEAT_FORMULAS: dict[str, tuple[float, dict[str, float]]] = {
    "experience": (40, {"list_count": 8, "faq_count": 4, "h3_count": 2}),
    "expertise": (40, {"h2_count": 6, "h3_count": 3, "strong_count": 2}),
    "authoritativeness": (45, {"h1_count": 10, "h2_count": 4, "word_count": 0.01}),
    "trustworthiness": (50, {"faq_count": 5, "list_count": 3, "strong_count": 1}),
}


def clamp_score(value: float) -> int:
    return max(0, min(100, int(round(value))))


def classify_score(score: int) -> ScoreStatus:
    """Three-level traffic light: green >= 70, yellow >= 50, else red."""
    if score >= GREEN_THRESHOLD:
        return "green"
    if score >= YELLOW_THRESHOLD:
        return "yellow"
    return "red"


def sub_score(name: str, metrics: HtmlMetrics) -> int:
    base, weights = EEAT_FORMULAS[name]
    raw = base + sum(weight * getattr(metrics, field) for field, weight in weights.items())
    return clamp_score(raw)


def score_eeat(metrics: HtmlMetrics) -> GuidelineValidation:
    """Compute the four sub-scores, the overall average and their statuses."""
    scores = {name: sub_score(name, metrics) for name in EEAT_FORMULAS}
    overall = clamp_score(sum(scores.values()) / len(scores))

    eeat = GoogleEEAT(
        **{
            name: ScoreEntry(score=score, status=classify_score(score))
            for name, score in scores.items()
        }
    )
    return GuidelineValidation(
        overall_score=overall,
        status=classify_score(overall),
        google_eeat=eeat,
        metrics=metrics,
    )
