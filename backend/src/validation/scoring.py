"""
Validation signal scoring.

Fixed-weight additive score over an idea's recorded signals:

  any survey            +20
  3+ interviews         +30
  any landing page      +25
  any prototype         +25
  per landing page      +10 if conversion > 5%, another +10 if > 10%

Clamped to 100. Pure functions over an already-loaded signal list, safe to
call from any request.
"""

from typing import Sequence

from src.validation.schemas import (
    Confidence, SignalCounts, SignalKind, ValidationAnalysis,
)

SURVEY_POINTS = 20
INTERVIEW_POINTS = 30
LANDING_PAGE_POINTS = 25
PROTOTYPE_POINTS = 25
CONVERSION_BONUS = 10

MIN_INTERVIEWS = 3
GOOD_CONVERSION = 0.05
EXCELLENT_CONVERSION = 0.10
PROTOTYPE_SCORE_GATE = 40
MAX_SCORE = 100

# Highest threshold first
CONFIDENCE_THRESHOLDS = [
    (80, Confidence.VERY_HIGH),
    (60, Confidence.HIGH),
    (30, Confidence.MEDIUM),
]

STARTER_RECOMMENDATIONS = [
    "Start with basic validation surveys",
    "Conduct user interviews",
]
RECOMMEND_SURVEYS = "Create and distribute validation surveys"
RECOMMEND_INTERVIEWS = "Conduct more user interviews (target: 5-10)"
RECOMMEND_LANDING_PAGE = "Create a landing page to test demand"
RECOMMEND_PROTOTYPE = "Build a simple prototype for user testing"

BUCKETS = (SignalKind.SURVEY, SignalKind.INTERVIEW, SignalKind.LANDING_PAGE, SignalKind.PROTOTYPE)


def classify_signals(signals: Sequence) -> dict[str, list]:
    """Split signals into survey / interview / landing_page / prototype buckets.

    Order within each bucket follows the input. Any other kind lands in no bucket.
    """
    buckets = {kind.value: [] for kind in BUCKETS}
    for signal in signals:
        if signal.kind in buckets:
            buckets[signal.kind].append(signal)
    return buckets


def confidence_for(score: int) -> Confidence:
    for threshold, label in CONFIDENCE_THRESHOLDS:
        if score >= threshold:
            return label
    return Confidence.LOW


def _conversion_rate(signal) -> float:
    return signal.result.conversion_rate or 0.0


def score_validation(signals: Sequence) -> ValidationAnalysis:
    """Score an idea's validation signals and suggest next steps."""
    if not signals:
        return ValidationAnalysis(
            score=0,
            confidence=Confidence.LOW,
            recommendations=list(STARTER_RECOMMENDATIONS),
            signals=SignalCounts(),
        )

    buckets = classify_signals(signals)
    surveys = buckets[SignalKind.SURVEY.value]
    interviews = buckets[SignalKind.INTERVIEW.value]
    landing_pages = buckets[SignalKind.LANDING_PAGE.value]
    prototypes = buckets[SignalKind.PROTOTYPE.value]

    score = 0
    if surveys:
        score += SURVEY_POINTS
    if len(interviews) >= MIN_INTERVIEWS:
        score += INTERVIEW_POINTS
    if landing_pages:
        score += LANDING_PAGE_POINTS
    if prototypes:
        score += PROTOTYPE_POINTS

    for signal in landing_pages:
        rate = _conversion_rate(signal)
        if rate > GOOD_CONVERSION:
            score += CONVERSION_BONUS
        if rate > EXCELLENT_CONVERSION:
            score += CONVERSION_BONUS

    score = min(score, MAX_SCORE)

    recommendations = []
    if not surveys:
        recommendations.append(RECOMMEND_SURVEYS)
    if len(interviews) < MIN_INTERVIEWS:
        recommendations.append(RECOMMEND_INTERVIEWS)
    if not landing_pages:
        recommendations.append(RECOMMEND_LANDING_PAGE)
    # Only prototype advice depends on the score
    if not prototypes and score > PROTOTYPE_SCORE_GATE:
        recommendations.append(RECOMMEND_PROTOTYPE)

    return ValidationAnalysis(
        score=score,
        confidence=confidence_for(score),
        recommendations=recommendations,
        signals=SignalCounts(
            surveys=len(surveys),
            interviews=len(interviews),
            landing_pages=len(landing_pages),
            prototypes=len(prototypes),
        ),
    )
