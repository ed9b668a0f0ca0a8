"""Keyword heuristic that buckets queries into simple, medium or deep."""

from __future__ import annotations

import re

from insight_search.pipeline.models import ComplexityAssessment, ComplexityLevel

HIGH_WEIGHT = 3
MEDIUM_WEIGHT = 2
NEGATIVE_WEIGHT = -1

# (category, weight, pattern) in evaluation order; triggers follow this order.
COMPLEXITY_CATEGORIES: tuple[tuple[str, int, re.Pattern[str]], ...] = (
    (
        "academic",
        HIGH_WEIGHT,
        re.compile(r"\b(research|study|analysis|theory|methodology|hypothesis|dissertation|peer.?review)\b", re.I),
    ),
    (
        "technical",
        HIGH_WEIGHT,
        re.compile(r"\b(algorithm|implementation|architecture|framework|optimization|performance)\b", re.I),
    ),
    (
        "analytical",
        HIGH_WEIGHT,
        re.compile(r"\b(compare|contrast|evaluate|assess|analyze|critique|examine)\b", re.I),
    ),
    (
        "controversial",
        HIGH_WEIGHT,
        re.compile(r"\b(debate|controversy|pros.?cons|advantages.?disadvantages|benefits.?risks)\b", re.I),
    ),
    (
        "multifaceted",
        HIGH_WEIGHT,
        re.compile(r"\b(factors|aspects|dimensions|perspectives|implications|considerations)\b", re.I),
    ),
    ("explanatory", MEDIUM_WEIGHT, re.compile(r"\b(how|why|what|explain|understand|clarify)\b", re.I)),
    ("current", MEDIUM_WEIGHT, re.compile(r"\b(latest|recent|current|today|now|2024|2025)\b", re.I)),
    ("factual", NEGATIVE_WEIGHT, re.compile(r"\b(when|where|who|define|definition)\b", re.I)),
    ("basic", NEGATIVE_WEIGHT, re.compile(r"\b(price|cost|location|address|phone|hours)\b", re.I)),
)


def level_for_score(score: int) -> ComplexityLevel:
    if score <= 1:
        return "simple"
    if score <= 4:
        return "medium"
    return "deep"


def score_complexity(query: str) -> ComplexityAssessment:
    """
    Score a query's complexity.

    Args:
        query: Validated query text

    Returns:
        ComplexityAssessment with clamped score, level and ordered triggers
    """
    score = 0
    triggers: list[str] = []

    for name, weight, pattern in COMPLEXITY_CATEGORIES:
        if pattern.search(query):
            score += weight
            triggers.append(name)

    word_count = len(query.split())
    if word_count > 10:
        score += 1
    if word_count > 20:
        score += 2

    if query.count("?") > 1:
        score += 1

    score = max(0, score)
    return ComplexityAssessment(score=score, level=level_for_score(score), triggers=tuple(triggers))
